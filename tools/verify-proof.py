#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
This script checks a claim proof (in the JSON format printed by
get-proof.py --json) the same way as the distributor contract does.
"""

import proofs

import argparse
import json
import sys


parser = argparse.ArgumentParser ()
parser.add_argument ("proof",
                     help="JSON file with the proof data ('-' for stdin)")
parser.add_argument ("--root", default=None,
                     help="Root to verify against (default: from the data)")
args = parser.parse_args ()

if args.proof == "-":
  data = json.load (sys.stdin)
else:
  with open (args.proof, "r") as f:
    data = json.load (f)

ok = proofs.verifyClaim (data, args.root)
print ("Valid proof: %s" % ok)
if not ok:
  sys.exit (1)
