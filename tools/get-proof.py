#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
This script loads the airdrop data written by compute-merkle-root.py,
looks up a particular address, and returns the Merkle proof for its claim.
"""

from errors import NotEligible
import proofs
import store
import util

import argparse
import json
import sys


parser = argparse.ArgumentParser ()
parser.add_argument ("--data", default="merkle-data",
                     help="Directory with the airdrop data")
parser.add_argument ("--address", required=True,
                     help="Address to look up")
parser.add_argument ("--combined", action="store_true",
                     help="Return a proof against the final root instead"
                          " of the batch root")
parser.add_argument ("--json", action="store_true",
                     help="Print the proof data as JSON")
args = parser.parse_args ()

util.setupLogging ()

service = proofs.ProofService (store.BatchStore (args.data))

try:
  proof = service.getProof (args.address, combined=args.combined)
except NotEligible:
  sys.exit ("Address not eligible")

if args.json:
  print (json.dumps (proof.toJson (), indent=2))
  sys.exit ()

print ("Claim data:")
print ("  index: %d" % proof.index)
print ("  address: %s" % proof.account)
print ("  amount: %s tokens (%d)" % (util.formatTokens (proof.amount),
                                     proof.amount))
print ("  batch: %d" % proof.batchIndex)
print ("  batch root: %s" % util.hexHash (proof.batchRoot))
print ("  verified against: %s" % util.hexHash (proof.root))

print ("\nProof: [")
for p in proof.proof:
  print ("  %s," % util.hexHash (p))
print ("]")
