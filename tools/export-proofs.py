#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
This script builds the claim proofs for all eligible addresses and
writes them to a single JSON file keyed by address.
"""

import proofs
import store
import util

import argparse
import os


parser = argparse.ArgumentParser ()
parser.add_argument ("--data", default="merkle-data",
                     help="Directory with the airdrop data")
parser.add_argument ("--output", default="",
                     help="File to write (default: all_proofs.json in the"
                          " data directory)")
parser.add_argument ("--combined", action="store_true",
                     help="Build proofs against the final root")
parser.add_argument ("--numproc", type=int, default=proofs.NUMPROC,
                     help="Number of worker processes")
args = parser.parse_args ()

util.setupLogging ()

output = args.output
if output == "":
  output = os.path.join (args.data, "all_proofs.json")

service = proofs.ProofService (store.BatchStore (args.data))
allProofs = service.exportAll (combined=args.combined, numProc=args.numproc)

util.writeJson (output, {
  addr: p.toJson ()
  for addr, p in allProofs.items ()
})

print ("Exported %d proofs to %s" % (len (allProofs), output))
print ("Merkle root hash: %s" % util.hexHash (service.finalRoot))
