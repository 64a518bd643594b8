#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
This script computes the Merkle root that is set in the distributor
contract.  It reads score tables in CSV format (from the given files,
or stdin if none are given), computes the allocation for each address
and writes the batch data needed to produce claim proofs later on.
"""

import airdrop
from errors import EmptyInput
import proofs
import scores
import store
import util

import argparse
import sys


# Number of addresses for which example proofs are stored.
NUM_EXAMPLES = 10


parser = argparse.ArgumentParser ()
parser.add_argument ("csv", nargs="*",
                     help="Score tables to read (default: stdin)")
parser.add_argument ("--batch-size", type=int,
                     default=airdrop.DEFAULT_BATCH_SIZE,
                     help="Number of claims per batch tree")
parser.add_argument ("--output", default="merkle-data",
                     help="Directory to write the airdrop data to")
parser.add_argument ("--verbose", action="store_true",
                     help="Enable debug logging")
args = parser.parse_args ()

util.setupLogging (args.verbose)

session = airdrop.IngestionSession (args.batch_size)


def ingest (inp):
  for address, score in scores.readScoreRows (inp):
    session.add (address, score)


if args.csv:
  for path in args.csv:
    with open (path, "r", newline="", encoding="utf-8-sig") as f:
      ingest (f)
else:
  ingest (sys.stdin)

try:
  data = session.finish ()
except EmptyInput as exc:
  sys.exit (str (exc))

service = proofs.ProofService (data)
examples = {}
for addr in data.addresses ()[:NUM_EXAMPLES]:
  examples[addr] = service.getProof (addr).toJson ()

rootPath = store.save (data, args.output, examples)

print ("Number of rows: %d" % session.rows)
print ("Number of claims: %d" % data.recordCount)
for reason, cnt in sorted (data.skipped.items ()):
  print ("  skipped (%s): %d" % (reason, cnt))
print ("Total amount: %s tokens" % util.formatTokens (data.total))
print ("Batches: %d of up to %d claims" % (len (data.batches), data.batchSize))
print ("Batch tree depth: %d levels" % data.batches[0].tree.depth)
print ("Top tree depth: %d levels" % data.topTree.depth)
print ("Merkle root hash: %s" % util.hexHash (data.root))
print ("\nData written to %s" % rootPath)
