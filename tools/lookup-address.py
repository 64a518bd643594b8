#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
This script looks up an address in the airdrop data and prints out its
claim (if any), optionally together with the on-chain claim status.
"""

import distributor
import store
import util

from web3 import Web3

import argparse
import sys


parser = argparse.ArgumentParser ()
parser.add_argument ("--data", default="merkle-data",
                     help="Directory with the airdrop data")
parser.add_argument ("--address", required=True,
                     help="Address to look up")
parser.add_argument ("--rpc-url", default="",
                     help="RPC endpoint to check the claim status with")
parser.add_argument ("--distributor", default="",
                     help="Address of the distributor contract")
args = parser.parse_args ()

data = store.BatchStore (args.data)

loc = data.locate (args.address)
if loc is None:
  sys.exit ("Address not eligible")

record = data.getBatch (loc.batchIndex).records[loc.localIndex]

print ("Claim:")
print ("  index: %d" % record.index)
print ("  batch: %d (position %d)" % (loc.batchIndex, loc.localIndex))
print ("  amount: %s tokens" % util.formatTokens (record.amount))

if args.rpc_url != "" and args.distributor != "":
  w3 = Web3 (Web3.HTTPProvider (args.rpc_url))
  dist = distributor.Distributor.connect (w3, args.distributor)
  print ("  claimed: %s" % dist.isClaimed (record.index))
