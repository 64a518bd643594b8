#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
This script loads the airdrop data and prints the addresses with the
largest allocations in descending order.
"""

import store
import util

import argparse


parser = argparse.ArgumentParser ()
parser.add_argument ("--data", default="merkle-data",
                     help="Directory with the airdrop data")
parser.add_argument ("--num", type=int, default=10,
                     help="Number of addresses to display")
args = parser.parse_args ()

data = store.BatchStore (args.data)

allocations = []
for i in range (data.batchCount):
  for r in data.getBatch (i).records:
    allocations.append ((r.account, r.amount))

allocations.sort (key=lambda x: x[1], reverse=True)

total = sum (amount for _, amount in allocations)
print (f"Total: {util.formatTokens (total)} tokens for {len (allocations)} addresses")

print (f"Top {args.num} addresses by allocation:")
for i in range (min (args.num, len (allocations))):
  address, amount = allocations[i]
  print (f"  #{i + 1} {address}: {util.formatTokens (amount)} tokens")
