#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
This script scores DeFi position snapshots (CSV files with "address" and
"totalValue" columns) into a user score table that can be fed into
compute-merkle-root.py.
"""

import scores
import util

import argparse
import sys


COLUMNS = ["address", "totalValue", "score", "user_label", "total_score"]

parser = argparse.ArgumentParser ()
parser.add_argument ("csv", nargs="+",
                     help="Position snapshots to read")
parser.add_argument ("--output", required=True,
                     help="Score table to write")
parser.add_argument ("--bonus", default="",
                     help="Table of bonus scores (address, score) to add")
args = parser.parse_args ()

util.setupLogging ()

rows = []
for path in args.csv:
  with open (path, "r", newline="", encoding="utf-8-sig") as f:
    rows.extend (scores.readPositions (f))

scored, stats = scores.processPositions (rows)
if not scored:
  sys.exit ("No positions above the minimum value")

for entry in scored:
  entry["total_score"] = entry["score"]

if args.bonus != "":
  with open (args.bonus, "r", newline="", encoding="utf-8-sig") as f:
    bonus = {
      addr.lower (): scores.parseValue (score)
      for addr, score in scores.readScoreRows (f)
      if addr is not None
    }
  scored = scores.mergeScores (scored, bonus)

with open (args.output, "w", newline="") as f:
  scores.writeScores (f, scored, COLUMNS)

print ("Positions read: %d" % len (rows))
print ("Scored addresses: %d" % len (scored))
for label, cnt in stats.items ():
  print ("  %s: %d (%.2f%%)" % (label, cnt, 100.0 * cnt / len (scored)))
print ("\nScore table written to %s" % args.output)
