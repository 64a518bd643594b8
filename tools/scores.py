# Copyright (C) 2026 The Xaya developers

"""
Reading of the score tables that feed the airdrop, and the scoring of
DeFi positions by their USD value.
"""

import csv
import logging


log = logging.getLogger (__name__)

# Score and label per minimum position value (in USD), from the highest
# threshold down.
SCORE_RULES = [
  (1000000, 12, "whale"),
  (100000, 6, "large"),
  (1000, 3, "medium"),
  (100, 2, "small"),
  (20, 1, "tiny"),
]

# Positions need to be worth more than this to be included at all.
MIN_POSITION_VALUE = 20

# Column positions used if the header does not name them.
DEFAULT_ADDRESS_COLUMN = 1
DEFAULT_SCORE_COLUMN = 8


def scoreForValue (value):
  """
  Returns the (score, label) for a position with the given total value.
  """

  for threshold, score, label in SCORE_RULES:
    if value >= threshold:
      return score, label

  return 0, "none"


def parseValue (val):
  try:
    return float (val or 0)
  except ValueError:
    return 0.0


def processPositions (rows):
  """
  Scores a list of DeFi position rows (dicts with at least "address" and
  "totalValue").  Only positions worth more than MIN_POSITION_VALUE are
  kept, and for addresses appearing more than once the position with the
  highest value wins.  Returns the scored rows sorted by value (highest
  first) and a Counter-like dict of labels.
  """

  best = {}
  total = 0
  for row in rows:
    total += 1
    value = parseValue (row.get ("totalValue"))
    if value <= MIN_POSITION_VALUE:
      continue

    addr = (row.get ("address") or "").strip ().lower ()
    if not addr:
      continue

    if addr in best and best[addr][0] >= value:
      continue

    score, label = scoreForValue (value)
    entry = dict (row)
    entry.update ({
      "address": addr,
      "score": score,
      "user_label": label,
    })
    best[addr] = (value, entry)

  result = [entry for _, entry in sorted (best.values (),
                                          key=lambda x: x[0], reverse=True)]

  stats = {label: 0 for _, _, label in SCORE_RULES}
  for entry in result:
    stats[entry["user_label"]] += 1

  log.info ("Scored %d of %d positions (%d unique addresses)",
            len (result), total, len (best))

  return result, stats


def mergeScores (rows, bonus):
  """
  Adds bonus scores (a dict mapping addresses to scores) onto the
  "total_score" of the given rows (dicts with "address"), matching
  addresses case-insensitively.  Returns new row dicts.
  """

  bonus = {a.lower (): s for a, s in bonus.items ()}

  result = []
  for row in rows:
    entry = dict (row)
    addr = (entry.get ("address") or "").strip ().lower ()
    if addr in bonus:
      entry["total_score"] = parseValue (entry.get ("total_score")) \
                              + bonus[addr]
    result.append (entry)

  return result


def readScoreRows (inp):
  """
  Reads (address, score) pairs from a CSV (or tab-separated) score table
  in the given stream.  The first line is the header; the address and
  score columns are looked up by name ("address" and "total_score" or
  "score"), falling back to the second and ninth column.

  Values are yielded as strings without further validation.  Rows that
  do not have enough columns are yielded as (None, None), so that the
  ingestion can report them as malformed.
  """

  first = inp.readline ().lstrip ("\ufeff")
  if not first.strip ():
    return

  delimiter = "\t" if "\t" in first else ","
  [header] = csv.reader ([first], delimiter=delimiter)
  header = [h.strip () for h in header]

  addrCol = DEFAULT_ADDRESS_COLUMN
  if "address" in header:
    addrCol = header.index ("address")

  scoreCol = DEFAULT_SCORE_COLUMN
  for name in ["total_score", "score"]:
    if name in header:
      scoreCol = header.index (name)
      break

  for row in csv.reader (inp, delimiter=delimiter):
    if not any (c.strip () for c in row):
      continue
    if len (row) <= max (addrCol, scoreCol):
      yield None, None
      continue
    yield row[addrCol].strip (), row[scoreCol].strip ()


def readPositions (inp):
  return list (csv.DictReader (inp))


def writeScores (out, rows, columns):
  """
  Writes scored rows as CSV with the given columns (other keys are
  ignored).
  """

  writer = csv.DictWriter (out, fieldnames=columns, extrasaction="ignore")
  writer.writeheader ()
  for row in rows:
    writer.writerow (row)
