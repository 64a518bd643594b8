# Copyright (C) 2026 The Xaya developers

"""
This module turns a stream of (address, score) input rows into the
airdrop allocation:  Each accepted row gets a global claim index and a
token amount, the records are grouped into fixed-size batches with a
Merkle tree each, and a top-level Merkle tree over all batch roots
yields the final root that is published in the distributor contract.
"""

from errors import (
  DuplicateIndex,
  EmptyInput,
  IndexOutOfRange,
  InvalidAddress,
  InvalidAmount,
  MalformedRecord,
)
import merkle
import util

from web3 import Web3

from collections import Counter
from decimal import Decimal, ROUND_HALF_UP, localcontext
import logging
import math
from typing import NamedTuple


log = logging.getLogger (__name__)

# Default number of records per batch tree.
DEFAULT_BATCH_SIZE = 100

# The allocation formula is SCORE_BASE ** (score - 1) tokens, rounded to
# AMOUNT_DECIMALS decimal places before scaling to the smallest unit.
SCORE_BASE = 1.3
AMOUNT_DECIMALS = 6

# Log progress after this many accepted records.
PROGRESS_INTERVAL = 10000


def parseScore (val):
  """
  Parses a score from the input (string or number) into a float.
  Raises ValueError if it is not a finite number.
  """

  if isinstance (val, str):
    val = val.strip ()
  score = float (val)
  if not math.isfinite (score):
    raise ValueError ("score is not finite: %r" % (val,))

  return score


def computeAmount (score):
  """
  Computes the token amount (in the smallest unit with 18 decimals)
  for a given score, as SCORE_BASE ** (score - 1) rounded half-up to
  AMOUNT_DECIMALS places.  Non-positive scores yield zero.

  Raises OverflowError or ValueError if the result does not fit
  into uint256.
  """

  if score <= 0:
    return 0

  base = SCORE_BASE ** (score - 1)
  with localcontext () as ctx:
    ctx.prec = 400
    rounded = Decimal (base).quantize (Decimal (1).scaleb (-AMOUNT_DECIMALS),
                                       rounding=ROUND_HALF_UP)

  amount = Web3.to_wei (rounded, "ether")
  merkle.checkUint256 ("amount", amount)

  return amount


class AllocationRecord (NamedTuple):
  """
  A single claim in the airdrop:  The global claim index, the
  (canonical, lower-case) account address and the amount in the
  token's smallest unit.
  """

  index: int
  account: str
  amount: int

  def leaf (self):
    return merkle.encodeLeaf (self.index, self.account, self.amount)

  def toJson (self):
    return {
      "index": self.index,
      "address": self.account,
      "amount": str (self.amount),
    }

  @classmethod
  def fromJson (cls, data):
    return cls (index=int (data["index"]),
                account=util.normaliseAddress (data["address"]),
                amount=int (data["amount"]))


class AddressLocation (NamedTuple):
  """
  Where a claim of an address is found:  The batch, the position of its
  leaf inside the batch tree and its global claim index.
  """

  address: str
  batchIndex: int
  localIndex: int
  globalIndex: int


class Batch:
  """
  A fixed-size chunk of the allocation records together with the
  Merkle tree built over their leaves.  Batches are immutable once
  constructed.
  """

  def __init__ (self, batchIndex, records):
    self.batchIndex = batchIndex
    self.records = tuple (records)

    lastIndex = None
    for r in self.records:
      if lastIndex is not None and r.index <= lastIndex:
        raise DuplicateIndex ("batch %d: index %d follows %d"
                                % (batchIndex, r.index, lastIndex))
      lastIndex = r.index

    self.tree = merkle.MerkleTree ([r.leaf () for r in self.records])

  @property
  def root (self):
    return self.tree.root

  def __len__ (self):
    return len (self.records)

  def getProof (self, localIndex):
    return self.tree.getProof (localIndex)

  def toJson (self):
    return {
      "batchIndex": self.batchIndex,
      "root": util.hexHash (self.root),
      "recordCount": len (self.records),
      "records": [r.toJson () for r in self.records],
    }


def buildTopTree (batches):
  """
  Builds the top-level Merkle tree whose leaves are the batch roots in
  order of their batch index.
  """

  batches = list (batches)
  for i, b in enumerate (batches):
    if b.batchIndex != i:
      raise ValueError ("batch at position %d has index %d"
                          % (i, b.batchIndex))

  return merkle.MerkleTree ([b.root for b in batches])


def buildTop (batches):
  """
  Returns the final Merkle root over the given batches.
  """

  return buildTopTree (batches).root


class Airdrop:
  """
  The finished airdrop construction:  All batches with their trees,
  the top-level tree over the batch roots, and the index mapping
  addresses to the location of their claim.
  """

  def __init__ (self, batches, locations, batchSize, skipped=None):
    self.batches = list (batches)
    self.locations = dict (locations)
    self.batchSize = batchSize
    self.skipped = Counter (skipped or {})

    self.topTree = buildTopTree (self.batches)

    self.total = 0
    self.recordCount = 0
    for b in self.batches:
      self.recordCount += len (b)
      for r in b.records:
        self.total += r.amount

  @property
  def root (self):
    return self.topTree.root

  def batchRoots (self):
    return [b.root for b in self.batches]

  def getBatch (self, batchIndex):
    if batchIndex < 0 or batchIndex >= len (self.batches):
      raise IndexOutOfRange ("unknown batch %d" % batchIndex)
    return self.batches[batchIndex]

  def locate (self, address):
    """
    Returns the AddressLocation for the given address or None if it
    has no claim.  Invalid addresses are never eligible.
    """

    try:
      address = util.normaliseAddress (address)
    except InvalidAddress:
      return None

    return self.locations.get (address)

  def addresses (self):
    return list (self.locations.keys ())

  def records (self):
    for b in self.batches:
      yield from b.records


class IngestionSession:
  """
  Assigns global indices and amounts to input rows and groups them into
  batches.  All mutable ingestion state (the index counter, the pending
  batch and the address map) lives here, so that independent sessions
  do not interfere.
  """

  def __init__ (self, batchSize=DEFAULT_BATCH_SIZE):
    if batchSize < 1:
      raise ValueError ("batch size must be positive")

    self.batchSize = batchSize
    self.batches = []
    self.pending = []
    self.locations = {}
    self.nextIndex = 0
    self.rows = 0
    self.skipped = Counter ()

  def add (self, address, score):
    """
    Processes one input row.  Returns the AddressLocation of the new
    claim, or None if the row was skipped as malformed.
    """

    self.rows += 1

    try:
      account = self.checkAddress (address)
      try:
        score = parseScore (score)
      except (TypeError, ValueError):
        raise MalformedRecord ("score", "non-numeric score %r" % (score,))
      if score <= 0:
        raise MalformedRecord ("non-positive",
                               "non-positive score %s" % score)
      try:
        amount = computeAmount (score)
      except (ArithmeticError, ValueError, InvalidAmount) as exc:
        raise MalformedRecord ("overflow",
                               "amount for score %s too large: %s"
                                  % (score, exc))
    except MalformedRecord as exc:
      self.skip (exc)
      return None

    return self.append (account, amount)

  def addAllocation (self, address, amount):
    """
    Adds a claim with an explicitly given amount (rather than computing
    it from a score).  Malformed rows are skipped as in add.
    """

    self.rows += 1

    try:
      account = self.checkAddress (address)
      if isinstance (amount, bool) or not isinstance (amount, int) \
          or amount <= 0 or amount > merkle.MAX_UINT256:
        raise MalformedRecord ("amount", "invalid amount %r" % (amount,))
    except MalformedRecord as exc:
      self.skip (exc)
      return None

    return self.append (account, amount)

  def checkAddress (self, address):
    try:
      account = util.normaliseAddress (address)
    except InvalidAddress:
      raise MalformedRecord ("address", "invalid address %r" % (address,))

    if account in self.locations:
      raise MalformedRecord ("duplicate", "duplicate address %s" % account)

    return account

  def skip (self, exc):
    self.skipped[exc.reason] += 1
    log.warning ("Skipping row %d: %s", self.rows, exc)

  def append (self, account, amount):
    record = AllocationRecord (index=self.nextIndex, account=account,
                               amount=amount)
    self.nextIndex += 1

    loc = AddressLocation (address=account,
                           batchIndex=len (self.batches),
                           localIndex=len (self.pending),
                           globalIndex=record.index)
    self.pending.append (record)
    self.locations[account] = loc

    if len (self.pending) >= self.batchSize:
      self.closeBatch ()

    if self.nextIndex % PROGRESS_INTERVAL == 0:
      log.info ("Processed %d records...", self.nextIndex)

    return loc

  def closeBatch (self):
    """
    Finalises the pending records into a batch with its Merkle tree.
    """

    if not self.pending:
      return

    batch = Batch (len (self.batches), self.pending)
    log.debug ("Batch %d: %d records, root %s",
               batch.batchIndex, len (batch), util.hexHash (batch.root))

    self.batches.append (batch)
    self.pending = []

  def finish (self):
    """
    Closes the last (possibly short) batch and returns the resulting
    Airdrop.  Raises EmptyInput if no record has been accepted.
    """

    self.closeBatch ()

    if not self.batches:
      raise EmptyInput ("no valid records in the input (%d rows skipped)"
                          % sum (self.skipped.values ()))

    return Airdrop (self.batches, self.locations, self.batchSize,
                    self.skipped)


def partition (rows, batchSize=DEFAULT_BATCH_SIZE):
  """
  Runs a full ingestion over the given (address, score) rows and
  returns the finished Airdrop.
  """

  session = IngestionSession (batchSize)
  for address, score in rows:
    session.add (address, score)

  return session.finish ()
