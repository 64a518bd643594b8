# Copyright (C) 2026 The Xaya developers

"""
Persistence of the airdrop data as a directory of JSON files:

  merkle_data.json      final root plus metadata (and example proofs)
  address_map.json      address -> batch index, local index, claim index
  batches/batch_<n>.json  the records and root of each batch

The batch files contain the final amounts, so that any batch tree can be
rebuilt later without access to the original scores.
"""

from airdrop import AddressLocation, AllocationRecord, Batch
from errors import (
  AirdropError,
  IndexOutOfRange,
  InvalidAddress,
  ProofConstructionFailed,
)
import util

import logging
import os


log = logging.getLogger (__name__)

ROOT_FILE = "merkle_data.json"
MAP_FILE = "address_map.json"
BATCH_DIR = "batches"


def batchPath (dataDir, batchIndex):
  return os.path.join (dataDir, BATCH_DIR, "batch_%d.json" % batchIndex)


def save (airdrop, dataDir, examples=None):
  """
  Writes the full airdrop data to the given directory, creating it if
  necessary.  Returns the path of the root record.
  """

  os.makedirs (os.path.join (dataDir, BATCH_DIR), exist_ok=True)

  for b in airdrop.batches:
    util.writeJson (batchPath (dataDir, b.batchIndex), b.toJson ())

  addressMap = {}
  for addr, loc in airdrop.locations.items ():
    addressMap[addr] = {
      "batchIndex": loc.batchIndex,
      "localIndex": loc.localIndex,
      "index": loc.globalIndex,
    }
  util.writeJson (os.path.join (dataDir, MAP_FILE), addressMap)

  rootPath = os.path.join (dataDir, ROOT_FILE)
  util.writeJson (rootPath, {
    "root": util.hexHash (airdrop.root),
    "totalRecords": airdrop.recordCount,
    "totalAmount": str (airdrop.total),
    "batchSize": airdrop.batchSize,
    "batchCount": len (airdrop.batches),
    "batchRoots": [util.hexHash (r) for r in airdrop.batchRoots ()],
    "skipped": dict (airdrop.skipped),
    "examples": examples or {},
  })
  log.info ("Wrote airdrop data for %d records to %s",
            airdrop.recordCount, dataDir)

  return rootPath


class BatchStore:
  """
  Read access to an airdrop data directory written by save.  The root
  record and address map are loaded up front, while batches are read
  (and their trees rebuilt) only when needed and then cached.

  Every loaded batch is checked against its stored root, and the batch
  roots against the final root, since proofs built from inconsistent
  data would be rejected on-chain.
  """

  def __init__ (self, dataDir):
    self.dataDir = dataDir
    self.metadata = util.readJson (os.path.join (dataDir, ROOT_FILE))
    self.root = util.parseHash (self.metadata["root"])
    self.batchSize = self.metadata["batchSize"]
    self.roots = [util.parseHash (r) for r in self.metadata["batchRoots"]]

    self.locations = {}
    rawMap = util.readJson (os.path.join (dataDir, MAP_FILE))
    for addr, entry in rawMap.items ():
      addr = util.normaliseAddress (addr)
      self.locations[addr] = AddressLocation (address=addr,
                                              batchIndex=entry["batchIndex"],
                                              localIndex=entry["localIndex"],
                                              globalIndex=entry["index"])

    self.cache = {}

  @property
  def batchCount (self):
    return len (self.roots)

  def batchRoots (self):
    return list (self.roots)

  def locate (self, address):
    try:
      address = util.normaliseAddress (address)
    except InvalidAddress:
      return None

    return self.locations.get (address)

  def addresses (self):
    return list (self.locations.keys ())

  def getBatch (self, batchIndex):
    """
    Loads the batch with the given index and rebuilds its tree.
    """

    if batchIndex < 0 or batchIndex >= self.batchCount:
      raise IndexOutOfRange ("unknown batch %d" % batchIndex)

    if batchIndex in self.cache:
      return self.cache[batchIndex]

    data = util.readJson (batchPath (self.dataDir, batchIndex))
    try:
      fileIndex = data["batchIndex"]
      records = [AllocationRecord.fromJson (r) for r in data["records"]]
      expected = util.parseHash (data["root"])
      batch = Batch (batchIndex, records)
    except (KeyError, TypeError, ValueError, AirdropError) as exc:
      raise ProofConstructionFailed ("batch file %d is malformed: %r"
                                       % (batchIndex, exc))

    if fileIndex != batchIndex:
      raise ProofConstructionFailed ("batch file %d claims index %r"
                                       % (batchIndex, fileIndex))

    if batch.root != expected or batch.root != self.roots[batchIndex]:
      raise ProofConstructionFailed (
          "batch %d: recomputed root %s does not match stored root %s"
            % (batchIndex, util.hexHash (batch.root),
               util.hexHash (expected)))

    log.debug ("Loaded batch %d with %d records", batchIndex, len (batch))
    self.cache[batchIndex] = batch

    return batch
