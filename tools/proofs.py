# Copyright (C) 2026 The Xaya developers

"""
Construction of claim proofs for individual addresses.  Proofs can be
built either against the root of the address' batch (for the two-step
claimFromBatch function of the distributor) or all the way up to the
final root (for the single-root claim function).
"""

from errors import (
  InvalidAddress,
  InvalidAmount,
  NotEligible,
  ProofConstructionFailed,
)
import merkle
import util

import logging
import multiprocessing
from typing import NamedTuple


log = logging.getLogger (__name__)

# Number of processes to use for exporting all proofs.  None means
# the number of processors in the system.
NUMPROC = None


class Proof (NamedTuple):
  """
  A claim together with its Merkle proof.  If combined is set, the
  proof leads to the final root, and otherwise to the batch root.
  """

  index: int
  account: str
  amount: int
  proof: tuple
  batchIndex: int
  batchRoot: bytes
  root: bytes
  combined: bool

  def leaf (self):
    return merkle.encodeLeaf (self.index, self.account, self.amount)

  def verify (self):
    return merkle.verifyProof (self.leaf (), self.proof, self.root)

  def toJson (self):
    return {
      "index": self.index,
      "address": self.account,
      "amount": str (self.amount),
      "amountInEther": util.formatTokens (self.amount),
      "proof": [util.hexHash (p) for p in self.proof],
      "batchIndex": self.batchIndex,
      "batchRoot": util.hexHash (self.batchRoot),
      "root": util.hexHash (self.root),
      "combined": self.combined,
    }


def verifyClaim (data, root=None):
  """
  Verifies a proof in the JSON format produced by Proof.toJson.  If no
  root is given explicitly, the one recorded in the data is used.
  Claims with a malformed address, index, amount or hash do not verify.
  """

  if root is None:
    root = data["root"]

  try:
    leaf = merkle.encodeLeaf (int (data["index"]), data["address"],
                              int (data["amount"]))
    return merkle.verifyProof (leaf, data["proof"], root)
  except (InvalidAddress, InvalidAmount, TypeError, ValueError) as exc:
    log.warning ("Malformed claim data: %s", exc)
    return False


class ProofService:
  """
  Looks up addresses and builds their proofs.  The source of batch data
  is either an in-memory Airdrop or a BatchStore on disk; both provide
  locate, getBatch, batchRoots and addresses.

  The service itself holds no per-request state, so that proofs for
  different addresses can be built independently.
  """

  def __init__ (self, source):
    self.source = source
    self.topTree = merkle.MerkleTree (source.batchRoots ())

    expected = getattr (source, "root", None)
    if expected is not None and self.topTree.root != expected:
      raise ProofConstructionFailed (
          "final root %s does not match the batch roots (%s)"
            % (util.hexHash (expected), util.hexHash (self.topTree.root)))

  @property
  def finalRoot (self):
    return self.topTree.root

  def getProof (self, address, combined=False):
    """
    Returns the Proof for the given address.  Raises NotEligible if it
    has no claim, and ProofConstructionFailed if the resulting proof does
    not verify (which would mean a bug or corrupted data).
    """

    loc = self.source.locate (address)
    if loc is None:
      raise NotEligible (address)

    batch = self.source.getBatch (loc.batchIndex)
    record = batch.records[loc.localIndex]
    if record.account != loc.address or record.index != loc.globalIndex:
      raise ProofConstructionFailed (
          "address map entry for %s does not match batch %d"
            % (loc.address, loc.batchIndex))

    leaf = record.leaf ()
    siblings = list (batch.getProof (loc.localIndex))
    if not merkle.verifyProof (leaf, siblings, batch.root):
      raise ProofConstructionFailed (
          "proof for %s does not verify against batch root %s"
            % (loc.address, util.hexHash (batch.root)))

    root = batch.root
    if combined:
      if self.topTree.levels[0][loc.batchIndex] != batch.root:
        raise ProofConstructionFailed ("batch %d root is not in the top tree"
                                         % loc.batchIndex)
      siblings.extend (self.topTree.getProof (loc.batchIndex))
      root = self.finalRoot
      if not merkle.verifyProof (leaf, siblings, root):
        raise ProofConstructionFailed (
            "combined proof for %s does not verify against %s"
              % (loc.address, util.hexHash (root)))

    return Proof (index=record.index, account=record.account,
                  amount=record.amount, proof=tuple (siblings),
                  batchIndex=loc.batchIndex, batchRoot=batch.root,
                  root=root, combined=combined)

  def exportAll (self, combined=False, numProc=NUMPROC):
    """
    Builds the proofs for all eligible addresses and returns them as
    dictionary keyed by address.  With numProc other than 1, the work
    is distributed over a pool of worker processes.
    """

    addresses = self.source.addresses ()
    log.info ("Generating proofs for %d addresses...", len (addresses))

    if numProc == 1:
      proofs = [self.getProof (a, combined) for a in addresses]
    else:
      with multiprocessing.Pool (numProc, initializer=initWorker,
                                 initargs=(self, combined)) as p:
        proofs = p.map (workerProof, addresses, chunksize=100)

    return dict (zip (addresses, proofs))


# State of a worker process in exportAll.  Each worker gets its own
# copy of the service when the pool starts.
workerService = None
workerCombined = False


def initWorker (service, combined):
  global workerService, workerCombined
  workerService = service
  workerCombined = combined


def workerProof (address):
  return workerService.getProof (address, workerCombined)
