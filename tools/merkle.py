# Copyright (C) 2026 The Xaya developers

"""
Merkle tree construction and verification compatible with the
OpenZeppelin MerkleProof library as used by the airdrop distributor
contract.  Leaves are keccak256 hashes of the packed claim data, and
inner nodes hash their two children in sorted order.
"""

from errors import EmptyInput, IndexOutOfRange, InvalidAmount
import util

from web3 import Web3


MAX_UINT256 = 2**256 - 1


def checkUint256 (name, val):
  """
  Makes sure that val is an integer that fits into uint256.
  """

  if isinstance (val, bool) or not isinstance (val, int):
    raise InvalidAmount ("%s must be an integer, got %r" % (name, val))
  if val < 0 or val > MAX_UINT256:
    raise InvalidAmount ("%s out of uint256 range: %d" % (name, val))


def encodeLeaf (index, account, amount):
  """
  Computes the Merkle leaf hash for a claim, which is the keccak256
  hash of abi.encodePacked (uint256 index, address account, uint256 amount)
  as done by the distributor contract.
  """

  checkUint256 ("index", index)
  checkUint256 ("amount", amount)
  account = Web3.to_checksum_address (util.normaliseAddress (account))

  return Web3.solidity_keccak (
      ["uint256", "address", "uint256"],
      [index, account, amount])


def hashPair (a, b):
  """
  Helper method to compute the hash of a pair of hashes, i.e. the parent
  node in the Merkle tree for two child nodes.  As per OpenZeppelin's
  MerkleProof contract, we hash the pair in sorted order.
  """

  if a < b:
    return Web3.keccak (a + b)

  return Web3.keccak (b + a)


def computeRoot (leaf, proof):
  """
  Processes a proof upwards from the given leaf and returns the
  resulting root hash.
  """

  cur = util.parseHash (leaf)
  for p in proof:
    cur = hashPair (cur, util.parseHash (p))

  return cur


def verifyProof (leaf, proof, root):
  """
  Checks a Merkle proof for the given leaf against a root.  This is the
  same algorithm that MerkleProof.verify runs on-chain.  Hashes may be
  given as bytes or hex strings.
  """

  return computeRoot (leaf, proof) == util.parseHash (root)


class MerkleTree:
  """
  A binary Merkle tree over a fixed, ordered list of leaf hashes.

  The tree shape is positional:  Nodes on each level are paired up from
  left to right.  If a level has an odd number of nodes, the last one
  is moved up to the next level as it is (without hashing it and without
  any padding).  A tree with a single leaf has that leaf as its root.
  """

  def __init__ (self, leaves):
    """
    Builds the full tree for the given leaf hashes.
    """

    leaves = [util.parseHash (l) for l in leaves]
    if not leaves:
      raise EmptyInput ("cannot build a Merkle tree without leaves")

    # We store the hashes at each node in the Merkle tree.  This is done
    # row-by-row in an array of levels, where each level is the array
    # of corresponding node hashes.  The deepest level (with the hashes
    # of the leaves) is stored first.
    self.levels = [leaves]

    while len (self.levels[-1]) > 1:
      lastLevel = self.levels[-1]
      nextLevel = []
      for i in range (0, len (lastLevel), 2):
        if i + 1 < len (lastLevel):
          nextLevel.append (bytes (hashPair (lastLevel[i], lastLevel[i + 1])))
        else:
          nextLevel.append (lastLevel[i])
      self.levels.append (nextLevel)

    [self.root] = self.levels[-1]

  @property
  def leafCount (self):
    return len (self.levels[0])

  @property
  def depth (self):
    """
    Number of hashing levels above the leaves.  This is an upper bound
    for the length of proofs.
    """

    return len (self.levels) - 1

  def getProof (self, index):
    """
    Computes and returns the Merkle proof for the leaf with the given index.
    The proof is returned as array of bytes32 hashes, starting with the
    sibling on the leaf level, as expected by the OpenZeppelin
    MerkleProof contract.  Levels where the node has no sibling (because
    it was carried up) do not contribute to the proof.
    """

    if isinstance (index, bool) or not isinstance (index, int):
      raise IndexOutOfRange ("leaf index must be an integer: %r" % (index,))
    if index < 0 or index >= self.leafCount:
      raise IndexOutOfRange ("leaf index %d not in [0, %d)"
                               % (index, self.leafCount))

    proof = []
    for lvl in self.levels[:-1]:
      sibling = index ^ 1
      if sibling < len (lvl):
        proof.append (lvl[sibling])
      index >>= 1

    return proof
