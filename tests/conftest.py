"""
Shared fixtures for the airdrop tests.

The expected hashes below were computed independently of this code base
(keccak256 over the Solidity packed encoding), so they pin the leaf
encoding and tree shape bit-exactly.
"""

import pytest

import airdrop


ETHER = 10**18

ADDR_A = "0x" + "a" * 39 + "1"
ADDR_B = "0x" + "b" * 39 + "2"
ADDR_C = "0x" + "c" * 39 + "3"

# Leaves for (0, A, 100e18), (1, B, 200e18), (2, C, 300e18).
LEAVES_ABC = [
  "0x58a19ee90d4b8f4564f22a8f0375d2267783c27c4df0c701f447927f164fad4e",
  "0x7931f07957ce60380d4cf54777c7c16d3e5b0df29c5e9d6420a30bda682def35",
  "0x62be678f17663786466c80646a9b4a709dc5492a17f7a2d7905567e82052dc4d",
]
ROOT_ABC = "0x9c14708152a88caf90395f4705ebb879e635465525380689bdbe67daa29ada6e"
# hashPair (leaf 0, leaf 1), the proof for leaf 2.
PAIR_AB = "0x7105b61ef17c8f7f8ba3c6dd40d2ad8e04e8f59f1748c5f34e8840340415fe7e"
# Leaf for (0, A, 101e18).
LEAF_A_101 = "0xdb9bb7fd1ca83f34b5a1114ade8ab90eaffb8ed7388d67ce79b6598777fd6664"

# Five claims (i, 0x00..0<i+1>, (i+1) * 1e18).
ADDRS_FIVE = ["0x%040x" % (i + 1) for i in range (5)]
ROOT_FIVE = "0x9af99b0f8d215b9019530f52214d2f94a9f828933aa71e9d68bbfb33418372f4"
# Proof for the last of the five leaves (only the top-level sibling).
PROOF_FIVE_LAST = [
  "0x28dba84f9eb2ff018178d686d859b2126f1ed88f49e8cdaacc8ce79539d140c3",
]
# Batch roots of the five claims with a batch size of two.
BATCH_ROOTS_FIVE = [
  "0x2f12e8a6d04641c78a5bdc540d9fe8d01017694999e26ae46eedd1abe37f5d59",
  "0xb1239ff8306febd33ace3482e9c5568b4ee4c50639954dea488a85d577649cf9",
  "0x498140e134b2924b3175709da09bbad45117277431f8145dfa0564650f457df1",
]


def buildAllocations (claims, batchSize=airdrop.DEFAULT_BATCH_SIZE):
  """
  Builds an Airdrop from (address, amount) pairs with explicit amounts.
  """

  session = airdrop.IngestionSession (batchSize)
  for addr, amount in claims:
    session.addAllocation (addr, amount)
  return session.finish ()


@pytest.fixture
def abcAirdrop ():
  return buildAllocations ([
    (ADDR_A, 100 * ETHER),
    (ADDR_B, 200 * ETHER),
    (ADDR_C, 300 * ETHER),
  ])


@pytest.fixture
def fiveAirdrop ():
  """
  The five claims split into batches of two (the last one is short).
  """

  return buildAllocations ([
    (a, (i + 1) * ETHER) for i, a in enumerate (ADDRS_FIVE)
  ], batchSize=2)


@pytest.fixture
def largeAirdrop ():
  """
  A larger airdrop with scores, several batches and odd batch sizes.
  """

  rows = [("0x%040x" % (1000 + i), str (1 + (i % 7) * 0.5))
          for i in range (23)]
  return airdrop.partition (rows, batchSize=5)


class FakeCall:
  """
  Stands in for a bound web3 contract function.
  """

  def __init__ (self, name, args, result=None):
    self.name = name
    self.args = args
    self.result = result

  def call (self):
    return self.result

  def build_transaction (self, params):
    tx = dict (params)
    tx["to"] = FakeContract.ADDRESS
    tx["data"] = "%s%r" % (self.name, self.args)
    tx["function"] = self.name
    tx["args"] = self.args
    return tx


class FakeFunctions:

  def __init__ (self, contract):
    self.contract = contract

  def isClaimed (self, index):
    return FakeCall ("isClaimed", (index,), index in self.contract.claimed)

  def merkleRoot (self):
    return FakeCall ("merkleRoot", (), self.contract.root)

  def claim (self, *args):
    return FakeCall ("claim", args)

  def claimFromBatch (self, *args):
    return FakeCall ("claimFromBatch", args)


class FakeContract:
  """
  Minimal stand-in for a web3 contract object of the distributor.
  """

  ADDRESS = "0x" + "d" * 40

  def __init__ (self, claimed=(), root=None):
    self.address = self.ADDRESS
    self.claimed = set (claimed)
    self.root = root
    self.functions = FakeFunctions (self)


@pytest.fixture
def fakeContract ():
  return FakeContract ()
