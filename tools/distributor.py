# Copyright (C) 2026 The Xaya developers

"""
Interaction with the MerkleDistributor contract on-chain.  The contract
verifies claims either against its single final root (claim) or against
the root of a registered batch (claimFromBatch), and tracks claimed
indices in a bitmap.
"""

from web3 import Web3

import logging


log = logging.getLogger (__name__)

# Gas limit used for claim transactions.
CLAIM_GAS = 200000

# The parts of the distributor ABI used by the tools.
ABI = [
  {
    "type": "function",
    "name": "merkleRoot",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"name": "", "type": "bytes32"}],
  },
  {
    "type": "function",
    "name": "isClaimed",
    "stateMutability": "view",
    "inputs": [{"name": "index", "type": "uint256"}],
    "outputs": [{"name": "", "type": "bool"}],
  },
  {
    "type": "function",
    "name": "claim",
    "stateMutability": "nonpayable",
    "inputs": [
      {"name": "index", "type": "uint256"},
      {"name": "account", "type": "address"},
      {"name": "amount", "type": "uint256"},
      {"name": "merkleProof", "type": "bytes32[]"},
    ],
    "outputs": [],
  },
  {
    "type": "function",
    "name": "claimFromBatch",
    "stateMutability": "nonpayable",
    "inputs": [
      {"name": "index", "type": "uint256"},
      {"name": "batchIndex", "type": "uint256"},
      {"name": "account", "type": "address"},
      {"name": "amount", "type": "uint256"},
      {"name": "merkleProof", "type": "bytes32[]"},
    ],
    "outputs": [],
  },
]


class Distributor:
  """
  Wrapper around the web3 contract object of a deployed distributor.
  """

  def __init__ (self, contract):
    self.contract = contract

  @classmethod
  def connect (cls, w3, address):
    return cls (w3.eth.contract (address=Web3.to_checksum_address (address),
                                 abi=ABI))

  @property
  def address (self):
    return self.contract.address

  def merkleRoot (self):
    return self.contract.functions.merkleRoot ().call ()

  def isClaimed (self, index):
    return self.contract.functions.isClaimed (index).call ()

  def claimCall (self, proof):
    """
    Returns the contract function call that claims with the given Proof.
    Combined proofs go to claim, batch-level proofs to claimFromBatch.
    """

    account = Web3.to_checksum_address (proof.account)
    hashes = [bytes (p) for p in proof.proof]

    if proof.combined:
      return self.contract.functions.claim (
          proof.index, account, proof.amount, hashes)

    return self.contract.functions.claimFromBatch (
        proof.index, proof.batchIndex, account, proof.amount, hashes)

  def buildClaim (self, proof, sender, nonce, gas=CLAIM_GAS):
    """
    Builds the (unsigned) transaction that submits the claim, to be sent
    from the given sender address.
    """

    log.debug ("Building claim for index %d from %s", proof.index, sender)

    return self.claimCall (proof).build_transaction ({
      "from": Web3.to_checksum_address (sender),
      "gas": gas,
      "nonce": nonce,
    })
