#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
This script builds and signs the claim transaction for an address in the
airdrop, and optionally sends it to the network.
"""

import distributor
from errors import NotEligible
import proofs
import store

from eth_account import Account
from web3 import Web3

import argparse
import sys


parser = argparse.ArgumentParser ()
parser.add_argument ("--data", default="merkle-data",
                     help="Directory with the airdrop data")
parser.add_argument ("--address", required=True,
                     help="Address whose claim to submit")
parser.add_argument ("--key", required=True,
                     help="Private key (hex) of the sending account")
parser.add_argument ("--rpc-url", required=True,
                     help="RPC endpoint of the network")
parser.add_argument ("--distributor", required=True,
                     help="Address of the distributor contract")
parser.add_argument ("--combined", action="store_true",
                     help="Claim with a proof against the final root"
                          " (claim) instead of the batch (claimFromBatch)")
parser.add_argument ("--send", action="store_true",
                     help="Send the signed transaction")
args = parser.parse_args ()

service = proofs.ProofService (store.BatchStore (args.data))
try:
  proof = service.getProof (args.address, combined=args.combined)
except NotEligible:
  sys.exit ("Address not eligible")

w3 = Web3 (Web3.HTTPProvider (args.rpc_url))
dist = distributor.Distributor.connect (w3, args.distributor)

if dist.isClaimed (proof.index):
  sys.exit ("Claim %d has already been made" % proof.index)

if args.combined and dist.merkleRoot () != proof.root:
  sys.exit ("Distributor root does not match the airdrop data")

acc = Account.from_key (args.key)
tx = dist.buildClaim (proof, acc.address,
                      w3.eth.get_transaction_count (acc.address))
tx["chainId"] = w3.eth.chain_id
signed = acc.sign_transaction (tx)

print ("Sender: %s" % acc.address)
print ("Claim index: %d" % proof.index)
print ("Signed transaction: %s" % Web3.to_hex (signed.raw_transaction))

if args.send:
  txid = w3.eth.send_raw_transaction (signed.raw_transaction)
  print ("Sent: %s" % Web3.to_hex (txid))
