#!/usr/bin/env python3

from flask import Flask, render_template, request, jsonify
import argparse
import sys
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware
from distributor import Distributor
from errors import InvalidAddress, NotEligible, ProofConstructionFailed
from proofs import ProofService
from store import BatchStore
import util

app = Flask(__name__)

# Global variables
proof_service = None
web3 = None
distributor = None

def load_proof_service(data_dir):
    """Load the airdrop data directory and set up the proof service."""
    try:
        return ProofService(BatchStore(data_dir))
    except (OSError, ValueError, KeyError) as e:
        print(f"Error loading airdrop data from {data_dir}: {e}", file=sys.stderr)
        sys.exit(1)

def check_claimed(index):
    """
    Returns whether the claim with the given index has been made on-chain,
    or None if no distributor contract is configured.
    """
    if distributor is None:
        return None
    return distributor.isClaimed(index)

def wants_combined():
    """Whether the request asks for a proof against the final root."""
    value = request.values.get('combined', '')
    return value.lower() in ('1', 'true', 'yes', 'on')

def error_response(message, status):
    return jsonify({
        'success': False,
        'error': message
    }), status

def lookup_proof(address, combined):
    """
    Builds the proof for an address.  Returns (proof, error, status), where
    error is None on success.
    """
    try:
        util.normaliseAddress(address)
    except InvalidAddress:
        return None, 'Invalid address', 400

    try:
        return proof_service.getProof(address, combined=combined), None, 200
    except NotEligible:
        return None, 'Address not eligible', 404
    except ProofConstructionFailed as e:
        app.logger.error("Proof construction failed for %s: %s", address, e)
        return None, 'Internal error building the proof', 500

@app.route('/', methods=['GET', 'POST'])
def airdrop_claim():
    claim = None
    error = None
    address = ''
    claimed = None

    if request.method == 'POST':
        address = request.form.get('address', '').strip()
        proof, error, _ = lookup_proof(address, wants_combined())

        if error is None:
            claim = proof.toJson()
            claimed = check_claimed(proof.index)

    return render_template('index.html',
                           claim=claim,
                           claimed=claimed,
                           error=error,
                           address=address,
                           root=util.hexHash(proof_service.finalRoot))

@app.route('/api/root', methods=['GET'])
def airdrop_root():
    """Returns the final root and the batch roots."""
    source = proof_service.source
    return jsonify({
        'success': True,
        'root': util.hexHash(proof_service.finalRoot),
        'batchRoots': [util.hexHash(r) for r in source.batchRoots()],
        'batchSize': source.batchSize,
    })

@app.route('/api/proof/<address>', methods=['GET'])
def airdrop_proof(address):
    """Returns the claim proof for an address as JSON."""
    proof, error, status = lookup_proof(address, wants_combined())
    if error is not None:
        return error_response(error, status)

    result = proof.toJson()
    result['claimed'] = check_claimed(proof.index)
    return jsonify({
        'success': True,
        'claim': result
    })

@app.route('/execute-claim', methods=['POST'])
def execute_claim():
    """Prepare the claim transaction for an address, to be signed by the wallet."""
    address = request.form.get('address')
    wallet_address = request.form.get('wallet_address')

    # Validate inputs
    if not wallet_address:
        return error_response('Wallet not connected', 400)

    if not address:
        return error_response('Claim address is missing', 400)

    if distributor is None:
        return error_response('Distributor contract not configured', 503)

    proof, error, status = lookup_proof(address, wants_combined())
    if error is not None:
        return error_response(error, status)

    try:
        if check_claimed(proof.index):
            return error_response('This claim has already been made', 400)

        tx = distributor.buildClaim(
            proof,
            wallet_address,
            web3.eth.get_transaction_count(Web3.to_checksum_address(wallet_address))
        )

        # Return the transaction data to be signed by MetaMask in the frontend
        return jsonify({
            'success': True,
            'transaction': {
                'to': tx['to'],
                'from': tx['from'],
                'data': tx['data'],
                'gas': tx['gas'],
                'amount': util.formatTokens(proof.amount),
            }
        })

    except Exception as e:
        app.logger.exception("Error preparing claim transaction")
        return error_response(f'Error preparing transaction: {str(e)}', 500)

if __name__ == '__main__':
    # Set up command line argument parsing
    parser = argparse.ArgumentParser(description='Token Airdrop Claims Application')
    parser.add_argument('--data', required=True, help='Directory with the airdrop data')
    parser.add_argument('--rpc-url', default='', help='Ethereum RPC endpoint URL')
    parser.add_argument('--distributor', default='', help='Distributor contract address')

    # Parse arguments
    args = parser.parse_args()

    proof_service = load_proof_service(args.data)

    if args.rpc_url and args.distributor:
        # Connect to Ethereum and set up contract
        try:
            web3 = Web3(Web3.HTTPProvider(args.rpc_url))
            web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
            if not web3.is_connected():
                print(f"Error: Could not connect to Ethereum node at {args.rpc_url}", file=sys.stderr)
                sys.exit(1)

            distributor = Distributor.connect(web3, args.distributor)
            print(f"Connected to Ethereum node, distributor at {args.distributor}")
        except Exception as e:
            print(f"Error setting up Web3 or contract: {e}", file=sys.stderr)
            sys.exit(1)

    # Print stats about the loaded data
    print(f"Loaded airdrop data with {len(proof_service.source.addresses())} claims")
    print(f"Merkle root: {util.hexHash(proof_service.finalRoot)}")

    app.run(debug=True)
