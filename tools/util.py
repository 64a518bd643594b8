#!/usr/bin/env python3
# Copyright (C) 2026 The Xaya developers

"""
Some utility methods for the scripts.
"""

from errors import InvalidAddress

from web3 import Web3

import json
import logging


def formatTokens (val):
  """
  Formats a token amount (in the smallest unit, 18 decimals) as
  decimal string.
  """

  return str (Web3.from_wei (val, "ether"))


def normaliseAddress (addr):
  """
  Validates an EVM address given as hex string and returns it in the
  canonical (lower-case, 0x-prefixed) form.  Mixed-case addresses must
  have a valid checksum.  Raises InvalidAddress otherwise.
  """

  if not isinstance (addr, str):
    raise InvalidAddress (addr)

  stripped = addr.strip ()
  if not stripped.startswith (("0x", "0X")) or not Web3.is_address (stripped):
    raise InvalidAddress (addr)

  digits = stripped[2:]
  mixedCase = digits != digits.lower () and digits != digits.upper ()
  if mixedCase and not Web3.is_checksum_address ("0x" + digits):
    raise InvalidAddress (addr)

  return Web3.to_checksum_address (stripped).lower ()


def hexHash (val):
  """
  Returns a 32-byte hash as 0x-prefixed hex string.
  """

  return Web3.to_hex (val)


def parseHash (val):
  """
  Converts a hash given as hex string (or bytes) to raw bytes and makes
  sure it is 32 bytes long.
  """

  if isinstance (val, str):
    val = Web3.to_bytes (hexstr=val)
  val = bytes (val)

  if len (val) != 32:
    raise ValueError ("expected a 32-byte hash, got %d bytes" % len (val))

  return val


def readJson (path):
  with open (path, "r") as f:
    return json.load (f)


def writeJson (path, data):
  with open (path, "w") as f:
    json.dump (data, f, indent=2)
    f.write ("\n")


def setupLogging (verbose=False):
  """
  Configures logging for one of the command-line scripts.
  """

  logging.basicConfig (
      level=logging.DEBUG if verbose else logging.INFO,
      format="%(asctime)s %(levelname)s %(name)s: %(message)s")
