# Copyright (C) 2026 The Xaya developers

"""
Exceptions raised while building the airdrop Merkle trees and while
constructing proofs from them.
"""


class AirdropError (Exception):
  """
  Base class for all errors raised by the airdrop tools.
  """


class InvalidAddress (AirdropError):
  """
  The given value is not a valid 20-byte hex address.
  """

  def __init__ (self, value):
    super ().__init__ ("invalid address: %r" % (value,))
    self.value = value


class InvalidAmount (AirdropError):
  """
  An index or amount is not an integer representable as uint256.
  """


class MalformedRecord (AirdropError):
  """
  An input record was rejected during ingestion.  The reason is a short
  keyword that is used to count skipped records per kind.
  """

  def __init__ (self, reason, msg):
    super ().__init__ (msg)
    self.reason = reason


class EmptyInput (AirdropError):
  """
  There is nothing to build a tree from (no leaves or no valid records).
  """


class DuplicateIndex (AirdropError):
  """
  Global record indices within a batch are repeated or not increasing.
  """


class IndexOutOfRange (AirdropError):
  """
  A leaf or batch index is outside the valid range.
  """


class NotEligible (AirdropError):
  """
  The requested address is not part of the airdrop.  This is an ordinary
  outcome of a lookup and not an internal failure.
  """

  def __init__ (self, address):
    super ().__init__ ("address not eligible: %s" % address)
    self.address = address


class ProofConstructionFailed (AirdropError):
  """
  A freshly built proof does not verify against the known root, or stored
  batch data is inconsistent with its recorded root.  This indicates a bug
  or corrupted data and must never be ignored.
  """
