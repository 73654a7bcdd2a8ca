# starledger/core/errors.py
"""
Exceptions raised by the ledger.

Request-time errors (InvalidParameter, ProofExpired, InvalidSignature) reject a
single write and leave the chain untouched. Validation findings are never raised,
see starledger.verify.validator.
"""


class LedgerError(Exception):
    """Base class for every error raised by starledger."""


class InvalidParameter(LedgerError, ValueError):
    """Missing or malformed request input (empty address, unparseable challenge...)."""


class ProofExpired(LedgerError):
    """The ownership challenge is older than the validation window."""

    def __init__(self, age_seconds: int, window_seconds: int):
        self.age_seconds = age_seconds
        self.window_seconds = window_seconds
        super().__init__(
            f"Message signature expired: issued {age_seconds}s ago, window is {window_seconds}s"
        )


class InvalidSignature(LedgerError):
    """The signature does not verify against the claimed wallet address."""


class HashComputationFailure(LedgerError):
    """The block fields could not be canonicalized for hashing."""


class MalformedKeyError(LedgerError, ValueError):
    """A wallet address, private key or signature could not be decoded."""


class PayloadDecodeError(LedgerError, ValueError):
    """A block body is not valid hex-encoded JSON."""
