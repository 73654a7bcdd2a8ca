# starledger/__init__.py
"""
starledger — an append-only, hash-linked star registry.
Writes are authorized by Ed25519 wallet signatures over time-boxed challenges;
every block links to its predecessor by SHA-256 over RFC 8785 canonical JSON.
"""

__version__ = "0.1.0-dev"

from starledger.chain.blockchain import Blockchain
from starledger.core.types import Block
from starledger.crypto.keys import WalletKeyPair, verify_signature
from starledger.registry import StarRegistry
from starledger.verify.validator import ChainValidator, FailureKind, ValidationResult

__all__ = [
    "Block",
    "Blockchain",
    "ChainValidator",
    "FailureKind",
    "StarRegistry",
    "ValidationResult",
    "WalletKeyPair",
    "verify_signature",
]
