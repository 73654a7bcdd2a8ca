# starledger/crypto/keys.py
"""
Ed25519 wallets.

A wallet address is the base64url (unpadded) encoding of the raw 32-byte public
key. Signatures are base64url of the raw 64-byte Ed25519 signature over the
UTF-8 bytes of the message.
"""
from dataclasses import dataclass, field
from typing import Optional

from cryptography.exceptions import InvalidSignature as _BadSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from starledger.core.encoding import b64url_decode, b64url_encode
from starledger.core.errors import MalformedKeyError

_RAW = serialization.Encoding.Raw


def _decode(value: str, what: str, size: int) -> bytes:
    if not isinstance(value, str) or not value:
        raise MalformedKeyError(f"{what} must be a non-empty base64url string")
    try:
        raw = b64url_decode(value)
    except ValueError as e:
        raise MalformedKeyError(f"{what} is not valid base64url: {e}") from e
    if len(raw) != size:
        raise MalformedKeyError(f"{what} must decode to {size} bytes, got {len(raw)}")
    # one key, one spelling: no padding, no stray low bits in the last character
    if b64url_encode(raw) != value:
        raise MalformedKeyError(f"{what} is not canonical unpadded base64url")
    return raw


@dataclass
class WalletKeyPair:
    """Ed25519 wallet. Verification-only when loaded from an address."""
    public_key: Ed25519PublicKey
    _private_key: Optional[Ed25519PrivateKey] = field(default=None, repr=False)

    @classmethod
    def generate(cls) -> "WalletKeyPair":
        priv = Ed25519PrivateKey.generate()
        return cls(public_key=priv.public_key(), _private_key=priv)

    @classmethod
    def from_private_b64url(cls, value: str) -> "WalletKeyPair":
        priv = Ed25519PrivateKey.from_private_bytes(_decode(value, "Private key", 32))
        return cls(public_key=priv.public_key(), _private_key=priv)

    @classmethod
    def from_address(cls, address: str) -> "WalletKeyPair":
        try:
            pub = Ed25519PublicKey.from_public_bytes(_decode(address, "Wallet address", 32))
        except MalformedKeyError:
            raise
        except ValueError as e:
            raise MalformedKeyError(f"Wallet address is not an Ed25519 public key: {e}") from e
        return cls(public_key=pub)

    @property
    def address(self) -> str:
        return b64url_encode(self.public_key.public_bytes(_RAW, serialization.PublicFormat.Raw))

    @property
    def can_sign(self) -> bool:
        return self._private_key is not None

    def private_key_b64url(self) -> str:
        if self._private_key is None:
            raise MalformedKeyError("Wallet has no private key")
        raw = self._private_key.private_bytes(
            _RAW, serialization.PrivateFormat.Raw, serialization.NoEncryption()
        )
        return b64url_encode(raw)

    def sign(self, message: str) -> str:
        if self._private_key is None:
            raise MalformedKeyError("Wallet has no private key; cannot sign")
        return b64url_encode(self._private_key.sign(message.encode("utf-8")))

    def verify(self, message: str, signature: str) -> bool:
        sig = _decode(signature, "Signature", 64)
        try:
            self.public_key.verify(sig, message.encode("utf-8"))
            return True
        except _BadSignature:
            return False


def verify_signature(message: str, address: str, signature: str) -> bool:
    """
    Check that `signature` over `message` was produced by the wallet `address`.
    Returns False for a well-formed but wrong signature; raises MalformedKeyError
    when the address or signature cannot be decoded.
    """
    return WalletKeyPair.from_address(address).verify(message, signature)
