# tests/test_keys.py
import pytest

from starledger.core.encoding import b64url_decode
from starledger.core.errors import MalformedKeyError
from starledger.crypto.keys import WalletKeyPair, verify_signature


@pytest.fixture
def wallet():
    return WalletKeyPair.generate()


def test_address_is_raw_public_key(wallet):
    assert len(b64url_decode(wallet.address)) == 32
    assert "=" not in wallet.address


def test_sign_and_verify(wallet):
    signature = wallet.sign("addr:1760000000:starRegistry")
    assert len(b64url_decode(signature)) == 64
    assert verify_signature("addr:1760000000:starRegistry", wallet.address, signature)


def test_verify_rejects_other_message(wallet):
    signature = wallet.sign("hello")
    assert not verify_signature("hello!", wallet.address, signature)


def test_verify_rejects_other_wallet(wallet):
    other = WalletKeyPair.generate()
    assert not verify_signature("hello", other.address, wallet.sign("hello"))


def test_private_key_roundtrip(wallet):
    restored = WalletKeyPair.from_private_b64url(wallet.private_key_b64url())
    assert restored.address == wallet.address
    assert verify_signature("hi", wallet.address, restored.sign("hi"))


def test_address_only_wallet_cannot_sign(wallet):
    public_only = WalletKeyPair.from_address(wallet.address)
    assert not public_only.can_sign
    assert public_only.verify("hi", wallet.sign("hi"))
    with pytest.raises(MalformedKeyError):
        public_only.sign("hi")
    with pytest.raises(MalformedKeyError):
        public_only.private_key_b64url()


@pytest.mark.parametrize("address", ["", "short", "!!!!", "a" * 100])
def test_malformed_address_raises(wallet, address):
    with pytest.raises(MalformedKeyError):
        verify_signature("hello", address, wallet.sign("hello"))


@pytest.mark.parametrize("signature", ["", "abcd", "é" * 10])
def test_malformed_signature_raises(wallet, signature):
    with pytest.raises(MalformedKeyError):
        verify_signature("hello", wallet.address, signature)


def address_aliases(address):
    """Other base64url spellings that decode to the same 32 key bytes."""
    last = address[-1]
    alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
    base = alphabet.index(last) & ~0b11
    variants = [address[:-1] + alphabet[base + low] for low in range(4)]
    return [address + "="] + [v for v in variants if v != address]


def test_address_aliases_rejected(wallet):
    signature = wallet.sign("hello")
    aliases = address_aliases(wallet.address)
    assert len(aliases) == 4
    for alias in aliases:
        assert b64url_decode(alias) == b64url_decode(wallet.address)
        with pytest.raises(MalformedKeyError):
            verify_signature("hello", alias, signature)
        with pytest.raises(MalformedKeyError):
            WalletKeyPair.from_address(alias)


def test_padded_signature_rejected(wallet):
    with pytest.raises(MalformedKeyError):
        verify_signature("hello", wallet.address, wallet.sign("hello") + "==")
