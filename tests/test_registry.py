# tests/test_registry.py
"""End-to-end: wallet → challenge → signed star → queries → validation."""
from dataclasses import replace

import pytest

from starledger import StarRegistry, WalletKeyPair
from starledger.config import LedgerConfig
from starledger.core.encoding import encode_body
from starledger.core.errors import InvalidParameter, InvalidSignature, MalformedKeyError, ProofExpired
from starledger.verify.validator import FailureKind

NOW = 1_760_000_000


class FakeClock:
    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return StarRegistry(clock=clock)


@pytest.fixture
def wallet():
    return WalletKeyPair.generate()


def register(registry, wallet, star):
    message = registry.request_message_ownership_verification(wallet.address)
    return registry.submit_star(wallet.address, message, wallet.sign(message), star)


def test_new_registry_has_genesis(registry):
    assert registry.get_chain_height() == 0
    genesis = registry.get_block_by_height(0)
    assert genesis.decode_body() == {"data": "Genesis Block"}


def test_submit_star_end_to_end(registry, wallet):
    star = {"dec": "68° 52' 56.9", "ra": "16h 29m 1.0s", "story": "Testing the story 4"}
    block = register(registry, wallet, star)

    assert registry.get_chain_height() == 1
    assert registry.get_block_by_hash(block.hash) is block
    assert registry.get_block_by_height(1) is block
    assert registry.get_stars_by_wallet_address(wallet.address) == [
        {"owner": wallet.address, "star": star}
    ]
    assert registry.validate_chain() == []


def test_stars_by_wallet_only_returns_own(registry, wallet):
    other = WalletKeyPair.generate()
    register(registry, wallet, {"story": "mine"})
    register(registry, other, {"story": "theirs"})
    register(registry, wallet, {"story": "mine again"})

    mine = registry.get_stars_by_wallet_address(wallet.address)
    assert [s["star"]["story"] for s in mine] == ["mine", "mine again"]
    assert registry.get_stars_by_wallet_address("unknown") == []


def test_height_after_appends(registry, wallet):
    for i in range(5):
        register(registry, wallet, {"n": i})
    # 6 successful appends including genesis
    assert registry.get_chain_height() == 5


def test_request_challenge_requires_address(registry):
    with pytest.raises(InvalidParameter):
        registry.request_message_ownership_verification("")


def test_expired_proof_leaves_chain_untouched(registry, clock, wallet):
    message = registry.request_message_ownership_verification(wallet.address)
    clock.now += 301
    with pytest.raises(ProofExpired):
        registry.submit_star(wallet.address, message, wallet.sign(message), {"n": 1})
    assert registry.get_chain_height() == 0


def test_wrong_signer_leaves_chain_untouched(registry, wallet):
    impostor = WalletKeyPair.generate()
    message = registry.request_message_ownership_verification(wallet.address)
    with pytest.raises(InvalidSignature):
        registry.submit_star(wallet.address, message, impostor.sign(message), {"n": 1})
    assert registry.get_chain_height() == 0
    assert registry.get_stars_by_wallet_address(wallet.address) == []


def test_unknown_lookups_return_none(registry):
    assert registry.get_block_by_hash("ff" * 32) is None
    assert registry.get_block_by_height(42) is None


def test_validate_chain_detects_tampering(registry, wallet):
    for i in range(3):
        register(registry, wallet, {"n": i})

    blocks = registry.chain._blocks
    blocks[1] = replace(blocks[1], body=encode_body({"owner": "mallory", "star": {"n": 0}}))

    failures = registry.validate_chain()
    assert [(f.height, f.kind) for f in failures] == [
        (1, FailureKind.INVALID_ENTRY_INTEGRITY),
        (2, FailureKind.BROKEN_LINKAGE),
    ]
    assert not registry.validation_report()


def test_config_is_applied(clock, wallet):
    cfg = LedgerConfig(validation_window_seconds=30, message_tag="skyRegistry", genesis_data="First light")
    registry = StarRegistry(config=cfg, clock=clock)

    assert registry.get_block_by_height(0).decode_body() == {"data": "First light"}
    message = registry.request_message_ownership_verification(wallet.address)
    assert message.endswith(":skyRegistry")

    clock.now += 31
    with pytest.raises(ProofExpired):
        registry.submit_star(wallet.address, message, wallet.sign(message), {"n": 1})


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        StarRegistry(config=LedgerConfig(validation_window_seconds=0))


def test_submit_star_with_address_alias_rejected(registry, wallet):
    alias = wallet.address + "="
    message = registry.request_message_ownership_verification(alias)
    with pytest.raises(MalformedKeyError):
        registry.submit_star(alias, message, wallet.sign(message), {"n": 1})
    assert registry.get_chain_height() == 0
    assert registry.get_stars_by_wallet_address(alias) == []


def test_block_time_follows_registry_clock(registry, clock, wallet):
    clock.now += 42.5
    block = register(registry, wallet, {"n": 1})
    assert block.time == (NOW + 42.5) * 1000
