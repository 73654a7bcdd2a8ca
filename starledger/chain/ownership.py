# starledger/chain/ownership.py
"""
Ownership proofs for chain writes.

A wallet owner asks for a challenge message, signs it with their wallet and
submits the signature together with the star record. The challenge embeds the
address and issue time (whole seconds) so it can be checked without keeping
any server-side state:

    <address>:<issued_at_seconds>:starRegistry
"""
import logging
import time
from typing import Any, Callable, Tuple

from starledger.chain.blockchain import Blockchain
from starledger.core.errors import InvalidParameter, InvalidSignature, ProofExpired
from starledger.core.types import Block
from starledger.crypto.keys import verify_signature

logger = logging.getLogger(__name__)

VALIDATION_WINDOW_SECONDS = 5 * 60
MESSAGE_TAG = "starRegistry"
CLOCK_SKEW_SECONDS = 30

SignatureVerifier = Callable[[str, str, str], bool]


def _check_address(address: Any) -> str:
    if not isinstance(address, str) or not address.strip():
        raise InvalidParameter("Invalid params: wallet address is required")
    if ":" in address:
        raise InvalidParameter("Invalid params: wallet address must not contain ':'")
    return address


def parse_challenge(message: str, tag: str = MESSAGE_TAG) -> Tuple[str, int]:
    """Recover (address, issued_at_seconds) from a challenge message."""
    if not isinstance(message, str):
        raise InvalidParameter("Invalid params: message is required")
    parts = message.split(":")
    if len(parts) != 3 or parts[2] != tag:
        raise InvalidParameter(f"Malformed ownership message: {message!r}")
    address, issued_raw, _ = parts
    if not (issued_raw.isascii() and issued_raw.isdigit()):
        raise InvalidParameter(f"Malformed ownership message timestamp: {issued_raw!r}")
    return address, int(issued_raw)


class OwnershipProtocol:
    """Challenge/response gate in front of Blockchain.add_block."""

    def __init__(
        self,
        chain: Blockchain,
        verifier: SignatureVerifier = verify_signature,
        clock: Callable[[], float] = time.time,
        window_seconds: int = VALIDATION_WINDOW_SECONDS,
        tag: str = MESSAGE_TAG,
    ):
        self.chain = chain
        self.verifier = verifier
        self.clock = clock
        self.window_seconds = window_seconds
        self.tag = tag

    def _now_seconds(self) -> int:
        return int(self.clock())

    def request_challenge(self, address: str) -> str:
        address = _check_address(address)
        return f"{address}:{self._now_seconds()}:{self.tag}"

    def submit_proof(self, address: str, message: str, signature: str, payload: Any) -> Block:
        """
        Verify a signed challenge and append {"owner": address, "star": payload}.

        Order of checks: message shape → issue time → signature. An expired proof
        never reaches the signature verifier.
        """
        address = _check_address(address)
        claimed, issued_at = parse_challenge(message, self.tag)
        if claimed != address:
            raise InvalidParameter("Ownership message was issued for a different wallet address")

        age = self._now_seconds() - issued_at
        if age < -CLOCK_SKEW_SECONDS:
            logger.info("Rejected future-dated proof for %s (issued %ss ahead)", address, -age)
            raise InvalidParameter("Ownership message is dated in the future")
        if age > self.window_seconds:
            logger.info("Rejected expired proof for %s (age %ss)", address, age)
            raise ProofExpired(age, self.window_seconds)

        if not self.verifier(message, address, signature):
            logger.info("Rejected invalid signature for %s", address)
            raise InvalidSignature("Invalid message signature")

        block = Block.create({"owner": address, "star": payload}, time_ms=int(self.clock() * 1000))
        return self.chain.add_block(block)
