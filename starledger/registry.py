# starledger/registry.py
import time
from typing import Any, Callable, Dict, List, Optional

from starledger.chain.blockchain import Blockchain
from starledger.chain.ownership import OwnershipProtocol, SignatureVerifier
from starledger.chain.query import ChainQuery
from starledger.config import LedgerConfig
from starledger.core.types import Block
from starledger.crypto.keys import verify_signature
from starledger.verify.validator import ChainValidator, ValidationFailure, ValidationResult


class StarRegistry:
    """
    Star registry backed by a single in-memory Blockchain.
    Owns the chain and hands the same instance to every component.
    """

    def __init__(
        self,
        config: Optional[LedgerConfig] = None,
        verifier: SignatureVerifier = verify_signature,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or LedgerConfig()
        self.config.validate()
        self.chain = Blockchain(genesis_data=self.config.genesis_data)
        self.ownership = OwnershipProtocol(
            self.chain,
            verifier=verifier,
            clock=clock,
            window_seconds=self.config.validation_window_seconds,
            tag=self.config.message_tag,
        )
        self.query = ChainQuery(self.chain)
        self.validator = ChainValidator()

    def get_chain_height(self) -> int:
        return self.query.get_height()

    def request_message_ownership_verification(self, address: str) -> str:
        return self.ownership.request_challenge(address)

    def submit_star(self, address: str, message: str, signature: str, star: Any) -> Block:
        return self.ownership.submit_proof(address, message, signature, star)

    def get_block_by_hash(self, block_hash: str) -> Optional[Block]:
        return self.query.find_by_hash(block_hash)

    def get_block_by_height(self, height: int) -> Optional[Block]:
        return self.query.find_by_height(height)

    def get_stars_by_wallet_address(self, address: str) -> List[Dict[str, Any]]:
        return self.query.list_by_owner(address)

    def validate_chain(self) -> List[ValidationFailure]:
        return self.validation_report().failures

    def validation_report(self) -> ValidationResult:
        return self.validator.validate(self.chain)
