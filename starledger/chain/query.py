# starledger/chain/query.py
from typing import Any, Dict, List, Optional

from starledger.chain.blockchain import Blockchain
from starledger.core.types import Block


class ChainQuery:
    """Read-only lookups. Never takes the writer lock."""

    def __init__(self, chain: Blockchain):
        self.chain = chain

    def get_height(self) -> int:
        return self.chain.height

    def find_by_hash(self, block_hash: str) -> Optional[Block]:
        for block in self.chain.snapshot():
            if block.hash == block_hash:
                return block
        return None

    def find_by_height(self, height: int) -> Optional[Block]:
        return self.chain.block_at(height)

    def list_by_owner(self, address: str) -> List[Dict[str, Any]]:
        """
        Decoded bodies of every block owned by `address`, in chain order.
        Always a list; empty when the address owns nothing.
        """
        owned = []
        for block in self.chain.snapshot():
            data = block.decode_body()
            if isinstance(data, dict) and "owner" in data and data["owner"] == address:
                owned.append(data)
        return owned
