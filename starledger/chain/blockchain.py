# starledger/chain/blockchain.py
import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Iterator, List, Optional

from starledger.core.errors import InvalidParameter
from starledger.core.types import GENESIS_DATA, Block
from starledger.crypto.hashing import block_hash

logger = logging.getLogger(__name__)


class Blockchain:
    """
    In-memory, append-only store of sealed blocks.
    Index in the store == block height. Every write goes through add_block,
    which holds the writer lock across read tail → seal → push.
    """

    def __init__(self, genesis_data: str = GENESIS_DATA):
        self._blocks: List[Block] = []
        self._lock = threading.RLock()
        self._genesis_data = genesis_data
        self._initialize_chain()

    def _initialize_chain(self) -> None:
        if self.height != -1:
            return
        try:
            genesis = self.append({"data": self._genesis_data})
            logger.debug("Genesis block created: %s", genesis.hash)
        except Exception:
            # The chain stays empty and usable; the next append becomes height 0.
            logger.warning("Failed to create genesis block", exc_info=True)

    @property
    def height(self) -> int:
        return len(self._blocks) - 1

    def __len__(self) -> int:
        return len(self._blocks)

    @property
    def tail(self) -> Optional[Block]:
        blocks = self._blocks
        return blocks[-1] if blocks else None

    def add_block(self, block: Block) -> Block:
        """
        Seal `block` onto the tail: set previous_block_hash and height, compute
        the hash, push. Returns the sealed block. On any failure the chain is
        left exactly as it was.
        """
        if block.is_sealed:
            raise InvalidParameter("Cannot add an already sealed block")

        with self._lock:
            if self._blocks:
                tail = self._blocks[-1]
                linked = replace(block, previous_block_hash=tail.hash, height=len(self._blocks))
            else:
                linked = replace(block, previous_block_hash=None, height=0)

            sealed = replace(linked, hash=block_hash(linked))
            self._blocks.append(sealed)

        logger.debug("Block %d appended: %s", sealed.height, sealed.hash)
        return sealed

    def append(self, payload: Any) -> Block:
        return self.add_block(Block.create(payload))

    def block_at(self, height: int) -> Optional[Block]:
        if not isinstance(height, int) or isinstance(height, bool):
            return None
        blocks = self._blocks
        if 0 <= height < len(blocks):
            return blocks[height]
        return None

    def snapshot(self) -> List[Block]:
        """Copy of the chain; safe to iterate while writers keep appending."""
        return self._blocks.copy()

    def __iter__(self) -> Iterator[Block]:
        return iter(self.snapshot())

    @contextmanager
    def locked(self) -> Iterator[List[Block]]:
        """Hold the writer lock and yield a stable snapshot (used by validators)."""
        with self._lock:
            yield self.snapshot()
