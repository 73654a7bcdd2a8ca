# starledger/core/types.py
import time
from dataclasses import dataclass, asdict
from typing import Any, Optional

from starledger.core import encoding
from starledger.crypto.hashing import block_hash

GENESIS_DATA = "Genesis Block"


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Block:
    """Single entry in the hash-linked star registry chain."""
    body: str                                   # hex(JCS(payload))
    time: int                                   # creation time, ms since epoch
    height: int = -1                            # -1 until sealed
    previous_block_hash: Optional[str] = None   # None for the genesis block
    hash: Optional[str] = None                  # hex(sha256) fixed at seal time

    @classmethod
    def create(cls, payload: Any, time_ms: Optional[int] = None) -> "Block":
        """New unsealed block. Linkage fields are filled in by Blockchain.add_block."""
        return cls(
            body=encoding.encode_body(payload),
            time=now_ms() if time_ms is None else time_ms,
        )

    @property
    def is_sealed(self) -> bool:
        return self.hash is not None

    def hashable_dict(self) -> dict:
        d = asdict(self)
        del d["hash"]
        return d

    def compute_hash(self) -> str:
        return block_hash(self)

    def decode_body(self) -> Any:
        return encoding.decode_body(self.body)

    def validate(self) -> bool:
        """True if the stored hash still matches the block content."""
        return self.is_sealed and self.hash == self.compute_hash()

    def to_dict(self) -> dict:
        return asdict(self)
