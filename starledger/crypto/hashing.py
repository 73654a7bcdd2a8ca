# starledger/crypto/hashing.py
import hashlib
from typing import Any, Dict

from starledger.core.canon import canonical_json
from starledger.core.errors import HashComputationFailure


def hash_fields(fields: Dict[str, Any]) -> str:
    """hex(sha256(JCS(fields)))"""
    try:
        canon = canonical_json(fields)
    except (TypeError, ValueError) as e:
        raise HashComputationFailure(f"Cannot canonicalize block fields: {e}") from e
    return hashlib.sha256(canon).hexdigest()


def block_hash(block) -> str:
    """
    Content hash of a block: every field except the stored hash itself,
    so previous_block_hash is covered and linkage is tamper-evident.
    """
    return hash_fields(block.hashable_dict())
