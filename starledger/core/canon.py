# starledger/core/canon.py
import json
from typing import Any

try:
    import jcs
except ImportError:
    raise ImportError("Please install jcs: pip install jcs")


def canonical_json(obj: Any) -> bytes:
    """
    Produce deterministic UTF-8 bytes according to RFC 8785 (JSON Canonicalization Scheme).
    Block bodies and block hashes are both derived from these bytes.
    """
    return jcs.canonicalize(obj)


def parse_json_bytes(data: bytes) -> Any:
    """Inverse of canonical_json for payloads read back out of a block body."""
    return json.loads(data.decode("utf-8"))
