# starledger/core/encoding.py
import base64
from typing import Any

from starledger.core.canon import canonical_json, parse_json_bytes
from starledger.core.errors import InvalidParameter, PayloadDecodeError


def b64url_encode(data: bytes) -> str:
    """Encode bytes to base64url (no padding, URL-safe)."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(s: str) -> bytes:
    """Decode base64url string back to bytes."""
    # Restore padding
    padding = len(s) % 4
    if padding:
        s += "=" * (4 - padding)
    return base64.urlsafe_b64decode(s)


def encode_body(payload: Any) -> str:
    """Payload → lowercase hex of its canonical JSON bytes."""
    try:
        return canonical_json(payload).hex()
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"Payload is not JSON serializable: {e}") from e


def decode_body(body: str) -> Any:
    try:
        return parse_json_bytes(bytes.fromhex(body))
    except ValueError as e:
        raise PayloadDecodeError(f"Block body is not hex-encoded JSON: {e}") from e
