import base64
import binascii
import json
import re
from typing import Any, Dict, Mapping

# Strict base64url charset (no padding in JWT segments)
BASE64URL_RE = re.compile(r"^[A-Za-z0-9\-_]*$")


def b64url_encode(data: bytes) -> str:
    """
    Base64url encode without padding, as required by JOSE / JWT.
    """
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(data: str) -> bytes:
    """
    Strict base64url decode:
      - Only allows A-Z, a-z, 0-9, '-' and '_'
      - Adds padding if missing
      - Raises ValueError if invalid
    """
    if not BASE64URL_RE.fullmatch(data):
        raise ValueError("invalid base64url characters")

    # '-' -> '+', '_' -> '/', then pad to a multiple of 4
    std = data.replace("-", "+").replace("_", "/")
    padded = std + "=" * (-len(std) % 4)
    try:
        raw = base64.b64decode(padded.encode("ascii"), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64url: {exc}") from exc

    # unused trailing bits must be zero, otherwise two strings decode alike
    if b64url_encode(raw) != data:
        raise ValueError("non-canonical base64url encoding")
    return raw


def compact_json(obj: Mapping[str, Any]) -> bytes:
    # Insertion order kept, no whitespace, no NaN/Infinity
    return json.dumps(dict(obj), separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")


def encode_segment(obj: Mapping[str, Any]) -> str:
    """
    JSON-encode then base64url-encode a header or payload.
    """
    return b64url_encode(compact_json(obj))


def decode_segment(segment: str) -> Dict[str, Any]:
    """
    Decode a base64url-encoded JSON segment (header or payload).
    Raises ValueError if the segment is not a base64url JSON object.
    """
    raw = b64url_decode(segment)
    obj = json.loads(raw.decode("utf-8"))
    if not isinstance(obj, dict):
        raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
    return obj


def split_jws(token: str) -> tuple[str, str, str]:
    """
    Split a compact JWS into 3 segments.
    Raises ValueError if the structure is wrong.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise ValueError(f"expected 3 segments, got {len(parts)}")
    return parts[0], parts[1], parts[2]
