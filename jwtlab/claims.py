"""
Time helpers over the registered claims (exp, iat, nbf).

All timestamps are seconds since the epoch. Non-numeric time claims are
treated as absent rather than as errors: decoding never fails because of
claim contents.
"""
from __future__ import annotations

import time
from datetime import datetime, tzinfo
from typing import Any, Dict, Mapping, Optional

from .models import DecodedToken, TokenMetadata

EXPIRED = "Expired"


def _now(now: Optional[float]) -> int:
    return int(time.time() if now is None else now)


def _numeric_claim(payload: Mapping[str, Any], name: str) -> Optional[float]:
    value = payload.get(name)
    # bool is an int subclass, but never a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def format_timestamp(timestamp: float, tz: Optional[tzinfo] = None) -> str:
    """
    Render an epoch timestamp as text, in local time unless `tz` is given.
    """
    try:
        dt = datetime.fromtimestamp(timestamp, tz).astimezone(tz)
    except (OverflowError, OSError, ValueError):
        return f"{timestamp} (out of range)"
    return dt.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def get_time_to_expiry(exp: float, now: Optional[float] = None) -> str:
    """
    "Expired", or the remaining time as "1h 2m 3s", "2m 3s" or "3s".
    """
    diff = int(exp) - _now(now)
    if diff <= 0:
        return EXPIRED

    hours, rem = divmod(diff, 3600)
    minutes, seconds = divmod(rem, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def is_expired(payload: Mapping[str, Any], now: Optional[float] = None) -> bool:
    exp = _numeric_claim(payload, "exp")
    return exp is not None and exp <= _now(now)


def is_not_yet_valid(payload: Mapping[str, Any], now: Optional[float] = None) -> bool:
    nbf = _numeric_claim(payload, "nbf")
    return nbf is not None and nbf > _now(now)


def summarize(
    decoded: DecodedToken,
    now: Optional[float] = None,
    tz: Optional[tzinfo] = None,
) -> TokenMetadata:
    payload = decoded.payload
    exp = _numeric_claim(payload, "exp")
    iat = _numeric_claim(payload, "iat")
    nbf = _numeric_claim(payload, "nbf")
    iss = payload.get("iss")
    sub = payload.get("sub")

    return TokenMetadata(
        algorithm=decoded.alg,
        issued_at=format_timestamp(iat, tz) if iat is not None else None,
        expires_at=format_timestamp(exp, tz) if exp is not None else None,
        not_before=format_timestamp(nbf, tz) if nbf is not None else None,
        issuer=iss if isinstance(iss, str) else None,
        subject=sub if isinstance(sub, str) else None,
        time_to_expiry=get_time_to_expiry(exp, now) if exp is not None else None,
        expired=is_expired(payload, now),
        not_yet_valid=is_not_yet_valid(payload, now),
    )


def with_expiry(payload: Mapping[str, Any], hours: float, now: Optional[float] = None) -> Dict[str, Any]:
    """Copy of `payload` with exp set `hours` from now."""
    return {**payload, "exp": _now(now) + int(hours * 3600)}


def with_issued_at(payload: Mapping[str, Any], now: Optional[float] = None) -> Dict[str, Any]:
    """Copy of `payload` with iat set to now."""
    return {**payload, "iat": _now(now)}
