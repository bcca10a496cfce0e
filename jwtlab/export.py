from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .codec import as_claims
from .engine import Claims, build_header


def build_export(
    token: str,
    alg: str,
    payload: Optional[Claims],
    header_overrides: Optional[Claims] = None,
    now: Optional[float] = None,
) -> Dict[str, Any]:
    """
    JSON-ready record of a generated token. Keys and secrets are never included.
    """
    ts = time.time() if now is None else now
    return {
        "algorithm": alg,
        "payload": as_claims(payload),
        "header": build_header(alg, header_overrides),
        "token": token,
        "generated": datetime.fromtimestamp(ts, timezone.utc).isoformat().replace("+00:00", "Z"),
    }


def default_export_filename(now: Optional[float] = None) -> str:
    ts = time.time() if now is None else now
    return f"jwt-export-{int(ts * 1000)}.json"
