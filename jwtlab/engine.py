"""
Signature engine: one sign/verify contract over the HMAC, RSA and ECDSA
families.

The algorithm used to verify is always the one the caller passes in.
The token's own header `alg` is never trusted to pick the primitive.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel

from .codec import as_claims, decode, encode
from .config import settings
from .crypto_backend import ALGORITHMS, Family, KeyMaterial, get_spec
from .crypto_ecdsa import EcdsaHandler
from .crypto_hmac import HmacHandler
from .crypto_rsa import RsaHandler
from .errors import JwtError, KeyFormatError, UnsupportedAlgorithmError
from .jose_utils import b64url_decode, b64url_encode
from .metrics import (
    ERRORS_TOTAL,
    SIGN_LATENCY_SECONDS,
    TOKENS_SIGNED_TOTAL,
    VERIFICATIONS_TOTAL,
    VERIFY_LATENCY_SECONDS,
)
from .models import ValidationResult

logger = logging.getLogger("jwtlab.engine")

VERIFIED_MESSAGE = "Signature verified successfully"

Handler = Union[HmacHandler, RsaHandler, EcdsaHandler]

HANDLERS: Dict[Family, Handler] = {
    Family.HMAC: HmacHandler(),
    Family.RSA: RsaHandler(),
    Family.ECDSA: EcdsaHandler(),
}

Claims = Union[Mapping[str, Any], BaseModel]

# metric label per error class
_ERROR_TYPES = {
    "FormatError": "format_error",
    "DecodeError": "decode_error",
    "KeyFormatError": "key_format_error",
    "UnsupportedAlgorithmError": "unsupported_algorithm",
}


def build_header(alg: str, header_overrides: Optional[Claims] = None) -> Dict[str, Any]:
    """
    {alg, typ: "JWT", **overrides} with the explicit alg always winning.
    """
    header: Dict[str, Any] = {"alg": alg, "typ": settings.default_typ}
    header.update(as_claims(header_overrides))
    header["alg"] = alg
    return header


def sign(
    payload: Optional[Claims],
    key: KeyMaterial,
    alg: str,
    header_overrides: Optional[Claims] = None,
) -> str:
    """
    Issue a compact JWT signed with `key` under `alg`.

    Raises:
        UnsupportedAlgorithmError: alg is not one of the eight supported names
        KeyFormatError: key cannot be used by alg's family
    """
    try:
        spec = get_spec(alg)
        handler = HANDLERS[spec.family]
        signing_key = handler.load_signing_key(key, spec)
    except UnsupportedAlgorithmError:
        ERRORS_TOTAL.labels(type="unsupported_algorithm").inc()
        raise
    except KeyFormatError:
        ERRORS_TOTAL.labels(type="key_format_error").inc()
        raise

    parts = encode(build_header(alg, header_overrides), payload)

    t0 = time.perf_counter()
    try:
        signature = handler.sign(spec, signing_key, parts.signing_input.encode("ascii"))
    except Exception:
        ERRORS_TOTAL.labels(type="sign_error").inc()
        raise
    SIGN_LATENCY_SECONDS.labels(family=spec.family.value).observe(time.perf_counter() - t0)
    TOKENS_SIGNED_TOTAL.labels(alg=alg).inc()

    token = f"{parts.signing_input}.{b64url_encode(signature)}"
    logger.debug("Signed %s token (%d bytes)", alg, len(token))
    return token


def invalid_result(alg: Any, error: str) -> ValidationResult:
    label = alg if isinstance(alg, str) and alg in ALGORITHMS else "unsupported"
    VERIFICATIONS_TOTAL.labels(alg=label, result="invalid").inc()
    logger.warning("Verification failed alg=%s: %s", label, error)
    return ValidationResult(
        valid=False,
        algorithm=alg if isinstance(alg, str) else None,
        error=error,
    )


def verify(token: str, key: KeyMaterial, alg: str) -> ValidationResult:
    """
    Verify `token` with `key` under the caller-supplied `alg`.

    Never raises: a bad signature, wrong key, malformed key or malformed
    token all come back as ValidationResult(valid=False, error=...).
    """
    if not isinstance(token, str):
        return invalid_result(alg, "Token must be a string")

    try:
        spec = get_spec(alg)
        handler = HANDLERS[spec.family]
        decoded = decode(token)
        header_alg = decoded.alg
        if header_alg != alg:
            return invalid_result(
                alg,
                f"Token header alg {header_alg!r} does not match the requested algorithm {alg!r}",
            )
        verifying_key = handler.load_verifying_key(key, spec)
        signature = b64url_decode(decoded.raw.signature)
    except JwtError as exc:
        ERRORS_TOTAL.labels(type=_ERROR_TYPES.get(type(exc).__name__, "jwt_error")).inc()
        return invalid_result(alg, str(exc))
    except ValueError as exc:
        ERRORS_TOTAL.labels(type="decode_error").inc()
        return invalid_result(alg, f"Failed to decode signature: {exc}")

    t0 = time.perf_counter()
    try:
        ok = handler.verify(spec, verifying_key, decoded.signing_input, signature)
    except Exception as exc:
        ERRORS_TOTAL.labels(type="verify_exception").inc()
        return invalid_result(alg, f"Verification error: {exc}")
    VERIFY_LATENCY_SECONDS.labels(family=spec.family.value).observe(time.perf_counter() - t0)

    if not ok:
        return invalid_result(alg, "Signature verification failed")

    VERIFICATIONS_TOTAL.labels(alg=alg, result="valid").inc()
    logger.debug("Verified %s token", alg)
    return ValidationResult(valid=True, algorithm=alg, message=VERIFIED_MESSAGE)
