"""
Public functions consumed by front ends (CLI, UI layers).

decode_jwt and the is_* predicates are synchronous. Signing and
verification are coroutines: the crypto runs in a worker thread so the
awaiting caller's event loop keeps running.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from . import engine
from .codec import decode
from .crypto_backend import (
    EcdsaAlg,
    Family,
    HmacAlg,
    KeyMaterial,
    RsaAlg,
    family_of,
    is_ecdsa_algorithm,
    is_hmac_algorithm,
    is_rsa_algorithm,
)
from .engine import Claims
from .errors import UnsupportedAlgorithmError
from .keys import is_valid_pem_format
from .models import DecodedToken, ValidationResult

__all__ = [
    "decode_jwt",
    "sign_hmac_jwt",
    "sign_rsa_jwt",
    "sign_ecdsa_jwt",
    "verify_hmac_jwt",
    "verify_rsa_jwt",
    "verify_ecdsa_jwt",
    "is_hmac_algorithm",
    "is_rsa_algorithm",
    "is_ecdsa_algorithm",
    "is_valid_pem_format",
]


def decode_jwt(token: str) -> DecodedToken:
    """
    Decode a token into header, payload and signature without verifying it.
    Raises FormatError or DecodeError.
    """
    return decode(token)


def _require_family(alg: str, family: Family) -> None:
    if family_of(alg) is not family:
        raise UnsupportedAlgorithmError(f"{alg} is not an {family.value} algorithm")


async def _sign(
    family: Family,
    payload: Optional[Claims],
    key: KeyMaterial,
    alg: str,
    header_overrides: Optional[Claims],
) -> str:
    _require_family(alg, family)
    return await asyncio.to_thread(engine.sign, payload, key, alg, header_overrides)


async def _verify(family: Family, token: str, key: KeyMaterial, alg: str) -> ValidationResult:
    try:
        _require_family(alg, family)
    except UnsupportedAlgorithmError as exc:
        return engine.invalid_result(alg, str(exc))
    return await asyncio.to_thread(engine.verify, token, key, alg)


async def sign_hmac_jwt(
    payload: Optional[Claims],
    secret: KeyMaterial,
    alg: HmacAlg,
    header_overrides: Optional[Claims] = None,
) -> str:
    """Sign with HS256/HS384/HS512 using a shared secret."""
    return await _sign(Family.HMAC, payload, secret, alg, header_overrides)


async def sign_rsa_jwt(
    payload: Optional[Claims],
    private_key_pem: KeyMaterial,
    alg: RsaAlg,
    header_overrides: Optional[Claims] = None,
) -> str:
    """Sign with RS256/RS384/RS512 using a PKCS#8 PEM private key."""
    return await _sign(Family.RSA, payload, private_key_pem, alg, header_overrides)


async def sign_ecdsa_jwt(
    payload: Optional[Claims],
    private_key_pem: KeyMaterial,
    alg: EcdsaAlg,
    header_overrides: Optional[Claims] = None,
) -> str:
    """Sign with ES256 (P-256) or ES384 (P-384) using a PKCS#8 PEM private key."""
    return await _sign(Family.ECDSA, payload, private_key_pem, alg, header_overrides)


async def verify_hmac_jwt(token: str, secret: KeyMaterial, alg: HmacAlg) -> ValidationResult:
    return await _verify(Family.HMAC, token, secret, alg)


async def verify_rsa_jwt(token: str, public_key_pem: KeyMaterial, alg: RsaAlg) -> ValidationResult:
    return await _verify(Family.RSA, token, public_key_pem, alg)


async def verify_ecdsa_jwt(token: str, public_key_pem: KeyMaterial, alg: EcdsaAlg) -> ValidationResult:
    return await _verify(Family.ECDSA, token, public_key_pem, alg)
