from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hmac

from .crypto_backend import AlgorithmSpec, Family, KeyMaterial
from .errors import KeyFormatError


class HmacHandler:
    """
    HS256 / HS384 / HS512 keyed by the raw secret.

    The same secret signs and verifies, so both key loaders are identical.
    """

    family = Family.HMAC

    def load_signing_key(self, key: KeyMaterial, spec: AlgorithmSpec) -> bytes:
        if isinstance(key, str):
            if key.lstrip().startswith("-----BEGIN "):
                raise KeyFormatError("HMAC algorithms take a shared secret, not a PEM key")
            key = key.encode("utf-8")
        if not isinstance(key, bytes):
            raise KeyFormatError(f"HMAC secret must be str or bytes, got {type(key).__name__}")
        if not key:
            raise KeyFormatError("HMAC secret must not be empty")
        return key

    load_verifying_key = load_signing_key

    def sign(self, spec: AlgorithmSpec, key: bytes, data: bytes) -> bytes:
        h = hmac.HMAC(key, spec.hash())
        h.update(data)
        return h.finalize()

    def verify(self, spec: AlgorithmSpec, key: bytes, data: bytes, signature: bytes) -> bool:
        h = hmac.HMAC(key, spec.hash())
        h.update(data)
        try:
            # constant-time comparison
            h.verify(signature)
            return True
        except InvalidSignature:
            return False
