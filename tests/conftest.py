"""Shared fixtures: throwaway RSA / EC key pairs as PEM text."""
import asyncio
from dataclasses import dataclass

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

# jwt.io's default example, signed with "your-256-bit-secret"
JWT_IO_TOKEN = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiaWF0IjoxNTE2MjM5MDIyfQ"
    ".SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"
)
JWT_IO_SECRET = "your-256-bit-secret"


@dataclass
class PemPair:
    private: str
    public: str


def _to_pem(priv) -> PemPair:
    private = priv.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    public = priv.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    return PemPair(private=private, public=public)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture(scope="session")
def rsa_pair() -> PemPair:
    return _to_pem(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture(scope="session")
def other_rsa_pair() -> PemPair:
    return _to_pem(rsa.generate_private_key(public_exponent=65537, key_size=2048))


@pytest.fixture(scope="session")
def p256_pair() -> PemPair:
    return _to_pem(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture(scope="session")
def other_p256_pair() -> PemPair:
    return _to_pem(ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture(scope="session")
def p384_pair() -> PemPair:
    return _to_pem(ec.generate_private_key(ec.SECP384R1()))


@pytest.fixture(scope="session")
def key_pairs(rsa_pair, p256_pair, p384_pair):
    """(signing key, verifying key) for every supported alg."""
    return {
        "HS256": ("hs256-secret", "hs256-secret"),
        "HS384": ("hs384-secret", "hs384-secret"),
        "HS512": ("hs512-secret", "hs512-secret"),
        "RS256": (rsa_pair.private, rsa_pair.public),
        "RS384": (rsa_pair.private, rsa_pair.public),
        "RS512": (rsa_pair.private, rsa_pair.public),
        "ES256": (p256_pair.private, p256_pair.public),
        "ES384": (p384_pair.private, p384_pair.public),
    }
