from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Literal, Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .errors import UnsupportedAlgorithmError

# The eight algorithm names we sign and verify with
AlgName = Literal["HS256", "HS384", "HS512", "RS256", "RS384", "RS512", "ES256", "ES384"]

HmacAlg = Literal["HS256", "HS384", "HS512"]
RsaAlg = Literal["RS256", "RS384", "RS512"]
EcdsaAlg = Literal["ES256", "ES384"]

# Secret string or PEM text; bytes are accepted as-is
KeyMaterial = Union[str, bytes]


class Family(str, enum.Enum):
    HMAC = "HMAC"
    RSA = "RSA"
    ECDSA = "ECDSA"


@dataclass(frozen=True)
class AlgorithmSpec:
    """
    Everything the per-family handlers need to know about one alg.
    `curve` and `coord_size` are only set for ECDSA.
    """
    name: str
    family: Family
    hash_cls: type
    curve: Optional[type] = None
    coord_size: int = 0

    def hash(self) -> hashes.HashAlgorithm:
        return self.hash_cls()


ALGORITHMS: Dict[str, AlgorithmSpec] = {
    "HS256": AlgorithmSpec("HS256", Family.HMAC, hashes.SHA256),
    "HS384": AlgorithmSpec("HS384", Family.HMAC, hashes.SHA384),
    "HS512": AlgorithmSpec("HS512", Family.HMAC, hashes.SHA512),
    "RS256": AlgorithmSpec("RS256", Family.RSA, hashes.SHA256),
    "RS384": AlgorithmSpec("RS384", Family.RSA, hashes.SHA384),
    "RS512": AlgorithmSpec("RS512", Family.RSA, hashes.SHA512),
    "ES256": AlgorithmSpec("ES256", Family.ECDSA, hashes.SHA256, ec.SECP256R1, 32),
    "ES384": AlgorithmSpec("ES384", Family.ECDSA, hashes.SHA384, ec.SECP384R1, 48),
}

SUPPORTED_ALGORITHMS = tuple(ALGORITHMS)


def get_spec(alg: str) -> AlgorithmSpec:
    spec = ALGORITHMS.get(alg) if isinstance(alg, str) else None
    if spec is None:
        raise UnsupportedAlgorithmError(
            f"Unsupported algorithm: {alg!r} (expected one of {', '.join(SUPPORTED_ALGORITHMS)})"
        )
    return spec


def family_of(alg: str) -> Family:
    """
    Classify an alg into HMAC, RSA or ECDSA.
    Raises UnsupportedAlgorithmError for anything else.
    """
    return get_spec(alg).family


def _in_family(alg: str, family: Family) -> bool:
    spec = ALGORITHMS.get(alg) if isinstance(alg, str) else None
    return spec is not None and spec.family is family


def is_hmac_algorithm(alg: str) -> bool:
    return _in_family(alg, Family.HMAC)


def is_rsa_algorithm(alg: str) -> bool:
    return _in_family(alg, Family.RSA)


def is_ecdsa_algorithm(alg: str) -> bool:
    return _in_family(alg, Family.ECDSA)
