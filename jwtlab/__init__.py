"""
jwtlab: decode, sign and verify JSON Web Tokens locally.

HS256/384/512, RS256/384/512 and ES256/384, with cryptographic
primitives delegated to the `cryptography` package.
"""
from .api import (
    decode_jwt,
    is_ecdsa_algorithm,
    is_hmac_algorithm,
    is_rsa_algorithm,
    is_valid_pem_format,
    sign_ecdsa_jwt,
    sign_hmac_jwt,
    sign_rsa_jwt,
    verify_ecdsa_jwt,
    verify_hmac_jwt,
    verify_rsa_jwt,
)
from .crypto_backend import SUPPORTED_ALGORITHMS, Family, family_of
from .errors import (
    DecodeError,
    FormatError,
    JwtError,
    KeyFormatError,
    UnsupportedAlgorithmError,
)
from .models import DecodedToken, JwtHeader, JwtPayload, TokenMetadata, ValidationResult

__version__ = "0.1.0"

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
    "family_of",
    "Family",
    "SUPPORTED_ALGORITHMS",
    "JwtError",
    "FormatError",
    "DecodeError",
    "KeyFormatError",
    "UnsupportedAlgorithmError",
    "DecodedToken",
    "JwtHeader",
    "JwtPayload",
    "TokenMetadata",
    "ValidationResult",
]
