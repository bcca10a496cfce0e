from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .crypto_backend import AlgorithmSpec, Family, KeyMaterial
from .errors import KeyFormatError
from .keys import load_private_key, load_public_key


class RsaHandler:
    """
    RS256 / RS384 / RS512: RSASSA-PKCS1-v1_5 with SHA-2.
    """

    family = Family.RSA

    def load_signing_key(self, key: KeyMaterial, spec: AlgorithmSpec) -> rsa.RSAPrivateKey:
        priv = load_private_key(key)
        if not isinstance(priv, rsa.RSAPrivateKey):
            raise KeyFormatError(f"RSA algorithms need an RSA private key, got {type(priv).__name__}")
        return priv

    def load_verifying_key(self, key: KeyMaterial, spec: AlgorithmSpec) -> rsa.RSAPublicKey:
        pub = load_public_key(key)
        if not isinstance(pub, rsa.RSAPublicKey):
            raise KeyFormatError(f"RSA algorithms need an RSA public key, got {type(pub).__name__}")
        return pub

    def sign(self, spec: AlgorithmSpec, key: rsa.RSAPrivateKey, data: bytes) -> bytes:
        return key.sign(data, padding.PKCS1v15(), spec.hash())

    def verify(self, spec: AlgorithmSpec, key: rsa.RSAPublicKey, data: bytes, signature: bytes) -> bool:
        try:
            key.verify(signature, data, padding.PKCS1v15(), spec.hash())
            return True
        except InvalidSignature:
            return False
