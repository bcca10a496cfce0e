from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .crypto_backend import AlgorithmSpec, Family, KeyMaterial
from .errors import KeyFormatError
from .keys import load_private_key, load_public_key


def _check_curve(spec: AlgorithmSpec, key) -> None:
    if not isinstance(key.curve, spec.curve):
        raise KeyFormatError(
            f"{spec.name} needs a key on {spec.curve.name}, got {key.curve.name}"
        )


class EcdsaHandler:
    """
    ES256 (P-256) / ES384 (P-384).

    JWS signatures are the fixed-length R||S concatenation, not the DER
    structure cryptography produces, so we convert on both paths.
    """

    family = Family.ECDSA

    def load_signing_key(self, key: KeyMaterial, spec: AlgorithmSpec) -> ec.EllipticCurvePrivateKey:
        priv = load_private_key(key)
        if not isinstance(priv, ec.EllipticCurvePrivateKey):
            raise KeyFormatError(f"ECDSA algorithms need an EC private key, got {type(priv).__name__}")
        _check_curve(spec, priv)
        return priv

    def load_verifying_key(self, key: KeyMaterial, spec: AlgorithmSpec) -> ec.EllipticCurvePublicKey:
        pub = load_public_key(key)
        if not isinstance(pub, ec.EllipticCurvePublicKey):
            raise KeyFormatError(f"ECDSA algorithms need an EC public key, got {type(pub).__name__}")
        _check_curve(spec, pub)
        return pub

    def sign(self, spec: AlgorithmSpec, key: ec.EllipticCurvePrivateKey, data: bytes) -> bytes:
        der_sig = key.sign(data, ec.ECDSA(spec.hash()))
        r, s = decode_dss_signature(der_sig)
        return r.to_bytes(spec.coord_size, "big") + s.to_bytes(spec.coord_size, "big")

    def verify(
        self,
        spec: AlgorithmSpec,
        key: ec.EllipticCurvePublicKey,
        data: bytes,
        signature: bytes,
    ) -> bool:
        if len(signature) != 2 * spec.coord_size:
            return False

        r = int.from_bytes(signature[:spec.coord_size], "big")
        s = int.from_bytes(signature[spec.coord_size:], "big")
        try:
            key.verify(encode_dss_signature(r, s), data, ec.ECDSA(spec.hash()))
            return True
        except InvalidSignature:
            return False
