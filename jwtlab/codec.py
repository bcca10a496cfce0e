"""
Compact JWT serialization: decode a token into its parts, and encode a
header/payload pair into the signing input.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from .errors import DecodeError, FormatError, UnsupportedAlgorithmError
from .jose_utils import BASE64URL_RE, decode_segment, encode_segment, split_jws
from .models import DecodedToken, RawSegments

INVALID_FORMAT = "Invalid JWT format. Expected 3 parts separated by dots."


@dataclass
class EncodedParts:
    signing_input: str
    header_seg: str
    payload_seg: str


def as_claims(obj: Mapping[str, Any] | BaseModel | None) -> dict[str, Any]:
    """
    Plain dict view of a header or payload given as a mapping or a model.
    Unset model fields are dropped so no empty claims get injected;
    fields set explicitly, even to None, are kept.
    """
    if obj is None:
        return {}
    if isinstance(obj, BaseModel):
        return obj.model_dump(exclude_unset=True)
    return dict(obj)


def decode(token: str) -> DecodedToken:
    """
    Decode a compact JWT without verifying it.

    Raises:
        FormatError: the token is not three non-empty dot-separated segments
        DecodeError: a segment is not base64url, or header/payload is not a JSON object
    """
    try:
        h_seg, p_seg, s_seg = split_jws(token.strip())
    except ValueError as exc:
        raise FormatError(INVALID_FORMAT) from exc

    if not h_seg or not p_seg or not s_seg:
        raise FormatError(f"{INVALID_FORMAT} Found an empty segment.")

    try:
        header = decode_segment(h_seg)
        payload = decode_segment(p_seg)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(f"Failed to decode JWT: {exc}") from exc

    # signature stays encoded; only its alphabet is checked here
    if not BASE64URL_RE.fullmatch(s_seg):
        raise DecodeError("Failed to decode JWT: invalid base64url characters in signature")

    return DecodedToken(
        header=header,
        payload=payload,
        signature=s_seg,
        raw=RawSegments(header=h_seg, payload=p_seg, signature=s_seg),
    )


def encode(
    header: Mapping[str, Any] | BaseModel | None,
    payload: Mapping[str, Any] | BaseModel | None,
    alg: Optional[str] = None,
) -> EncodedParts:
    """
    Serialize header and payload into the exact bytes every family signs.

    `alg` is inserted into the header when the caller left it out.
    """
    hdr = as_claims(header)
    if "alg" not in hdr:
        if alg is None:
            raise UnsupportedAlgorithmError("Header has no 'alg' and none was given")
        hdr = {"alg": alg, **hdr}

    header_seg = encode_segment(hdr)
    payload_seg = encode_segment(as_claims(payload))

    return EncodedParts(
        signing_input=f"{header_seg}.{payload_seg}",
        header_seg=header_seg,
        payload_seg=payload_seg,
    )
