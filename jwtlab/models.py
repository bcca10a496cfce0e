from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, model_validator


class JwtHeader(BaseModel):
    """
    JOSE header: `alg` is mandatory, `typ` optional, anything else is kept as-is.
    """
    alg: str
    typ: Optional[str] = None

    class Config:
        extra = "allow"


class JwtPayload(BaseModel):
    """
    JWT claims. Registered claims are typed, unknown claims are kept as-is.
    An empty payload is valid.
    """
    exp: Optional[Union[int, float]] = None
    iat: Optional[Union[int, float]] = None
    nbf: Optional[Union[int, float]] = None
    iss: Optional[str] = None
    sub: Optional[str] = None
    aud: Optional[Union[str, List[str]]] = None

    class Config:
        extra = "allow"


class RawSegments(BaseModel):
    header: str
    payload: str
    signature: str


class DecodedToken(BaseModel):
    """
    Result of decoding a compact token.

    `header` and `payload` are plain dicts in JSON source order. `raw`
    keeps the original segments: verification signs over those, never
    over a re-serialization.
    """
    header: Dict[str, Any]
    payload: Dict[str, Any]
    signature: str
    raw: RawSegments

    @property
    def alg(self) -> Optional[str]:
        alg = self.header.get("alg")
        return alg if isinstance(alg, str) else None

    @property
    def signing_input(self) -> bytes:
        return f"{self.raw.header}.{self.raw.payload}".encode("ascii")


class ValidationResult(BaseModel):
    valid: bool
    algorithm: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "ValidationResult":
        if self.valid and (not self.message or self.error is not None):
            raise ValueError("a valid result carries a message and no error")
        if not self.valid and (not self.error or self.message is not None):
            raise ValueError("an invalid result carries an error and no message")
        return self


class TokenMetadata(BaseModel):
    """
    Human-facing summary of the registered claims of a decoded token.
    """
    algorithm: Optional[str] = None
    issued_at: Optional[str] = None
    expires_at: Optional[str] = None
    not_before: Optional[str] = None
    issuer: Optional[str] = None
    subject: Optional[str] = None
    time_to_expiry: Optional[str] = None
    expired: bool = False
    not_yet_valid: bool = False
