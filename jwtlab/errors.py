class JwtError(Exception):
    """Base class for errors raised by the codec and the signature engine."""


class FormatError(JwtError):
    """Raised when a token does not have the compact header.payload.signature shape."""


class DecodeError(JwtError):
    """Raised when a segment is not valid base64url, or not a JSON object."""


class KeyFormatError(JwtError):
    """Raised when key material cannot be used by the requested algorithm family."""


class UnsupportedAlgorithmError(JwtError):
    """Raised for any alg outside HS256/384/512, RS256/384/512, ES256/384."""
