"""
Command-line front end: decode, sign and verify JWTs locally.

Examples:
  jwtlab decode <token>
  echo '<token>' | jwtlab decode --stdin
  jwtlab sign --alg HS256 --secret s3cret --payload '{"sub": "123"}' --exp-hours 1
  jwtlab sign --alg ES256 --key-file private.pem --payload-file claims.json
  jwtlab verify <token> --alg RS256 --key-file public.pem
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import api
from .claims import summarize, with_expiry, with_issued_at
from .config import settings
from .crypto_backend import SUPPORTED_ALGORITHMS, Family, family_of
from .errors import JwtError
from .export import build_export, default_export_filename

logger = logging.getLogger("jwtlab.cli")

EXIT_ERROR = 1
EXIT_INVALID_SIGNATURE = 2

SIGNERS = {
    Family.HMAC: api.sign_hmac_jwt,
    Family.RSA: api.sign_rsa_jwt,
    Family.ECDSA: api.sign_ecdsa_jwt,
}

VERIFIERS = {
    Family.HMAC: api.verify_hmac_jwt,
    Family.RSA: api.verify_rsa_jwt,
    Family.ECDSA: api.verify_ecdsa_jwt,
}


class UsageError(Exception):
    """Bad command-line input (unreadable file, invalid JSON argument)."""


def setup_logging(verbose: bool = False) -> None:
    log_level = "DEBUG" if verbose else settings.log_level.upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
    logging.getLogger("jwtlab").setLevel(log_level)


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------

def _read_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise UsageError(f"Cannot read {path}: {exc.strerror or exc}") from exc


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not allowed in a JWT")


def _json_object(text: str, label: str) -> Dict[str, Any]:
    try:
        obj = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise UsageError(f"{label} is not valid JSON: {exc}") from exc
    if not isinstance(obj, dict):
        raise UsageError(f"{label} must be a JSON object")
    return obj


def _key_from_args(args: argparse.Namespace) -> str:
    if args.secret is not None:
        return args.secret
    return _read_file(args.key_file)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=settings.json_indent, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def cmd_decode(args: argparse.Namespace) -> int:
    if args.stdin:
        token = sys.stdin.read().strip()
    elif args.token:
        token = args.token
    else:
        try:
            token = input("Please enter your JWT token: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 130

    if not token:
        raise UsageError("No token given")

    decoded = api.decode_jwt(token)
    _print_json({
        "header": decoded.header,
        "payload": decoded.payload,
        "signature": decoded.signature,
        "metadata": summarize(decoded).model_dump(exclude_none=True),
    })
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    if args.payload_file:
        payload = _json_object(_read_file(args.payload_file), "Payload")
    else:
        payload = _json_object(args.payload, "Payload")

    header_overrides = _json_object(args.header, "Header") if args.header else None

    now = time.time()
    if args.iat:
        payload = with_issued_at(payload, now)
    if args.exp_hours is not None:
        payload = with_expiry(payload, args.exp_hours, now)

    family = family_of(args.alg)
    token = asyncio.run(SIGNERS[family](payload, _key_from_args(args), args.alg, header_overrides))
    print(token)

    if args.export:
        target = Path(args.export)
        if target.is_dir():
            target = target / default_export_filename()
        record = build_export(token, args.alg, payload, header_overrides)
        try:
            target.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise UsageError(f"Cannot write {target}: {exc.strerror or exc}") from exc
        logger.info("Export written to %s", target)

    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    family = family_of(args.alg)
    result = asyncio.run(VERIFIERS[family](args.token, _key_from_args(args), args.alg))
    _print_json(result.model_dump(exclude_none=True))
    return 0 if result.valid else EXIT_INVALID_SIGNATURE


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _add_key_args(parser: argparse.ArgumentParser) -> None:
    key = parser.add_mutually_exclusive_group(required=True)
    key.add_argument("--secret", help="HMAC shared secret")
    key.add_argument("--key-file", help="PEM key file (PKCS#8 private to sign, SPKI public to verify)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jwtlab",
        description=settings.app_name,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p_decode = sub.add_parser("decode", help="Decode a token without verifying it")
    p_decode.add_argument("token", nargs="?", default=None,
                          help="JWT string (prompts interactively if omitted)")
    p_decode.add_argument("--stdin", action="store_true", help="Read the token from stdin")
    p_decode.set_defaults(func=cmd_decode)

    p_sign = sub.add_parser("sign", help="Build and sign a token")
    p_sign.add_argument("--alg", default=settings.default_alg, choices=SUPPORTED_ALGORITHMS)
    _add_key_args(p_sign)
    payload = p_sign.add_mutually_exclusive_group()
    payload.add_argument("--payload", default="{}", help="Claims as a JSON object")
    payload.add_argument("--payload-file", help="File holding the claims JSON object")
    p_sign.add_argument("--header", help="Header overrides as a JSON object (alg cannot be overridden)")
    p_sign.add_argument("--exp-hours", type=float, default=None,
                        help=f"Set exp this many hours from now (e.g. {settings.expiry_presets_hours})")
    p_sign.add_argument("--iat", action="store_true", help="Set iat to now")
    p_sign.add_argument("--export", help="Write a JSON export (without keys) to this file or directory")
    p_sign.set_defaults(func=cmd_sign)

    p_verify = sub.add_parser("verify", help="Verify a token's signature")
    p_verify.add_argument("token")
    p_verify.add_argument("--alg", required=True, choices=SUPPORTED_ALGORITHMS)
    _add_key_args(p_verify)
    p_verify.set_defaults(func=cmd_verify)

    return parser


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.func(args)
    except (JwtError, UsageError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
