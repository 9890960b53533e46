"""
jwtlab Command Line Interface.

Provides commands for decoding, verifying and generating tokens and for
checking their time-based claims.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from jwtlab import config
from jwtlab.algorithms import Algorithm
from jwtlab.engine import JWTEngine
from jwtlab.errors import JWTError
from jwtlab.verifiers import KeyMaterial


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity (JWTLAB_LOG_LEVEL wins if set)."""
    level = logging.DEBUG if verbose else logging.WARNING
    if config.LOG_LEVEL:
        level = getattr(logging, config.LOG_LEVEL.upper(), level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s'
    )


def _read_token(value: str) -> str:
    """'-' reads the token from stdin."""
    if value == '-':
        return sys.stdin.read().strip()
    return value


def _resolve_key(args: argparse.Namespace, algorithm: Algorithm) -> Optional[KeyMaterial]:
    if args.key:
        return args.key
    if args.key_file:
        # bytes; secrets and DER keys need not be text
        return Path(args.key_file).read_bytes()
    if algorithm.family.is_symmetric:
        return config.get_default_secret()
    return config.get_default_public_key()


def cmd_decode(args: argparse.Namespace) -> int:
    """Decode a token without verifying it."""
    decoded = JWTEngine().decode(_read_token(args.token))

    if args.json:
        print(json.dumps({
            "header": decoded.header,
            "payload": decoded.payload,
            "signature": decoded.signature,
        }, indent=2))
    else:
        print("Header:")
        print(decoded.header_json)
        print("\nPayload:")
        print(decoded.payload_json)
        print(f"\nSignature (base64url encoded):\n{decoded.signature}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    """Verify a token's signature."""
    algorithm = Algorithm.from_name(args.alg)
    key = _resolve_key(args, algorithm)

    valid = JWTEngine().verify(_read_token(args.token), algorithm, key)

    if args.json:
        print(json.dumps({"valid": valid, "alg": algorithm.value}))
    elif valid:
        print(f"✅ VALID ({algorithm.value})")
    else:
        print(f"❌ INVALID ({algorithm.value})")
    return 0 if valid else 1


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate an HMAC-signed token from a JSON payload."""
    try:
        payload = json.loads(args.payload)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON payload: {e}", file=sys.stderr)
        return 1

    algorithm = Algorithm.from_name(args.alg)
    secret = _resolve_key(args, algorithm)

    print(JWTEngine().generate(payload, secret, algorithm))
    return 0


def cmd_claims(args: argparse.Namespace) -> int:
    """Report on the standard claims of a token."""
    engine = JWTEngine()
    decoded = engine.decode(_read_token(args.token))
    results = engine.validate_claims(decoded.payload, leeway=args.leeway)

    if args.json:
        print(json.dumps([
            {
                "claim": r.claim,
                "value": r.value,
                "valid": r.valid,
                "informational": r.informational,
                "message": r.message,
            }
            for r in results
        ], indent=2))
    elif not results:
        print("No standard claims present")
    else:
        for r in results:
            mark = "ℹ️ " if r.informational else ("✅" if r.valid else "❌")
            print(f"{mark} {r.claim}: {r.message}")

    return 0 if all(r.valid for r in results) else 1


def cmd_detect(args: argparse.Namespace) -> int:
    """Print the algorithm named in the token header."""
    algorithm = JWTEngine().detect_algorithm(_read_token(args.token))
    if algorithm is None:
        print("unknown")
        return 1
    print(algorithm.value)
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    config.print_config()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jwtlab',
        description='jwtlab - decode, verify and generate JSON Web Tokens'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    alg_names = [a.value for a in Algorithm]

    # decode command
    p_decode = subparsers.add_parser('decode', help='Decode a token (no verification)')
    p_decode.add_argument('token', help="The token to decode ('-' for stdin)")
    p_decode.add_argument('--json', action='store_true', help='Output as JSON')

    # verify command
    p_verify = subparsers.add_parser('verify', help='Verify a token signature')
    p_verify.add_argument('token', help="The token to verify ('-' for stdin)")
    p_verify.add_argument('--alg', required=True, type=str.upper, choices=alg_names,
                          help='Expected algorithm')
    p_verify.add_argument('--key', help='HMAC secret or PEM/JWK public key')
    p_verify.add_argument('--key-file', help='Read the secret or public key from a file')
    p_verify.add_argument('--json', action='store_true', help='Output as JSON')

    # generate command
    p_generate = subparsers.add_parser('generate', help='Generate an HMAC-signed token')
    p_generate.add_argument('payload', help='JSON object payload')
    p_generate.add_argument('--alg', default='HS256', type=str.upper,
                            choices=['HS256', 'HS384', 'HS512'], help='HMAC algorithm')
    p_generate.add_argument('--key', help='HMAC secret')
    p_generate.add_argument('--key-file', help='Read the secret from a file')

    # claims command
    p_claims = subparsers.add_parser('claims', help='Check exp/nbf/iat and list standard claims')
    p_claims.add_argument('token', help="The token to inspect ('-' for stdin)")
    p_claims.add_argument('--leeway', type=int, default=None,
                          help='Allowed clock skew in seconds')
    p_claims.add_argument('--json', action='store_true', help='Output as JSON')

    # detect command
    p_detect = subparsers.add_parser('detect', help='Show the algorithm named in the header')
    p_detect.add_argument('token', help="The token to inspect ('-' for stdin)")

    # config command
    subparsers.add_parser('config', help='Show effective configuration')

    return parser


COMMANDS = {
    'decode': cmd_decode,
    'verify': cmd_verify,
    'generate': cmd_generate,
    'claims': cmd_claims,
    'detect': cmd_detect,
    'config': cmd_config,
}


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except JWTError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading key file: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
