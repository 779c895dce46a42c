"""
rtctoken Command Line Interface.

Provides commands for issuing media and messaging tokens and for inspecting
the fields of an existing token.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rtctoken import config
from rtctoken.builder import TokenBuilder
from rtctoken.codec import parse_token
from rtctoken.credentials import Credential
from rtctoken.errors import CryptoError, InvalidCredentialError, MalformedTokenError
from rtctoken.privileges import Privilege
from rtctoken.validation import validate_identifier


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _load_builder(args: argparse.Namespace) -> TokenBuilder:
    app_id = args.app_id or config.get_app_id()
    app_certificate = args.app_certificate or config.get_app_certificate()

    if not app_id or not app_certificate:
        raise InvalidCredentialError(
            f"Missing credentials. Set {config.APP_ID_ENV} and "
            f"{config.APP_CERTIFICATE_ENV} or use --app-id/--app-certificate"
        )
    return TokenBuilder(Credential(app_id=app_id, app_certificate=app_certificate))


def cmd_media(args: argparse.Namespace) -> int:
    """Issue a join + publish token for a channel."""
    try:
        channel = validate_identifier(args.channel, "Channel name")
        uid = validate_identifier(args.uid, "UID")
        builder = _load_builder(args)
        print(builder.build_media_token(channel, uid, args.expiry))
        return 0
    except (InvalidCredentialError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except CryptoError as e:
        print(f"Error signing token: {e}", file=sys.stderr)
        return 1


def cmd_messaging(args: argparse.Namespace) -> int:
    """Issue a messaging-service login token."""
    try:
        uid = validate_identifier(args.uid, "UID")
        builder = _load_builder(args)
        print(builder.build_messaging_token(uid, args.expiry))
        return 0
    except (InvalidCredentialError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except CryptoError as e:
        print(f"Error signing token: {e}", file=sys.stderr)
        return 1


def _privilege_name(code: int) -> str:
    try:
        return Privilege(code).name
    except ValueError:
        return f"UNKNOWN({code})"


def cmd_inspect(args: argparse.Namespace) -> int:
    """Show the fields of a token. The signature is not verified."""
    try:
        parts = parse_token(args.token)
    except MalformedTokenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(parts.to_dict(), indent=2))
    else:
        print(f"Version:      {parts.version}")
        print(f"App ID:       {parts.app_id}")
        print(f"Signature:    {parts.signature.hex()}")
        print(f"Channel hash: {parts.channel_hash}")
        print(f"Subject hash: {parts.subject_hash}")
        print("Privileges:")
        for code, expiry in parts.privileges:
            print(f"   {_privilege_name(code)} ({code}): {expiry}")
        print("⚠️  Signature not verified", file=sys.stderr)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtctoken",
        description="Issue and inspect signed access tokens",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    credentials = argparse.ArgumentParser(add_help=False)
    credentials.add_argument("--app-id", help=f"App id (default: ${config.APP_ID_ENV})")
    credentials.add_argument(
        "--app-certificate", help=f"App certificate (default: ${config.APP_CERTIFICATE_ENV})"
    )
    credentials.add_argument(
        "--expiry",
        type=int,
        default=config.DEFAULT_EXPIRY,
        help=f"Expiry value written into the token (default: {config.DEFAULT_EXPIRY})",
    )

    # media command
    p_media = subparsers.add_parser(
        "media", parents=[credentials], help="Issue a channel join + publish token"
    )
    p_media.add_argument("channel", help="Channel name")
    p_media.add_argument("uid", help="User id")

    # messaging command
    p_messaging = subparsers.add_parser(
        "messaging", parents=[credentials], help="Issue a messaging login token"
    )
    p_messaging.add_argument("uid", help="User id")

    # inspect command
    p_inspect = subparsers.add_parser("inspect", help="Show the fields of a token")
    p_inspect.add_argument("token", help="The token to inspect")
    p_inspect.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command == "media":
        return cmd_media(args)
    elif args.command == "messaging":
        return cmd_messaging(args)
    elif args.command == "inspect":
        return cmd_inspect(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
