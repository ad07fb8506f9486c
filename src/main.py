# src/main.py - v1
"""CLI entry point: encode, decode, cookies, purge-sessions commands.

Usage:
    httpstore encode '<json value>' [--codec json|pickle]
    httpstore decode '<raw value>' [--codec json|pickle]
    httpstore cookies '<Cookie header>'
    httpstore purge-sessions
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from httpstore.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="httpstore",
        description=f"httpstore v{__version__} - request-scoped key/value stores",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- encode ---
    p_encode = subparsers.add_parser(
        "encode", help="Encode a JSON literal into its stored (raw) form",
    )
    p_encode.add_argument("value", help="JSON literal, e.g. '[1, 2, 3]'")
    p_encode.add_argument(
        "--codec", choices=["json", "pickle"], default="json",
        help="Codec to use (default: json)",
    )
    p_encode.set_defaults(func=_cmd_encode)

    # --- decode ---
    p_decode = subparsers.add_parser(
        "decode", help="Decode a raw stored value",
    )
    p_decode.add_argument("raw", help="Raw value as found in a cookie or session")
    p_decode.add_argument(
        "--codec", choices=["json", "pickle"], default="json",
        help="Codec to use (default: json)",
    )
    p_decode.set_defaults(func=_cmd_decode)

    # --- cookies ---
    p_cookies = subparsers.add_parser(
        "cookies", help="Show the decoded cookie store for a Cookie header",
    )
    p_cookies.add_argument("header", help="Value of a Cookie request header")
    p_cookies.set_defaults(func=_cmd_cookies)

    # --- purge-sessions ---
    p_purge = subparsers.add_parser(
        "purge-sessions", help="Delete expired sessions from the configured backend",
    )
    p_purge.set_defaults(func=_cmd_purge_sessions)

    return parser


def _cmd_encode(args: argparse.Namespace) -> int:
    """Print the raw form of a JSON literal."""
    from httpstore.codec.codec_factory import create_codec

    try:
        value = json.loads(args.value)
    except json.JSONDecodeError as exc:
        logger.error("Not a JSON literal: %s", exc)
        return 1
    print(create_codec(args.codec).encode(value))
    return 0


def _cmd_decode(args: argparse.Namespace) -> int:
    """Print the logical value of a raw stored value."""
    from httpstore.codec.codec_factory import create_codec

    value = create_codec(args.codec).decode(args.raw)
    print(json.dumps(value, indent=2, default=repr, ensure_ascii=False))
    return 0


def _cmd_cookies(args: argparse.Namespace) -> int:
    """Print every cookie of a Cookie header, decoded."""
    from httpstore.adapters.cookie import Cookie
    from httpstore.config.settings import Settings
    from httpstore.context import RequestContext
    from httpstore.core.registry import StoreRegistry
    from httpstore.transport.cookies import CookieTransport

    context = RequestContext(cookies=CookieTransport.from_header(args.header), session=None)
    registry = StoreRegistry(context, Settings())
    store = registry.get_instance(Cookie)
    print(json.dumps(store.all(), indent=2, default=repr, ensure_ascii=False))
    return 0


def _cmd_purge_sessions(args: argparse.Namespace) -> int:
    """Delete expired sessions and print how many were removed."""
    from httpstore.config.settings import Settings
    from httpstore.sessions.backend_factory import create_session_backend

    settings = Settings()
    backend = create_session_backend(settings)
    try:
        removed = backend.purge_expired()
    finally:
        backend.close()
    logger.info("Purged %d expired sessions from %s backend", removed, settings.session_backend)
    print(removed)
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from httpstore.logging.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "WARNING", log_format="text")


if __name__ == "__main__":
    sys.exit(main())
