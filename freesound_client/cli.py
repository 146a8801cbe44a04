"""Command-line interface for the Freesound client.

WHY: Quick lookups (a sound's metadata, a text search, the OAuth2 login
URL, exchanging a login code for a token) are handy from a terminal
without writing a script.

HOW: argparse subcommands, one per operation. Credentials come from the
environment / .env via FreesoundClient.from_env(). Each command runs one
async call via asyncio.run() and prints the JSON result to stdout.

RULES:
- Results go to stdout as JSON; errors go to stderr with exit code 1
- --verbose turns on DEBUG logging (request lines, never credentials)
- login-url never touches the network
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import Any, List, Optional

from freesound_client.api.client import FreesoundClient
from freesound_client.errors import FreesoundError


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _search_params(args: argparse.Namespace) -> dict:
    params = {
        "filter": args.filter,
        "sort": args.sort,
        "fields": args.fields,
        "page": args.page,
        "page_size": args.page_size,
    }
    return {k: v for k, v in params.items() if v is not None}


async def _run_command(args: argparse.Namespace) -> Any:
    """Execute one subcommand and return the JSON-serialisable result."""
    client = FreesoundClient.from_env()

    if args.command == "login-url":
        return {"login_url": client.get_login_url(), "logout_url": client.get_logout_url()}

    async with client:
        if args.command == "sound":
            return (await client.get_sound(args.sound_id)).to_dict()
        if args.command == "pack":
            return (await client.get_pack(args.pack_id)).to_dict()
        if args.command == "user":
            return (await client.get_user(args.username)).to_dict()
        if args.command == "search":
            page = await client.text_search(args.query, **_search_params(args))
            return page.to_dict()
        if args.command == "similar":
            sound = await client.get_sound(args.sound_id)
            return (await sound.get_similar()).to_dict()
        if args.command == "token":
            kind = "refresh" if args.refresh else "auth"
            resp = await client.post_access_code(args.code, kind)
            _status("Set FREESOUND_ACCESS_TOKEN to the access_token below.")
            return dataclasses.asdict(resp)

    raise ValueError(f"Unknown command: {args.command}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser (separate from main() for testing)."""
    parser = argparse.ArgumentParser(
        prog="freesound_client",
        description="Query the Freesound APIv2. Credentials are read from "
                    "FREESOUND_* environment variables or a .env file.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log HTTP requests to stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("sound", help="Show a sound's metadata.")
    p.add_argument("sound_id")

    p = sub.add_parser("pack", help="Show a pack's metadata.")
    p.add_argument("pack_id")

    p = sub.add_parser("user", help="Show a user's public profile.")
    p.add_argument("username")

    p = sub.add_parser("similar", help="List sounds similar to a sound.")
    p.add_argument("sound_id")

    p = sub.add_parser("search", help="Text search.")
    p.add_argument("query", nargs="?", default="")
    p.add_argument("--filter", default=None, help="e.g. 'tag:tenuto duration:[1.0 TO 15.0]'")
    p.add_argument("--sort", default=None, help="e.g. rating_desc")
    p.add_argument("--fields", default=None, help="Comma-separated response fields.")
    p.add_argument("--page", type=int, default=None)
    p.add_argument("--page-size", type=int, default=None)

    sub.add_parser("login-url", help="Print the OAuth2 login and logout URLs.")

    p = sub.add_parser("token", help="Exchange a login code for an access token.")
    p.add_argument("code")
    p.add_argument(
        "--refresh",
        action="store_true",
        help="Treat CODE as a refresh token instead of an authorization code.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m freesound_client``.

    argv=None means use sys.argv; an explicit list is for testing.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(_run_command(args))
    except FreesoundError as exc:
        print("Error: {}".format(exc), file=sys.stderr)
        sys.exit(1)

    _emit(result)


if __name__ == "__main__":
    main()
