#!/usr/bin/env python3
"""
Command-line interface for the link service.

Usage:
    linkservice-cli shorten <url>
    linkservice-cli resolve <code>
    linkservice-cli health
    linkservice-cli init-db
"""

import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

from .app import build_store, start_service
from .config import load_config
from .lib.common.logging_config import setup_logging
from .lib.errors import LinkServiceError, StoreError


class LinkServiceCLI:
    """Command-line interface for the link service."""

    def __init__(self, db_url: Optional[str] = None, in_memory: bool = False, verbose: bool = False):
        """Initialize CLI."""
        overrides = {"database_url": db_url} if db_url else {}
        self.config = load_config(**overrides)
        self.in_memory = in_memory
        # Logs go to stderr; stdout carries the JSON result
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING", stream=sys.stderr)
        self.store = None
        self.service = None

    async def initialize(self):
        """Connect the store and build the service."""
        self.store = build_store(self.config, logger=self.logger, in_memory=self.in_memory)
        self.service = await start_service(self.config, self.store, logger=self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()
        elif self.store:
            await self.store.close()

    def _print(self, payload: dict, ok: bool = True) -> int:
        print(json.dumps(payload, indent=2), file=sys.stdout if ok else sys.stderr)
        return 0 if ok else 1

    def _error(self, exc: Exception) -> int:
        if isinstance(exc, LinkServiceError):
            return self._print({"success": False, **exc.to_dict()}, ok=False)
        return self._print({"success": False, "error": f"Unexpected error: {exc}"}, ok=False)

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            code = await self.service.create(url)
        except LinkServiceError as e:
            return self._error(e)

        return self._print({"success": True, "code": code, "url": url})

    async def resolve(self, code: str) -> int:
        """Get the original URL for a short code."""
        try:
            url = await self.service.resolve(code)
        except LinkServiceError as e:
            return self._error(e)

        return self._print({"success": True, "code": code, "url": url})

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        return self._print({"success": health_status["overall"], "health": health_status}, ok=health_status["overall"])

    async def init_db(self) -> int:
        """Create the links table."""
        await self.store.ensure_schema()
        return self._print({"success": True, "message": "Tables initialized"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkservice-cli",
        description="Link Service CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Get original URL
  %(prog)s resolve 4fR_x09Kqa

  # Create the links table
  %(prog)s init-db
        """
    )

    parser.add_argument(
        "--db-url",
        default=None,
        help="PostgreSQL connection URL (default: DATABASE_URL env or built-in default)"
    )
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Use a throwaway in-memory store instead of PostgreSQL"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL")
    resolve_parser.add_argument("code", help="Short code to lookup")

    subparsers.add_parser("health", help="Check service health")
    subparsers.add_parser("init-db", help="Create the links table if missing")

    return parser


async def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments and execute one command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = LinkServiceCLI(db_url=args.db_url, in_memory=args.memory, verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "resolve":
            return await cli.resolve(args.code)
        elif args.command == "health":
            return await cli.health()
        elif args.command == "init-db":
            return await cli.init_db()
        else:
            parser.print_help()
            return 1

    except StoreError as e:
        return cli._error(e)
    finally:
        await cli.cleanup()


def main():
    """Console script entry point."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
