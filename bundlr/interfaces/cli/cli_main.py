#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse
import logging
from datetime import date

from bundlr.interfaces.cli.commands.pairings_cli import cmd_pairings


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="bundlr",
        description="Bundlr - service pairing and upsell analytics for salon bookings",
        epilog="Examples:\n"
        "  bundlr pairings --from 2024-01-01 --to 2024-03-31              # All locations\n"
        "  bundlr pairings --from 2024-01-01 --to 2024-03-31 --location 3 # One location\n"
        "  bundlr pairings --from 2024-01-01 --to 2024-01-31 --limit 20   # Top 20 pairings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'bundlr <command> --help' for command-specific help)",
    )

    # pairings: Co-occurrence and upsell analytics
    s = sub.add_parser("pairings", help="Show service pairings, standalone rates and revenue lift")
    s.add_argument("--from", dest="date_from", type=_iso_date, required=True, help="first visit date (YYYY-MM-DD)")
    s.add_argument("--to", dest="date_to", type=_iso_date, required=True, help="last visit date (YYYY-MM-DD)")
    s.add_argument("--location", default=None, help="only include this location id")
    s.add_argument("--limit", type=_positive_int, default=None, help="number of service pairings to show")
    s.set_defaults(func=cmd_pairings)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    raise SystemExit(main())
