#!/usr/bin/env python3
"""
CLI entry point for chakrabeats package.
"""

import argparse
import logging
import sys
from importlib.metadata import version
from typing import List, Optional

from .presets import CHAKRAS, OFFSETS, PresetCatalog
from .commands import add_play_parser, add_render_parser, config


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Set up logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", datefmt="%H:%M:%S")


def list_presets() -> None:
    """Print available chakra and offset presets."""
    print("Chakra presets:")
    print()
    for chakra in CHAKRAS:
        print(f"  {chakra.id:<13} - {chakra.name} ({chakra.sanskrit})")
        print(f"    Base: {chakra.frequency:g} Hz, Carrier: {chakra.carrier:g} Hz, Color: {chakra.color}")
    print()

    print("Offset presets:")
    print()
    for offset in OFFSETS:
        print(f"  {offset.id:<13} - {offset.name}: {offset.value:g} Hz")
    custom = PresetCatalog().custom_offset
    print(f"  {'custom':<13} - Custom: --custom-offset <Hz> (default {custom:g} Hz)")
    print()


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point with argument parsing and subcommands."""
    argv = sys.argv[1:] if argv is None else argv

    # The config group is a click command; hand it everything after its name.
    if argv and argv[0] == "config":
        config.main(args=argv[1:], prog_name="chakrabeats config")
        return

    parser = argparse.ArgumentParser(
        prog="chakrabeats",
        description="Play and render chakra binaural beats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Live playback
  chakrabeats play --chakra heart --offset relax
  chakrabeats play --base 200 --beat 6 --seconds 600

  # Render to a file
  chakrabeats render --chakra root --offset meditate -m 5 --out root.wav

  # Configuration
  chakrabeats config show
  chakrabeats config set engine.default_gain 0.2

  # Other commands
  chakrabeats --list-presets
  chakrabeats --version
        """.strip(),
    )

    parser.add_argument(
        "--version", action="version", version=f"chakrabeats {version('chakrabeats')}"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List all chakra and offset presets"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress non-error output")

    subparsers = parser.add_subparsers(
        dest="command", help="Available commands", metavar="COMMAND", required=False
    )
    add_play_parser(subparsers)
    add_render_parser(subparsers)
    subparsers.add_parser("config", help="Configuration management commands", add_help=False)

    if not argv:
        parser.print_help()
        sys.exit(0)

    args = parser.parse_args(argv)

    if args.list_presets:
        list_presets()
        sys.exit(0)

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(0)

    try:
        exit_code = args.func(args)
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(130)
    except Exception as e:
        if args.verbose:
            logging.exception("Unexpected error occurred")
        else:
            logging.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
