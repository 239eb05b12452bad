"""
Shared tone arguments for the play and render commands.
"""

import argparse

from ..engine import BinauralParameters, SynthesisEngine
from ..presets import CHAKRAS, CUSTOM_OFFSET_ID, OFFSETS


def positive_float(v: str) -> float:
    x = float(v)
    if x <= 0:
        raise argparse.ArgumentTypeError("must be > 0")
    return x


def nonneg_float(v: str) -> float:
    x = float(v)
    if x < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return x


def add_tone_arguments(parser: argparse.ArgumentParser) -> None:
    """Add preset and frequency flags to a subcommand parser."""
    parser.add_argument(
        "--chakra",
        choices=[c.id for c in CHAKRAS],
        help="Chakra preset that sets the base/carrier tone",
    )
    parser.add_argument(
        "--offset",
        choices=[o.id for o in OFFSETS] + [CUSTOM_OFFSET_ID],
        help="Offset preset that sets the beat",
    )
    parser.add_argument(
        "--custom-offset",
        type=float,
        help="Custom beat in Hz (selects the custom offset preset; only with --offset custom or no --offset)",
    )
    parser.add_argument("--base", type=positive_float, help="Base/carrier frequency in Hz")
    parser.add_argument("--beat", type=positive_float, help="Beat (offset) frequency in Hz")


def apply_tone_arguments(engine: SynthesisEngine, args: argparse.Namespace) -> None:
    """
    Apply preset flags, then explicit Hz flags, to the engine.

    Raises:
        PresetNotFound: If a preset id is unknown
        ValueError: If --custom-offset is combined with a non-custom --offset
    """
    if args.chakra or args.offset or args.custom_offset is not None:
        engine.apply_preset(args.chakra, args.offset, args.custom_offset)

    if args.base is not None or args.beat is not None:
        current = engine.parameters
        engine.retune(
            BinauralParameters(
                base=args.base if args.base is not None else current.base,
                offset=args.beat if args.beat is not None else current.offset,
            )
        )
