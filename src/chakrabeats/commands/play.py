"""
Play command module.

Starts live binaural output through the sound card and keeps it running
until the requested duration passes or the user interrupts.
"""

import argparse
import logging
import time
from typing import List

from ..channels import Channel
from ..engine import AudioUnavailable, EngineSnapshot, PresetNotFound, get_engine
from .tone_args import add_tone_arguments, apply_tone_arguments, nonneg_float, positive_float

BAR_GLYPHS = " ▁▂▃▄▅▆▇█"


def format_bars(values: List[float]) -> str:
    """Render percentage bars (0..100) as a row of block glyphs."""
    top = len(BAR_GLYPHS) - 1
    return "".join(BAR_GLYPHS[min(top, max(0, round(v / 100.0 * top)))] for v in values)


def describe(snapshot: EngineSnapshot) -> str:
    text = (
        f"L {snapshot.left_freq:.1f} Hz | R {snapshot.right_freq:.1f} Hz | "
        f"beat {snapshot.beat:.1f} Hz | gain {snapshot.gain:g}"
    )
    if snapshot.chakra_id or snapshot.offset_id:
        text += f" | preset {snapshot.chakra_id or '-'}/{snapshot.offset_id or '-'}"
    return text


def play_command(args: argparse.Namespace) -> int:
    """
    Handle the play subcommand.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 if audio is unavailable, 2 for a bad preset selection)
    """
    engine = get_engine()

    try:
        apply_tone_arguments(engine, args)
    except (PresetNotFound, ValueError) as e:
        logging.error(str(e))
        return 2

    if args.gain is not None:
        engine.set_gain(args.gain)

    try:
        engine.start()
    except AudioUnavailable as e:
        print(f"Couldn't start audio: {e}")
        return 1

    print(f"Playing: {describe(engine.get_state())}")
    print("Press Ctrl+C to stop.")

    deadline = time.monotonic() + args.seconds if args.seconds else None
    try:
        while deadline is None or time.monotonic() < deadline:
            time.sleep(args.interval)
            if args.bars:
                left = format_bars(engine.spectrum.bars(Channel.LEFT))
                right = format_bars(engine.spectrum.bars(Channel.RIGHT))
                print(f"L [{left}]  R [{right}]")
    finally:
        engine.stop()

    print("Stopped.")
    return 0


def add_play_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore
    """
    Add the play subcommand parser.

    Args:
        subparsers: Subparsers action from main parser
    """
    parser = subparsers.add_parser(
        "play",
        help="Play binaural beats live",
        description="Play a binaural beat through the default audio output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chakrabeats play --chakra heart --offset relax
  chakrabeats play --base 200 --beat 6 --seconds 600 --gain 0.2
  chakrabeats play --chakra crown --custom-offset 7.83 --bars
        """.strip(),
    )
    add_tone_arguments(parser)
    parser.add_argument("--gain", type=nonneg_float, help="Channel gain 0-1 (default from config)")
    parser.add_argument(
        "--seconds", "-s", type=positive_float, help="Stop after this many seconds (default: until Ctrl+C)"
    )
    parser.add_argument(
        "--bars", action="store_true", help="Print spectrum bars for each channel while playing"
    )
    parser.add_argument(
        "--interval", type=positive_float, default=1.0, help="Seconds between status updates"
    )
    parser.set_defaults(func=play_command)
