"""
Render command module.

Writes a binaural track to a WAV file using the engine's presets and
frequency policy, without opening an audio device.
"""

import argparse
import logging
from pathlib import Path

from ..config import get_config_manager
from ..engine import PresetNotFound, SynthesisEngine
from ..render import render_binaural, save_wav
from .tone_args import add_tone_arguments, apply_tone_arguments, nonneg_float, positive_float


def render_command(args: argparse.Namespace) -> int:
    """
    Handle the render subcommand.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 2 for a bad preset selection)
    """
    config = get_config_manager().get_config()
    engine = SynthesisEngine(config)

    try:
        apply_tone_arguments(engine, args)
    except (PresetNotFound, ValueError) as e:
        logging.error(str(e))
        return 2

    duration = args.minutes * 60.0 if args.minutes is not None else args.seconds
    samplerate = args.samplerate or config.output.sample_rate
    volume = args.volume if args.volume is not None else config.engine.default_gain

    data = render_binaural(
        engine.parameters,
        duration,
        convention=engine.convention,
        limits=engine.limits,
        samplerate=samplerate,
        volume=volume,
        fade_sec=args.fade,
    )

    out = Path(args.out).expanduser().resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    save_wav(str(out), data, samplerate=samplerate)

    state = engine.get_state()
    logging.info(
        f"✓ Rendered: {out} ({duration:.1f}s @ {samplerate} Hz, left={state.left_freq:g} Hz, "
        f"right={state.right_freq:g} Hz, beat={state.beat:g} Hz, vol={volume})"
    )
    return 0


def add_render_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore
    """
    Add the render subcommand parser.

    Args:
        subparsers: Subparsers action from main parser
    """
    parser = subparsers.add_parser(
        "render",
        help="Render binaural beats to a WAV file",
        description="Render a binaural beat to a 16-bit stereo WAV file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chakrabeats render --chakra heart --offset relax --minutes 5 --out heart_relax.wav
  chakrabeats render --base 200 --beat 6 --seconds 30 --volume 0.2
        """.strip(),
    )
    add_tone_arguments(parser)
    dur = parser.add_mutually_exclusive_group(required=True)
    dur.add_argument("--minutes", "-m", type=positive_float, help="Duration in minutes")
    dur.add_argument("--seconds", "-s", type=positive_float, help="Duration in seconds")
    parser.add_argument("--samplerate", type=int, help="Sample rate (default from config)")
    parser.add_argument("--volume", type=positive_float, help="Output volume scalar (0-1]")
    parser.add_argument("--fade", type=nonneg_float, default=3.0, help="Fade in/out seconds")
    parser.add_argument("--out", default="binaural.wav", help="Output WAV filename")
    parser.set_defaults(func=render_command)
