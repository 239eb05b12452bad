"""
Command modules for chakrabeats CLI subcommands.
"""

from .play import add_play_parser
from .render import add_render_parser
from .config_command import config

__all__ = [
    "add_play_parser",
    "add_render_parser",
    "config",
]
