"""Stereo channel types shared by the engine and the spectrum tap."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Channel(str, Enum):
    """Hard stereo placement of a tone generator."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def column(self) -> int:
        """Index of this channel in an interleaved (frames, 2) output block."""
        return 0 if self is Channel.LEFT else 1


@dataclass(frozen=True)
class ChannelState:
    """Frequency, gain and placement of one live generator."""

    frequency: float
    gain: float
    pan: Channel
