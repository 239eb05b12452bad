"""Phase-continuous sine tone generator."""

from __future__ import annotations

import math

import numpy as np

TWO_PI = 2.0 * math.pi


class ToneGenerator:
    """
    Sine oscillator that keeps its phase between blocks.

    The frequency is passed per block, so a retune takes effect at the next
    block boundary without a discontinuity in the waveform.
    """

    def __init__(self, samplerate: int):
        if samplerate <= 0:
            raise ValueError("samplerate must be > 0")
        self.samplerate = samplerate
        self.phase = 0.0

    def render(self, frequency: float, frames: int) -> np.ndarray:
        """Return `frames` float64 samples in [-1, 1] at `frequency` Hz."""
        step = TWO_PI * frequency / self.samplerate
        phases = self.phase + step * np.arange(frames, dtype=np.float64)
        self.phase = (self.phase + step * frames) % TWO_PI
        return np.sin(phases)

    def reset(self) -> None:
        self.phase = 0.0
