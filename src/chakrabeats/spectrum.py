"""
Spectrum tap for chakrabeats.

A pull-based, read-only view of the most recent audio written by the engine.
The audio callback pushes blocks in; a display loop (at roughly 60 Hz)
pulls magnitude snapshots out. Pushing never blocks: if a reader holds the
lock the block is skipped.
"""

from __future__ import annotations

import threading
from typing import Dict, List

import numpy as np

from .channels import Channel

DEFAULT_FFT_SIZE = 256
MIN_DECIBELS = -100.0
MAX_DECIBELS = -30.0


class SpectrumTap:
    """Per-channel rolling window with byte-scaled FFT magnitude snapshots."""

    def __init__(self, fft_size: int = DEFAULT_FFT_SIZE):
        if fft_size < 2 or fft_size & (fft_size - 1):
            raise ValueError("fft_size must be a power of two >= 2")
        self.fft_size = fft_size
        self._window = np.hanning(fft_size)
        self._buffers: Dict[Channel, np.ndarray] = {
            Channel.LEFT: np.zeros(fft_size, dtype=np.float64),
            Channel.RIGHT: np.zeros(fft_size, dtype=np.float64),
        }
        self._lock = threading.Lock()

    @property
    def bin_count(self) -> int:
        return self.fft_size // 2

    def push(self, left: np.ndarray, right: np.ndarray) -> bool:
        """Append a block of samples per channel. Returns False if the block was dropped."""
        if not self._lock.acquire(blocking=False):
            return False
        try:
            for channel, block in ((Channel.LEFT, left), (Channel.RIGHT, right)):
                self._buffers[channel] = self._roll_in(self._buffers[channel], block)
        finally:
            self._lock.release()
        return True

    def _roll_in(self, buffer: np.ndarray, block: np.ndarray) -> np.ndarray:
        block = np.asarray(block, dtype=np.float64)
        if block.size >= self.fft_size:
            return block[-self.fft_size :].copy()
        return np.concatenate((buffer[block.size :], block))

    def snapshot(self, channel: Channel) -> np.ndarray:
        """
        Return `fft_size // 2` magnitude bins scaled to 0..255.

        Magnitudes are converted to dB and mapped linearly from
        [MIN_DECIBELS, MAX_DECIBELS] onto the byte range.
        """
        with self._lock:
            samples = self._buffers[Channel(channel)].copy()

        spectrum = np.abs(np.fft.rfft(samples * self._window))[: self.bin_count]
        spectrum /= self.fft_size
        with np.errstate(divide="ignore"):
            db = 20.0 * np.log10(spectrum)
        scaled = (db - MIN_DECIBELS) / (MAX_DECIBELS - MIN_DECIBELS) * 255.0
        return np.clip(np.nan_to_num(scaled, neginf=0.0), 0.0, 255.0).astype(np.uint8)

    def bars(self, channel: Channel, count: int = 16) -> List[float]:
        """Average the snapshot into `count` bars, each a percentage 0..100."""
        bins = self.snapshot(channel).astype(np.float64)
        size = max(1, self.bin_count // count)
        return [float(bins[i * size : (i + 1) * size].mean() / 255.0 * 100.0) for i in range(count)]

    def bin_frequencies(self, samplerate: int) -> np.ndarray:
        return np.arange(self.bin_count) * samplerate / self.fft_size

    def clear(self) -> None:
        with self._lock:
            for channel in self._buffers:
                self._buffers[channel] = np.zeros(self.fft_size, dtype=np.float64)
