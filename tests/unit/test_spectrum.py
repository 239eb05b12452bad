"""Tests for spectrum.py"""

import math

import numpy as np
import pytest

from chakrabeats.channels import Channel
from chakrabeats.spectrum import SpectrumTap


def _sine(freq, frames, samplerate=48000, amplitude=0.3):
    t = np.arange(frames) / samplerate
    return amplitude * np.sin(2 * math.pi * freq * t)


class TestSpectrumTap:
    """Test SpectrumTap."""

    def test_invalid_fft_size(self):
        """Test fft_size must be a power of two."""
        with pytest.raises(ValueError):
            SpectrumTap(100)

    def test_snapshot_has_128_bins(self):
        """Test the default window yields 128 bins."""
        tap = SpectrumTap()
        snapshot = tap.snapshot(Channel.LEFT)
        assert snapshot.shape == (128,)
        assert snapshot.dtype == np.uint8

    def test_silence_is_zero(self):
        """Test an empty tap reports no energy."""
        tap = SpectrumTap()
        assert tap.snapshot(Channel.RIGHT).max() == 0
        assert tap.bars(Channel.RIGHT) == [0.0] * 16

    def test_peak_at_tone_bin(self):
        """Test a tone lands in the expected bin on the right channel only."""
        tap = SpectrumTap(256)
        freqs = tap.bin_frequencies(48000)
        tone = freqs[20]
        tap.push(np.zeros(1024), _sine(tone, 1024, amplitude=0.01))
        right = tap.snapshot(Channel.RIGHT)
        assert int(np.argmax(right)) == 20
        assert right[20] > 150
        assert tap.snapshot(Channel.LEFT).max() == 0

    def test_small_blocks_roll_in(self):
        """Test blocks smaller than the window accumulate."""
        tap = SpectrumTap(256)
        for _ in range(8):
            assert tap.push(_sine(1500.0, 64), _sine(1500.0, 64)) is True
        assert tap.snapshot(Channel.LEFT).max() > 0

    def test_bars(self):
        """Test bars are percentages of the requested count."""
        tap = SpectrumTap()
        tap.push(_sine(3000.0, 512), _sine(3000.0, 512))
        bars = tap.bars(Channel.LEFT, count=8)
        assert len(bars) == 8
        assert all(0.0 <= b <= 100.0 for b in bars)
        assert max(bars) > 0.0

    def test_push_skips_when_busy(self):
        """Test a push never waits for a reader."""
        tap = SpectrumTap()
        tap._lock.acquire()
        try:
            assert tap.push(np.ones(10), np.ones(10)) is False
        finally:
            tap._lock.release()

    def test_clear(self):
        """Test clear drops buffered audio."""
        tap = SpectrumTap()
        tap.push(_sine(1000.0, 512), _sine(1000.0, 512))
        tap.clear()
        assert tap.snapshot(Channel.LEFT).max() == 0
