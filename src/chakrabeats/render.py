"""
render.py: write a binaural track to a stereo WAV instead of the sound card.

Uses the same frequency policy and phase-continuous generators as the live
engine, so a rendered file matches what `chakrabeats play` would produce.

Examples:
  chakrabeats render --chakra heart --offset relax --minutes 5 --out heart_relax.wav
  chakrabeats render --base 200 --beat 6 --seconds 30 --volume 0.2
"""

import wave

import numpy as np

from .frequency import (
    DEFAULT_LIMITS,
    BinauralParameters,
    Convention,
    FrequencyLimits,
    compute_pair,
)
from .tone import ToneGenerator


def render_binaural(
    params: BinauralParameters,
    duration_sec: float = 300.0,
    *,
    convention: Convention = Convention.BASE_OFFSET,
    limits: FrequencyLimits = DEFAULT_LIMITS,
    samplerate: int = 48000,
    volume: float = 0.3,
    fade_sec: float = 3.0,
) -> bytes:
    """Return interleaved int16 stereo samples for a binaural beat track."""
    if duration_sec <= 0:
        raise ValueError("duration_sec must be > 0")
    if not (0.0 < volume <= 1.0):
        raise ValueError("volume must be in (0, 1]")

    n = int(duration_sec * samplerate)
    left_hz, right_hz = compute_pair(params.base, params.offset, convention, limits)
    left = ToneGenerator(samplerate).render(left_hz, n)
    right = ToneGenerator(samplerate).render(right_hz, n)

    # Fade in/out envelope to avoid clicks
    n_fade = int(max(0.0, min(fade_sec, duration_sec / 2.0)) * samplerate)
    if n_fade > 0:
        env = np.ones(n, dtype=np.float64)
        env[:n_fade] = np.linspace(0.0, 1.0, n_fade, dtype=np.float64)
        env[-n_fade:] = np.linspace(1.0, 0.0, n_fade, dtype=np.float64)
        left *= env
        right *= env

    peak = 32767 * volume
    stereo = np.empty(n * 2, dtype=np.int16)
    stereo[0::2] = np.clip(left * peak, -32767, 32767).astype(np.int16)
    stereo[1::2] = np.clip(right * peak, -32767, 32767).astype(np.int16)
    return stereo.tobytes()


def save_wav(path: str, data_bytes: bytes, samplerate: int = 48000) -> None:
    with wave.open(path, "wb") as wf:
        wf.setnchannels(2)
        wf.setsampwidth(2)  # 16-bit PCM
        wf.setframerate(samplerate)
        wf.writeframes(data_bytes)
