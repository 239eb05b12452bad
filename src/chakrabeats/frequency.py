"""
Frequency policy for chakrabeats.

Pure functions that turn a base/carrier frequency and a beat offset into the
(left, right) tone pair played on each stereo channel. Every input is
clamped, never rejected, so callers cannot produce an invalid pair.

Conventions:
  base_offset   left = base,               right = base + offset
  carrier_half  left = carrier - offset/2, right = carrier + offset/2

When the upper tone would pass the ceiling, both tones slide down by the
excess so the beat is kept: base_offset with base 5000 and offset 10 plays
1990/2000, not 2000/2000. Each tone is then raised to the floor if needed,
which is the only clamp that can shrink the beat.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

AUDIBLE_FLOOR_HZ = 20.0
UPPER_BOUND_HZ = 2000.0
MIN_OFFSET_HZ = 0.1
MAX_OFFSET_HZ = 50.0


class Convention(str, Enum):
    """How a (base, offset) pair is spread over the two channels."""

    BASE_OFFSET = "base_offset"
    CARRIER_HALF = "carrier_half"


@dataclass(frozen=True)
class FrequencyLimits:
    """Bounds applied to every computed channel frequency."""

    floor: float = AUDIBLE_FLOOR_HZ
    ceiling: float = UPPER_BOUND_HZ
    min_offset: float = MIN_OFFSET_HZ
    max_offset: float = MAX_OFFSET_HZ


DEFAULT_LIMITS = FrequencyLimits()


@dataclass(frozen=True)
class BinauralParameters:
    """A base (or carrier) frequency and the beat offset between channels."""

    base: float
    offset: float


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, float(value)))


def clamp_offset(offset: float, limits: FrequencyLimits = DEFAULT_LIMITS) -> float:
    """Clamp an offset into the positive offset range (negatives become the minimum)."""
    return clamp(offset, limits.min_offset, limits.max_offset)


def clamp_frequency(hz: float, limits: FrequencyLimits = DEFAULT_LIMITS) -> float:
    return clamp(hz, limits.floor, limits.ceiling)


def normalize(
    params: BinauralParameters, limits: FrequencyLimits = DEFAULT_LIMITS
) -> BinauralParameters:
    """Return params with base and offset clamped into their configured ranges."""
    return BinauralParameters(
        base=clamp_frequency(params.base, limits),
        offset=clamp_offset(params.offset, limits),
    )


def compute_pair(
    base: float,
    offset: float,
    convention: Convention = Convention.BASE_OFFSET,
    limits: FrequencyLimits = DEFAULT_LIMITS,
) -> Tuple[float, float]:
    """
    Compute the (left, right) frequencies for a base/carrier and offset.

    The pair is shifted down as a whole when the upper tone would pass the
    ceiling, so the realized beat still equals the offset. Only the floor
    clamp may shrink the beat.

    Args:
        base: Base (base_offset) or carrier (carrier_half) frequency in Hz
        offset: Beat frequency in Hz
        convention: Channel spreading convention
        limits: Frequency bounds

    Returns:
        Tuple of (left_hz, right_hz)
    """
    base = clamp_frequency(base, limits)
    offset = clamp_offset(offset, limits)

    if Convention(convention) is Convention.CARRIER_HALF:
        left = base - offset / 2.0
        right = base + offset / 2.0
    else:
        left = base
        right = base + offset

    if right > limits.ceiling:
        left -= right - limits.ceiling
        right = limits.ceiling

    return max(limits.floor, left), max(limits.floor, right)


def parameters_from_pair(
    left: float,
    right: float,
    convention: Convention = Convention.BASE_OFFSET,
    limits: FrequencyLimits = DEFAULT_LIMITS,
) -> BinauralParameters:
    """Derive normalized parameters from an explicit (left, right) pair."""
    if Convention(convention) is Convention.CARRIER_HALF:
        params = BinauralParameters(base=(left + right) / 2.0, offset=right - left)
    else:
        params = BinauralParameters(base=left, offset=right - left)
    return normalize(params, limits)


def parameters_holding(
    held_hz: float,
    edited_hz: float,
    edited_is_left: bool,
    convention: Convention = Convention.BASE_OFFSET,
    limits: FrequencyLimits = DEFAULT_LIMITS,
) -> BinauralParameters:
    """
    Derive parameters for a one-channel edit that keeps the other channel at held_hz.

    The edited channel is clamped into the offset range measured from the
    held channel (below it for a left edit, above it for a right edit) and
    into the floor/ceiling, so it can never cross the held channel.
    compute_pair on the result reproduces held_hz under either convention.
    """
    edited = clamp_frequency(edited_hz, limits)
    if edited_is_left:
        left = clamp(edited, held_hz - limits.max_offset, held_hz - limits.min_offset)
        left, right = max(limits.floor, left), held_hz
    else:
        right = clamp(edited, held_hz + limits.min_offset, held_hz + limits.max_offset)
        left, right = held_hz, min(limits.ceiling, right)
    return parameters_from_pair(left, right, convention, limits)


def beat_of(left: float, right: float) -> float:
    return abs(right - left)
