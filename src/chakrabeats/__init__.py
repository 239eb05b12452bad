"""
chakrabeats: binaural beat synthesis with chakra and brainwave presets.
"""

from .channels import Channel, ChannelState
from .engine import (
    AudioUnavailable,
    BinauralParameters,
    EngineSnapshot,
    EngineState,
    PresetNotFound,
    SynthesisEngine,
    get_engine,
)
from .frequency import Convention, FrequencyLimits, compute_pair
from .presets import PresetCatalog

__all__ = [
    "AudioUnavailable",
    "BinauralParameters",
    "Channel",
    "ChannelState",
    "Convention",
    "EngineSnapshot",
    "EngineState",
    "FrequencyLimits",
    "PresetCatalog",
    "PresetNotFound",
    "SynthesisEngine",
    "compute_pair",
    "get_engine",
]
