"""
Binaural synthesis engine for chakrabeats.

Owns the two tone generators, their per-channel gain and hard stereo
placement, and the idle/running lifecycle. Control calls (start, stop,
retune, apply_preset) are serialized by a lock; the audio callback runs
on the sounddevice thread and only ever reads the channel pair, which is
swapped in and out as one immutable object.
"""

from __future__ import annotations

import atexit
import logging
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional, Tuple

import numpy as np

from .channels import Channel, ChannelState
from .config import AppConfig, default_config, get_config_manager, validate_app_config
from .frequency import (
    BinauralParameters,
    Convention,
    beat_of,
    clamp,
    compute_pair,
    normalize,
    parameters_holding,
)
from .output import AudioUnavailable, OutputContext
from .presets import CUSTOM_OFFSET_ID, PresetCatalog, PresetNotFound
from .spectrum import SpectrumTap
from .tone import ToneGenerator

__all__ = [
    "AudioUnavailable",
    "BinauralParameters",
    "EngineSnapshot",
    "EngineState",
    "PresetNotFound",
    "SynthesisEngine",
    "get_engine",
]


class EngineState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class EngineSnapshot:
    """Externally observable engine state."""

    lifecycle: EngineState
    left_freq: float
    right_freq: float
    beat: float
    gain: float
    convention: Convention
    chakra_id: Optional[str] = None
    offset_id: Optional[str] = None


@dataclass(frozen=True)
class _Voices:
    """The live channel pair. Created and released as one unit."""

    left: ChannelState
    right: ChannelState
    generators: Tuple[ToneGenerator, ToneGenerator]

    def retuned(self, left_hz: float, right_hz: float) -> "_Voices":
        return replace(
            self,
            left=replace(self.left, frequency=left_hz),
            right=replace(self.right, frequency=right_hz),
        )


class SynthesisEngine:
    """Two-channel binaural tone engine with live retuning."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        catalog: Optional[PresetCatalog] = None,
        stream_factory: Optional[Callable[..., Any]] = None,
    ):
        """
        Initialize the engine in the idle state.

        Args:
            config: Application configuration (defaults when None)
            catalog: Preset catalog (a fresh one using the engine limits when None)
            stream_factory: OutputStream factory, for tests or alternative backends
        """
        config = config or default_config()
        is_valid, issues = validate_app_config(config)
        if not is_valid:
            logging.warning(f"Invalid configuration, using defaults: {'; '.join(issues)}")
            config = default_config()
        self.convention = Convention(config.engine.convention)
        self.limits = config.engine.limits()
        self.catalog = catalog or PresetCatalog(self.limits)
        self.samplerate = config.output.sample_rate
        self.spectrum = SpectrumTap(config.output.fft_size)
        self._context = OutputContext(
            self._render,
            samplerate=config.output.sample_rate,
            blocksize=config.output.block_size,
            device=config.output.device,
            stream_factory=stream_factory,
        )

        self._lock = threading.RLock()
        self._state = EngineState.IDLE
        self._voices: Optional[_Voices] = None
        self._params = normalize(
            BinauralParameters(config.engine.default_base_hz, config.engine.default_offset_hz),
            self.limits,
        )
        self._gain = clamp(config.engine.default_gain, 0.0, 1.0)
        self._chakra_id: Optional[str] = None
        self._offset_id: Optional[str] = None

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def parameters(self) -> BinauralParameters:
        """The last applied (normalized) parameters."""
        return self._params

    @property
    def output(self) -> OutputContext:
        return self._context

    # ---------- Lifecycle ----------

    def start(self) -> None:
        """
        Start continuous output of the current parameters.

        Raises:
            AudioUnavailable: If the output device cannot be opened or resumed.
                The engine stays idle and start() may be retried.
        """
        with self._lock:
            if self._state is EngineState.RUNNING:
                return

            try:
                self._context.resume()
            except AudioUnavailable as e:
                logging.error(f"Couldn't start audio: {e}")
                raise

            left_hz, right_hz = self._pair()
            self._voices = _Voices(
                left=ChannelState(left_hz, self._gain, Channel.LEFT),
                right=ChannelState(right_hz, self._gain, Channel.RIGHT),
                generators=(ToneGenerator(self.samplerate), ToneGenerator(self.samplerate)),
            )
            self._state = EngineState.RUNNING
            logging.info(
                f"Engine running: left={left_hz:g} Hz, right={right_hz:g} Hz, "
                f"beat={beat_of(left_hz, right_hz):g} Hz, gain={self._gain:g}"
            )

    def stop(self) -> None:
        """Stop output and release the channel pair. No-op when idle."""
        with self._lock:
            if self._state is EngineState.IDLE:
                return
            self._voices = None
            self._state = EngineState.IDLE
            self._context.suspend()
            self.spectrum.clear()
            logging.info("Engine stopped")

    def close(self) -> None:
        """Stop and release the output device for good."""
        with self._lock:
            self.stop()
            self._context.close()

    # ---------- Parameter control ----------

    def retune(self, params: BinauralParameters) -> None:
        """
        Apply new parameters as a manual edit, clearing any preset selection.

        When running, the live generators change frequency at the next audio
        block without restarting. When idle, the parameters are kept for the
        next start().
        """
        with self._lock:
            self._chakra_id = None
            self._offset_id = None
            self._apply(params)

    def apply_preset(
        self,
        chakra_id: Optional[str] = None,
        offset_id: Optional[str] = None,
        custom_offset: Optional[float] = None,
    ) -> None:
        """
        Select a chakra and/or offset preset and retune to it.

        Chakra and offset selections are independent: omitting one keeps the
        current value. `custom_offset` writes the custom slot and selects it;
        it cannot be combined with any other offset id.

        Raises:
            PresetNotFound: If an identifier is unknown. Nothing is changed.
            ValueError: If `custom_offset` is given with a non-custom offset id.
                Nothing is changed.
        """
        with self._lock:
            if custom_offset is not None:
                if offset_id is None:
                    offset_id = CUSTOM_OFFSET_ID
                elif offset_id != CUSTOM_OFFSET_ID:
                    raise ValueError(
                        f"custom_offset only applies to the '{CUSTOM_OFFSET_ID}' offset, "
                        f"not '{offset_id}'"
                    )

            chakra = self.catalog.get_chakra(chakra_id) if chakra_id is not None else None
            offset = self.catalog.get_offset(offset_id) if offset_id is not None else None

            if custom_offset is not None:
                self.catalog.set_custom_offset(custom_offset)
                offset = self.catalog.get_offset(CUSTOM_OFFSET_ID)

            base = chakra.base_for(self.convention) if chakra else self._params.base
            value = offset.value if offset else self._params.offset
            self._apply(BinauralParameters(base, value))

            if chakra:
                self._chakra_id = chakra.id
            if offset:
                self._offset_id = offset.id

    def set_channel_frequency(self, channel: Channel, hz: float) -> None:
        """
        Set one channel directly in Hz, holding the other channel where it is.

        The edited channel stays on its own side of the held one: a left edit
        lands between held - max_offset and held - min_offset, a right edit
        between held + min_offset and held + max_offset.
        """
        with self._lock:
            left_hz, right_hz = self._pair()
            if Channel(channel) is Channel.LEFT:
                params = parameters_holding(right_hz, hz, True, self.convention, self.limits)
            else:
                params = parameters_holding(left_hz, hz, False, self.convention, self.limits)
            self.retune(params)

    def set_gain(self, gain: float) -> None:
        """Set the gain of both channels, clamped to [0, 1]."""
        with self._lock:
            self._gain = clamp(gain, 0.0, 1.0)
            voices = self._voices
            if voices is not None:
                self._voices = replace(
                    voices,
                    left=replace(voices.left, gain=self._gain),
                    right=replace(voices.right, gain=self._gain),
                )

    def _apply(self, params: BinauralParameters) -> None:
        self._params = normalize(params, self.limits)
        left_hz, right_hz = self._pair()
        if self._voices is not None:
            self._voices = self._voices.retuned(left_hz, right_hz)
        logging.debug(
            f"Retuned ({self._state.value}): base={self._params.base:g} Hz, "
            f"offset={self._params.offset:g} Hz -> {left_hz:g}/{right_hz:g} Hz"
        )

    def _pair(self) -> Tuple[float, float]:
        return compute_pair(self._params.base, self._params.offset, self.convention, self.limits)

    # ---------- Observation ----------

    def channels(self) -> Optional[Tuple[ChannelState, ChannelState]]:
        """The live (left, right) channel states, or None when idle."""
        voices = self._voices
        if voices is None:
            return None
        return voices.left, voices.right

    def get_state(self) -> EngineSnapshot:
        """Snapshot of lifecycle and frequencies; idle reports what start() would play."""
        with self._lock:
            voices = self._voices
            if voices is not None:
                left_hz, right_hz = voices.left.frequency, voices.right.frequency
            else:
                left_hz, right_hz = self._pair()
            return EngineSnapshot(
                lifecycle=self._state,
                left_freq=left_hz,
                right_freq=right_hz,
                beat=beat_of(left_hz, right_hz),
                gain=self._gain,
                convention=self.convention,
                chakra_id=self._chakra_id,
                offset_id=self._offset_id,
            )

    # ---------- Audio thread ----------

    def _render(self, outdata: np.ndarray, frames: int, time: Any, status: Any) -> None:
        """sounddevice callback: fill one block from the current channel pair."""
        if status:
            logging.warning(f"Audio callback status: {status}")

        voices = self._voices
        if voices is None:
            outdata.fill(0)
            return

        for channel, generator in zip((voices.left, voices.right), voices.generators):
            outdata[:, channel.pan.column] = generator.render(channel.frequency, frames) * channel.gain

        self.spectrum.push(outdata[:, 0], outdata[:, 1])


_engine: Optional[SynthesisEngine] = None
_engine_lock = threading.Lock()


def get_engine() -> SynthesisEngine:
    """Get the process-wide engine, creating it from the user configuration."""
    global _engine
    with _engine_lock:
        if _engine is None:
            _engine = SynthesisEngine(get_config_manager().get_config())
            atexit.register(_engine.close)
        return _engine
