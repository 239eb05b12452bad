"""
Preset catalog for chakrabeats.

Holds the seven chakra presets (which set the base or carrier tone) and the
brainwave-band offset presets (which set the beat), plus one user-editable
"custom" offset slot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from .frequency import DEFAULT_LIMITS, Convention, FrequencyLimits, clamp_offset

CUSTOM_OFFSET_ID = "custom"
DEFAULT_CUSTOM_OFFSET = 4.0


class PresetNotFound(LookupError):
    """Raised when a preset identifier is not in the catalog."""

    def __init__(self, kind: str, preset_id: str, choices: Tuple[str, ...] = ()):
        self.kind = kind
        self.preset_id = preset_id
        self.choices = choices
        message = f"Unknown {kind} preset '{preset_id}'"
        if choices:
            message += f". Choices: {', '.join(choices)}"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass(frozen=True)
class ChakraPreset:
    """A chakra tone preset."""

    id: str
    name: str
    frequency: float  # solfeggio base for base_offset
    color: str
    sanskrit: str
    carrier: float  # carrier for carrier_half

    def base_for(self, convention: Convention) -> float:
        if Convention(convention) is Convention.CARRIER_HALF:
            return self.carrier
        return self.frequency


@dataclass(frozen=True)
class OffsetPreset:
    """A beat offset preset labelled by brainwave band."""

    id: str
    name: str
    band: str
    value: float


CHAKRAS: Tuple[ChakraPreset, ...] = (
    ChakraPreset("root", "Root", 396.0, "#FF0000", "Muladhara", 228.0),
    ChakraPreset("sacral", "Sacral", 417.0, "#FF8C00", "Svadhisthana", 303.0),
    ChakraPreset("solar_plexus", "Solar Plexus", 528.0, "#FFD700", "Manipura", 364.0),
    ChakraPreset("heart", "Heart", 639.0, "#00FF00", "Anahata", 341.0),
    ChakraPreset("throat", "Throat", 741.0, "#0080FF", "Vishuddha", 384.0),
    ChakraPreset("third_eye", "Third Eye", 852.0, "#4B0082", "Ajna", 445.0),
    ChakraPreset("crown", "Crown", 963.0, "#8A2BE2", "Sahasrara", 480.0),
)

OFFSETS: Tuple[OffsetPreset, ...] = (
    OffsetPreset("focus", "Focus (Alpha)", "alpha", 10.0),
    OffsetPreset("relax", "Relaxation (Theta)", "theta", 6.0),
    OffsetPreset("meditate", "Meditation (Delta)", "delta", 2.0),
    OffsetPreset("alert", "Alert (Beta)", "beta", 20.0),
)


class PresetCatalog:
    """Ordered chakra and offset presets with a mutable custom offset slot."""

    def __init__(
        self,
        limits: FrequencyLimits = DEFAULT_LIMITS,
        custom_offset: float = DEFAULT_CUSTOM_OFFSET,
    ):
        self.limits = limits
        self._chakras: Dict[str, ChakraPreset] = {c.id: c for c in CHAKRAS}
        self._offsets: Dict[str, OffsetPreset] = {o.id: o for o in OFFSETS}
        self._custom_offset = clamp_offset(custom_offset, limits)

    @property
    def chakras(self) -> Tuple[ChakraPreset, ...]:
        return tuple(self._chakras.values())

    @property
    def offsets(self) -> Tuple[OffsetPreset, ...]:
        """Offset presets in display order, ending with the custom slot."""
        return tuple(self._offsets.values()) + (self._custom_preset(),)

    @property
    def custom_offset(self) -> float:
        return self._custom_offset

    def set_custom_offset(self, value: float) -> float:
        """Set the custom slot, clamped to the offset range. Returns the stored value."""
        self._custom_offset = clamp_offset(value, self.limits)
        return self._custom_offset

    def get_chakra(self, chakra_id: str) -> ChakraPreset:
        try:
            return self._chakras[chakra_id]
        except KeyError:
            raise PresetNotFound("chakra", chakra_id, tuple(self._chakras)) from None

    def get_offset(self, offset_id: str) -> OffsetPreset:
        if offset_id == CUSTOM_OFFSET_ID:
            return self._custom_preset()
        try:
            return self._offsets[offset_id]
        except KeyError:
            choices = tuple(self._offsets) + (CUSTOM_OFFSET_ID,)
            raise PresetNotFound("offset", offset_id, choices) from None

    def _custom_preset(self) -> OffsetPreset:
        return OffsetPreset(CUSTOM_OFFSET_ID, "Custom", "custom", self._custom_offset)
