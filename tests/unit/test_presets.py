"""Tests for presets.py"""

import pytest

from chakrabeats.frequency import Convention, FrequencyLimits
from chakrabeats.presets import (
    CHAKRAS,
    CUSTOM_OFFSET_ID,
    OFFSETS,
    ChakraPreset,
    PresetCatalog,
    PresetNotFound,
)


class TestPresetData:
    """Test the static preset tables."""

    def test_seven_chakras_in_order(self):
        """Test the chakra order from root to crown."""
        assert [c.id for c in CHAKRAS] == [
            "root",
            "sacral",
            "solar_plexus",
            "heart",
            "throat",
            "third_eye",
            "crown",
        ]

    def test_heart_values(self):
        """Test the heart chakra record."""
        heart = PresetCatalog().get_chakra("heart")
        assert heart.frequency == 639.0
        assert heart.color == "#00FF00"
        assert heart.sanskrit == "Anahata"

    def test_offset_bands(self):
        """Test offset presets and their values."""
        assert [(o.id, o.band, o.value) for o in OFFSETS] == [
            ("focus", "alpha", 10.0),
            ("relax", "theta", 6.0),
            ("meditate", "delta", 2.0),
            ("alert", "beta", 20.0),
        ]

    def test_presets_are_immutable(self):
        """Test preset records cannot be changed."""
        with pytest.raises(AttributeError):
            CHAKRAS[0].frequency = 1.0  # type: ignore[misc]

    def test_base_for_convention(self):
        """Test chakra base depends on the convention."""
        chakra = ChakraPreset("x", "X", 400.0, "#000000", "x", 250.0)
        assert chakra.base_for(Convention.BASE_OFFSET) == 400.0
        assert chakra.base_for(Convention.CARRIER_HALF) == 250.0


class TestPresetCatalog:
    """Test PresetCatalog lookups and the custom slot."""

    def setup_method(self):
        """Set up test fixtures."""
        self.catalog = PresetCatalog()

    def test_offsets_end_with_custom(self):
        """Test the custom slot is listed last."""
        offsets = self.catalog.offsets
        assert offsets[-1].id == CUSTOM_OFFSET_ID
        assert offsets[-1].value == 4.0
        assert len(offsets) == len(OFFSETS) + 1

    def test_unknown_chakra(self):
        """Test unknown chakra ids raise PresetNotFound."""
        with pytest.raises(PresetNotFound) as exc_info:
            self.catalog.get_chakra("nonexistent")
        assert exc_info.value.kind == "chakra"
        assert exc_info.value.preset_id == "nonexistent"
        assert "heart" in str(exc_info.value)

    def test_lookup_is_by_id_not_name(self):
        """Test display names are not valid ids."""
        with pytest.raises(PresetNotFound):
            self.catalog.get_chakra("Heart")

    def test_unknown_offset(self):
        """Test unknown offset ids raise PresetNotFound, which is a LookupError."""
        with pytest.raises(LookupError):
            self.catalog.get_offset("gamma")

    def test_set_custom_offset(self):
        """Test the custom slot is settable and clamped."""
        assert self.catalog.set_custom_offset(7.83) == pytest.approx(7.83)
        assert self.catalog.get_offset(CUSTOM_OFFSET_ID).value == pytest.approx(7.83)
        assert self.catalog.set_custom_offset(100.0) == 50.0
        assert self.catalog.set_custom_offset(0.0) == pytest.approx(0.1)

    def test_custom_offset_uses_catalog_limits(self):
        """Test custom limits clamp the custom slot."""
        catalog = PresetCatalog(FrequencyLimits(min_offset=1.0, max_offset=12.0), custom_offset=0.5)
        assert catalog.custom_offset == 1.0
        assert catalog.set_custom_offset(30.0) == 12.0
