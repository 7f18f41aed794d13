"""Tests for ColorMapping channel reordering."""

import numpy as np
import pytest

from ledgrid.models import ColorMapping, PanelGeometry


@pytest.mark.unit
class TestMapChannel:
    """Test per-position channel lookup."""

    def test_gbr_sends_red_last(self):
        """Pure red on a GBR panel is written as (0, 0, 255)."""
        red = (255, 0, 0)
        wire = [ColorMapping.GBR.map_channel(red, p) for p in range(3)]
        assert wire == [0, 0, 255]

    def test_rgb_is_identity(self):
        pixel = (10, 20, 30)
        assert [ColorMapping.RGB.map_channel(pixel, p) for p in range(3)] == [10, 20, 30]

    @pytest.mark.parametrize("mapping,expected", [
        (ColorMapping.RGB, [10, 20, 30]),
        (ColorMapping.BGR, [30, 20, 10]),
        (ColorMapping.GRB, [20, 10, 30]),
        (ColorMapping.RBG, [10, 30, 20]),
        (ColorMapping.BRG, [30, 10, 20]),
        (ColorMapping.GBR, [20, 30, 10]),
    ])
    def test_all_permutations(self, mapping, expected):
        pixel = (10, 20, 30)
        assert [mapping.map_channel(pixel, p) for p in range(3)] == expected

    def test_invalid_position_reads_red(self):
        pixel = (10, 20, 30)
        assert ColorMapping.GBR.map_channel(pixel, 3) == 10
        assert ColorMapping.BGR.map_channel(pixel, -1) == 10

    def test_values_are_clamped(self):
        pixel = (300, -5, 128)
        assert ColorMapping.RGB.map_channel(pixel, 0) == 255
        assert ColorMapping.RGB.map_channel(pixel, 1) == 0
        assert ColorMapping.RGB.map_channel(pixel, 2) == 128


@pytest.mark.unit
class TestApply:
    """Test array remapping and inversion."""

    @pytest.mark.parametrize("mapping", list(ColorMapping))
    def test_apply_matches_map_channel(self, mapping):
        pixels = np.array([[1, 2, 3], [200, 100, 50], [0, 255, 7]], dtype=np.uint8)
        mapped = mapping.apply(pixels)

        for row, pixel in zip(mapped, pixels):
            assert list(row) == [mapping.map_channel(pixel, p) for p in range(3)]

    @pytest.mark.parametrize("mapping", list(ColorMapping))
    def test_inverse_restores_rgb(self, mapping):
        rng = np.random.default_rng(seed=7)
        pixels = rng.integers(0, 256, size=(64, 3), dtype=np.uint8)

        restored = mapping.inverse().apply(mapping.apply(pixels))

        np.testing.assert_array_equal(restored, pixels)

    def test_gbr_inverse_is_brg(self):
        assert ColorMapping.GBR.inverse() is ColorMapping.BRG
        assert ColorMapping.BGR.inverse() is ColorMapping.BGR

    def test_apply_clamps_wide_input(self):
        mapped = ColorMapping.RGB.apply(np.array([[300, -20, 5]]))
        assert mapped.dtype == np.uint8
        assert list(mapped[0]) == [255, 0, 5]

    def test_apply_accepts_flat_bytes(self):
        flat = np.frombuffer(bytes([255, 0, 0, 0, 255, 0]), dtype=np.uint8)
        mapped = ColorMapping.GBR.apply(flat)
        assert mapped.tobytes() == bytes([0, 0, 255, 255, 0, 0])


@pytest.mark.unit
class TestParsing:
    """Test parsing mappings from configuration strings."""

    def test_case_insensitive(self):
        assert ColorMapping("gbr") is ColorMapping.GBR
        assert ColorMapping("Bgr") is ColorMapping.BGR

    def test_unknown_mapping_rejected(self):
        with pytest.raises(ValueError):
            ColorMapping("XYZ")

    def test_panel_accepts_lowercase(self):
        panel = PanelGeometry(color_mapping="grb")
        assert panel.color_mapping is ColorMapping.GRB

    def test_description(self):
        assert ColorMapping.GBR.description == "Green, Blue, Red"
