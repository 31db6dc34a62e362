"""HSV to RGB conversion and lerp tests."""
import numpy as np
import pytest

from unity_random.logic.color import hsv_to_rgb, lerp


def as_floats(color):
    return tuple(float(c) for c in color)


class TestLerp:
    def test_interpolates(self):
        assert lerp(2.0, 4.0, 0.5) == np.float32(3.0)

    def test_clamps_t(self):
        assert lerp(2.0, 4.0, 1.5) == np.float32(4.0)
        assert lerp(2.0, 4.0, -1.0) == np.float32(2.0)

    def test_reversed_bounds(self):
        assert lerp(4.0, 2.0, 0.25) == np.float32(3.5)


class TestHsvToRgb:
    """Sector arithmetic mirrors the engine's switch on floor(h * 6) + 1."""

    def test_zero_saturation_is_gray(self):
        assert as_floats(hsv_to_rgb(0.7, 0.0, 0.4)) == pytest.approx((0.4, 0.4, 0.4, 1.0))

    def test_zero_value_is_black(self):
        assert as_floats(hsv_to_rgb(0.7, 0.5, 0.0)) == (0.0, 0.0, 0.0, 1.0)

    def test_red_at_hue_zero(self):
        assert as_floats(hsv_to_rgb(0.0, 1.0, 1.0)) == (1.0, 0.0, 0.0, 1.0)

    def test_cyan_at_half_hue(self):
        assert as_floats(hsv_to_rgb(0.5, 1.0, 1.0)) == (0.0, 1.0, 1.0, 1.0)

    def test_hue_one_wraps_to_red(self):
        # selector 7 duplicates selector 1
        assert as_floats(hsv_to_rgb(1.0, 1.0, 1.0)) == (1.0, 0.0, 0.0, 1.0)

    def test_slightly_negative_hue_uses_selector_zero(self):
        r, g, b, a = as_floats(hsv_to_rgb(-0.1, 1.0, 1.0))
        assert (r, g, a) == (1.0, 0.0, 1.0)
        assert b == pytest.approx(0.6, abs=1e-6)

    @pytest.mark.parametrize("hue", [2.0, -0.5, 1.2])
    def test_selector_outside_ring_falls_back_to_black(self, hue):
        assert as_floats(hsv_to_rgb(hue, 1.0, 1.0)) == (0.0, 0.0, 0.0, 1.0)

    def test_extended_range_is_not_clamped(self):
        assert as_floats(hsv_to_rgb(0.0, 0.5, 2.0, extended=True)) == (2.0, 1.0, 1.0, 1.0)

    def test_standard_range_is_clamped(self):
        assert as_floats(hsv_to_rgb(0.0, 0.5, 2.0)) == (1.0, 1.0, 1.0, 1.0)

    def test_alpha_is_always_one(self):
        for hue in np.linspace(0.0, 1.0, 25):
            assert float(hsv_to_rgb(hue, 0.8, 0.9)[3]) == 1.0
