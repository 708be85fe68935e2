import math
import pytest

from core.color import (
    color_sort_key,
    hex_to_rgb,
    hsl_to_rgb,
    is_grayscale,
    is_valid_hex,
    recolor,
    rgb_to_display_hex,
    rgb_to_hsl,
    rgba_from_mapping,
    sanitize_channel,
    shift_hue,
)
from core.types import RGBA


def channels(rgba: RGBA):
    return rgba.r, rgba.g, rgba.b, rgba.a


def rgba_approx(rgba: RGBA):
    return pytest.approx(channels(rgba), abs=1e-9)


class TestHex:
    @pytest.mark.parametrize("hex_color", ["#000000", "#ffffff", "#88eeee", "#123abc", "#7f0080"])
    def test_round_trip(self, hex_color):
        assert rgb_to_display_hex(*hex_to_rgb(hex_color)) == hex_color

    def test_short_form(self):
        assert hex_to_rgb("#fff") == (1.0, 1.0, 1.0)
        assert hex_to_rgb("#0F0") == (0.0, 1.0, 0.0)

    @pytest.mark.parametrize("text", ["", "ffffff", "#12345", "#gggggg", "#1234567", None])
    def test_invalid_is_black(self, text):
        assert not is_valid_hex(text)
        assert hex_to_rgb(text) == (0.0, 0.0, 0.0)

    def test_hdr_display_is_scaled_down(self):
        # (2, 1, 0) displays as (1, 0.5, 0), and 0.5 rounds half up to 0x80
        assert rgb_to_display_hex(2.0, 1.0, 0.0) == "#ff8000"

    def test_display_clamps_negative(self):
        assert rgb_to_display_hex(-1.0, 0.0, 0.0) == "#000000"


class TestChannels:
    @pytest.mark.parametrize("value,expected", [
        (0.5, 0.5),
        (3, 3.0),
        ("0.25", 0.25),
        ("abc", 0.0),
        (None, 0.0),
        (True, 0.0),
        (math.nan, 0.0),
        (math.inf, 0.0),
        (-math.inf, 0.0),
    ])
    def test_sanitize_channel(self, value, expected):
        assert sanitize_channel(value) == expected

    def test_missing_channels_become_zero(self):
        assert rgba_from_mapping({"R": 1, "G": "x"}) == RGBA(1.0, 0.0, 0.0, 0.0)

    def test_grayscale(self):
        assert is_grayscale(RGBA(0.5, 0.5, 0.5, 1.0))
        assert is_grayscale(RGBA(3.0, 3.0, 3.0, 0.0))
        assert not is_grayscale(RGBA(0.5, 0.5, 0.4, 1.0))


class TestHsl:
    @pytest.mark.parametrize("rgb", [(0.5, 0.5, 0.5), (0.2, 0.4, 0.6), (1.0, 0.0, 0.0), (0.0, 0.0, 0.0)])
    def test_round_trip(self, rgb):
        assert hsl_to_rgb(*rgb_to_hsl(*rgb)) == pytest.approx(rgb, abs=1e-9)

    def test_hdr_is_normalized(self):
        assert rgb_to_hsl(2.0, 0.5, 0.5) == pytest.approx(rgb_to_hsl(1.0, 0.25, 0.25))

    def test_sort_key_orders_by_hue(self):
        red, green, blue = RGBA(1, 0, 0, 1), RGBA(0, 1, 0, 1), RGBA(0, 0, 1, 1)
        assert sorted([blue, red, green], key=color_sort_key) == [red, green, blue]


class TestRecolor:
    def test_preserves_intensity(self):
        result = recolor(RGBA(2.0, 0.5, 0.5, 1.0), (0.0, 0.0, 1.0), preserve_intensity=True)
        assert result == RGBA(0.0, 0.0, 2.0, 1.0)

    def test_intensity_matches_original_max(self):
        result = recolor(RGBA(0.3, 0.6, 0.1, 0.5), (1.0, 0.5, 0.25), preserve_intensity=True)
        assert max(result.rgb) == pytest.approx(0.6)
        assert result.a == 0.5

    def test_replaces_outright(self):
        result = recolor(RGBA(2.0, 0.5, 0.5, 0.7), (0.0, 0.0, 1.0), preserve_intensity=False)
        assert result == RGBA(0.0, 0.0, 1.0, 0.7)

    def test_black_original_stays_black(self):
        assert recolor(RGBA(0, 0, 0, 1), (1.0, 0.0, 0.0), True) == RGBA(0, 0, 0, 1)

    def test_black_target_gives_black(self):
        assert recolor(RGBA(1.0, 0.5, 0.0, 1), (0.0, 0.0, 0.0), True) == RGBA(0, 0, 0, 1)


class TestHueShift:
    @pytest.mark.parametrize("rgba", [RGBA(0.8, 0.2, 0.1, 1.0), RGBA(4.0, 1.0, 0.5, 0.3), RGBA(0.0, 0.0, 0.0, 1.0)])
    def test_zero_shift_is_noop(self, rgba):
        assert channels(shift_hue(rgba, 0)) == rgba_approx(rgba)

    def test_full_turn_is_noop(self):
        rgba = RGBA(0.8, 0.2, 0.1, 1.0)
        assert channels(shift_hue(rgba, 360)) == rgba_approx(rgba)

    def test_rotates_primaries(self):
        assert channels(shift_hue(RGBA(1, 0, 0, 1), 120)) == rgba_approx(RGBA(0, 1, 0, 1))
        assert channels(shift_hue(RGBA(1, 0, 0, 1), -120)) == rgba_approx(RGBA(0, 0, 1, 1))

    def test_keeps_hdr_intensity(self):
        assert channels(shift_hue(RGBA(2.0, 0.0, 0.0, 0.5), 120)) == rgba_approx(RGBA(0.0, 2.0, 0.0, 0.5))
