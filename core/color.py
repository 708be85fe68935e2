import colorsys
import math
import re
from typing import Mapping, Tuple

from core.types import RGBA

RGB = Tuple[float, float, float]
HSL = Tuple[float, float, float]

HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def sanitize_channel(value) -> float:
    """Coerce a channel to a finite float, anything unusable becomes 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def rgba_from_mapping(data: Mapping) -> RGBA:
    return RGBA(
        r=sanitize_channel(data.get("R")),
        g=sanitize_channel(data.get("G")),
        b=sanitize_channel(data.get("B")),
        a=sanitize_channel(data.get("A")),
    )


def max_channel(rgba: RGBA) -> float:
    return max(rgba.r, rgba.g, rgba.b)


def is_grayscale(rgba: RGBA) -> bool:
    return rgba.r == rgba.g == rgba.b


def is_valid_hex(text: str) -> bool:
    return bool(HEX_PATTERN.match(text or ""))


def rgb_to_hsl(r, g, b) -> HSL:
    """
    Convert linear RGB to HSL, all components in [0, 1].

    Over-bright input is divided by its max channel first, so colors that only
    differ in overall intensity share the same hue and lightness basis.
    """
    scale = max(r, g, b, 1.0)
    h, l, s = colorsys.rgb_to_hls(r / scale, g / scale, b / scale)
    return h, s, l


def hsl_to_rgb(h, s, l) -> RGB:
    return colorsys.hls_to_rgb(h, l, s)


def hex_to_rgb(hex_color: str) -> RGB:
    # "#rgb" or "#rrggbb", anything else is black
    if not is_valid_hex(hex_color):
        return 0.0, 0.0, 0.0
    digits = hex_color[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return tuple(int(digits[i:i + 2], 16) / 255 for i in (0, 2, 4))


def _to_byte(value: float) -> int:
    return min(255, max(0, math.floor(value * 255 + 0.5)))


def rgb_to_display_hex(r, g, b) -> str:
    """Closest displayable hex for a linear color, HDR values are scaled down first."""
    r, g, b = sanitize_channel(r), sanitize_channel(g), sanitize_channel(b)
    scale = max(r, g, b, 1.0)
    return "#" + "".join(f"{_to_byte(c / scale):02x}" for c in (r, g, b))


def recolor(rgba: RGBA, target: RGB, preserve_intensity: bool) -> RGBA:
    """Replace the RGB part of a color, keeping its max channel if asked. Alpha is kept."""
    if not preserve_intensity:
        return rgba.with_rgb(*target)

    original_intensity = max_channel(rgba)
    target_max = max(target)
    if original_intensity == 0 or target_max == 0:
        return rgba.with_rgb(0.0, 0.0, 0.0)

    return rgba.with_rgb(*(c / target_max * original_intensity for c in target))


def shift_hue(rgba: RGBA, degrees: float) -> RGBA:
    # rotating hue keeps max/min in HSL, so undoing the normalisation restores intensity
    scale = max(rgba.r, rgba.g, rgba.b, 1.0)
    h, s, l = rgb_to_hsl(rgba.r, rgba.g, rgba.b)
    h = (h + degrees / 360) % 1.0
    r, g, b = hsl_to_rgb(h, s, l)
    return rgba.with_rgb(r * scale, g * scale, b * scale)


def color_sort_key(rgba: RGBA) -> HSL:
    return rgb_to_hsl(rgba.r, rgba.g, rgba.b)
