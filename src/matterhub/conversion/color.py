"""Color space conversion between Home Assistant and Matter.

Matter:
    Hue: 0-254
    Saturation: 0-254
    colorTemperatureMireds: 0-65279 (samples are usually 147-454)

Home Assistant:
    Hue: 0-360
    Saturation: 0-100
    rgb: 0-255 per channel

Every Home Assistant representation is first normalized into a :class:`ColorValue`, and every
output is extracted from one. Brightness is handled by the level cluster, so the HSV value is
always fixed at 100.
"""

import colorsys
import math
from dataclasses import dataclass
from typing import Literal

from matterhub.const import MAX_MIREDS, MAX_PROTOCOL_HUE, MAX_PROTOCOL_SATURATION, MIN_MIREDS
from matterhub.utils.number_utils import round_half_up

MiredsRounding = Literal["floor", "ceil", "none"]


@dataclass(frozen=True, slots=True)
class ColorValue:
    """A color as hue and saturation, with the value fixed at 100."""

    hue: float
    """Hue in degrees, 0 <= hue < 360."""

    saturation: float
    """Saturation in percent, 0-100."""

    value: float = 100
    """HSV value, always 100."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "hue", self.hue % 360)
        object.__setattr__(self, "saturation", min(max(self.saturation, 0.0), 100.0))
        object.__setattr__(self, "value", 100)


def from_hs(hue: float, saturation: float) -> ColorValue:
    """Create a color from an `hs_color` value (hue 0-360, saturation 0-100)."""
    return ColorValue(hue, saturation)


def from_protocol_hs(hue: int, saturation: int) -> ColorValue:
    """Create a color from `currentHue` / `currentSaturation` as set through Matter (0-254)."""
    return ColorValue(
        round_half_up(hue / MAX_PROTOCOL_HUE * 360),
        round_half_up(saturation / MAX_PROTOCOL_SATURATION * 100),
    )


def from_rgb(r: float, g: float, b: float) -> ColorValue:
    """Create a color from an `rgb_color` value, 0-255 per channel."""
    h, s, _ = colorsys.rgb_to_hsv(_channel(r), _channel(g), _channel(b))
    return ColorValue(h * 360, s * 100)


def from_rgbw(r: float, g: float, b: float, w: float) -> ColorValue:
    """Create a color from an `rgbw_color` value; white is added onto every channel."""
    return from_rgb(min(255, r + w), min(255, g + w), min(255, b + w))


def from_rgbww(r: float, g: float, b: float, cw: float, ww: float) -> ColorValue:
    """Create a color from an `rgbww_color` value; cold and warm white are averaged."""
    return from_rgbw(r, g, b, (cw + ww) / 2)


def from_xy(x: float, y: float) -> ColorValue | None:
    """Create a color from CIE 1931 `xy_color` chromaticity.

    Inspired by ``homeassistant.util.color.color_xy_brightness_to_RGB``. Returns None when
    ``y`` is zero, which has no defined XYZ representation.
    """
    if y == 0:
        return None

    # XYZ at full luminance
    big_y = 1.0
    big_x = (big_y / y) * x
    big_z = (big_y / y) * (1 - x - y)

    # linear sRGB, D65 reference white
    rgb = [
        big_x * 1.656492 - big_y * 0.354851 - big_z * 0.255038,
        -big_x * 0.707196 + big_y * 1.655397 + big_z * 0.036152,
        big_x * 0.051713 - big_y * 0.121364 + big_z * 1.01153,
    ]

    # out-of-gamut channels: negatives clamp to 0, then the brightest channel scales down to 1
    rgb = [max(_reverse_gamma(v), 0.0) for v in rgb]

    max_value = max(rgb)
    if max_value > 1:
        rgb = [v / max_value for v in rgb]

    r, g, b = (round_half_up(v * 255) for v in rgb)
    return from_rgb(r, g, b)


def to_entity_hs(color: ColorValue) -> tuple[float, float]:
    """Extract `hs_color` compatible hue (0-360) and saturation (0-100)."""
    return color.hue, color.saturation


def to_protocol_hs(color: ColorValue) -> tuple[int, int]:
    """Extract Matter compatible hue and saturation (0-254 each)."""
    return (
        round_half_up(color.hue / 360 * MAX_PROTOCOL_HUE),
        round_half_up(color.saturation / 100 * MAX_PROTOCOL_SATURATION),
    )


def mireds_to_kelvin(mireds: float) -> float | None:
    """Convert a color temperature in mireds to Kelvin."""
    if not mireds or not math.isfinite(mireds):
        return None
    return 1_000_000 / mireds


def kelvin_to_mireds(
    kelvin: float,
    rounding: MiredsRounding = "none",
    boundaries: tuple[float, float] = (MIN_MIREDS, MAX_MIREDS),
) -> float:
    """Convert a color temperature in Kelvin to mireds.

    The result is clamped to ``boundaries`` first and then rounded.

    Args:
        kelvin: Temperature in Kelvin.
        rounding: "floor", "ceil" or "none".
        boundaries: Inclusive (min, max) mireds.

    Returns:
        The temperature in mireds.
    """
    result = 1_000_000 / kelvin if kelvin else math.inf
    lower, upper = boundaries
    result = min(max(result, lower), upper)
    if rounding == "floor":
        return math.floor(result)
    if rounding == "ceil":
        return math.ceil(result)
    return result


def _channel(value: float) -> float:
    return min(max(value, 0), 255) / 255


def _reverse_gamma(value: float) -> float:
    if value <= 0.0031308:
        return 12.92 * value
    return (1.0 + 0.055) * math.pow(value, 1.0 / 2.4) - 0.055
