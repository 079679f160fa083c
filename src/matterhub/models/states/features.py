"""Home Assistant side capability enums.

These mirror the hub's own ``EntityFeature`` IntFlags and color mode strings so callers can
check what an entity supports without raw bit twiddling.
"""

from enum import IntFlag, StrEnum


class ClimateEntityFeature(IntFlag):
    """Supported features of the climate entity.

    See: https://www.home-assistant.io/integrations/climate/
    """

    TARGET_TEMPERATURE = 1
    TARGET_TEMPERATURE_RANGE = 2
    TARGET_HUMIDITY = 4
    FAN_MODE = 8
    PRESET_MODE = 16
    SWING_MODE = 32
    TURN_OFF = 128
    TURN_ON = 256
    SWING_HORIZONTAL_MODE = 512


class ColorMode(StrEnum):
    """Color modes a Home Assistant light can report in ``color_mode`` and ``supported_color_modes``."""

    UNKNOWN = "unknown"
    ONOFF = "onoff"
    BRIGHTNESS = "brightness"
    COLOR_TEMP = "color_temp"
    HS = "hs"
    XY = "xy"
    RGB = "rgb"
    RGBW = "rgbw"
    RGBWW = "rgbww"
    WHITE = "white"


CHROMATIC_COLOR_MODES = frozenset({ColorMode.HS, ColorMode.XY, ColorMode.RGB, ColorMode.RGBW, ColorMode.RGBWW})
"""Color modes that carry hue and saturation information."""
