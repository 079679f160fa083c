from enum import IntEnum

from pydantic import Field

from matterhub.const import MAX_MIREDS, MAX_PROTOCOL_HUE, MAX_PROTOCOL_SATURATION, MIN_MIREDS

from .base import ClusterAttributes

CLUSTER_NAME = "color_control"


class ColorMode(IntEnum):
    CURRENT_HUE_AND_CURRENT_SATURATION = 0
    CURRENT_X_AND_CURRENT_Y = 1
    COLOR_TEMPERATURE_MIREDS = 2


class ColorControlAttributes(ClusterAttributes):
    color_mode: ColorMode = ColorMode.CURRENT_X_AND_CURRENT_Y
    current_hue: int = Field(default=0, ge=0, le=MAX_PROTOCOL_HUE)
    current_saturation: int = Field(default=0, ge=0, le=MAX_PROTOCOL_SATURATION)
    color_temperature_mireds: int = Field(default=250, ge=MIN_MIREDS, le=MAX_MIREDS)
    color_temp_physical_min_mireds: int = Field(default=MIN_MIREDS, ge=MIN_MIREDS, le=MAX_MIREDS)
    color_temp_physical_max_mireds: int = Field(default=MAX_MIREDS, ge=MIN_MIREDS, le=MAX_MIREDS)
    couple_color_temp_to_level_min_mireds: int = Field(default=MIN_MIREDS, ge=MIN_MIREDS, le=MAX_MIREDS)
    start_up_color_temperature_mireds: int | None = Field(default=None, ge=MIN_MIREDS, le=MAX_MIREDS)
