from typing import ClassVar

from pydantic import Field

from .base import AttributesBase, EntityState


class LightAttributes(AttributesBase):
    supported_color_modes: set[str] | None = Field(default=None)
    """Flag supported color modes."""

    color_mode: str | None = Field(default=None)
    """The color mode of the light."""

    brightness: int | None = Field(default=None, gt=-1, lt=256)
    """The brightness of this light between 0..255."""

    color_temp_kelvin: int | None = Field(default=None)
    """The CT color value in Kelvin."""

    min_color_temp_kelvin: int | None = Field(default=None)
    """The warmest color_temp_kelvin that this light supports."""

    max_color_temp_kelvin: int | None = Field(default=None)
    """The coldest color_temp_kelvin that this light supports."""

    hs_color: tuple[float, float] | None = Field(default=None)
    """The hue and saturation color value."""

    rgb_color: tuple[int, int, int] | None = Field(default=None)
    """The rgb color value."""

    rgbw_color: tuple[int, int, int, int] | None = Field(default=None)
    """The rgbw color value."""

    rgbww_color: tuple[int, int, int, int, int] | None = Field(default=None)
    """The rgbww color value."""

    xy_color: tuple[float, float] | None = Field(default=None)
    """The x and y color value."""


class LightState(EntityState):
    """Representation of a Home Assistant light state.

    See: https://www.home-assistant.io/integrations/light/
    """

    domain_name: ClassVar[str | None] = "light"

    attributes: LightAttributes = Field(default_factory=LightAttributes)
