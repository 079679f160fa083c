from typing import ClassVar

from pydantic import Field

from .base import AttributesBase, EntityState
from .features import ClimateEntityFeature


class ClimateAttributes(AttributesBase):
    hvac_modes: list[str] | None = Field(default=None)
    min_temp: int | float | None = Field(default=None)
    max_temp: int | float | None = Field(default=None)
    current_temperature: int | float | str | None = Field(default=None)
    temperature: int | float | str | None = Field(default=None)
    target_temperature: int | float | str | None = Field(default=None)
    target_temp_high: int | float | str | None = Field(default=None)
    target_temp_low: int | float | str | None = Field(default=None)
    current_humidity: float | None = Field(default=None)
    hvac_action: str | None = Field(default=None)

    @property
    def supports_target_temperature_range(self) -> bool:
        """Whether this climate entity supports target temperature range."""
        return self.has_feature(ClimateEntityFeature.TARGET_TEMPERATURE_RANGE)


class ClimateState(EntityState):
    """Representation of a Home Assistant climate state.

    The state value is the hvac mode, e.g. 'heat' or 'heat_cool'.

    See: https://www.home-assistant.io/integrations/climate/
    """

    domain_name: ClassVar[str | None] = "climate"

    attributes: ClimateAttributes = Field(default_factory=ClimateAttributes)
