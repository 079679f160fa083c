from typing import ClassVar

from pydantic import Field

from .base import AttributesBase, EntityState


class SensorAttributes(AttributesBase):
    unit_of_measurement: str | None = Field(default=None)
    """The unit of measurement of the sensor."""

    state_class: str | None = Field(default=None)
    """The state class of the sensor."""


class SensorState(EntityState):
    """Representation of a Home Assistant sensor state.

    See: https://www.home-assistant.io/integrations/sensor/
    """

    domain_name: ClassVar[str | None] = "sensor"

    attributes: SensorAttributes = Field(default_factory=SensorAttributes)
