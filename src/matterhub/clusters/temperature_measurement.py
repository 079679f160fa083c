from pydantic import Field

from .base import ClusterAttributes
from .thermostat import MAX_TEMPERATURE, MIN_TEMPERATURE

CLUSTER_NAME = "temperature_measurement"


class TemperatureMeasurementAttributes(ClusterAttributes):
    measured_value: int | None = Field(default=None, ge=MIN_TEMPERATURE, le=MAX_TEMPERATURE)
    min_measured_value: int | None = Field(default=None, ge=MIN_TEMPERATURE, le=MAX_TEMPERATURE)
    max_measured_value: int | None = Field(default=None, ge=MIN_TEMPERATURE, le=MAX_TEMPERATURE)
