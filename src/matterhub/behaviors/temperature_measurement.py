from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from matterhub.clusters.base import ClusterState
from matterhub.clusters.temperature_measurement import CLUSTER_NAME, TemperatureMeasurementAttributes
from matterhub.conversion.temperature import entity_to_protocol_temperature
from matterhub.features import FeatureSet
from matterhub.hub import HomeAssistantEntity
from matterhub.models.states import EntityState
from matterhub.runtime import DeviceRuntime

from .base import ClusterBehavior


@dataclass(frozen=True, slots=True)
class TemperatureMeasurementConfig:
    get_value: Callable[[Any], float | str | None]
    """Extracts the temperature from an entity snapshot."""

    get_unit_of_measurement: Callable[[Any], str | None] | None = None
    """Extracts the unit of that temperature. Celsius when missing or when it returns None."""


class TemperatureMeasurementBehavior(ClusterBehavior[EntityState, TemperatureMeasurementAttributes]):
    cluster_name = CLUSTER_NAME

    config: TemperatureMeasurementConfig

    def __init__(
        self,
        entity: HomeAssistantEntity[Any],
        cluster: ClusterState[TemperatureMeasurementAttributes],
        runtime: DeviceRuntime,
        config: TemperatureMeasurementConfig,
    ) -> None:
        super().__init__(entity, cluster, runtime)
        self.config = config

    def resolve_features(self) -> FeatureSet:
        return FeatureSet()

    def update(self, state: EntityState) -> None:
        # None clears the measured value instead of keeping a stale reading
        self.cluster.patch({"measured_value": self.get_temperature(state)})

    def get_temperature(self, state: EntityState) -> int | None:
        value = self.config.get_value(state)
        unit = None
        if self.config.get_unit_of_measurement is not None:
            unit = self.config.get_unit_of_measurement(state)
        return entity_to_protocol_temperature(value, unit if unit is not None else "°C")
