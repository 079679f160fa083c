from logging import getLogger
from typing import Any

from matterhub.clusters.base import ClusterState
from matterhub.clusters.thermostat import CLUSTER_NAME, SetpointRaiseLowerMode, SystemMode, ThermostatAttributes
from matterhub.conversion.temperature import entity_to_protocol_temperature, protocol_to_entity_temperature
from matterhub.hub import HomeAssistantEntity
from matterhub.models.states import ClimateAttributes, ClimateState
from matterhub.runtime import DeviceRuntime

from . import thermostat_utils as utils
from .base import ClusterBehavior

LOGGER = getLogger(__name__)


def _first_present(*values: Any) -> Any:
    return next((value for value in values if value is not None), None)


class ThermostatBehavior(ClusterBehavior[ClimateState, ThermostatAttributes]):
    """Projects a climate entity onto the Thermostat cluster.

    Setpoint writes, system mode writes and ``setpoint_raise_lower`` are turned into
    ``climate.set_temperature`` / ``climate.set_hvac_mode`` actions, unless the entity already
    reflects the requested value.
    """

    cluster_name = CLUSTER_NAME

    unit: str | None
    """The hub's temperature unit as last observed."""

    default_unit: str
    """Unit assumed when the hub does not report one."""

    def __init__(
        self,
        entity: HomeAssistantEntity[ClimateState],
        cluster: ClusterState[ThermostatAttributes],
        runtime: DeviceRuntime,
        default_unit: str = "°C",
    ) -> None:
        super().__init__(entity, cluster, runtime)
        self.unit = None
        self.default_unit = default_unit

    def register_handlers(self) -> None:
        self.on_command("setpoint_raise_lower", self.setpoint_raise_lower)
        self.watch("system_mode", self.system_mode_changed)
        if self.features.cooling:
            self.watch("occupied_cooling_setpoint", self.cooling_setpoint_changed)
        if self.features.heating:
            self.watch("occupied_heating_setpoint", self.heating_setpoint_changed)

    def refresh_unit(self) -> str:
        unit = self.entity.hub.temperature_unit or self.default_unit
        if unit != self.unit:
            LOGGER.info("Switching unit of %s to '%s'", self.entity.entity_id, unit)
            self.unit = unit
        return unit

    def update(self, state: ClimateState) -> None:
        unit = self.refresh_unit()
        attributes = state.attributes
        hvac_mode = state.raw_state

        min_setpoint_limit = entity_to_protocol_temperature(attributes.min_temp, unit)
        max_setpoint_limit = entity_to_protocol_temperature(attributes.max_temp, unit)

        patch: dict[str, Any] = {
            "local_temperature": entity_to_protocol_temperature(attributes.current_temperature, unit),
            "system_mode": utils.get_system_mode(hvac_mode, self.features),
            "thermostat_running_state": utils.get_running_state(attributes.hvac_action, hvac_mode),
            "control_sequence_of_operation": utils.get_control_sequence(self.features),
        }

        if self.features.heating:
            # keep the previous setpoint when the entity reports none
            heating = self.get_heating_setpoint(attributes)
            if heating is not None:
                patch["occupied_heating_setpoint"] = heating
            patch["min_heat_setpoint_limit"] = min_setpoint_limit
            patch["max_heat_setpoint_limit"] = max_setpoint_limit
            patch["abs_min_heat_setpoint_limit"] = min_setpoint_limit
            patch["abs_max_heat_setpoint_limit"] = max_setpoint_limit

        if self.features.cooling:
            cooling = self.get_cooling_setpoint(attributes)
            if cooling is not None:
                patch["occupied_cooling_setpoint"] = cooling
            patch["min_cool_setpoint_limit"] = min_setpoint_limit
            patch["max_cool_setpoint_limit"] = max_setpoint_limit
            patch["abs_min_cool_setpoint_limit"] = min_setpoint_limit
            patch["abs_max_cool_setpoint_limit"] = max_setpoint_limit

        if self.features.auto_mode:
            patch["min_setpoint_dead_band"] = 0
            patch["thermostat_running_mode"] = utils.get_running_mode(attributes.hvac_action)

        self.cluster.patch(patch)

    def get_heating_setpoint(self, attributes: ClimateAttributes) -> int | None:
        value = _first_present(attributes.target_temp_low, attributes.target_temperature, attributes.temperature)
        return entity_to_protocol_temperature(value, self.unit)

    def get_cooling_setpoint(self, attributes: ClimateAttributes) -> int | None:
        value = _first_present(attributes.target_temp_high, attributes.target_temperature, attributes.temperature)
        return entity_to_protocol_temperature(value, self.unit)

    async def setpoint_raise_lower(self, mode: SetpointRaiseLowerMode | int, amount: int) -> None:
        """Move the requested setpoint(s) by ``amount`` tenths of a degree.

        Only sides that are both requested and enabled are moved. Nothing is sent when no side moves.
        """
        mode = SetpointRaiseLowerMode(mode)
        if amount == 0:
            LOGGER.debug("%s setpoint_raise_lower by 0, not sending", self.entity.entity_id)
            return

        attributes = self.entity.state.attributes
        heat: int | None = None
        cool: int | None = None
        if mode is not SetpointRaiseLowerMode.COOL and self.features.heating:
            heat = self.get_heating_setpoint(attributes)
        if mode is not SetpointRaiseLowerMode.HEAT and self.features.cooling:
            cool = self.get_cooling_setpoint(attributes)

        if heat is None and cool is None:
            LOGGER.debug("%s has no setpoint for %s, not sending", self.entity.entity_id, mode.name)
            return

        # centi-Celsius per tenth of a degree
        delta = amount * 10
        if heat is not None:
            heat += delta
        if cool is not None:
            cool += delta

        if attributes.supports_target_temperature_range:
            # a range always carries both ends, the side that was not asked for keeps its value
            if heat is None and self.features.heating:
                heat = self.get_heating_setpoint(attributes)
            if cool is None and self.features.cooling:
                cool = self.get_cooling_setpoint(attributes)
        elif heat is not None:
            # a single setpoint device only gets one side, heating wins for BOTH
            cool = None

        await self.set_temperature(heat, cool)

    async def system_mode_changed(self, system_mode: SystemMode) -> None:
        current = utils.get_system_mode(self.entity.state.raw_state, self.features)
        if system_mode == current:
            LOGGER.debug("%s already in %s, not sending", self.entity.entity_id, current.name)
            return
        await self.entity.call_action("climate.set_hvac_mode", {"hvac_mode": utils.get_hvac_mode(system_mode)})

    async def heating_setpoint_changed(self, value: int) -> None:
        attributes = self.entity.state.attributes
        if self.get_heating_setpoint(attributes) == value:
            LOGGER.debug("%s heating setpoint already %s, not sending", self.entity.entity_id, value)
            return
        cooling = self.cluster.attributes.occupied_cooling_setpoint
        await self.set_temperature(value, cooling if attributes.supports_target_temperature_range else None)

    async def cooling_setpoint_changed(self, value: int) -> None:
        attributes = self.entity.state.attributes
        if self.get_cooling_setpoint(attributes) == value:
            LOGGER.debug("%s cooling setpoint already %s, not sending", self.entity.entity_id, value)
            return
        heating = self.cluster.attributes.occupied_heating_setpoint
        await self.set_temperature(heating if attributes.supports_target_temperature_range else None, value)

    async def set_temperature(self, heat: int | None, cool: int | None) -> None:
        """Send one ``climate.set_temperature``, with a range when both setpoints are given."""
        if heat is None and cool is None:
            return

        unit = self.unit or self.default_unit
        if heat is not None and cool is not None:
            data = {
                "target_temp_low": protocol_to_entity_temperature(heat, unit),
                "target_temp_high": protocol_to_entity_temperature(cool, unit),
            }
        else:
            data = {"temperature": protocol_to_entity_temperature(heat if heat is not None else cool, unit)}

        await self.entity.call_action("climate.set_temperature", data)
