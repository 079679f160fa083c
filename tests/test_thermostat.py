import anyio
import pytest

from matterhub.behaviors import ThermostatBehavior
from matterhub.behaviors import thermostat_utils as utils
from matterhub.clusters import ClusterState, ThermostatFeature
from matterhub.clusters.thermostat import (
    ControlSequenceOfOperation,
    SetpointRaiseLowerMode,
    SystemMode,
    ThermostatAttributes,
    ThermostatRunningMode,
    ThermostatRunningState,
)
from matterhub.features import FeatureSet
from matterhub.hub import HomeAssistantEntity
from matterhub.models.states import ClimateEntityFeature, ClimateState
from matterhub.runtime import ENTITY_CHANGED, DeviceRuntime, command_topic
from matterhub.test_utils import MockHub, create_climate_state

HEAT_COOL_MODES = ["off", "heat", "cool", "heat_cool"]


async def bind(
    hub: MockHub, cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime, state: ClimateState
) -> ThermostatBehavior:
    behavior = ThermostatBehavior(HomeAssistantEntity(hub, state), cluster, runtime)
    await behavior.initialize()
    return behavior


def range_state(**attributes) -> ClimateState:
    attributes.setdefault("target_temp_low", 20)
    attributes.setdefault("target_temp_high", 24)
    return create_climate_state(
        state="heat_cool",
        hvac_modes=HEAT_COOL_MODES,
        supported_features=ClimateEntityFeature.TARGET_TEMPERATURE_RANGE.value,
        **attributes,
    )


class TestThermostatUtils:
    @pytest.mark.parametrize("system_mode", list(SystemMode))
    def test_every_system_mode_maps_to_an_hvac_mode(self, system_mode: SystemMode) -> None:
        assert utils.get_hvac_mode(system_mode) in {"off", "heat", "cool", "heat_cool", "dry", "fan_only"}

    def test_sleep_turns_off(self) -> None:
        assert utils.get_hvac_mode(SystemMode.SLEEP) == "off"

    @pytest.mark.parametrize(
        ("hvac_mode", "expected"),
        [
            ("heat", SystemMode.HEAT),
            ("cool", SystemMode.COOL),
            ("dry", SystemMode.DRY),
            ("fan_only", SystemMode.FAN_ONLY),
            ("off", SystemMode.OFF),
            ("unavailable", SystemMode.OFF),
            ("something_new", SystemMode.OFF),
            (None, SystemMode.OFF),
        ],
    )
    def test_system_mode(self, hvac_mode: str | None, expected: SystemMode) -> None:
        assert utils.get_system_mode(hvac_mode, FeatureSet(heating=True, cooling=True)) is expected

    @pytest.mark.parametrize(
        ("features", "expected"),
        [
            (FeatureSet(heating=True, cooling=True, auto_mode=True), SystemMode.AUTO),
            (FeatureSet(heating=True), SystemMode.HEAT),
            (FeatureSet(cooling=True), SystemMode.COOL),
            (FeatureSet(), SystemMode.SLEEP),
        ],
    )
    def test_heat_cool_depends_on_features(self, features: FeatureSet, expected: SystemMode) -> None:
        assert utils.get_system_mode("heat_cool", features) is expected
        assert utils.get_system_mode("auto", features) is expected

    @pytest.mark.parametrize(
        ("action", "mode", "expected"),
        [
            ("heating", "heat", ThermostatRunningState(heat=True)),
            ("preheating", None, ThermostatRunningState(heat=True)),
            ("cooling", "cool", ThermostatRunningState(cool=True)),
            ("drying", "dry", ThermostatRunningState(heat=True, fan=True)),
            ("fan", "fan_only", ThermostatRunningState(fan=True)),
            ("idle", "heat", utils.ALL_OFF),
            (None, "cool", ThermostatRunningState(cool=True)),
            (None, "heat_cool", utils.ALL_OFF),
            (None, None, utils.ALL_OFF),
        ],
    )
    def test_running_state(self, action: str | None, mode: str | None, expected: ThermostatRunningState) -> None:
        assert utils.get_running_state(action, mode) == expected

    def test_running_state_bitmap(self) -> None:
        assert ThermostatRunningState(heat=True, fan=True).to_bitmap() == 0b101
        assert utils.ALL_OFF.to_bitmap() == 0

    def test_running_mode(self) -> None:
        assert utils.get_running_mode("drying") is ThermostatRunningMode.HEAT
        assert utils.get_running_mode("cooling") is ThermostatRunningMode.COOL
        assert utils.get_running_mode("fan") is ThermostatRunningMode.OFF
        assert utils.get_running_mode(None) is ThermostatRunningMode.OFF

    def test_control_sequence(self) -> None:
        assert utils.get_control_sequence(FeatureSet(heating=True, cooling=True)) is (
            ControlSequenceOfOperation.COOLING_AND_HEATING
        )
        assert utils.get_control_sequence(FeatureSet(cooling=True)) is ControlSequenceOfOperation.COOLING_ONLY
        assert utils.get_control_sequence(FeatureSet(heating=True)) is ControlSequenceOfOperation.HEATING_ONLY


class TestThermostatProjection:
    async def test_heating_only(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        state = create_climate_state(
            state="heat",
            hvac_modes=["off", "heat"],
            current_temperature=21.5,
            temperature=22,
            min_temp=7,
            max_temp=35,
            hvac_action="heating",
        )
        await bind(hub, heating_cluster, runtime, state)

        attributes = heating_cluster.attributes
        assert attributes.local_temperature == 2150
        assert attributes.occupied_heating_setpoint == 2200
        assert attributes.min_heat_setpoint_limit == 700
        assert attributes.abs_max_heat_setpoint_limit == 3500
        assert attributes.system_mode is SystemMode.HEAT
        assert attributes.thermostat_running_state == ThermostatRunningState(heat=True)
        assert attributes.control_sequence_of_operation is ControlSequenceOfOperation.HEATING_ONLY
        # cooling is not enabled, its attributes keep their defaults
        assert attributes.occupied_cooling_setpoint == 2600
        assert attributes.min_cool_setpoint_limit is None

    async def test_heat_cool_on_heating_only_device_is_heat(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heating_cluster, runtime, create_climate_state(state="heat_cool", hvac_modes=["off", "heat"]))
        assert heating_cluster.attributes.system_mode is SystemMode.HEAT

    async def test_range(
        self, hub: MockHub, heat_cool_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heat_cool_cluster, runtime, range_state(hvac_action="cooling"))

        attributes = heat_cool_cluster.attributes
        assert attributes.system_mode is SystemMode.AUTO
        assert attributes.occupied_heating_setpoint == 2000
        assert attributes.occupied_cooling_setpoint == 2400
        assert attributes.min_setpoint_dead_band == 0
        assert attributes.thermostat_running_mode is ThermostatRunningMode.COOL
        assert attributes.control_sequence_of_operation is ControlSequenceOfOperation.COOLING_AND_HEATING

    async def test_fahrenheit_hub(
        self, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        hub = MockHub(temperature_unit="°F")
        behavior = await bind(hub, heating_cluster, runtime, create_climate_state(temperature=72))

        assert behavior.unit == "°F"
        assert heating_cluster.attributes.occupied_heating_setpoint == 2222

    async def test_missing_setpoint_keeps_previous(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heating_cluster, runtime, create_climate_state(temperature=22, current_temperature=20))

        await runtime.send(ENTITY_CHANGED, create_climate_state())
        await runtime.drain()

        assert heating_cluster.attributes.occupied_heating_setpoint == 2200
        assert heating_cluster.attributes.local_temperature is None

    async def test_unavailable_entity_is_off(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heating_cluster, runtime, create_climate_state(state="unavailable"))
        assert heating_cluster.attributes.system_mode is SystemMode.OFF

    async def test_unit_change_is_picked_up(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        behavior = await bind(hub, heating_cluster, runtime, create_climate_state(temperature=22))
        assert behavior.unit == "°C"

        hub.temperature_unit = "°F"
        await runtime.send(ENTITY_CHANGED, create_climate_state(temperature=72))
        await runtime.drain()

        assert behavior.unit == "°F"
        assert heating_cluster.attributes.occupied_heating_setpoint == 2222


class TestThermostatWrites:
    async def test_heating_setpoint_write(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heating_cluster, runtime, create_climate_state(temperature=22))

        heating_cluster.write("occupied_heating_setpoint", 2300)
        await runtime.drain()

        assert hub.actions == [("climate.set_temperature", {"entity_id": "climate.living_room", "temperature": 23})]

    async def test_setpoint_already_reflected_is_not_sent(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        behavior = await bind(hub, heating_cluster, runtime, create_climate_state(temperature=22))

        await behavior.heating_setpoint_changed(2200)

        hub.call_action.assert_not_awaited()

    async def test_projection_does_not_echo_back(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heating_cluster, runtime, create_climate_state(temperature=22))

        await runtime.send(ENTITY_CHANGED, create_climate_state(temperature=19))
        await runtime.drain()

        assert heating_cluster.attributes.occupied_heating_setpoint == 1900
        hub.call_action.assert_not_awaited()

    async def test_cooling_setpoint_write_on_range_device(
        self, hub: MockHub, heat_cool_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heat_cool_cluster, runtime, range_state())

        heat_cool_cluster.write("occupied_cooling_setpoint", 2500)
        await runtime.drain()

        assert hub.actions == [
            (
                "climate.set_temperature",
                {"entity_id": "climate.living_room", "target_temp_low": 20, "target_temp_high": 25},
            )
        ]

    async def test_cooling_setpoint_write_on_single_setpoint_device(
        self, hub: MockHub, heat_cool_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        state = create_climate_state(state="cool", hvac_modes=HEAT_COOL_MODES, temperature=24)
        await bind(hub, heat_cool_cluster, runtime, state)

        heat_cool_cluster.write("occupied_cooling_setpoint", 2300)
        await runtime.drain()

        assert hub.actions == [("climate.set_temperature", {"entity_id": "climate.living_room", "temperature": 23})]

    async def test_system_mode_write(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heating_cluster, runtime, create_climate_state(state="heat"))

        heating_cluster.write("system_mode", SystemMode.OFF)
        await runtime.drain()

        assert hub.actions == [("climate.set_hvac_mode", {"entity_id": "climate.living_room", "hvac_mode": "off"})]

    async def test_system_mode_already_reflected_is_not_sent(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        behavior = await bind(hub, heating_cluster, runtime, create_climate_state(state="off"))

        await behavior.system_mode_changed(SystemMode.OFF)

        hub.call_action.assert_not_awaited()

    async def test_auto_maps_to_heat_cool(
        self, hub: MockHub, heat_cool_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heat_cool_cluster, runtime, create_climate_state(state="off", hvac_modes=HEAT_COOL_MODES))

        heat_cool_cluster.write("system_mode", SystemMode.AUTO)
        await runtime.drain()

        assert hub.actions == [
            ("climate.set_hvac_mode", {"entity_id": "climate.living_room", "hvac_mode": "heat_cool"})
        ]


class TestSetpointRaiseLower:
    async def test_heat_on_single_setpoint_device(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        behavior = await bind(hub, heating_cluster, runtime, create_climate_state(temperature=22))

        await behavior.setpoint_raise_lower(SetpointRaiseLowerMode.HEAT, 5)

        assert hub.actions == [("climate.set_temperature", {"entity_id": "climate.living_room", "temperature": 22.5})]

    async def test_both_on_range_device(
        self, hub: MockHub, heat_cool_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        behavior = await bind(hub, heat_cool_cluster, runtime, range_state())

        await behavior.setpoint_raise_lower(SetpointRaiseLowerMode.BOTH, -10)

        assert hub.actions == [
            (
                "climate.set_temperature",
                {"entity_id": "climate.living_room", "target_temp_low": 19, "target_temp_high": 23},
            )
        ]

    async def test_cool_on_range_device_keeps_heating_setpoint(
        self, hub: MockHub, heat_cool_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        behavior = await bind(hub, heat_cool_cluster, runtime, range_state())

        await behavior.setpoint_raise_lower(SetpointRaiseLowerMode.COOL, 10)

        assert hub.actions == [
            (
                "climate.set_temperature",
                {"entity_id": "climate.living_room", "target_temp_low": 20, "target_temp_high": 25},
            )
        ]

    async def test_cool_on_single_setpoint_device(
        self, hub: MockHub, heat_cool_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        state = create_climate_state(state="cool", hvac_modes=HEAT_COOL_MODES, temperature=24)
        behavior = await bind(hub, heat_cool_cluster, runtime, state)

        await behavior.setpoint_raise_lower(SetpointRaiseLowerMode.COOL, -10)

        assert hub.actions == [("climate.set_temperature", {"entity_id": "climate.living_room", "temperature": 23})]

    async def test_routed_as_command(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        await bind(hub, heating_cluster, runtime, create_climate_state(temperature=22))

        await runtime.send(command_topic("thermostat", "setpoint_raise_lower"), {"mode": 0, "amount": 10})
        await runtime.drain()

        assert hub.actions == [("climate.set_temperature", {"entity_id": "climate.living_room", "temperature": 23})]

    async def test_zero_amount_is_not_sent(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        behavior = await bind(hub, heating_cluster, runtime, create_climate_state(temperature=22))

        await behavior.setpoint_raise_lower(SetpointRaiseLowerMode.BOTH, 0)

        hub.call_action.assert_not_awaited()

    async def test_heat_on_cooling_only_device_is_not_sent(self, hub: MockHub, runtime: DeviceRuntime) -> None:
        cluster = ClusterState("thermostat", ThermostatAttributes(), ThermostatFeature.COOLING)
        state = create_climate_state(state="cool", hvac_modes=["off", "cool"], temperature=24)
        behavior = await bind(hub, cluster, runtime, state)

        await behavior.setpoint_raise_lower(SetpointRaiseLowerMode.HEAT, 10)

        hub.call_action.assert_not_awaited()

    async def test_cool_on_heating_only_range_device_is_not_sent(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes], runtime: DeviceRuntime
    ) -> None:
        state = create_climate_state(
            supported_features=ClimateEntityFeature.TARGET_TEMPERATURE_RANGE.value,
            target_temp_low=20,
            target_temp_high=24,
        )
        behavior = await bind(hub, heating_cluster, runtime, state)

        await behavior.setpoint_raise_lower(SetpointRaiseLowerMode.COOL, 10)

        hub.call_action.assert_not_awaited()


class TestFullQueue:
    async def test_write_that_cannot_be_queued_is_not_stored(
        self, hub: MockHub, heating_cluster: ClusterState[ThermostatAttributes]
    ) -> None:
        runtime = DeviceRuntime("climate.living_room", queue_size=1)
        await bind(hub, heating_cluster, runtime, create_climate_state(temperature=20))

        heating_cluster.write("occupied_heating_setpoint", 2100)
        with pytest.raises(anyio.WouldBlock):
            heating_cluster.write("occupied_heating_setpoint", 2200)

        assert heating_cluster.attributes.occupied_heating_setpoint == 2100

        await runtime.drain()

        assert hub.actions == [("climate.set_temperature", {"entity_id": "climate.living_room", "temperature": 21})]
