"""Build a :class:`~matterhub.device.Device` for a hub entity, picking behaviors by domain."""

from logging import getLogger
from typing import Any

from matterhub.behaviors import (
    ColorControlBehavior,
    ColorControlConfig,
    TemperatureMeasurementBehavior,
    TemperatureMeasurementConfig,
    ThermostatBehavior,
)
from matterhub.clusters import ClusterState, TemperatureMeasurementFeature, ThermostatFeature
from matterhub.clusters import color_control, temperature_measurement, thermostat
from matterhub.config import MatterHubConfig
from matterhub.device import Device
from matterhub.features import color_features_for, thermostat_features_for
from matterhub.hub import HomeAssistantEntity, HubClient
from matterhub.models.states import ClimateState, EntityState, LightState, SensorState
from matterhub.runtime import DeviceRuntime
from matterhub.storage.models import BridgeFeatureFlags

LOGGER = getLogger(__name__)


def create_device(
    state: EntityState,
    hub: HubClient,
    config: MatterHubConfig,
    feature_flags: BridgeFeatureFlags | None = None,
) -> Device | None:
    """Create the device for ``state``.

    Args:
        state: The current snapshot of the entity.
        hub: Connection used for outbound actions.
        config: Global configuration.
        feature_flags: Flags of the bridge the device belongs to, they take precedence over the
            global configuration.

    Returns:
        The device, not started yet, or None if the entity maps to no supported cluster.
    """
    getLogger("matterhub.runtime").setLevel(config.runtime_log_level)

    runtime = DeviceRuntime(state.entity_id, queue_size=config.runtime_queue_size)
    device = Device(HomeAssistantEntity(hub, state), runtime)

    if isinstance(state, LightState):
        _add_color_control(device, state, config, feature_flags)
    elif isinstance(state, ClimateState):
        _add_thermostat(device, state, config)
    elif isinstance(state, SensorState) and state.attributes.device_class == "temperature":
        _add_temperature_measurement(
            device,
            TemperatureMeasurementConfig(
                get_value=lambda s: s.value,
                get_unit_of_measurement=lambda s: s.attributes.unit_of_measurement,
            ),
        )

    if not device.behaviors:
        LOGGER.debug("No supported clusters for %s", state.entity_id)
        return None

    return device


def _add_color_control(
    device: Device, state: LightState, config: MatterHubConfig, feature_flags: BridgeFeatureFlags | None
) -> None:
    features = color_features_for(state)
    if not features:
        return

    expand = config.expand_min_max_color_temperature
    if feature_flags is not None:
        expand = feature_flags.expand_min_max_color_temperature

    cluster = ClusterState(color_control.CLUSTER_NAME, color_control.ColorControlAttributes(), features)
    device.add_behavior(
        ColorControlBehavior(
            device.entity, cluster, device.runtime, ColorControlConfig(expand_min_max_temperature=expand)
        )
    )


def _add_thermostat(device: Device, state: ClimateState, config: MatterHubConfig) -> None:
    features = thermostat_features_for(state)
    if not features:
        # a thermostat needs at least one of heating or cooling
        features = ThermostatFeature.HEATING

    cluster = ClusterState(thermostat.CLUSTER_NAME, thermostat.ThermostatAttributes(), features)
    device.add_behavior(
        ThermostatBehavior(device.entity, cluster, device.runtime, default_unit=config.default_temperature_unit)
    )

    def get_unit(_: Any) -> str:
        return device.entity.hub.temperature_unit or config.default_temperature_unit

    _add_temperature_measurement(
        device,
        TemperatureMeasurementConfig(
            get_value=lambda s: s.attributes.current_temperature,
            get_unit_of_measurement=get_unit,
        ),
    )


def _add_temperature_measurement(device: Device, config: TemperatureMeasurementConfig) -> None:
    cluster = ClusterState(
        temperature_measurement.CLUSTER_NAME,
        temperature_measurement.TemperatureMeasurementAttributes(),
        TemperatureMeasurementFeature.NONE,
    )
    device.add_behavior(TemperatureMeasurementBehavior(device.entity, cluster, device.runtime, config))
