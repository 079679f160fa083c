from typing import Any
from unittest.mock import AsyncMock

from matterhub.models.states import ClimateState, LightState, SensorState


class MockHub:
    """Stands in for a hub connection. ``call_action`` records every outbound action."""

    def __init__(self, temperature_unit: str | None = "°C") -> None:
        self.call_action = AsyncMock()
        self.temperature_unit = temperature_unit

    @property
    def actions(self) -> list[tuple[str, dict[str, Any]]]:
        """The ``(action, data)`` pairs sent so far."""
        return [(c.args[0], dict(c.args[1])) for c in self.call_action.await_args_list]


def make_state_dict(entity_id: str, state: Any, attributes: dict[str, Any] | None = None) -> dict[str, Any]:
    return {
        "entity_id": entity_id,
        "state": state,
        "attributes": attributes or {},
    }


def create_light_state(
    entity_id: str = "light.kitchen",
    state: str = "on",
    *,
    supported_color_modes: list[str] | None = None,
    **attributes: Any,
) -> LightState:
    """Create a light snapshot. Supports hs and color_temp unless told otherwise."""
    attributes.setdefault("supported_color_modes", supported_color_modes or ["hs", "color_temp"])
    return LightState.model_validate(make_state_dict(entity_id, state, attributes))


def create_climate_state(
    entity_id: str = "climate.living_room",
    state: str = "heat",
    *,
    hvac_modes: list[str] | None = None,
    **attributes: Any,
) -> ClimateState:
    attributes.setdefault("hvac_modes", hvac_modes or ["off", "heat"])
    return ClimateState.model_validate(make_state_dict(entity_id, state, attributes))


def create_sensor_state(
    entity_id: str = "sensor.outdoor_temperature",
    state: Any = "21.5",
    *,
    unit_of_measurement: str | None = "°C",
    device_class: str | None = "temperature",
    **attributes: Any,
) -> SensorState:
    attributes.setdefault("unit_of_measurement", unit_of_measurement)
    attributes.setdefault("device_class", device_class)
    return SensorState.model_validate(make_state_dict(entity_id, state, attributes))
