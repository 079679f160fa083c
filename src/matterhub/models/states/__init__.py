from typing import Any

from .base import AttributesBase, EntityState, StateT
from .climate import ClimateAttributes, ClimateState
from .features import CHROMATIC_COLOR_MODES, ClimateEntityFeature, ColorMode
from .light import LightAttributes, LightState
from .sensor import SensorAttributes, SensorState

_STATE_CLASSES: dict[str, type[EntityState]] = {
    cls.domain_name: cls for cls in (LightState, ClimateState, SensorState) if cls.domain_name
}


def state_from_dict(data: dict[str, Any]) -> EntityState:
    """Build the state model matching the entity's domain, falling back to :class:`EntityState`."""
    entity_id = data.get("entity_id") or ""
    domain = entity_id.split(".")[0]
    state_cls = _STATE_CLASSES.get(domain, EntityState)
    return state_cls.model_validate(data)


__all__ = [
    "CHROMATIC_COLOR_MODES",
    "AttributesBase",
    "ClimateAttributes",
    "ClimateEntityFeature",
    "ClimateState",
    "ColorMode",
    "EntityState",
    "LightAttributes",
    "LightState",
    "SensorAttributes",
    "SensorState",
    "StateT",
    "state_from_dict",
]
