from logging import getLogger
from typing import Any, ClassVar, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from whenever import ZonedDateTime

from matterhub.const import UNAVAILABLE, UNKNOWN
from matterhub.utils.date_utils import convert_datetime_str_to_system_tz, convert_utc_timestamp_to_system_tz

StateT = TypeVar("StateT", bound="EntityState", covariant=True)
"""Represents a specific state type, e.g., LightState, ClimateState, etc."""

LOGGER = getLogger(__name__)


class AttributesBase(BaseModel):
    """Represents the attributes of a Home Assistant state."""

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True, frozen=True)

    friendly_name: str | None = Field(default=None)
    """A friendly name for the entity."""

    device_class: str | None = Field(default=None)
    """The device class of the entity."""

    supported_features: int | float | None = Field(default=None)
    """Bitfield of supported features."""

    def has_feature(self, flag: int) -> bool:
        """Whether ``flag`` is set in the hub's ``supported_features`` bitmask."""
        if self.supported_features is None:
            return False
        return (int(self.supported_features) & int(flag)) == int(flag)

    def extra(self, name: str, default: Any = None) -> Any:
        """Return an attribute that has no typed field, e.g. one added by a custom integration."""
        extras = self.model_extra or {}
        return extras.get(name, default)


class EntityState(BaseModel):
    """A full snapshot of a Home Assistant entity.

    Snapshots are replaced wholesale, never patched. Everything projected onto a cluster is
    re-derived from the latest one.
    """

    domain_name: ClassVar[str | None] = None
    """The Home Assistant domain this class models, None for the generic fallback."""

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True, frozen=True)

    domain: str
    """The domain of the entity, e.g. 'light', 'climate', etc."""

    entity_id: str = Field(...)
    """The full entity ID, e.g. 'light.living_room'."""

    last_changed: ZonedDateTime | None = Field(None)
    """Time the state changed in the state machine, not updated when only attributes change."""

    last_updated: ZonedDateTime | None = Field(None)
    """Time the state or state attributes changed in the state machine."""

    is_unknown: bool = Field(default=False)
    """Whether the state is 'unknown'."""

    is_unavailable: bool = Field(default=False)
    """Whether the state is 'unavailable'."""

    value: str | None = Field(..., validation_alias=AliasChoices("state", "value"))
    """The state value, e.g. 'on', 'off', 'heat_cool'. None when unknown or unavailable."""

    attributes: AttributesBase = Field(default_factory=AttributesBase)
    """The attributes of the state."""

    @property
    def raw_state(self) -> str | None:
        """The status string as Home Assistant sent it, including 'unknown' and 'unavailable'."""
        if self.is_unavailable:
            return UNAVAILABLE
        if self.is_unknown:
            return UNKNOWN
        return self.value

    @field_validator("last_changed", "last_updated", mode="before")
    @classmethod
    def _validate_datetime_fields(cls, value):
        if value is None:
            return None
        if isinstance(value, int | float):
            return convert_utc_timestamp_to_system_tz(value)
        if isinstance(value, str):
            return convert_datetime_str_to_system_tz(value)

        return value

    @model_validator(mode="before")
    @classmethod
    def _validate_domain_and_state(cls, values):
        if not isinstance(values, dict):
            LOGGER.warning("Expected values to be a dict, got %s", type(values).__name__, stacklevel=2)
            return values

        values = dict(values)

        entity_id = values.get("entity_id")
        if entity_id:
            values["domain"] = entity_id.split(".")[0]

        key = "state" if "state" in values else "value"
        state = values.get(key)
        if state == UNKNOWN:
            values["is_unknown"] = True
            values[key] = None
        elif state == UNAVAILABLE:
            values["is_unavailable"] = True
            values[key] = None
        elif state is not None:
            values[key] = str(state)

        return values
