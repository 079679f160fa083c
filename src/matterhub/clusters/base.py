from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import IntFlag, StrEnum
from logging import getLogger
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from matterhub.exceptions import InvalidAttributeValueError, UnknownAttributeError

LOGGER = getLogger(__name__)

AttributesT = TypeVar("AttributesT", bound="ClusterAttributes")


class AttributeOrigin(StrEnum):
    """Who wrote an attribute value."""

    PROJECTION = "projection"
    """Written by a behavior while projecting an entity snapshot."""

    CLIENT = "client"
    """Written by a Matter client (controller, fabric admin, ...)."""


@dataclass(frozen=True, slots=True)
class AttributeChange:
    """A single attribute value that changed as part of a patch or write."""

    cluster: str
    attribute: str
    old_value: Any
    new_value: Any
    origin: AttributeOrigin

    @property
    def from_client(self) -> bool:
        return self.origin is AttributeOrigin.CLIENT


AttributeListener = Callable[[AttributeChange], None]


class ClusterAttributes(BaseModel):
    """Typed, range-constrained attribute values of one cluster."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class ClusterState(Generic[AttributesT]):
    """Attribute state of one cluster on one endpoint.

    The owning behavior is the only writer through :meth:`patch`. Matter clients go through
    :meth:`write`, which tags the resulting changes as client-originated so watchers can tell the
    two apart.
    """

    name: str
    """Name of the cluster, e.g. 'thermostat'."""

    features: IntFlag
    """Feature bitmap declared for this cluster instance."""

    _attributes: AttributesT
    _listeners: list[AttributeListener]

    def __init__(self, name: str, attributes: AttributesT, features: IntFlag) -> None:
        self.name = name
        self.features = features
        self._attributes = attributes
        self._listeners = []

    def __repr__(self) -> str:
        return f"ClusterState<{self.name} {self._attributes!r}>"

    @property
    def attributes(self) -> AttributesT:
        """Current attribute values. The model is frozen, so this is a consistent snapshot."""
        return self._attributes

    def get(self, attribute: str) -> Any:
        if attribute not in type(self._attributes).model_fields:
            raise UnknownAttributeError(self.name, [attribute])
        return getattr(self._attributes, attribute)

    def subscribe(self, listener: AttributeListener) -> Callable[[], None]:
        """Register ``listener`` for every attribute change, returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def patch(self, values: Mapping[str, Any]) -> list[AttributeChange]:
        """Apply ``values`` as one atomic update on behalf of the owning behavior.

        Attributes not named in ``values`` are left untouched. Either every value is applied or,
        when any of them is invalid, none is.

        Raises:
            UnknownAttributeError: If an attribute does not exist on this cluster.
            InvalidAttributeValueError: If a value violates the attribute's type or range.
        """
        return self._apply(values, AttributeOrigin.PROJECTION)

    def write(self, attribute: str, value: Any) -> AttributeChange | None:
        """Write a single attribute on behalf of a Matter client.

        A listener that raises, e.g. with ``anyio.WouldBlock`` when the device queue is full, undoes
        the write and the exception propagates.
        """
        changes = self._apply({attribute: value}, AttributeOrigin.CLIENT)
        return changes[0] if changes else None

    def _apply(self, values: Mapping[str, Any], origin: AttributeOrigin) -> list[AttributeChange]:
        model_cls = type(self._attributes)
        unknown = set(values) - set(model_cls.model_fields)
        if unknown:
            raise UnknownAttributeError(self.name, unknown)

        old = self._attributes
        try:
            new = model_cls.model_validate({**dict(old), **values})
        except ValidationError as e:
            raise InvalidAttributeValueError(self, str(e)) from e

        changes = [
            AttributeChange(self.name, name, getattr(old, name), getattr(new, name), origin)
            for name in values
            if getattr(old, name) != getattr(new, name)
        ]
        if not changes:
            return []

        self._attributes = new

        try:
            for change in changes:
                for listener in list(self._listeners):
                    listener(change)
        except Exception:
            # a value no listener could take must not stay stored
            self._attributes = old
            LOGGER.debug("Cluster %s rolled back update by %s", self.name, origin)
            raise

        LOGGER.debug("Cluster %s changed by %s: %s", self.name, origin, {c.attribute: c.new_value for c in changes})
        return changes
