"""The Home Assistant side of a bridged device.

The hub's transport is not part of this package. Anything that can invoke an action and report the
configured temperature unit satisfies :class:`HubClient`.
"""

from collections.abc import Mapping
from logging import getLogger
from typing import Any, Generic, Protocol, runtime_checkable

from matterhub.models.states import StateT

LOGGER = getLogger(__name__)


@runtime_checkable
class HubClient(Protocol):
    """What the bridge needs from the hub connection."""

    async def call_action(self, action: str, data: Mapping[str, Any]) -> None:
        """Invoke ``action`` (e.g. ``light.turn_on``) with ``data``.

        Failures are the client's concern; the bridge does not retry, the next entity change
        re-derives the desired state anyway.
        """
        ...

    @property
    def temperature_unit(self) -> str | None:
        """The hub's configured temperature unit, e.g. '°C' or '°F'."""
        ...


class HomeAssistantEntity(Generic[StateT]):
    """Binding between one hub entity and one bridged device.

    Holds the latest full snapshot of the entity. Snapshots replace each other wholesale; the
    bridge never patches one.
    """

    hub: HubClient
    """Connection used for outbound actions."""

    entity_id: str
    """The bound entity, e.g. 'climate.living_room'."""

    _state: StateT

    def __init__(self, hub: HubClient, state: StateT) -> None:
        self.hub = hub
        self.entity_id = state.entity_id
        self._state = state

    def __repr__(self) -> str:
        return f"HomeAssistantEntity<{self.entity_id}>"

    @property
    def state(self) -> StateT:
        """The latest snapshot of the entity."""
        return self._state

    def replace_state(self, state: StateT) -> None:
        if state.entity_id != self.entity_id:
            raise ValueError(f"State for '{state.entity_id}' cannot replace state of '{self.entity_id}'")
        self._state = state

    async def call_action(self, action: str, data: Mapping[str, Any]) -> None:
        """Invoke ``action`` targeting this entity."""
        payload = {"entity_id": self.entity_id, **data}
        LOGGER.debug("Calling %s with %s", action, payload)
        await self.hub.call_action(action, payload)
