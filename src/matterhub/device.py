"""A bridged device: one hub entity, its clusters and the runtime that serializes their events."""

from logging import getLogger
from typing import Any

from matterhub.behaviors.base import ClusterBehavior
from matterhub.clusters.base import AttributeChange, ClusterState
from matterhub.exceptions import UnknownClusterError, UnknownCommandError
from matterhub.hub import HomeAssistantEntity
from matterhub.models.states import EntityState
from matterhub.runtime import ENTITY_CHANGED, DeviceRuntime, command_topic

LOGGER = getLogger(__name__)


class Device:
    """Groups one entity binding, one runtime and the behaviors attached to it.

    Every input (entity snapshots, commands, client attribute writes) is queued on the runtime and
    handled in order by :meth:`run` or :meth:`process_pending`.
    """

    entity: HomeAssistantEntity[Any]
    runtime: DeviceRuntime
    behaviors: dict[str, ClusterBehavior[Any, Any]]
    """Behaviors keyed by cluster name."""

    started: bool

    def __init__(self, entity: HomeAssistantEntity[Any], runtime: DeviceRuntime) -> None:
        self.entity = entity
        self.runtime = runtime
        self.behaviors = {}
        self.started = False

        # registered before any behavior so the binding holds the new snapshot when they run
        self.runtime.on(ENTITY_CHANGED, self._replace_state)

    def __repr__(self) -> str:
        return f"Device<{self.entity.entity_id} clusters={sorted(self.behaviors)}>"

    @property
    def entity_id(self) -> str:
        return self.entity.entity_id

    @property
    def clusters(self) -> dict[str, ClusterState[Any]]:
        return {name: behavior.cluster for name, behavior in self.behaviors.items()}

    def add_behavior(self, behavior: ClusterBehavior[Any, Any]) -> None:
        if self.started:
            raise RuntimeError(f"Cannot add behaviors to {self!r} after it was started")
        if behavior.cluster.name in self.behaviors:
            raise ValueError(f"{self!r} already has a behavior for cluster '{behavior.cluster.name}'")
        self.behaviors[behavior.cluster.name] = behavior

    def cluster(self, name: str) -> ClusterState[Any]:
        try:
            return self.behaviors[name].cluster
        except KeyError:
            raise UnknownClusterError(f"{self.entity_id} has no cluster '{name}'") from None

    async def start(self) -> None:
        """Bind every behavior to the current entity snapshot."""
        for behavior in self.behaviors.values():
            await behavior.initialize()
        self.started = True
        LOGGER.debug("Started %r", self)

    async def update_entity(self, state: EntityState) -> None:
        """Queue a new full snapshot of the entity.

        Raises:
            ValueError: If ``state`` belongs to another entity.
        """
        if state.entity_id != self.entity_id:
            raise ValueError(f"State for '{state.entity_id}' cannot be sent to {self!r}")
        await self.runtime.send(ENTITY_CHANGED, state)

    async def invoke(self, cluster: str, command: str, **kwargs: Any) -> None:
        """Queue the Matter command ``command`` of ``cluster`` with its arguments.

        Raises:
            UnknownCommandError: If no behavior handles the command, e.g. because the feature it
                belongs to is not enabled.
        """
        topic = command_topic(cluster, command)
        if not self.runtime.handles(topic):
            raise UnknownCommandError(f"{self.entity_id} does not handle command '{command}' of cluster '{cluster}'")
        await self.runtime.send(topic, kwargs)

    def write_attribute(self, cluster: str, attribute: str, value: Any) -> AttributeChange | None:
        """Write an attribute on behalf of a Matter client.

        The value is stored right away. A behavior watching the attribute is notified through the
        runtime.

        Raises:
            anyio.WouldBlock: If the runtime queue is full. The value is not stored then.
        """
        return self.cluster(cluster).write(attribute, value)

    async def process_pending(self) -> int:
        """Handle every queued event, returns how many were handled."""
        return await self.runtime.drain()

    async def run(self) -> None:
        await self.runtime.run_forever()

    def close(self) -> None:
        self.runtime.close()

    async def _replace_state(self, state: EntityState) -> None:
        self.entity.replace_state(state)
