from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import Any, ClassVar, Generic, TypeVar

from matterhub.clusters.base import AttributeChange, AttributesT, ClusterState
from matterhub.features import FeatureSet, resolve_features
from matterhub.hub import HomeAssistantEntity
from matterhub.models.states import EntityState
from matterhub.runtime import ENTITY_CHANGED, DeviceRuntime, attribute_topic, command_topic

LOGGER = getLogger(__name__)

EntityStateT = TypeVar("EntityStateT", bound=EntityState)


class ClusterBehavior(Generic[EntityStateT, AttributesT]):
    """Keeps one cluster in sync with one hub entity.

    Subclasses implement :meth:`update` (entity snapshot -> one atomic cluster patch) and
    :meth:`register_handlers` (commands and watched attributes -> hub actions).
    """

    cluster_name: ClassVar[str]
    """Name of the cluster this behavior serves."""

    entity: HomeAssistantEntity[EntityStateT]
    cluster: ClusterState[AttributesT]
    runtime: DeviceRuntime

    features: FeatureSet
    """Resolved once in :meth:`initialize`, never changes afterwards."""

    _forwarding: bool

    def __init__(
        self,
        entity: HomeAssistantEntity[EntityStateT],
        cluster: ClusterState[AttributesT],
        runtime: DeviceRuntime,
    ) -> None:
        self.entity = entity
        self.cluster = cluster
        self.runtime = runtime
        self.features = FeatureSet()
        self._forwarding = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self.entity.entity_id}>"

    async def initialize(self) -> None:
        """Resolve features, project the current snapshot and register every handler."""
        self.features = self.resolve_features()
        self.update(self.entity.state)
        self.runtime.on(ENTITY_CHANGED, self._on_entity_changed)
        self.register_handlers()
        LOGGER.debug("Bound %r with features %s", self, sorted(self.features.enabled))

    def resolve_features(self) -> FeatureSet:
        return resolve_features(self.cluster.features)  # pyright: ignore[reportArgumentType]

    def update(self, state: EntityStateT) -> None:
        raise NotImplementedError

    def register_handlers(self) -> None:
        """Register command handlers and attribute watches. Nothing to do by default."""

    async def _on_entity_changed(self, state: EntityStateT) -> None:
        self.update(state)

    def on_command(self, command: str, handler: Callable[..., Awaitable[None]]) -> None:
        """Route the Matter command ``command`` to ``handler``, called with the command's arguments."""

        async def _call(arguments: dict[str, Any]) -> None:
            await handler(**arguments)

        self.runtime.on(command_topic(self.cluster.name, command), _call)

    def watch(self, attribute: str, handler: Callable[[Any], Awaitable[None]]) -> None:
        """Call ``handler`` with the new value whenever a Matter client writes ``attribute``.

        Values written by :meth:`ClusterState.patch` never reach ``handler``.
        """
        self.runtime.on(attribute_topic(self.cluster.name, attribute), handler)
        if not self._forwarding:
            self.cluster.subscribe(self._forward_client_change)
            self._forwarding = True

    def _forward_client_change(self, change: AttributeChange) -> None:
        if not change.from_client:
            return
        topic = attribute_topic(change.cluster, change.attribute)
        if self.runtime.handles(topic):
            self.runtime.post(topic, change.new_value)
