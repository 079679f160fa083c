import contextlib
from collections.abc import AsyncIterator, Mapping, Sequence
from logging import getLogger

from matterhub.config import MatterHubConfig
from matterhub.exceptions import MigrationError, StorageNotInitializedError

from .context import SqliteStorage, StorageContext
from .migrations import CURRENT_VERSION, MIGRATIONS, Migration
from .models import BridgeData

LOGGER = getLogger(__name__)

CONTEXT_NAME = "bridges"


class BridgeStorage:
    """Persisted bridge records, keyed by bridge id.

    The ``version`` key holds the schema version of every record in the context and the ``ids``
    key lists the stored bridge ids in insertion order.
    """

    storage: StorageContext
    """The ``bridges`` storage context."""

    migrations: Mapping[int, Migration]
    """Migration step per source version."""

    current_version: int
    """Schema version the records are migrated up to."""

    _bridges: list[BridgeData] | None

    def __init__(
        self,
        storage: StorageContext,
        migrations: Mapping[int, Migration] | None = None,
        current_version: int = CURRENT_VERSION,
    ) -> None:
        self.storage = storage
        self.migrations = MIGRATIONS if migrations is None else migrations
        self.current_version = current_version
        self._bridges = None

    async def initialize(self) -> None:
        """Migrate the stored records, then load them."""
        await self.migrate()

        bridge_ids: list[str] = await self.storage.get("ids", [])
        bridges: list[BridgeData] = []
        for bridge_id in bridge_ids:
            raw = await self.storage.get(bridge_id)
            if raw is None:
                LOGGER.warning("Bridge %s is listed but has no stored record, skipping", bridge_id)
                continue
            bridges.append(BridgeData.model_validate(raw))

        self._bridges = bridges
        LOGGER.debug("Loaded %d bridge(s)", len(bridges))

    @property
    def bridges(self) -> Sequence[BridgeData]:
        """The loaded bridges.

        Raises:
            StorageNotInitializedError: If :meth:`initialize` has not run yet.
        """
        if self._bridges is None:
            raise StorageNotInitializedError("Bridge storage is not initialized")
        return tuple(self._bridges)

    def get(self, bridge_id: str) -> BridgeData | None:
        return next((b for b in self.bridges if b.id == bridge_id), None)

    async def add(self, bridge: BridgeData) -> None:
        """Store ``bridge``, replacing a stored bridge with the same id."""
        bridges = list(self.bridges)
        idx = next((i for i, b in enumerate(bridges) if b.id == bridge.id), None)
        if idx is None:
            bridges.append(bridge)
        else:
            bridges[idx] = bridge
        self._bridges = bridges

        await self.storage.set(bridge.id, bridge.model_dump(mode="json"))
        await self._persist_ids()

    async def remove(self, bridge_id: str) -> None:
        self._bridges = [b for b in self.bridges if b.id != bridge_id]
        await self.storage.delete(bridge_id)
        await self._persist_ids()

    async def _persist_ids(self) -> None:
        await self.storage.set("ids", [b.id for b in self.bridges])

    async def migrate(self) -> int:
        """Apply migration steps one at a time until the stored version no longer changes.

        Returns:
            The number of steps applied.

        Raises:
            MigrationError: If a step does not advance the version, or the stored version has no
                step and is not the current version.
        """
        applied = 0
        version: int = await self.storage.get("version", 1)

        while version != self.current_version:
            step = self.migrations.get(version)
            if step is None:
                raise MigrationError(f"No migration from version {version} to {self.current_version}")

            migrated = await step(self.storage)
            if migrated <= version:
                raise MigrationError(f"Migration from version {version} reported version {migrated}")

            await self.storage.set("version", migrated)
            applied += 1
            LOGGER.info("Migrated bridge storage from version %d to %d", version, migrated)

            version = await self.storage.get("version", 1)

        return applied


@contextlib.asynccontextmanager
async def open_bridge_storage(config: MatterHubConfig) -> AsyncIterator[BridgeStorage]:
    """Open the database at ``config.storage_path`` and yield its migrated, loaded bridge storage."""
    getLogger("matterhub.storage").setLevel(config.storage_log_level)

    async with SqliteStorage(config.storage_path) as sqlite:
        storage = BridgeStorage(sqlite.context(CONTEXT_NAME))
        await storage.initialize()
        yield storage
