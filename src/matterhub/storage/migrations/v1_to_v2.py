"""Version 1 stored the filter as a bare list of include matchers."""

from logging import getLogger

from matterhub.storage.context import StorageContext

LOGGER = getLogger(__name__)


async def migrate(storage: StorageContext) -> int:
    bridge_ids: list[str] = await storage.get("ids", [])
    for bridge_id in bridge_ids:
        bridge = await storage.get(bridge_id)
        if bridge is None:
            continue

        matchers = bridge.get("filter")
        if matchers is None or isinstance(matchers, list):
            bridge["filter"] = {"include": matchers or [], "exclude": []}
            await storage.set(bridge_id, bridge)
            LOGGER.debug("Moved filter of bridge %s into include/exclude", bridge_id)

    return 2
