"""Version 3 added per-bridge feature flags."""

from matterhub.storage.context import StorageContext

DEFAULT_FEATURE_FLAGS = {"expand_min_max_color_temperature": False}


async def migrate(storage: StorageContext) -> int:
    bridge_ids: list[str] = await storage.get("ids", [])
    for bridge_id in bridge_ids:
        bridge = await storage.get(bridge_id)
        if bridge is None:
            continue
        bridge["feature_flags"] = {**DEFAULT_FEATURE_FLAGS, **(bridge.get("feature_flags") or {})}
        await storage.set(bridge_id, bridge)

    return 3
