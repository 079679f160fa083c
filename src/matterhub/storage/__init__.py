from .bridge_storage import CONTEXT_NAME, BridgeStorage, open_bridge_storage
from .context import MemoryStorage, MemoryStorageContext, SqliteStorage, SqliteStorageContext, StorageContext
from .migrations import CURRENT_VERSION, MIGRATIONS, Migration
from .models import BridgeData, BridgeFeatureFlags, BridgeFilter, HomeAssistantMatcher

__all__ = [
    "CONTEXT_NAME",
    "CURRENT_VERSION",
    "MIGRATIONS",
    "BridgeData",
    "BridgeFeatureFlags",
    "BridgeFilter",
    "BridgeStorage",
    "HomeAssistantMatcher",
    "MemoryStorage",
    "MemoryStorageContext",
    "Migration",
    "SqliteStorage",
    "SqliteStorageContext",
    "StorageContext",
    "open_bridge_storage",
]
