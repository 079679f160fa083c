"""Schema migrations of the ``bridges`` storage context.

Each step takes the context at version ``n`` and returns ``n + 1``. The stored version defaults to 1.
"""

from collections.abc import Awaitable, Callable

from matterhub.storage.context import StorageContext

from . import v1_to_v2, v2_to_v3

Migration = Callable[[StorageContext], Awaitable[int]]

MIGRATIONS: dict[int, Migration] = {
    1: v1_to_v2.migrate,
    2: v2_to_v3.migrate,
}

CURRENT_VERSION = 3

__all__ = ["CURRENT_VERSION", "MIGRATIONS", "Migration"]
