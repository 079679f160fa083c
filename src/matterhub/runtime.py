"""Ordered event processing for one bridged device.

Each device owns one :class:`DeviceRuntime`. Entity snapshots, Matter commands and client attribute
writes are queued on one stream and handled strictly one after another, so a handler always runs to
completion before the next event is looked at. The only suspension point inside a handler is the
outbound hub action.

Nothing here waits for the hub to echo an action back as a new entity snapshot. When the echo
arrives it is projected like any other snapshot, and the command guards in the behaviors compare
against it so no second action is sent. The guards are plain comparisons against live state; an
echo carrying stale data can still trigger another command.
"""

from collections import defaultdict
from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import Any

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

LOGGER = getLogger(__name__)

ENTITY_CHANGED = "entity.state_changed"
"""Topic for a new full entity snapshot. The payload is the state model."""

Handler = Callable[[Any], Awaitable[None]]


def command_topic(cluster: str, command: str) -> str:
    """Topic for a Matter command, the payload is a dict of the command's arguments."""
    return f"{cluster}.command.{command}"


def attribute_topic(cluster: str, attribute: str) -> str:
    """Topic for a client write of a watched attribute, the payload is the new value."""
    return f"{cluster}.attribute.{attribute}"


class DeviceRuntime:
    """Queue plus handler table for one device.

    Handlers are registered explicitly with :meth:`on` while the device is bound; nothing is
    dispatched implicitly.
    """

    name: str
    """Name of the device, used in log messages."""

    _handlers: defaultdict[str, list[Handler]]
    _send_stream: MemoryObjectSendStream[tuple[str, Any]]
    _receive_stream: MemoryObjectReceiveStream[tuple[str, Any]]

    def __init__(self, name: str, queue_size: int = 100) -> None:
        self.name = name
        self._handlers = defaultdict(list)
        self._send_stream, self._receive_stream = anyio.create_memory_object_stream[tuple[str, Any]](
            max_buffer_size=queue_size
        )

    def __repr__(self) -> str:
        return f"DeviceRuntime<{self.name}>"

    @property
    def topics(self) -> frozenset[str]:
        return frozenset(topic for topic, handlers in self._handlers.items() if handlers)

    def on(self, topic: str, handler: Handler) -> None:
        """Register ``handler`` for ``topic``. Handlers for one topic run in registration order."""
        self._handlers[topic].append(handler)

    def handles(self, topic: str) -> bool:
        return bool(self._handlers.get(topic))

    async def send(self, topic: str, payload: Any) -> None:
        """Queue an event, waiting for room if the queue is full."""
        await self._send_stream.send((topic, payload))

    def post(self, topic: str, payload: Any) -> None:
        """Queue an event from synchronous code.

        Raises:
            anyio.WouldBlock: If the queue is full.
        """
        self._send_stream.send_nowait((topic, payload))

    async def dispatch(self, topic: str, payload: Any) -> None:
        """Run every handler for ``topic``, one after another.

        A failing handler is logged and does not stop the handlers after it. Nothing is retried.
        """
        handlers = self._handlers.get(topic)
        if not handlers:
            LOGGER.debug("No handlers for %s on %s", topic, self.name)
            return

        for handler in list(handlers):
            try:
                await handler(payload)
            except Exception:
                LOGGER.exception("Handler error (device=%s, topic=%s, handler=%r)", self.name, topic, handler)

    async def drain(self) -> int:
        """Handle every event that is queued right now, returns how many were handled."""
        count = 0
        while True:
            try:
                topic, payload = self._receive_stream.receive_nowait()
            except (anyio.WouldBlock, anyio.EndOfStream, anyio.ClosedResourceError):
                return count
            await self.dispatch(topic, payload)
            count += 1

    async def run_forever(self) -> None:
        """Handle events until the runtime is closed."""
        LOGGER.debug("Runtime for %s started", self.name)
        async with self._receive_stream:
            async for topic, payload in self._receive_stream:
                await self.dispatch(topic, payload)
        LOGGER.debug("Runtime for %s stopped", self.name)

    def close(self) -> None:
        """Stop accepting events; :meth:`run_forever` returns once the queue is empty."""
        self._send_stream.close()
