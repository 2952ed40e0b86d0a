"""
Event registry.

Maps event type tags to callbacks. Tags without a callback fall through to
an explicit no-op, so new event types never require router changes.
"""

import logging
from typing import Dict, Iterator, Optional

from transport.qq.schemas import EventEnvelope, EventType

from .base import EventCallback, EventHandler, EventTag

logger = logging.getLogger(__name__)


def _key(event_type: EventTag) -> str:
    if isinstance(event_type, EventType):
        return event_type.value
    return str(event_type)


async def _noop(payload: EventEnvelope) -> None:
    return None


class EventRegistry(EventHandler):
    """
    Registry-backed EventHandler.

    Usage:
        registry = EventRegistry()

        @registry.on(EventType.C2C_MESSAGE_CREATE)
        async def on_c2c(payload):
            ...
    """

    def __init__(self, default: Optional[EventCallback] = None):
        self._callbacks: Dict[str, EventCallback] = {}
        self._default = default or _noop

    def register(self, event_type: EventTag, callback: EventCallback) -> None:
        """Register (or replace) the callback for an event type."""
        key = _key(event_type)
        if key in self._callbacks:
            logger.warning(f"Replacing handler for event type {key}")
        self._callbacks[key] = callback

    def on(self, event_type: EventTag):
        """Decorator form of register()."""
        def decorator(callback: EventCallback) -> EventCallback:
            self.register(event_type, callback)
            return callback
        return decorator

    def get(self, event_type: EventTag) -> Optional[EventCallback]:
        return self._callbacks.get(_key(event_type))

    def __contains__(self, event_type: EventTag) -> bool:
        return _key(event_type) in self._callbacks

    def __iter__(self) -> Iterator[str]:
        return iter(self._callbacks)

    def __len__(self) -> int:
        return len(self._callbacks)

    async def handle(self, event_type: EventTag, payload: EventEnvelope) -> None:
        """Run the callback registered for event_type, or the default no-op."""
        callback = self.get(event_type)
        if callback is None:
            logger.info(f"Unhandled event type: {_key(event_type)}")
            await self._default(payload)
            return

        await callback(payload)
