"""
Event handler abstract interface.

Role: business logic per QQ event type.

Rules:
- Called once per authenticated, decoded event
- Raising signals failure; the webhook logs it and still acknowledges
- No HTTP knowledge
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Union

from transport.qq.schemas import EventEnvelope, EventType


# Known EventType, or the raw tag for types this build does not know
EventTag = Union[EventType, str]

EventCallback = Callable[[EventEnvelope], Awaitable[None]]


class EventHandler(ABC):
    """
    Abstract event boundary.
    The webhook router depends ONLY on this interface.
    """

    @abstractmethod
    async def handle(self, event_type: EventTag, payload: EventEnvelope) -> None:
        """
        Handle one event.

        Args:
            event_type: Resolved event type (or raw tag if unknown)
            payload: Decoded event payload

        Raises:
            Exception: Handling failed (logged, never returned to QQ)
        """
        raise NotImplementedError
