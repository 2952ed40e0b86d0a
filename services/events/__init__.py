"""
Event handling service exports.

Clean interface for the webhook router to import event components.
"""

from .base import EventCallback, EventHandler, EventTag
from .default import DEFAULT_HANDLERS, create_default_registry
from .registry import EventRegistry

__all__ = [
    "EventHandler",
    "EventCallback",
    "EventTag",
    "EventRegistry",
    "DEFAULT_HANDLERS",
    "create_default_registry",
]
