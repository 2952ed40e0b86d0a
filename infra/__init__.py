"""
Infrastructure module exports.

Bootstrap of the process-wide webhook context.
"""

from .bootstrap import WebhookContext, bootstrap

__all__ = [
    "WebhookContext",
    "bootstrap",
]
