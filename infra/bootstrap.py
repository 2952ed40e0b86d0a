"""
Infrastructure initialization and bootstrap.

Builds the immutable webhook context once at startup. The context is passed
explicitly into the app and router; nothing reads it from module globals.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from config import Config
from services.events import EventHandler, create_default_registry
from transport.qq.replay import DEFAULT_TOLERANCE, ReplayGuard
from transport.qq.signer import Signer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookContext:
    """
    Process-wide, read-only state shared by every request.

    Safe for concurrent readers without locking.
    """

    config: Config
    signer: Signer
    guard: ReplayGuard
    event_handler: EventHandler

    def __repr__(self) -> str:
        """String representation without key material."""
        return (
            f"WebhookContext(app_id={self.config.app_id!r}, "
            f"tolerance={self.guard.tolerance}, "
            f"handler={type(self.event_handler).__name__})"
        )


def bootstrap(
    config: Optional[Config] = None,
    event_handler: Optional[EventHandler] = None,
    tolerance: timedelta = DEFAULT_TOLERANCE,
) -> WebhookContext:
    """
    Build the webhook context.

    Args:
        config: Loaded configuration (defaults to Config.from_env())
        event_handler: Business handler (defaults to the log-only registry)
        tolerance: Replay window for delivery timestamps

    Returns:
        WebhookContext with the signer derived from the app secret

    Raises:
        ConfigError: Incomplete configuration
        InvalidSecret: Empty app secret
    """
    if config is None:
        config = Config.from_env()
    if event_handler is None:
        event_handler = create_default_registry()

    signer = Signer.from_secret(config.app_secret)
    logger.info(f"Ed25519 signer initialized (public key {signer.public_key_bytes.hex()[:16]}...)")

    context = WebhookContext(
        config=config,
        signer=signer,
        guard=ReplayGuard(tolerance),
        event_handler=event_handler,
    )
    logger.info(f"Services initialized: {context!r}")
    return context
