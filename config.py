"""
Configuration management for the QQ bot webhook.

Loads environment variables from .env file and provides typed access to configuration.
Loaded once at startup; an incomplete configuration stops the process.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


class ConfigError(Exception):
    """Required configuration is missing or invalid."""
    pass


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


@dataclass(frozen=True)
class Config:
    """Configuration for the QQ bot webhook."""

    # QQ Bot credentials
    app_id: str
    token: str  # Not used by the signature protocol, but must be set
    app_secret: str

    # Server
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load and validate configuration from the environment.

        Args:
            env_file: Optional .env path (defaults to ./.env if present)

        Raises:
            ConfigError: Missing credentials or invalid port
        """
        load_dotenv(env_file)

        raw_port = os.getenv("SERVER_PORT", "")
        try:
            port = int(raw_port) if raw_port else DEFAULT_PORT
        except ValueError:
            raise ConfigError(f"SERVER_PORT must be an integer, got {raw_port!r}")

        config = cls(
            app_id=os.getenv("QQ_BOT_APP_ID", ""),
            token=os.getenv("QQ_BOT_TOKEN", ""),
            app_secret=os.getenv("QQ_BOT_APP_SECRET", ""),
            host=os.getenv("SERVER_HOST", DEFAULT_HOST),
            port=port,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Validate that required configuration is set."""
        required = {
            "QQ_BOT_APP_ID": self.app_id,
            "QQ_BOT_TOKEN": self.token,
            "QQ_BOT_APP_SECRET": self.app_secret,
        }
        missing = [key for key, value in required.items() if not value]
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        if not 0 < self.port < 65536:
            raise ConfigError(f"SERVER_PORT out of range: {self.port}")

    def __repr__(self) -> str:
        # Never print credentials
        return (
            f"Config(app_id={self.app_id!r}, host={self.host!r}, "
            f"port={self.port}, log_level={self.log_level!r})"
        )
