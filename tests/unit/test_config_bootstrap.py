"""
Configuration and bootstrap tests.

Fail fast on incomplete config; context is immutable and deterministic.
"""

import dataclasses
from datetime import timedelta

import pytest

from config import DEFAULT_PORT, Config, ConfigError
from infra.bootstrap import WebhookContext, bootstrap
from services.events import EventRegistry
from transport.qq.errors import InvalidSecret
from transport.qq.signer import Signer

ENV = {
    "QQ_BOT_APP_ID": "102000000",
    "QQ_BOT_TOKEN": "test-token",
    "QQ_BOT_APP_SECRET": "test-secret",
}


@pytest.fixture
def qq_env(monkeypatch):
    for key in ("SERVER_PORT", "SERVER_HOST", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    for key, value in ENV.items():
        monkeypatch.setenv(key, value)
    return monkeypatch


class TestConfig:

    def test_from_env(self, qq_env, tmp_path):
        config = Config.from_env(tmp_path / "missing.env")

        assert config.app_id == "102000000"
        assert config.token == "test-token"
        assert config.app_secret == "test-secret"
        assert config.port == DEFAULT_PORT
        assert config.host == "0.0.0.0"

    def test_port_override(self, qq_env, tmp_path):
        qq_env.setenv("SERVER_PORT", "9000")
        assert Config.from_env(tmp_path / "missing.env").port == 9000

    def test_non_integer_port_rejected(self, qq_env, tmp_path):
        qq_env.setenv("SERVER_PORT", ":8080")
        with pytest.raises(ConfigError):
            Config.from_env(tmp_path / "missing.env")

    @pytest.mark.parametrize("missing", sorted(ENV))
    def test_missing_required_rejected(self, qq_env, tmp_path, missing):
        qq_env.setenv(missing, "")

        with pytest.raises(ConfigError) as exc_info:
            Config.from_env(tmp_path / "missing.env")

        assert missing in str(exc_info.value)

    def test_loads_dotenv_file(self, monkeypatch, tmp_path):
        # setenv first so monkeypatch also undoes what load_dotenv writes
        for key in (*ENV, "SERVER_PORT"):
            monkeypatch.setenv(key, "placeholder")
            monkeypatch.delenv(key)
        env_file = tmp_path / ".env"
        env_file.write_text(
            "QQ_BOT_APP_ID=1\nQQ_BOT_TOKEN=t\nQQ_BOT_APP_SECRET=s\nSERVER_PORT=8081\n"
        )

        config = Config.from_env(env_file)

        assert config.app_id == "1"
        assert config.port == 8081

    def test_out_of_range_port(self):
        with pytest.raises(ConfigError):
            Config(app_id="1", token="t", app_secret="s", port=70000).validate()

    def test_repr_hides_credentials(self):
        config = Config(app_id="1", token="tok-value", app_secret="secret-value")

        assert "tok-value" not in repr(config)
        assert "secret-value" not in repr(config)

    def test_frozen(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.app_secret = "other"


class TestBootstrap:

    def test_builds_context(self, config):
        context = bootstrap(config)

        assert isinstance(context, WebhookContext)
        assert context.config is config
        assert context.guard.tolerance == timedelta(minutes=5)
        assert isinstance(context.event_handler, EventRegistry)
        assert len(context.event_handler) > 0

    def test_keypair_derived_from_secret(self, config):
        context = bootstrap(config)

        assert context.signer.public_key_bytes == (
            Signer.from_secret(config.app_secret).public_key_bytes
        )

    def test_custom_handler_and_tolerance(self, config):
        registry = EventRegistry()
        context = bootstrap(config, event_handler=registry, tolerance=timedelta(seconds=30))

        assert context.event_handler is registry
        assert context.guard.tolerance == timedelta(seconds=30)

    def test_context_is_immutable(self, config):
        context = bootstrap(config)
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.signer = Signer.from_secret("other")

    def test_repr_hides_secret(self, config):
        assert config.app_secret not in repr(bootstrap(config))

    def test_empty_secret_fails(self):
        config = Config(app_id="1", token="t", app_secret="")
        with pytest.raises(InvalidSecret):
            bootstrap(config)
