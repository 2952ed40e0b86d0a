"""Pytest configuration and fixtures."""

import json
import sys
import time
from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Config  # noqa: E402
from transport.qq.signer import derive_seed  # noqa: E402


TEST_SECRET = "test-secret"


@pytest.fixture
def config() -> Config:
    """Complete configuration without touching the environment."""
    return Config(app_id="102000000", token="test-token", app_secret=TEST_SECRET)


@pytest.fixture
def platform_key() -> Ed25519PrivateKey:
    """The key QQ derives from the same app secret."""
    return Ed25519PrivateKey.from_private_bytes(derive_seed(TEST_SECRET))


@pytest.fixture
def sign_delivery(platform_key):
    """
    Sign a delivery the way QQ does.

    Returns (headers, body) ready for TestClient.post(content=..., headers=...).
    """

    def _sign(payload, timestamp=None):
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        ts = str(int(time.time()) if timestamp is None else timestamp)
        signature = platform_key.sign(ts.encode() + body).hex()
        headers = {
            "X-Signature-Timestamp": ts,
            "X-Signature-Ed25519": signature,
            "Content-Type": "application/json",
        }
        return headers, body

    return _sign
