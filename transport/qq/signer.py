"""
QQ Ed25519 Signer

SECURITY BOUNDARY - key derivation, signature verification, challenge signing.

The platform derives the bot keypair from the app secret by repeating the
secret bytes until a 32-byte Ed25519 seed is filled. Both sides derive the
same key independently, so the derivation must match bit-for-bit.
"""

import re
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .errors import (
    InternalSignError,
    InvalidSecret,
    MalformedSignature,
    SignatureMismatch,
)

SEED_SIZE = 32
SIGNATURE_SIZE = 64

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def derive_seed(secret: str) -> bytes:
    """
    Derive the 32-byte Ed25519 seed from the app secret.

    seed[i] = secret_bytes[i % len(secret_bytes)]

    Short secrets yield a repeating seed. This is the platform's
    documented algorithm and must not be strengthened.

    Raises:
        InvalidSecret: Empty secret
    """
    if not secret:
        raise InvalidSecret("App secret cannot be empty")

    secret_bytes = secret.encode("utf-8")
    return bytes(secret_bytes[i % len(secret_bytes)] for i in range(SEED_SIZE))


class Signer:
    """
    Holds the bot keypair for the process lifetime.

    Immutable after construction, safe to share across requests.
    """

    __slots__ = ("_private_key", "_public_key")

    def __init__(self, private_key: Ed25519PrivateKey):
        self._private_key = private_key
        self._public_key: Ed25519PublicKey = private_key.public_key()

    @classmethod
    def from_secret(cls, secret: str) -> "Signer":
        """Build a signer from the app secret."""
        seed = derive_seed(secret)
        return cls(Ed25519PrivateKey.from_private_bytes(seed))

    @property
    def public_key_bytes(self) -> bytes:
        """Raw 32-byte public key."""
        return self._public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def verify_signature(self, timestamp: str, body: bytes, signature_hex: str) -> None:
        """
        Verify a webhook delivery signature.

        Signed message is timestamp + body, no separator.

        Args:
            timestamp: X-Signature-Timestamp header value
            body: Raw, unmodified request body
            signature_hex: X-Signature-Ed25519 header value

        Raises:
            MalformedSignature: Not hex, or not 64 bytes
            SignatureMismatch: Verification failed
        """
        signature = _decode_signature(signature_hex)

        message = timestamp.encode("utf-8") + body
        try:
            self._public_key.verify(signature, message)
        except InvalidSignature:
            raise SignatureMismatch("Signature verification failed")

    def sign_verification_challenge(self, event_ts: str, plain_token: str) -> str:
        """
        Sign the op=13 identity-verification challenge.

        Signed message is event_ts + plain_token, not the
        timestamp + body layout used for deliveries.

        Returns:
            Lowercase hex of the 64-byte signature
        """
        message = (event_ts + plain_token).encode("utf-8")
        try:
            signature = self._private_key.sign(message)
        except Exception as e:
            raise InternalSignError(f"Failed to sign verification challenge: {e}") from e
        return signature.hex()

    def __repr__(self) -> str:
        return f"Signer(public_key={self.public_key_bytes.hex()[:16]}...)"


def _decode_signature(signature_hex: Optional[str]) -> bytes:
    if not signature_hex:
        raise MalformedSignature("Signature is empty")

    if len(signature_hex) % 2 or not _HEX_RE.fullmatch(signature_hex):
        raise MalformedSignature("Invalid signature format: not hex")
    signature = bytes.fromhex(signature_hex)

    if len(signature) != SIGNATURE_SIZE:
        raise MalformedSignature(
            f"Invalid signature length: expected {SIGNATURE_SIZE}, got {len(signature)}"
        )
    return signature
