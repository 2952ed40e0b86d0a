"""
QQ Webhook Error Taxonomy

Authentication errors are always surfaced (401).
Signing errors only surface on the handshake path (500).
"""


class InvalidSecret(ValueError):
    """App secret cannot be turned into a signing seed."""
    pass


class AuthError(Exception):
    """Inbound delivery failed authentication."""
    pass


class MissingSignatureHeaders(AuthError):
    """X-Signature-Timestamp or X-Signature-Ed25519 is absent."""
    pass


class MalformedTimestamp(AuthError):
    """Timestamp header is not a base-10 Unix timestamp."""
    pass


class TimestampExpired(AuthError):
    """Timestamp is outside the replay tolerance window."""
    pass


class MalformedSignature(AuthError):
    """Signature header is not 64 bytes of hex."""
    pass


class SignatureMismatch(AuthError):
    """Ed25519 verification against the public key failed."""
    pass


class InternalSignError(Exception):
    """Signing the verification challenge failed."""
    pass
