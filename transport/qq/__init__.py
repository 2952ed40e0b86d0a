"""QQ Webhook Transport - Module Exports"""

from .errors import (
    AuthError,
    InternalSignError,
    InvalidSecret,
    MalformedSignature,
    MalformedTimestamp,
    MissingSignatureHeaders,
    SignatureMismatch,
    TimestampExpired,
)
from .replay import DEFAULT_TOLERANCE, ReplayGuard, validate_timestamp
from .schemas import (
    OP_DISPATCH,
    OP_VERIFY,
    Author,
    Envelope,
    EventEnvelope,
    EventType,
    VerificationChallenge,
    VerificationResponse,
)
from .security import SIGNATURE_HEADER, TIMESTAMP_HEADER, SignatureAuth
from .signer import Signer, derive_seed
from .webhook import create_router, deliver_event

__all__ = [
    # Errors
    "AuthError",
    "MissingSignatureHeaders",
    "MalformedTimestamp",
    "TimestampExpired",
    "MalformedSignature",
    "SignatureMismatch",
    "InvalidSecret",
    "InternalSignError",
    # Schemas
    "Envelope",
    "VerificationChallenge",
    "VerificationResponse",
    "EventEnvelope",
    "Author",
    "EventType",
    "OP_DISPATCH",
    "OP_VERIFY",
    # Signing
    "derive_seed",
    "Signer",
    # Replay
    "ReplayGuard",
    "validate_timestamp",
    "DEFAULT_TOLERANCE",
    # Security
    "SignatureAuth",
    "TIMESTAMP_HEADER",
    "SIGNATURE_HEADER",
    # Router
    "create_router",
    "deliver_event",
]
