"""
QQ Webhook - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Defines the contract between the QQ open platform and this endpoint.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


# Opcodes carried in Envelope.op
OP_DISPATCH = 0
OP_VERIFY = 13


# ============================================================================
# ENVELOPE (INPUT)
# ============================================================================

class Envelope(BaseModel):
    """
    Outer wrapper of every webhook delivery.

    `d` stays untyped here. The router peeks at `op` first, then validates
    `d` against the variant model for that opcode.
    """

    id: int = Field(0, description="Delivery id")
    op: int = Field(0, description="Opcode: 0=event, 13=verification")
    d: Any = Field(None, description="Payload, shape depends on op")
    s: int = Field(0, description="Sequence number")
    t: str = Field("", description="Event type, meaningful only when op=0")

    class Config:
        extra = "allow"  # Platform may add fields

    @field_validator("id", "op", "s", "t", mode="before")
    @classmethod
    def null_as_default(cls, value, info):
        """Explicit JSON null decodes to the field's zero value."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


# ============================================================================
# IDENTITY VERIFICATION (op=13)
# ============================================================================

class VerificationChallenge(BaseModel):
    """Challenge sent once per endpoint registration."""

    plain_token: str = Field(..., description="Opaque token to sign and echo")
    event_ts: str = Field(..., description="Challenge timestamp")


class VerificationResponse(BaseModel):
    """
    Answer to the verification challenge.

    `responce_time` is the platform's documented (misspelled) field name.
    """

    plain_token: str
    msg_sig: str = Field(..., description="Hex Ed25519 signature of event_ts + plain_token")
    responce_time: str = Field(..., description="Echo of event_ts")


# ============================================================================
# EVENT DELIVERY (op=0)
# ============================================================================

class Author(BaseModel):
    """Message author. Which id is set depends on the event context."""

    id: Optional[str] = None  # Guild/channel scenes
    user_openid: Optional[str] = None  # C2C scenes
    member_openid: Optional[str] = None  # Group scenes

    class Config:
        extra = "allow"

    @property
    def open_id(self) -> Optional[str]:
        """Best available author identifier."""
        return self.user_openid or self.member_openid or self.id


class EventEnvelope(BaseModel):
    """Event payload. Field presence depends on the event type."""

    group_id: Optional[str] = None
    group_openid: Optional[str] = None
    author: Optional[Author] = None
    content: Optional[str] = None
    id: Optional[str] = Field(None, description="Message id")
    timestamp: Optional[str] = None

    class Config:
        extra = "allow"  # Event types carry their own extra fields


class EventType(str, Enum):
    """Known event type tags. Unknown tags are still accepted."""

    # Group and C2C
    GROUP_AT_MESSAGE_CREATE = "GROUP_AT_MESSAGE_CREATE"
    C2C_MESSAGE_CREATE = "C2C_MESSAGE_CREATE"
    FRIEND_ADD = "FRIEND_ADD"
    FRIEND_DEL = "FRIEND_DEL"
    GROUP_ADD_ROBOT = "GROUP_ADD_ROBOT"
    GROUP_DEL_ROBOT = "GROUP_DEL_ROBOT"

    # Guild channels
    MESSAGE_CREATE = "MESSAGE_CREATE"
    MESSAGE_DELETE = "MESSAGE_DELETE"
    DIRECT_MESSAGE_CREATE = "DIRECT_MESSAGE_CREATE"
    AT_MESSAGE_CREATE = "AT_MESSAGE_CREATE"

    # Guilds
    GUILD_CREATE = "GUILD_CREATE"
    GUILD_UPDATE = "GUILD_UPDATE"
    GUILD_DELETE = "GUILD_DELETE"

    @classmethod
    def resolve(cls, tag: str) -> "EventType | str":
        """Map a tag to a known EventType, or return the raw tag."""
        try:
            return cls(tag)
        except ValueError:
            return tag
