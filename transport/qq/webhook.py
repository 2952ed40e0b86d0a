"""
QQ Webhook Receiver

FastAPI router that authenticates deliveries and routes them by opcode.

Flow:
  signature auth → parse envelope → op=13 handshake | op=0 event dispatch

QQ treats any non-200 on event delivery as "retry", so the event path
always acknowledges with 200 null. Only the handshake may fail loudly.
"""

import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .errors import InternalSignError
from .schemas import (
    OP_DISPATCH,
    OP_VERIFY,
    Envelope,
    EventEnvelope,
    EventType,
    VerificationChallenge,
    VerificationResponse,
)
from .security import SignatureAuth
from .signer import Signer

if TYPE_CHECKING:
    from infra.bootstrap import WebhookContext
    from services.events import EventHandler

logger = logging.getLogger(__name__)


def acknowledge() -> JSONResponse:
    """The fixed 200 null acknowledgement."""
    return JSONResponse(status_code=status.HTTP_200_OK, content=None)


# ============================================================================
# ENVELOPE PARSING
# ============================================================================

def parse_envelope(body: bytes) -> Envelope:
    """
    Decode the outer envelope from the raw body.

    Raises:
        HTTPException(400): Not JSON, or not an envelope
    """
    try:
        return Envelope.model_validate(json.loads(body))
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
        logger.error(f"Failed to parse webhook payload: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="invalid json payload",
        )


# ============================================================================
# IDENTITY VERIFICATION (op=13)
# ============================================================================

def answer_verification(signer: Signer, data: Any) -> VerificationResponse:
    """
    Answer the identity-verification challenge.

    Raises:
        HTTPException(400): `d` is not a verification challenge
        HTTPException(500): Signing failed
    """
    try:
        challenge = VerificationChallenge.model_validate(data)
    except ValidationError as e:
        logger.error(f"Invalid verification payload: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="invalid verification payload",
        )

    try:
        msg_sig = signer.sign_verification_challenge(
            challenge.event_ts, challenge.plain_token
        )
    except InternalSignError as e:
        logger.error(f"Failed to sign verification: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed to generate signature",
        )

    return VerificationResponse(
        plain_token=challenge.plain_token,
        msg_sig=msg_sig,
        responce_time=challenge.event_ts,
    )


# ============================================================================
# EVENT DISPATCH (op=0)
# ============================================================================

async def deliver_event(handler: "EventHandler", envelope: Envelope) -> bool:
    """
    Decode and dispatch one event. Never raises.

    This is the single place where event-path failures are swallowed.

    Returns:
        True if the handler ran without error
    """
    data = {} if envelope.d is None else envelope.d
    try:
        payload = EventEnvelope.model_validate(data)
    except ValidationError as e:
        logger.warning(
            f"Failed to decode event data: {e}",
            extra={"event_type": envelope.t, "delivery_id": envelope.id},
        )
        return False

    event_type = EventType.resolve(envelope.t)

    try:
        await handler.handle(event_type, payload)
    except Exception as e:
        logger.error(
            f"Failed to handle event {envelope.t}: {e}",
            exc_info=True,
            extra={"event_type": envelope.t, "delivery_id": envelope.id},
        )
        return False

    logger.info(
        f"Event processed: {envelope.t}",
        extra={"event_type": envelope.t, "delivery_id": envelope.id},
    )
    return True


# ============================================================================
# ROUTER
# ============================================================================

def create_router(context: "WebhookContext") -> APIRouter:
    """
    Build the webhook router bound to an immutable context.

    Args:
        context: Startup context holding the signer, guard and event handler

    Returns:
        APIRouter exposing POST /webhook
    """
    router = APIRouter(tags=["QQ Webhook"])
    auth = SignatureAuth(context.signer, context.guard)

    @router.post("/webhook")
    async def qq_webhook(body: bytes = Depends(auth)):
        """
        Receive a QQ webhook delivery.

        Returns:
            200 VerificationResponse for op=13
            200 null for everything else

        Raises:
            HTTPException(401): Authentication failed (raised by the dependency)
            HTTPException(400): Malformed envelope or challenge
            HTTPException(500): Challenge signing failed
        """
        envelope = parse_envelope(body)
        logger.info(
            f"Webhook payload received: op={envelope.op} type={envelope.t}",
            extra={"op": envelope.op, "event_type": envelope.t, "delivery_id": envelope.id},
        )

        if envelope.op == OP_VERIFY:
            logger.info("Handling verification challenge")
            response = answer_verification(context.signer, envelope.d)
            logger.info("Verification challenge completed")
            return JSONResponse(status_code=status.HTTP_200_OK, content=response.model_dump())

        if envelope.op == OP_DISPATCH:
            await deliver_event(context.event_handler, envelope)
            return acknowledge()

        logger.warning(f"Unsupported opcode: {envelope.op}", extra={"op": envelope.op})
        return acknowledge()

    return router
