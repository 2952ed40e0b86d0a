"""
QQ Webhook Signature Verification

SECURITY BOUNDARY - Authenticate every delivery before it is parsed.
No retries. No payload logic.

QQ sends:
- X-Signature-Timestamp: Unix seconds
- X-Signature-Ed25519: hex Ed25519 signature of timestamp + raw body
"""

import logging

from fastapi import HTTPException, Request, status

from .errors import (
    AuthError,
    MalformedTimestamp,
    MissingSignatureHeaders,
    TimestampExpired,
)
from .replay import ReplayGuard
from .signer import Signer

logger = logging.getLogger(__name__)

TIMESTAMP_HEADER = "X-Signature-Timestamp"
SIGNATURE_HEADER = "X-Signature-Ed25519"


class SignatureAuth:
    """
    FastAPI dependency guarding the webhook route.

    The body is read once via request.body(); Starlette caches it on the
    request so the route handler reads the same unmodified bytes.
    """

    def __init__(self, signer: Signer, guard: ReplayGuard):
        self.signer = signer
        self.guard = guard

    async def __call__(self, request: Request) -> bytes:
        """
        Authenticate the request and return the raw body.

        Headers and timestamp are checked before the body is read.

        Raises:
            HTTPException(401): Missing headers, bad timestamp, bad signature
        """
        timestamp = request.headers.get(TIMESTAMP_HEADER)
        signature = request.headers.get(SIGNATURE_HEADER)

        try:
            if not timestamp or not signature:
                raise MissingSignatureHeaders(
                    f"Missing {TIMESTAMP_HEADER} or {SIGNATURE_HEADER} header"
                )
            self.guard.validate(timestamp)

            body = await request.body()
            self.signer.verify_signature(timestamp, body, signature)

        except AuthError as e:
            logger.warning(
                f"Webhook authentication failed: {e}",
                extra={
                    "path": request.url.path,
                    "reason": type(e).__name__,
                    "timestamp": timestamp,
                },
            )
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=_failure_detail(e),
            )

        logger.debug("Webhook signature verified")
        return body


def _failure_detail(error: AuthError) -> str:
    if isinstance(error, MissingSignatureHeaders):
        return "missing signature headers"
    if isinstance(error, (MalformedTimestamp, TimestampExpired)):
        return "invalid or expired timestamp"
    return "signature verification failed"
