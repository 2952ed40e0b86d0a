"""
QQ Replay Guard

Rejects deliveries whose claimed timestamp is too far from wall-clock time.
Tolerance is symmetric: stale and future-dated timestamps both fail.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from .errors import MalformedTimestamp, TimestampExpired

DEFAULT_TOLERANCE = timedelta(minutes=5)

_UNIX_TS_RE = re.compile(r"[+-]?[0-9]+")


def parse_timestamp(raw: str) -> int:
    """
    Parse a base-10 Unix timestamp in seconds.

    Raises:
        MalformedTimestamp: Not a base-10 integer
    """
    if raw is None or not _UNIX_TS_RE.fullmatch(raw):
        raise MalformedTimestamp(f"Invalid timestamp: {raw!r}")
    return int(raw)


def validate_timestamp(
    raw: str,
    now: Optional[datetime] = None,
    tolerance: timedelta = DEFAULT_TOLERANCE,
) -> None:
    """
    Check a delivery timestamp against the tolerance window.

    A skew of exactly `tolerance` passes.

    Args:
        raw: X-Signature-Timestamp header value
        now: Reference time (defaults to current UTC time)
        tolerance: Maximum allowed skew in either direction

    Raises:
        MalformedTimestamp: Not a base-10 integer
        TimestampExpired: Outside the window
    """
    claimed = parse_timestamp(raw)
    if now is None:
        now = datetime.now(timezone.utc)

    # Compare in seconds; huge claimed values would overflow datetime
    skew = abs(now.timestamp() - claimed)
    if skew > tolerance.total_seconds():
        raise TimestampExpired(
            f"Timestamp {claimed} is {skew:.0f}s from now "
            f"(tolerance {tolerance.total_seconds():.0f}s)"
        )


class ReplayGuard:
    """Timestamp validator with a fixed tolerance. Read-only after startup."""

    __slots__ = ("_tolerance",)

    def __init__(self, tolerance: timedelta = DEFAULT_TOLERANCE):
        if tolerance < timedelta(0):
            raise ValueError("Replay tolerance cannot be negative")
        self._tolerance = tolerance

    @property
    def tolerance(self) -> timedelta:
        return self._tolerance

    def validate(self, raw: str, now: Optional[datetime] = None) -> None:
        validate_timestamp(raw, now=now, tolerance=self._tolerance)
