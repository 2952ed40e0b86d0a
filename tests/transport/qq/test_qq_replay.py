"""
QQ Replay Guard Tests

Symmetric 5 minute tolerance window on X-Signature-Timestamp.
"""

from datetime import datetime, timedelta, timezone

import pytest

from transport.qq.errors import MalformedTimestamp, TimestampExpired
from transport.qq.replay import (
    DEFAULT_TOLERANCE,
    ReplayGuard,
    parse_timestamp,
    validate_timestamp,
)

NOW_TS = 1700000000
NOW = datetime.fromtimestamp(NOW_TS, tz=timezone.utc)


class TestParseTimestamp:

    def test_plain_integer(self):
        assert parse_timestamp("1700000000") == 1700000000

    def test_signed_integer(self):
        assert parse_timestamp("+5") == 5
        assert parse_timestamp("-5") == -5

    @pytest.mark.parametrize(
        "raw",
        ["", "abc", "1700000000.5", " 1700000000", "1_700_000_000", "0x10", "1e9"],
    )
    def test_malformed(self, raw):
        with pytest.raises(MalformedTimestamp):
            parse_timestamp(raw)


class TestBoundaries:
    """Exactly the tolerance passes, one second more fails, both directions."""

    def test_default_tolerance_is_five_minutes(self):
        assert DEFAULT_TOLERANCE == timedelta(minutes=5)

    def test_current_timestamp_passes(self):
        validate_timestamp(str(NOW_TS), now=NOW)

    def test_exactly_five_minutes_past_passes(self):
        validate_timestamp(str(NOW_TS - 300), now=NOW)

    def test_five_minutes_one_second_past_fails(self):
        with pytest.raises(TimestampExpired):
            validate_timestamp(str(NOW_TS - 301), now=NOW)

    def test_exactly_five_minutes_future_passes(self):
        validate_timestamp(str(NOW_TS + 300), now=NOW)

    def test_five_minutes_one_second_future_fails(self):
        with pytest.raises(TimestampExpired):
            validate_timestamp(str(NOW_TS + 301), now=NOW)

    def test_ten_minutes_stale_fails(self):
        with pytest.raises(TimestampExpired):
            validate_timestamp(str(NOW_TS - 600), now=NOW)

    def test_absurd_timestamp_is_expired_not_crash(self):
        """Values beyond datetime range are simply out of window."""
        with pytest.raises(TimestampExpired):
            validate_timestamp("99999999999999999999", now=NOW)

    def test_malformed_checked_before_window(self):
        with pytest.raises(MalformedTimestamp):
            validate_timestamp("yesterday", now=NOW)

    def test_defaults_to_wall_clock(self):
        """Without `now`, the current time is used."""
        current = int(datetime.now(timezone.utc).timestamp())
        validate_timestamp(str(current))

        with pytest.raises(TimestampExpired):
            validate_timestamp(str(current - 3600))


class TestReplayGuard:

    def test_custom_tolerance(self):
        guard = ReplayGuard(timedelta(seconds=10))

        guard.validate(str(NOW_TS - 10), now=NOW)
        with pytest.raises(TimestampExpired):
            guard.validate(str(NOW_TS - 11), now=NOW)

    def test_default_guard(self):
        guard = ReplayGuard()

        assert guard.tolerance == DEFAULT_TOLERANCE
        guard.validate(str(NOW_TS + 300), now=NOW)

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValueError):
            ReplayGuard(timedelta(seconds=-1))
