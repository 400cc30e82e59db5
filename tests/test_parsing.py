"""Tests for payload parsing helpers and the system clock."""

from decimal import Decimal

import pytest

from quadency_connector.interfaces.clock import SystemClock
from quadency_connector.parsing import (
    iso8601,
    parse_timeframe,
    safe_decimal,
    safe_integer,
    safe_string,
    safe_string_2,
    safe_value,
    to_decimal,
)


class TestSafeAccessors:
    """Missing and malformed values fall back to defaults."""

    def test_safe_value(self):
        assert safe_value({"a": 1}, "a") == 1
        assert safe_value({"a": ""}, "a", "d") == "d"
        assert safe_value(None, "a", "d") == "d"
        assert safe_value(["a"], "a") is None

    def test_safe_string(self):
        assert safe_string({"code": 4001}, "code") == "4001"
        assert safe_string({"flag": True}, "flag") == "true"
        assert safe_string({}, "code", "x") == "x"

    def test_safe_string_2_prefers_first_key(self):
        assert safe_string_2({"code": 1, "status": "S"}, "code", "status") == "1"
        assert safe_string_2({"status": "S"}, "code", "status") == "S"
        assert safe_string_2({}, "code", "status") is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1.50", Decimal("1.50")),
            (3, Decimal("3")),
            (0.1, Decimal("0.1")),
            (" 2 ", Decimal("2")),
            ("abc", None),
            ("Infinity", None),
            (True, None),
            (None, None),
        ],
    )
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    def test_safe_decimal_default(self):
        assert safe_decimal({"fee": "bad"}, "fee", Decimal("0")) == Decimal("0")

    def test_safe_integer_truncates(self):
        assert safe_integer({"ts": "1575523543584.9"}, "ts") == 1575523543584
        assert safe_integer({"ts": "soon"}, "ts") is None


class TestTime:
    """Timestamps and timeframes."""

    def test_iso8601(self):
        assert iso8601(1575523543584) == "2019-12-05T05:25:43.584Z"
        assert iso8601(1575523543000) == "2019-12-05T05:25:43.000Z"
        assert iso8601(None) is None

    @pytest.mark.parametrize(
        "timeframe,seconds",
        [("1m", 60), ("15m", 900), ("1h", 3600), ("4h", 14400), ("1d", 86400), ("1w", 604800)],
    )
    def test_parse_timeframe(self, timeframe, seconds):
        assert parse_timeframe(timeframe) == seconds

    @pytest.mark.parametrize("timeframe", ["", "h", "1x", "ah"])
    def test_parse_timeframe_rejects_garbage(self, timeframe):
        with pytest.raises(ValueError):
            parse_timeframe(timeframe)

    def test_system_clock_nonce_never_decreases(self):
        clock = SystemClock()

        nonces = [clock.nonce() for _ in range(5)]

        assert nonces == sorted(nonces)
        assert clock.milliseconds() // 1000 >= nonces[-1] - 1
