"""
Safe field extraction helpers for loosely typed exchange payloads.

Exchange responses frequently omit, rename or stringify fields. These helpers
read a single key from a mapping and coerce it, returning a default instead
of raising when the key is missing or the value cannot be converted.

All numeric helpers return Decimal, never float.

Example:
    >>> safe_decimal({"price": "50000.5"}, "price")
    Decimal('50000.5')
    >>> safe_decimal({"price": "n/a"}, "price") is None
    True
    >>> safe_string_2({"status": "FORBIDDEN"}, "code", "status")
    'FORBIDDEN'
"""

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

# Seconds per timeframe unit
_TIMEFRAME_UNITS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
    "M": 30 * 24 * 60 * 60,
    "y": 365 * 24 * 60 * 60,
}


def safe_value(record: Optional[Mapping[str, Any]], key: str, default: Any = None) -> Any:
    """Return record[key], or default if the record or the value is missing."""
    if record is None or not isinstance(record, Mapping):
        return default
    value = record.get(key)
    if value is None or value == "":
        return default
    return value


def safe_string(
    record: Optional[Mapping[str, Any]], key: str, default: Optional[str] = None
) -> Optional[str]:
    """Return record[key] as a string, or default if missing."""
    value = safe_value(record, key)
    if value is None:
        return default
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def safe_string_2(
    record: Optional[Mapping[str, Any]],
    key1: str,
    key2: str,
    default: Optional[str] = None,
) -> Optional[str]:
    """Return the first of record[key1], record[key2] present, as a string."""
    value = safe_string(record, key1)
    if value is None:
        value = safe_string(record, key2, default)
    return value


def to_decimal(value: Any, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """
    Convert a scalar to a finite Decimal.

    Args:
        value: Number or numeric string.
        default: Returned when value is None, boolean, or unparseable.

    Returns:
        Optional[Decimal]: Parsed value or default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return default
    if not result.is_finite():
        return default
    return result


def safe_decimal(
    record: Optional[Mapping[str, Any]], key: str, default: Optional[Decimal] = None
) -> Optional[Decimal]:
    """Return record[key] as a Decimal, or default if missing or unparseable."""
    return to_decimal(safe_value(record, key), default)


def safe_integer(
    record: Optional[Mapping[str, Any]], key: str, default: Optional[int] = None
) -> Optional[int]:
    """Return record[key] truncated to int, or default if missing or unparseable."""
    number = safe_decimal(record, key)
    if number is None:
        return default
    return int(number)


def iso8601(timestamp_ms: Optional[int]) -> Optional[str]:
    """
    Format a millisecond UTC timestamp as ISO 8601 with millisecond precision.

    Example:
        >>> iso8601(1575523543584)
        '2019-12-05T05:25:43.584Z'
    """
    if timestamp_ms is None:
        return None
    try:
        seconds, millis = divmod(int(timestamp_ms), 1000)
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError, TypeError):
        return None
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{millis:03d}Z"


def parse_timeframe(timeframe: str) -> int:
    """
    Convert a timeframe string to its duration in seconds.

    Args:
        timeframe: Amount followed by a unit, e.g. "1m", "4h", "1d".

    Returns:
        int: Duration in seconds.

    Raises:
        ValueError: If the unit or amount is not recognized.

    Example:
        >>> parse_timeframe("4h")
        14400
    """
    amount, unit = timeframe[:-1], timeframe[-1:]
    if unit not in _TIMEFRAME_UNITS or not amount.isdigit():
        raise ValueError(f"Invalid timeframe: {timeframe!r}")
    return int(amount) * _TIMEFRAME_UNITS[unit]
