"""Date utility functions for hoursViz."""
import re
from datetime import datetime, timezone
from typing import Optional

# .NET serializers emit up to 7 fractional digits; datetime accepts at most 6.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def parse_utc_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a timezone-aware UTC datetime.

    Args:
        value: Timestamp string, e.g. "2022-02-22T08:41:00.1234567Z"

    Returns:
        Aware datetime in UTC (naive input is taken to be UTC)

    Raises:
        ValueError: If the value is not a string or not a valid timestamp
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(r"\1", text)

    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_optional_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Like parse_utc_timestamp, but None (JSON null) passes through."""
    if value is None:
        return None
    return parse_utc_timestamp(value)


def generated_str(dt: Optional[datetime] = None) -> str:
    """Format a report generation time for display.

    Args:
        dt: Time to format (defaults to now, local time)

    Returns:
        String like "2024-05-15 14:03:22"
    """
    dt = dt or datetime.now()
    return dt.strftime("%Y-%m-%d %H:%M:%S")
