"""Formatting utility functions for hoursViz."""
import re

# query-string values, in a bare URL or inside an error message
_QUERY_VALUE_RE = re.compile(r"([?&][^=&\s#]+=)[^&\s#]+")


def format_hours(hours: float, places: int = 2) -> str:
    """Format a number of hours with a fixed number of decimal places.

    Args:
        hours: Hours (fractional)
        places: Decimal places

    Returns:
        Formatted hours, e.g. "99.99"
    """
    return f"{hours:.{places}f}"


def percent(val: float, total: float, places: int = 1) -> str:
    """Calculate percentage and format as string.

    Args:
        val: Value
        total: Total
        places: Decimal places

    Returns:
        Formatted percentage string (without the % sign)
    """
    return f"{(val / total * 100):.{places}f}" if total else f"{0:.{places}f}"


def redact_url(text: str) -> str:
    """Mask query-string values so access tokens never reach the console.

    Args:
        text: URL, or a message containing one, possibly carrying ``?code=<token>``

    Returns:
        Text with every query value replaced by ``***``
    """
    return _QUERY_VALUE_RE.sub(r"\1***", text)
