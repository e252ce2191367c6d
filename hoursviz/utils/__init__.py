"""Utility modules for hoursViz."""

from .date_utils import parse_utc_timestamp, parse_optional_timestamp, generated_str
from .format_utils import format_hours, percent, redact_url
from .file_utils import write_text, write_csv, write_markdown, open_with_default_app

__all__ = [
    'parse_utc_timestamp', 'parse_optional_timestamp', 'generated_str',
    'format_hours', 'percent', 'redact_url',
    'write_text', 'write_csv', 'write_markdown', 'open_with_default_app'
]
