"""
TimeEntriesClient: A client for fetching time entries from the time tracking API.
"""
import requests
from typing import Optional, Any, List

from ..errors import FetchError
from ..reports.time_record import TimeRecord
from ..utils.format_utils import redact_url


class TimeEntriesClient:
    """A client for the time entries endpoint."""

    def __init__(self, url: str, timeout: float = 30.0, max_response_bytes: Optional[int] = None):
        """Initialize the TimeEntriesClient.

        Args:
            url: Endpoint URL, including any access token query parameter
            timeout: Request timeout in seconds
            max_response_bytes: Reject responses larger than this (optional)
        """
        self.url = url
        self.timeout = timeout
        self.max_response_bytes = max_response_bytes

    @property
    def redacted_url(self) -> str:
        """The endpoint URL with the access token masked."""
        return redact_url(self.url)

    def api_get(self) -> Any:
        """Make a single GET request to the endpoint.

        Returns:
            API response as JSON

        Raises:
            FetchError: If the request fails, times out, returns a non-success
                status, is too large, or is not valid JSON
        """
        try:
            resp = requests.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.Timeout as e:
            raise FetchError(f"API request timed out after {self.timeout}s: {self.redacted_url}") from e
        except requests.RequestException as e:
            # requests includes the full URL in HTTPError messages
            raise FetchError(f"API request failed: {redact_url(str(e))}") from e

        if self.max_response_bytes is not None and len(resp.content) > self.max_response_bytes:
            raise FetchError(
                f"API response too large: {len(resp.content)} bytes (limit {self.max_response_bytes})"
            )

        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"API returned malformed JSON: {e}") from e

    def get_time_entries(self) -> List[TimeRecord]:
        """Fetch and deserialize all time entries.

        No filtering is done here; deleted and unnamed records are returned too.

        Returns:
            List of TimeRecord objects in response order

        Raises:
            FetchError: If fetching or deserialization fails
        """
        data = self.api_get()
        if not isinstance(data, list):
            raise FetchError(f"Expected a JSON array of time entries, got {type(data).__name__}")

        records = []
        for idx, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise FetchError(f"Time entry #{idx} is not a JSON object")
            try:
                records.append(TimeRecord.from_api(entry))
            except (ValueError, TypeError) as e:
                raise FetchError(f"Time entry #{idx} could not be parsed: {e}") from e
        return records
