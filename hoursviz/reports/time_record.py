"""TimeRecord class for representing time entries fetched from the API."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from ..utils.date_utils import parse_utc_timestamp, parse_optional_timestamp

# The upstream service misspells the start field; the correct spelling is a fallback.
START_FIELDS = ("StarTimeUtc", "StartTimeUtc")


@dataclass(frozen=True)
class TimeRecord:
    """A single work period as returned by the time entries API.

    Instances are created by ``from_api`` and never mutated.
    """

    id: str
    employee_name: Optional[str]
    start_time_utc: datetime
    end_time_utc: datetime
    notes: str = ""
    deleted_at: Optional[datetime] = None

    @classmethod
    def from_api(cls, entry_data: Dict[str, Any]) -> "TimeRecord":
        """Build a TimeRecord from one JSON object of the API response.

        Args:
            entry_data: Raw entry with keys Id, EmployeeName, StarTimeUtc,
                EndTimeUtc, EntryNotes, DeletedOn

        Returns:
            Parsed TimeRecord

        Raises:
            ValueError: If a timestamp is missing or malformed
        """
        start = next((entry_data[k] for k in START_FIELDS if entry_data.get(k) is not None), None)
        if start is None:
            raise ValueError(f"Entry {entry_data.get('Id')!r} has no start time")
        if entry_data.get("EndTimeUtc") is None:
            raise ValueError(f"Entry {entry_data.get('Id')!r} has no end time")

        name = entry_data.get("EmployeeName")
        return cls(
            id=str(entry_data.get("Id") or ""),
            employee_name=str(name) if name is not None else None,
            start_time_utc=parse_utc_timestamp(start),
            end_time_utc=parse_utc_timestamp(entry_data["EndTimeUtc"]),
            notes=str(entry_data.get("EntryNotes") or ""),
            deleted_at=parse_optional_timestamp(entry_data.get("DeletedOn")),
        )

    @property
    def duration_hours(self) -> float:
        """Worked hours; an end before the start counts as zero, never negative."""
        seconds = (self.end_time_utc - self.start_time_utc).total_seconds()
        return max(0.0, seconds) / 3600

    @property
    def is_deleted(self) -> bool:
        """True if the entry carries a deletion timestamp."""
        return self.deleted_at is not None

    @property
    def has_employee_name(self) -> bool:
        """True if the employee name is present and not blank."""
        return bool(self.employee_name and self.employee_name.strip())
