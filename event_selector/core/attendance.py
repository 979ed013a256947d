"""Attendance lookups - Pure data structure.

Read-only view over attendance records used for identity filtering and
attendee counts. Capacity (Event.max_attendees) is not enforced anywhere.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from event_selector.core.event import AttendanceRecord


@dataclass(frozen=True)
class AttendanceLedger:
    """Immutable set of attendance records with indexed lookups.

    Attributes:
        records: All (event_id, user_id) attendance records
    """
    records: frozenset[AttendanceRecord] = frozenset()
    _by_event: dict[str, frozenset[str]] = field(
        init=False, repr=False, compare=False,
    )
    _by_user: dict[str, frozenset[str]] = field(
        init=False, repr=False, compare=False,
    )

    def __post_init__(self) -> None:
        records = frozenset(self.records)

        by_event: dict[str, set[str]] = defaultdict(set)
        by_user: dict[str, set[str]] = defaultdict(set)
        for record in records:
            by_event[record.event_id].add(record.user_id)
            by_user[record.user_id].add(record.event_id)

        object.__setattr__(self, "records", records)
        object.__setattr__(
            self, "_by_event", {k: frozenset(v) for k, v in by_event.items()}
        )
        object.__setattr__(
            self, "_by_user", {k: frozenset(v) for k, v in by_user.items()}
        )

    @classmethod
    def from_records(cls, records: Iterable[AttendanceRecord]) -> "AttendanceLedger":
        """Build a ledger from records. Duplicates collapse."""
        return cls(records=frozenset(records))

    def is_attending(self, event_id: str, user_id: str) -> bool:
        """True iff user_id is attending event_id."""
        return user_id in self._by_event.get(event_id, frozenset())

    def attendees_of(self, event_id: str) -> frozenset[str]:
        """User IDs attending an event."""
        return self._by_event.get(event_id, frozenset())

    def attendee_count(self, event_id: str) -> int:
        """Number of users attending an event."""
        return len(self.attendees_of(event_id))

    def events_attended_by(self, user_id: str) -> frozenset[str]:
        """Event IDs a user is attending."""
        return self._by_user.get(user_id, frozenset())

    def __contains__(self, record: object) -> bool:
        return record in self.records

    def __len__(self) -> int:
        return len(self.records)
