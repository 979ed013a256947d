"""In-memory record store - Imperative Shell.

Holds events, follow edges and attendance in process memory. Used for
local runs (seeded from a YAML fixture) and as a test double for the
Firestore store. It exposes the same surface as FirestoreStore.

Not synchronized: callers sharing one instance across threads must lock
around mutations and load_snapshot().
"""

import logging
from pathlib import Path

import yaml

from event_selector.core.event import (
    AttendanceRecord,
    Event,
    FollowEdge,
    parse_attendance,
    parse_events,
    parse_follow_edges,
)
from event_selector.core.snapshot import Snapshot


logger = logging.getLogger(__name__)


class MemoryStore:
    """Record store backed by dicts.

    Events keep their insertion position when replaced. Follow and
    attendance inserts are idempotent; removing a missing entry is a no-op.
    Joining a full event succeeds: capacity is advisory.
    """

    def __init__(
        self,
        events: list[Event] | None = None,
        edges: list[FollowEdge] | None = None,
        records: list[AttendanceRecord] | None = None,
    ) -> None:
        self._events: dict[str, Event] = {}
        self._edges: dict[FollowEdge, None] = {}
        self._attendance: dict[AttendanceRecord, None] = {}

        for event in events or []:
            self._events[event.id] = event
        for edge in edges or []:
            self._edges[edge] = None
        for record in records or []:
            self._attendance[record] = None

    @classmethod
    def from_seed_file(cls, seed_path: str | Path) -> "MemoryStore":
        """Create a store from a YAML fixture.

        This method performs file I/O. Invalid rows are skipped.

        The fixture has three optional lists using the remote store's
        column names: ``events``, ``follows`` and ``attendance``.

        Args:
            seed_path: Path to the YAML fixture

        Returns:
            Populated MemoryStore

        Raises:
            FileNotFoundError: If the fixture doesn't exist
            yaml.YAMLError: If the fixture is invalid YAML
        """
        path = Path(seed_path)

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        event_rows = data.get("events") or []
        events = parse_events(event_rows)
        edges = parse_follow_edges(data.get("follows") or [])
        records = parse_attendance(data.get("attendance") or [])

        if len(events) < len(event_rows):
            logger.warning(
                "Skipped %d invalid event rows in %s",
                len(event_rows) - len(events),
                path,
            )

        logger.info(
            "Seeded memory store from %s: %d events, %d follows, %d attendance",
            path,
            len(events),
            len(edges),
            len(records),
        )

        return cls(events=events, edges=edges, records=records)

    def load_snapshot(self) -> Snapshot:
        """Copy current state into an immutable Snapshot."""
        return Snapshot.build(
            events=list(self._events.values()),
            edges=list(self._edges),
            records=list(self._attendance),
        )

    def upsert_event(self, event: Event) -> bool:
        """Insert an event or replace the one with the same ID."""
        self._events[event.id] = event
        return True

    def delete_event(self, event_id: str) -> bool:
        """Delete an event and its attendance records."""
        self._events.pop(event_id, None)
        for record in [r for r in self._attendance if r.event_id == event_id]:
            del self._attendance[record]
        return True

    def follow(self, follower_id: str, followee_id: str) -> bool:
        """Add a follow edge. Idempotent."""
        self._edges[FollowEdge(follower_id, followee_id)] = None
        return True

    def unfollow(self, follower_id: str, followee_id: str) -> bool:
        """Remove a follow edge. Missing edges are ignored."""
        self._edges.pop(FollowEdge(follower_id, followee_id), None)
        return True

    def attend(self, user_id: str, event_id: str) -> bool:
        """Record attendance. Idempotent; capacity is not checked."""
        self._attendance[AttendanceRecord(event_id, user_id)] = None
        return True

    def leave(self, user_id: str, event_id: str) -> bool:
        """Remove attendance. Missing records are ignored."""
        self._attendance.pop(AttendanceRecord(event_id, user_id), None)
        return True

    def remove_user(self, user_id: str) -> bool:
        """Remove everything tied to a user.

        Deletes the user's hosted events (with their attendance), every
        follow edge touching the user, and the user's attendance.
        """
        hosted = [e.id for e in self._events.values() if e.host_id == user_id]
        for event_id in hosted:
            self.delete_event(event_id)

        self._edges = {
            edge: None for edge in self._edges
            if user_id not in (edge.follower_id, edge.followee_id)
        }
        self._attendance = {
            record: None for record in self._attendance
            if record.user_id != user_id
        }

        logger.info(
            "Removed user %s: %d hosted events deleted",
            user_id,
            len(hosted),
        )
        return True
