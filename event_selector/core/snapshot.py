"""Consistent input snapshot for one selection pass.

A Snapshot bundles the catalog, the follow graph and the attendance ledger
as they were at one moment. Stores in the shell layer copy their state into
a Snapshot so the engine never sees a collection change mid-pass.
"""

from dataclasses import dataclass, field
from typing import Iterable

from event_selector.core.attendance import AttendanceLedger
from event_selector.core.event import AttendanceRecord, Event, FollowEdge
from event_selector.core.social_graph import SocialGraph


@dataclass(frozen=True)
class Snapshot:
    """Immutable bundle of selection inputs.

    Attributes:
        events: Event catalog, in store order
        graph: Follow relationships
        attendance: Attendance records
    """
    events: tuple[Event, ...] = ()
    graph: SocialGraph = field(default_factory=SocialGraph)
    attendance: AttendanceLedger = field(default_factory=AttendanceLedger)

    @classmethod
    def build(
        cls,
        events: Iterable[Event],
        edges: Iterable[FollowEdge] = (),
        records: Iterable[AttendanceRecord] = (),
    ) -> "Snapshot":
        """Build a snapshot from raw collections."""
        return cls(
            events=tuple(events),
            graph=SocialGraph.from_edges(edges),
            attendance=AttendanceLedger.from_records(records),
        )
