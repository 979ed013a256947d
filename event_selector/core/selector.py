"""Event selection - Pure functions.

This module decides which events a viewer gets to see for a set of filter
criteria. It is the single implementation of the selection rules; both
record stores feed it snapshots. All functions are pure with no side
effects.

Selection runs in four steps:
1. Split criteria into identity criteria and predicate criteria
2. Resolve the base set: the union of identity matches, or the full catalog
3. Drop events hidden from the viewer
4. Keep events matching every predicate criterion
"""

from typing import Iterable

from event_selector.core.attendance import AttendanceLedger
from event_selector.core.event import Event
from event_selector.core.filters import (
    Attending,
    ByHostedBy,
    FilterCriterion,
    IdentityCriterion,
    is_identity_criterion,
    matches_all,
)
from event_selector.core.snapshot import Snapshot
from event_selector.core.social_graph import SocialGraph
from event_selector.core.visibility import is_visible


def partition_criteria(
    criteria: Iterable[FilterCriterion],
) -> tuple[list[IdentityCriterion], list[FilterCriterion]]:
    """Split criteria into (identity, predicate) lists.

    Pure function. Relative order inside each list is preserved. Anything
    that is not an identity criterion lands in the predicate list,
    including unrecognized objects.
    """
    identity = []
    predicates = []

    for criterion in criteria:
        if is_identity_criterion(criterion):
            identity.append(criterion)
        else:
            predicates.append(criterion)

    return identity, predicates


def matches_identity(
    event: Event,
    criterion: IdentityCriterion,
    attendance: AttendanceLedger,
) -> bool:
    """Check if an event belongs to an identity criterion's set.

    Pure function.
    """
    if isinstance(criterion, ByHostedBy):
        return event.host_id == criterion.user_id
    if isinstance(criterion, Attending):
        return attendance.is_attending(event.id, criterion.user_id)
    return False


def resolve_base_set(
    catalog: list[Event],
    identity_criteria: list[IdentityCriterion],
    attendance: AttendanceLedger,
) -> list[Event]:
    """Resolve the candidate events before visibility and predicates.

    Pure function.

    With no identity criteria the whole catalog is returned as given,
    duplicates included. Otherwise the result is every event matching ANY
    identity criterion, de-duplicated by event ID (first occurrence kept).

    Args:
        catalog: All events, in input order
        identity_criteria: ByHostedBy / Attending criteria
        attendance: Attendance records

    Returns:
        Base candidate events, in catalog order
    """
    if not identity_criteria:
        return list(catalog)

    seen: set[str] = set()
    base = []

    for event in catalog:
        if event.id in seen:
            continue
        if any(matches_identity(event, c, attendance) for c in identity_criteria):
            seen.add(event.id)
            base.append(event)

    return base


def select_events(
    catalog: list[Event],
    viewer_id: str,
    criteria: Iterable[FilterCriterion],
    attendance: AttendanceLedger,
    graph: SocialGraph,
    *,
    ignore_unknown: bool = False,
) -> list[Event]:
    """Select the events viewer_id may see that satisfy criteria.

    Pure function. Identical inputs always produce identical output, and the
    result is always a subset of catalog in catalog order.

    Args:
        catalog: Event catalog
        viewer_id: Identity the selection runs on behalf of
        criteria: Filter criteria; identity ones OR together, others AND
        attendance: Attendance records
        graph: Follow relationships
        ignore_unknown: Let unrecognized criteria pass instead of matching
            nothing

    Returns:
        Selected events
    """
    identity, predicates = partition_criteria(list(criteria))

    base = resolve_base_set(catalog, identity, attendance)

    return [
        event for event in base
        if is_visible(event, viewer_id, graph)
        and matches_all(event, predicates, ignore_unknown=ignore_unknown)
    ]


def select_from_snapshot(
    snapshot: Snapshot,
    viewer_id: str,
    criteria: Iterable[FilterCriterion],
    *,
    ignore_unknown: bool = False,
) -> list[Event]:
    """Run select_events() over a Snapshot.

    Pure function.
    """
    return select_events(
        list(snapshot.events),
        viewer_id,
        criteria,
        snapshot.attendance,
        snapshot.graph,
        ignore_unknown=ignore_unknown,
    )
