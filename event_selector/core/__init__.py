"""Functional Core - Pure functions with no side effects.

This module contains all selection logic as pure functions:
- Event data parsing
- Great-circle distance
- Social graph and attendance lookups
- Visibility policy
- Filter criteria evaluation
- Event selection and search

All functions here are deterministic and have no I/O.
"""

from event_selector.core.event import (
    AttendanceRecord,
    Event,
    FollowEdge,
    VisibilityClass,
    parse_events,
)
from event_selector.core.geo import BoundingBox, distance_km, is_within_radius
from event_selector.core.social_graph import SocialGraph
from event_selector.core.attendance import AttendanceLedger
from event_selector.core.visibility import Visibility, evaluate_visibility, is_visible
from event_selector.core.filters import (
    Attending,
    ByAddress,
    ByCost,
    ByDateRange,
    ByHostedBy,
    ByLocation,
    ByMaxAttendees,
    ByTag,
    FilterCriterion,
    build_criteria,
    criterion_from_dict,
)
from event_selector.core.snapshot import Snapshot
from event_selector.core.selector import select_events, select_from_snapshot
from event_selector.core.search import search_events

__all__ = [
    # Event
    "AttendanceRecord",
    "Event",
    "FollowEdge",
    "VisibilityClass",
    "parse_events",
    # Geo
    "BoundingBox",
    "distance_km",
    "is_within_radius",
    # Graph / attendance
    "SocialGraph",
    "AttendanceLedger",
    # Visibility
    "Visibility",
    "evaluate_visibility",
    "is_visible",
    # Filters
    "Attending",
    "ByAddress",
    "ByCost",
    "ByDateRange",
    "ByHostedBy",
    "ByLocation",
    "ByMaxAttendees",
    "ByTag",
    "FilterCriterion",
    "build_criteria",
    "criterion_from_dict",
    # Selection
    "Snapshot",
    "select_events",
    "select_from_snapshot",
    "search_events",
]
