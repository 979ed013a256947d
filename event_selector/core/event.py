"""Event data models and parsing - Pure functions.

This module handles parsing stored rows into typed Event, FollowEdge and
AttendanceRecord objects. All functions are pure with no side effects.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class VisibilityClass(Enum):
    """Who besides the host may see an event.

    Values match the stored ``type`` column.
    """
    PUBLIC = "PUBLIC"
    FOLLOWER_ONLY = "FOLLOWER"
    FRIEND_ONLY = "FRIEND"


@dataclass(frozen=True)
class Event:
    """Immutable event data model.

    Attributes:
        id: Unique event ID
        host_id: User ID of the host (a lookup key)
        latitude: Venue latitude in degrees
        longitude: Venue longitude in degrees
        date: Event date as "YYYY-MM-DD"
        start_time: Start time as "HH:MM"
        end_time: End time as "HH:MM"
        estimated_cost: Estimated cost to attend
        max_attendees: Advisory capacity, never enforced
        tags: Comma-separated labels (e.g. "hiking,outdoors")
        address: Free-text address
        visibility_class: Visibility class of the event
        name: Event name
        description: Event description
    """
    id: str
    host_id: str
    latitude: float
    longitude: float
    date: str
    start_time: str = ""
    end_time: str = ""
    estimated_cost: float = 0.0
    max_attendees: int = 0
    tags: str = ""
    address: str = ""
    visibility_class: VisibilityClass = VisibilityClass.PUBLIC
    name: str = ""
    description: str = ""

    @property
    def tag_list(self) -> list[str]:
        """Tags split on commas, trimmed and lower-cased."""
        return [t.strip().lower() for t in self.tags.split(",")]


@dataclass(frozen=True)
class FollowEdge:
    """Directed follow relationship: follower_id follows followee_id."""
    follower_id: str
    followee_id: str


@dataclass(frozen=True)
class AttendanceRecord:
    """user_id is attending event_id."""
    event_id: str
    user_id: str


def parse_event(row: dict[str, Any]) -> Event | None:
    """Parse a single stored row into an Event.

    Pure function: takes raw dict, returns typed Event or None if invalid.

    Args:
        row: Row dict using the store's column names

    Returns:
        Event object or None if parsing fails
    """
    try:
        return Event(
            id=str(row["eid"]),
            host_id=str(row["host_id"]),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            date=str(row["date"]),
            start_time=row.get("start_time") or "",
            end_time=row.get("end_time") or "",
            estimated_cost=float(row.get("estimated_cost") or 0.0),
            max_attendees=int(row.get("max_attendees") or 0),
            tags=row.get("tags") or "",
            address=row.get("address") or "",
            visibility_class=VisibilityClass(row.get("type", "PUBLIC")),
            name=row.get("name") or "",
            description=row.get("description") or "",
        )
    except (KeyError, TypeError, ValueError):
        return None


def parse_events(rows: list[dict[str, Any]]) -> list[Event]:
    """Parse stored rows into Events, skipping invalid ones.

    Pure function. Row order is preserved.
    """
    events = []

    for row in rows:
        event = parse_event(row)
        if event is not None:
            events.append(event)

    return events


def event_to_row(event: Event) -> dict[str, Any]:
    """Serialize an Event back into the store's column names.

    Pure function.
    """
    return {
        "eid": event.id,
        "name": event.name,
        "description": event.description,
        "host_id": event.host_id,
        "address": event.address,
        "longitude": event.longitude,
        "latitude": event.latitude,
        "date": event.date,
        "start_time": event.start_time,
        "end_time": event.end_time,
        "estimated_cost": event.estimated_cost,
        "max_attendees": event.max_attendees,
        "tags": event.tags,
        "type": event.visibility_class.value,
    }


def parse_follow_edges(rows: list[dict[str, Any]]) -> list[FollowEdge]:
    """Parse ``followerid`` / ``followeeid`` rows, skipping invalid ones."""
    edges = []
    for row in rows:
        try:
            edges.append(FollowEdge(
                follower_id=str(row["followerid"]),
                followee_id=str(row["followeeid"]),
            ))
        except (KeyError, TypeError):
            continue
    return edges


def parse_attendance(rows: list[dict[str, Any]]) -> list[AttendanceRecord]:
    """Parse ``eid`` / ``uid`` rows, skipping invalid ones."""
    records = []
    for row in rows:
        try:
            records.append(AttendanceRecord(
                event_id=str(row["eid"]),
                user_id=str(row["uid"]),
            ))
        except (KeyError, TypeError):
            continue
    return records
