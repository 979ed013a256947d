"""Filter criteria and predicate evaluation - Pure functions.

Filter criteria form a closed set of frozen dataclasses. Two of them,
ByHostedBy and Attending, are identity criteria: they choose the base set
of events (OR-combined) and never reject an event on their own. Every other
criterion is a predicate that must hold for an event to be selected.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Union

from event_selector.core.event import Event
from event_selector.core.geo import BoundingBox, is_within_radius


@dataclass(frozen=True)
class ByLocation:
    """Event lies within radius_km of (latitude, longitude)."""
    latitude: float
    longitude: float
    radius_km: float


@dataclass(frozen=True)
class ByTag:
    """Event carries tag (case-insensitive)."""
    tag: str


@dataclass(frozen=True)
class ByAddress:
    """Event address contains query (case-insensitive)."""
    query: str


@dataclass(frozen=True)
class ByDateRange:
    """start_date <= event.date <= end_date.

    Dates are compared as plain strings, so both ends should be
    "YYYY-MM-DD". Nothing is validated here.
    """
    start_date: str
    end_date: str


@dataclass(frozen=True)
class ByMaxAttendees:
    """event.max_attendees <= max_attendees."""
    max_attendees: int


@dataclass(frozen=True)
class ByCost:
    """event.estimated_cost <= max_cost."""
    max_cost: float


@dataclass(frozen=True)
class ByHostedBy:
    """Identity criterion: events hosted by user_id."""
    user_id: str


@dataclass(frozen=True)
class Attending:
    """Identity criterion: events user_id is attending."""
    user_id: str


PredicateCriterion = Union[
    ByLocation, ByTag, ByAddress, ByDateRange, ByMaxAttendees, ByCost,
]
IdentityCriterion = Union[ByHostedBy, Attending]
FilterCriterion = Union[PredicateCriterion, IdentityCriterion]

IDENTITY_TYPES = (ByHostedBy, Attending)


def is_identity_criterion(criterion: FilterCriterion) -> bool:
    """True for ByHostedBy and Attending."""
    return isinstance(criterion, IDENTITY_TYPES)


def matches_tag(event: Event, tag: str) -> bool:
    """Check if any of the event's tags equals tag, ignoring case.

    Pure function.
    """
    return tag.lower() in event.tag_list


def matches_address(event: Event, query: str) -> bool:
    """Case-insensitive substring test on the event address.

    Pure function.
    """
    return query.lower() in event.address.lower()


def matches_date_range(event: Event, start_date: str, end_date: str) -> bool:
    """Inclusive string comparison of the event date against a range.

    Pure function. Malformed or differently padded dates compare
    lexicographically and may give surprising results.
    """
    return start_date <= event.date <= end_date


# One check per predicate type; keep in step with PredicateCriterion
_PREDICATE_CHECKS: dict[type, Callable[[Event, Any], bool]] = {
    ByLocation: lambda event, c: is_within_radius(
        event, c.latitude, c.longitude, c.radius_km
    ),
    ByTag: lambda event, c: matches_tag(event, c.tag),
    ByAddress: lambda event, c: matches_address(event, c.query),
    ByDateRange: lambda event, c: matches_date_range(event, c.start_date, c.end_date),
    ByMaxAttendees: lambda event, c: event.max_attendees <= c.max_attendees,
    ByCost: lambda event, c: event.estimated_cost <= c.max_cost,
}


def matches_criterion(
    event: Event,
    criterion: FilterCriterion,
    ignore_unknown: bool = False,
) -> bool:
    """Evaluate a single predicate criterion against an event.

    Pure function.

    Identity criteria always evaluate True here, since they are applied when
    the base set is resolved. An object of any other type matches nothing,
    unless ignore_unknown is set, in which case it matches everything.

    Args:
        event: Event to check
        criterion: Filter criterion
        ignore_unknown: Treat unrecognized criteria as always-true

    Returns:
        True if the event satisfies the criterion
    """
    if isinstance(criterion, IDENTITY_TYPES):
        return True

    check = _PREDICATE_CHECKS.get(type(criterion))
    if check is None:
        return ignore_unknown

    return check(event, criterion)


def matches_all(
    event: Event,
    criteria: Iterable[FilterCriterion],
    ignore_unknown: bool = False,
) -> bool:
    """AND of matches_criterion() over criteria. Vacuously True.

    Pure function.
    """
    return all(
        matches_criterion(event, c, ignore_unknown=ignore_unknown)
        for c in criteria
    )


def criterion_from_dict(data: dict[str, Any]) -> FilterCriterion:
    """Build a criterion from a plain dict such as a YAML preset entry.

    Args:
        data: Dict with a "type" key plus the variant's fields

    Returns:
        The matching criterion

    Raises:
        ValueError: If the type is unknown or a field is missing or invalid
    """
    kind = data.get("type")

    try:
        if kind == "location":
            return ByLocation(
                latitude=float(data["latitude"]),
                longitude=float(data["longitude"]),
                radius_km=float(data["radius_km"]),
            )
        if kind == "tag":
            return ByTag(tag=str(data["tag"]))
        if kind == "address":
            return ByAddress(query=str(data["query"]))
        if kind == "date_range":
            return ByDateRange(
                start_date=str(data["start_date"]),
                end_date=str(data["end_date"]),
            )
        if kind == "max_attendees":
            return ByMaxAttendees(max_attendees=int(data["max_attendees"]))
        if kind == "cost":
            return ByCost(max_cost=float(data["max_cost"]))
        if kind == "hosted_by":
            return ByHostedBy(user_id=str(data["user_id"]))
        if kind == "attending":
            return Attending(user_id=str(data["user_id"]))
    except KeyError as e:
        raise ValueError(f"Criterion '{kind}' is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise ValueError(f"Criterion '{kind}' has an invalid value: {e}") from e

    raise ValueError(f"Unknown criterion type: {kind!r}")


def build_criteria(
    *,
    bounds: BoundingBox | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    group_size: int | None = None,
    max_cost: float | None = None,
    own_events_for: str | None = None,
) -> list[FilterCriterion]:
    """Build a criteria list from optional search inputs.

    Pure function.

    - own_events_for adds ByHostedBy and Attending for that user
    - bounds becomes a ByLocation around the box center reaching its corner
    - a one-sided date range uses the given date for both ends

    Returns:
        Criteria in the order listed above
    """
    criteria: list[FilterCriterion] = []

    if own_events_for is not None:
        criteria.append(ByHostedBy(own_events_for))
        criteria.append(Attending(own_events_for))

    if bounds is not None:
        center_lat, center_lon = bounds.center
        criteria.append(ByLocation(
            latitude=center_lat,
            longitude=center_lon,
            radius_km=bounds.radius_km,
        ))

    if start_date is not None or end_date is not None:
        start = start_date if start_date is not None else end_date
        end = end_date if end_date is not None else start_date
        criteria.append(ByDateRange(start_date=start, end_date=end))

    if group_size is not None:
        criteria.append(ByMaxAttendees(max_attendees=group_size))

    if max_cost is not None:
        criteria.append(ByCost(max_cost=max_cost))

    return criteria
