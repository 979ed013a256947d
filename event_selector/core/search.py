"""Free-text event search - Pure functions."""

from event_selector.core.event import Event


def matches_search(event: Event, query: str) -> bool:
    """Check if query appears in the name, description or any tag.

    Pure function. query is expected to be lower-cased and trimmed.
    """
    if query in event.name.lower():
        return True
    if query in event.description.lower():
        return True
    return any(query in tag for tag in event.tag_list)


def search_events(events: list[Event], query: str | None) -> list[Event]:
    """Filter events by a free-text query.

    Pure function. A blank query returns the events unchanged.

    Args:
        events: Events to search
        query: Search text, matched case-insensitively

    Returns:
        Matching events, in input order
    """
    if query is None or not query.strip():
        return list(events)

    needle = query.strip().lower()
    return [e for e in events if matches_search(e, needle)]
