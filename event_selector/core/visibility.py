"""Visibility policy - Pure functions.

Decides whether a viewer may see an event at all, before any filter
criteria are applied.
"""

from enum import Enum

from event_selector.core.event import Event, VisibilityClass
from event_selector.core.social_graph import SocialGraph


class Visibility(Enum):
    """Terminal visibility decision for an (event, viewer) pair."""
    VISIBLE = "visible"
    HIDDEN = "hidden"


def evaluate_visibility(
    event: Event,
    viewer_id: str,
    graph: SocialGraph,
) -> Visibility:
    """Decide whether viewer_id may see event.

    Pure function.

    Rules, first match wins:
    - The host always sees their own event
    - Public events are visible to everyone
    - Follower-only events need viewer -> host
    - Friend-only events need viewer -> host AND host -> viewer

    Args:
        event: Event to check
        viewer_id: Identity the selection runs on behalf of
        graph: Follow relationships

    Returns:
        Visibility.VISIBLE or Visibility.HIDDEN
    """
    if viewer_id == event.host_id:
        return Visibility.VISIBLE

    if event.visibility_class is VisibilityClass.PUBLIC:
        return Visibility.VISIBLE

    if event.visibility_class is VisibilityClass.FOLLOWER_ONLY:
        if graph.follows(viewer_id, event.host_id):
            return Visibility.VISIBLE
        return Visibility.HIDDEN

    if event.visibility_class is VisibilityClass.FRIEND_ONLY:
        if graph.are_mutual(viewer_id, event.host_id):
            return Visibility.VISIBLE
        return Visibility.HIDDEN

    return Visibility.HIDDEN


def is_visible(event: Event, viewer_id: str, graph: SocialGraph) -> bool:
    """Returns True if evaluate_visibility() says VISIBLE."""
    return evaluate_visibility(event, viewer_id, graph) is Visibility.VISIBLE
