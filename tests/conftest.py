"""Shared fixtures for core and shell tests."""

from dataclasses import replace

import pytest

from event_selector.core.event import Event, VisibilityClass


@pytest.fixture
def sample_event():
    """Create a public sample event in Waterloo, ON."""
    return Event(
        id="e1",
        host_id="u1",
        latitude=43.4723,
        longitude=-80.5449,
        date="2025-10-15",
        start_time="09:00",
        end_time="17:00",
        estimated_cost=20.0,
        max_attendees=10,
        tags="hiking,outdoors",
        address="123 Trail Road, Waterloo",
        visibility_class=VisibilityClass.PUBLIC,
        name="Hiking",
        description="Mountain hiking",
    )


@pytest.fixture
def make_event(sample_event):
    """Factory for copies of sample_event with overrides."""
    def _make(**changes):
        return replace(sample_event, **changes)
    return _make
