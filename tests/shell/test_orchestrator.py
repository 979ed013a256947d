"""Tests for the Orchestrator module.

Tests the coordination between functional core and record stores. Uses
the in-memory store, plus mocks where a failing store is needed.
"""

import logging
from unittest.mock import Mock

import pytest

from event_selector.core.config import Config, FilterPreset
from event_selector.core.event import AttendanceRecord, FollowEdge, VisibilityClass
from event_selector.core.filters import ByCost, ByHostedBy, ByTag
from event_selector.orchestrator import Orchestrator, SelectionResult, create_store
from event_selector.shell.firestore_store import FirestoreStore
from event_selector.shell.memory_store import MemoryStore


@pytest.fixture
def store(make_event):
    return MemoryStore(
        events=[
            make_event(id="hike", host_id="u1", tags="hiking", estimated_cost=0.0, name="Hike"),
            make_event(id="dinner", host_id="u1", tags="food", estimated_cost=40.0,
                       visibility_class=VisibilityClass.FRIEND_ONLY, name="Dinner"),
            make_event(id="climb", host_id="u2", tags="hiking,climbing", estimated_cost=15.0,
                       visibility_class=VisibilityClass.FOLLOWER_ONLY, name="Climb"),
        ],
        edges=[FollowEdge("u3", "u2")],
        records=[AttendanceRecord("climb", "u3")],
    )


@pytest.fixture
def config():
    return Config(
        seed_path="unused.yaml",
        filter_presets=[
            FilterPreset(name="cheap-hikes", criteria=[ByTag("hiking"), ByCost(20)]),
        ],
    )


@pytest.fixture
def orchestrator(config, store):
    return Orchestrator(config, store=store)


class TestSelect:

    def test_no_criteria(self, orchestrator):
        result = orchestrator.select("u3")

        assert result.success is True
        assert [e.id for e in result.events] == ["hike", "climb"]
        assert result.catalog_size == 3

    def test_with_criteria(self, orchestrator):
        result = orchestrator.select("u3", criteria=[ByTag("climbing")])

        assert [e.id for e in result.events] == ["climb"]

    def test_preset_criteria(self, orchestrator):
        result = orchestrator.select("u3", preset="cheap-hikes")

        assert [e.id for e in result.events] == ["hike", "climb"]

    def test_preset_combined_with_criteria(self, orchestrator):
        result = orchestrator.select("u3", criteria=[ByHostedBy("u2")], preset="cheap-hikes")

        assert [e.id for e in result.events] == ["climb"]

    def test_unknown_preset_is_error(self, orchestrator):
        result = orchestrator.select("u3", preset="missing")

        assert result.success is False
        assert result.events == []
        assert "Unknown filter preset: missing" in result.errors

    def test_search_applied_after_selection(self, orchestrator):
        result = orchestrator.select("u1", search="dinner")

        assert [e.id for e in result.events] == ["dinner"]

    def test_reflects_store_changes(self, orchestrator, store):
        assert orchestrator.select("u1", criteria=[ByTag("climbing")]).events == []

        store.follow("u1", "u2")

        assert [e.id for e in orchestrator.select("u1", criteria=[ByTag("climbing")]).events] == [
            "climb"
        ]

    def test_store_failure_recorded(self, config):
        failing = Mock()
        failing.load_snapshot.side_effect = RuntimeError("unavailable")

        result = Orchestrator(config, store=failing).select("u1")

        assert result.success is False
        assert "Failed to load snapshot: unavailable" in result.errors[0]

    def test_ignore_unknown_from_config(self, store):
        config = Config(seed_path="x", ignore_unknown_criteria=True)

        result = Orchestrator(config, store=store).select("u1", criteria=[object()])

        assert len(result.events) == 2

    def test_unknown_criterion_fails_closed_by_default(self, orchestrator):
        assert orchestrator.select("u1", criteria=[object()]).events == []

    def test_catalog_size_warning(self, store, caplog):
        config = Config(seed_path="x", catalog_size_warning=2)

        with caplog.at_level(logging.WARNING):
            Orchestrator(config, store=store).select("u1")

        assert "Catalog has 3 events" in caplog.text


class TestSelectionResult:

    def test_summary(self, sample_event):
        result = SelectionResult(viewer_id="u1", events=[sample_event], catalog_size=5)

        assert result.summary == "Selected 1 of 5 events for u1"
        assert result.success is True


class TestCreateStore:

    def test_memory_from_seed(self, tmp_path):
        path = tmp_path / "seed.yaml"
        path.write_text("events: []\n")

        store = create_store(Config(seed_path=str(path)))

        assert isinstance(store, MemoryStore)

    def test_memory_without_seed(self):
        assert isinstance(create_store(Config()), MemoryStore)

    def test_firestore(self):
        store = create_store(Config(store="firestore"))

        assert isinstance(store, FirestoreStore)

    def test_unknown_backend_falls_back(self):
        assert isinstance(create_store(Config(store="postgres")), MemoryStore)
