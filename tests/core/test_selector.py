"""Unit tests for event selection.

Pure function tests - fast, no mocks needed.
"""

import pytest

from event_selector.core.attendance import AttendanceLedger
from event_selector.core.event import AttendanceRecord, FollowEdge, VisibilityClass
from event_selector.core.filters import (
    Attending,
    ByCost,
    ByDateRange,
    ByHostedBy,
    ByLocation,
    ByTag,
)
from event_selector.core.geo import distance_to_event
from event_selector.core.selector import (
    partition_criteria,
    resolve_base_set,
    select_events,
    select_from_snapshot,
)
from event_selector.core.snapshot import Snapshot
from event_selector.core.social_graph import SocialGraph
from event_selector.core.visibility import is_visible


def ids(events):
    return [e.id for e in events]


@pytest.fixture
def catalog(make_event):
    """Mixed catalog hosted by u1, u2 and u3."""
    return [
        make_event(id="pub-u1", host_id="u1", tags="hiking,outdoors", estimated_cost=0.0),
        make_event(id="fol-u1", host_id="u1", visibility_class=VisibilityClass.FOLLOWER_ONLY,
                   tags="cooking,food", estimated_cost=15.0),
        make_event(id="fri-u1", host_id="u1", visibility_class=VisibilityClass.FRIEND_ONLY,
                   estimated_cost=100.0),
        make_event(id="pub-u2", host_id="u2", tags="music"),
        make_event(id="fri-u3", host_id="u3", visibility_class=VisibilityClass.FRIEND_ONLY),
    ]


@pytest.fixture
def graph():
    """u2 follows u1 (one way); u3 and u4 are mutual."""
    return SocialGraph.from_edges([
        FollowEdge("u2", "u1"),
        FollowEdge("u3", "u4"),
        FollowEdge("u4", "u3"),
    ])


@pytest.fixture
def attendance():
    return AttendanceLedger.from_records([
        AttendanceRecord("pub-u2", "u4"),
        AttendanceRecord("pub-u1", "u4"),
    ])


class TestPartitionCriteria:

    def test_splits_and_keeps_order(self):
        criteria = [ByTag("a"), ByHostedBy("u1"), ByCost(5), Attending("u2")]

        identity, predicates = partition_criteria(criteria)

        assert identity == [ByHostedBy("u1"), Attending("u2")]
        assert predicates == [ByTag("a"), ByCost(5)]

    def test_unknown_objects_are_predicates(self):
        marker = object()

        identity, predicates = partition_criteria([marker])

        assert identity == []
        assert predicates == [marker]


class TestResolveBaseSet:

    def test_no_identity_returns_catalog(self, catalog, attendance):
        assert resolve_base_set(catalog, [], attendance) == catalog

    def test_no_identity_keeps_duplicates(self, catalog, attendance):
        doubled = catalog + catalog[:1]

        assert len(resolve_base_set(doubled, [], attendance)) == len(catalog) + 1

    def test_union_of_identity_criteria(self, catalog, attendance):
        base = resolve_base_set(
            catalog, [ByHostedBy("u3"), Attending("u4")], attendance,
        )

        assert ids(base) == ["pub-u1", "pub-u2", "fri-u3"]

    def test_union_deduplicates_by_id(self, catalog, make_event):
        ledger = AttendanceLedger.from_records([AttendanceRecord("pub-u1", "u1")])
        doubled = catalog + [make_event(id="pub-u1", host_id="u1")]

        base = resolve_base_set(doubled, [ByHostedBy("u1"), Attending("u1")], ledger)

        assert ids(base) == ["pub-u1", "fol-u1", "fri-u1"]


class TestSelectEvents:

    def test_empty_catalog(self, graph, attendance):
        assert select_events([], "u1", [], attendance, graph) == []

    def test_no_criteria_returns_visible_catalog(self, catalog, graph, attendance):
        result = select_events(catalog, "u2", [], attendance, graph)

        # u2 follows u1 but u1 does not follow back
        assert ids(result) == ["pub-u1", "fol-u1", "pub-u2"]

    def test_host_sees_everything_they_host(self, catalog, attendance):
        result = select_events(catalog, "u1", [], attendance, SocialGraph())

        assert ids(result) == ["pub-u1", "fol-u1", "fri-u1", "pub-u2"]

    def test_unknown_viewer_sees_public_only(self, catalog, graph, attendance):
        result = select_events(catalog, "ghost", [], attendance, graph)

        assert ids(result) == ["pub-u1", "pub-u2"]

    def test_identity_results_still_gated_by_visibility(self, catalog, graph, attendance):
        result = select_events(catalog, "u2", [ByHostedBy("u1")], attendance, graph)

        assert ids(result) == ["pub-u1", "fol-u1"]

    def test_identity_and_predicates_combined(self, catalog, graph, attendance):
        result = select_events(
            catalog, "u4", [ByHostedBy("u3"), Attending("u4"), ByTag("music")],
            attendance, graph,
        )

        assert ids(result) == ["pub-u2"]

    def test_unknown_criterion_fails_closed(self, catalog, graph, attendance):
        assert select_events(catalog, "u1", [object()], attendance, graph) == []

    def test_unknown_criterion_ignored_on_request(self, catalog, graph, attendance):
        result = select_events(
            catalog, "u1", [object()], attendance, graph, ignore_unknown=True,
        )

        assert len(result) == 4


class TestSelectionProperties:
    """Properties that hold for any input."""

    CRITERIA_SETS = [
        [],
        [ByTag("hiking")],
        [ByCost(20), ByTag("cooking")],
        [ByHostedBy("u1"), Attending("u4")],
        [Attending("u4"), ByCost(50)],
    ]

    @pytest.mark.parametrize("viewer", ["u1", "u2", "u3", "u4", "ghost"])
    @pytest.mark.parametrize("criteria", CRITERIA_SETS)
    def test_idempotent_subset_and_sound(self, catalog, graph, attendance, viewer, criteria):
        first = select_events(catalog, viewer, criteria, attendance, graph)
        second = select_events(catalog, viewer, criteria, attendance, graph)

        assert first == second
        assert set(ids(first)) <= set(ids(catalog))
        assert all(is_visible(e, viewer, graph) for e in first)

    @pytest.mark.parametrize("visibility_class", list(VisibilityClass))
    def test_host_self_visibility(self, make_event, visibility_class):
        event = make_event(host_id="h", visibility_class=visibility_class)
        graph = SocialGraph.from_edges([FollowEdge("x", "y")])

        result = select_events([event], "h", [], AttendanceLedger(), graph)

        assert result == [event]

    def test_and_composition(self, catalog, graph, attendance):
        c1, c2 = ByCost(20), ByTag("hiking")

        both = set(ids(select_events(catalog, "u2", [c1, c2], attendance, graph)))
        only1 = set(ids(select_events(catalog, "u2", [c1], attendance, graph)))
        only2 = set(ids(select_events(catalog, "u2", [c2], attendance, graph)))

        assert both <= only1 & only2

    def test_or_composition_of_identity(self, catalog, graph, attendance):
        hosted = set(ids(select_events(catalog, "u4", [ByHostedBy("u1")], attendance, graph)))
        attending = set(ids(select_events(catalog, "u4", [Attending("u4")], attendance, graph)))
        union = ids(select_events(
            catalog, "u4", [ByHostedBy("u1"), Attending("u4")], attendance, graph,
        ))

        assert set(union) <= hosted | attending

    def test_hosted_and_attended_event_appears_once(self, catalog, graph):
        ledger = AttendanceLedger.from_records([AttendanceRecord("pub-u1", "u1")])

        result = select_events(
            catalog, "u1", [ByHostedBy("u1"), Attending("u1")], ledger, graph,
        )

        assert ids(result).count("pub-u1") == 1


class TestScenarios:

    def test_tag_filter(self, make_event):
        hiking = make_event(id="hike", tags="hiking,outdoors")
        cooking = make_event(id="cook", tags="cooking,food")
        args = (AttendanceLedger(), SocialGraph())

        lower = select_events([hiking, cooking], "v", [ByTag("hiking")], *args)
        upper = select_events([hiking, cooking], "v", [ByTag("HIKING")], *args)

        assert ids(lower) == ["hike"]
        assert upper == lower

    def test_mutual_friend_visibility(self, make_event):
        event = make_event(id="party", host_id="u1", visibility_class=VisibilityClass.FRIEND_ONLY)
        one_way = Snapshot.build([event], edges=[FollowEdge("u2", "u1")])

        assert select_from_snapshot(one_way, "u2", []) == []

        mutual = Snapshot.build(
            [event], edges=[FollowEdge("u2", "u1"), FollowEdge("u1", "u2")],
        )

        assert select_from_snapshot(mutual, "u2", []) == [event]

    def test_location_filter(self, make_event):
        # Reference point in Waterloo; one event ~1 km north, one in Buenos Aires
        ref_lat, ref_lon = 43.4723, -80.5449
        near = make_event(id="near", latitude=43.4813, longitude=-80.5449)
        far = make_event(id="far", latitude=-34.6037, longitude=-58.3816)
        args = (AttendanceLedger(), SocialGraph())

        assert distance_to_event(near, ref_lat, ref_lon) == pytest.approx(1.0, abs=0.05)
        assert distance_to_event(far, ref_lat, ref_lon) == pytest.approx(8970, rel=0.01)

        small = select_events([near, far], "v", [ByLocation(ref_lat, ref_lon, 10)], *args)
        short = select_events([near, far], "v", [ByLocation(ref_lat, ref_lon, 8800)], *args)
        large = select_events([near, far], "v", [ByLocation(ref_lat, ref_lon, 9100)], *args)

        assert ids(small) == ["near"]
        assert ids(short) == ["near"]
        assert ids(large) == ["near", "far"]

    def test_location_filter_near_antipode(self, make_event):
        event = make_event(id="far-north", latitude=84.9, longitude=1.3)

        result = select_events(
            [event], "v", [ByLocation(-84.9, -178.7, 100)],
            AttendanceLedger(), SocialGraph(),
        )

        assert result == []

    def test_cost_and_date_combined(self, make_event):
        free = make_event(id="free", estimated_cost=0.0, date="2025-10-01")
        cheap = make_event(id="cheap", estimated_cost=15.0, date="2025-10-02")
        pricey = make_event(id="pricey", estimated_cost=100.0, date="2025-10-03")

        result = select_events(
            [free, cheap, pricey],
            "v",
            [ByCost(20), ByDateRange("2025-10-01", "2025-10-02")],
            AttendanceLedger(),
            SocialGraph(),
        )

        assert ids(result) == ["free", "cheap"]
