"""Social graph queries - Pure data structure.

Read-only view over follow edges. Edge mutation belongs to the record
store in the shell layer; this module only answers questions.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from event_selector.core.event import FollowEdge


@dataclass(frozen=True)
class SocialGraph:
    """Immutable set of follow edges with indexed lookups.

    Duplicate edges collapse. Unknown user IDs follow nobody and are
    followed by nobody. The lookup indexes are derived from edges on
    construction.

    Attributes:
        edges: All follow edges in the graph
    """
    edges: frozenset[FollowEdge] = frozenset()
    _following: dict[str, frozenset[str]] = field(
        init=False, repr=False, compare=False,
    )
    _followers: dict[str, frozenset[str]] = field(
        init=False, repr=False, compare=False,
    )

    def __post_init__(self) -> None:
        edges = frozenset(self.edges)

        following: dict[str, set[str]] = defaultdict(set)
        followers: dict[str, set[str]] = defaultdict(set)
        for edge in edges:
            following[edge.follower_id].add(edge.followee_id)
            followers[edge.followee_id].add(edge.follower_id)

        object.__setattr__(self, "edges", edges)
        object.__setattr__(
            self, "_following", {k: frozenset(v) for k, v in following.items()}
        )
        object.__setattr__(
            self, "_followers", {k: frozenset(v) for k, v in followers.items()}
        )

    @classmethod
    def from_edges(cls, edges: Iterable[FollowEdge]) -> "SocialGraph":
        """Build a graph from an edge collection."""
        return cls(edges=frozenset(edges))

    def follows(self, follower_id: str, followee_id: str) -> bool:
        """True iff the edge follower_id -> followee_id exists."""
        return followee_id in self._following.get(follower_id, frozenset())

    def are_mutual(self, a: str, b: str) -> bool:
        """True iff a follows b and b follows a."""
        return self.follows(a, b) and self.follows(b, a)

    def followers_of(self, user_id: str) -> frozenset[str]:
        """All users following user_id."""
        return self._followers.get(user_id, frozenset())

    def following_of(self, user_id: str) -> frozenset[str]:
        """All users that user_id follows."""
        return self._following.get(user_id, frozenset())

    def __len__(self) -> int:
        return len(self.edges)
