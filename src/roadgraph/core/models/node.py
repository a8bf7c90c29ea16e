"""
Intersection model for the road network.

An ``Intersection`` is a vertex of the road graph. It owns the road segments
leaving it, in insertion order, and a pair of optional per-node scores
(distance and time to a search start) with relax-only setters.

The route finders in ``roadgraph.core.graph_paths`` keep their scores in
per-search tables and never write to these fields, so one graph can serve
any number of concurrent searches. The node-local scores remain available to
callers that do their own bookkeeping.
"""

import math
from typing import Any, List, Optional, Tuple

from ..enums import Metric
from .edge import RoadEdge


class Intersection:
    """
    Graph vertex representing a point where roads meet.

    Attributes:
        location (Coordinate): Where the intersection is
        distance_to_start (float): Relaxed distance score, +inf when unset
        time_to_start (float): Relaxed time score, +inf when unset
    """

    __slots__ = ("location", "_outgoing", "distance_to_start", "time_to_start")

    def __init__(self, location: Any):
        self.location = location
        self._outgoing: List[RoadEdge] = []
        self.distance_to_start = math.inf
        self.time_to_start = math.inf

    @property
    def outgoing(self) -> Tuple[RoadEdge, ...]:
        """Road segments leaving this intersection, in insertion order."""
        return tuple(self._outgoing)

    def add_edge(
        self, end: Any, name: Optional[str], road_type: Optional[str], length: float
    ) -> bool:
        """
        Create a road segment from this intersection to ``end``.

        Parallel segments are kept; nothing is deduplicated.

        Returns:
            bool: True when a segment was appended

        Raises:
            InvalidEdgeError: If ``length`` is invalid
        """
        return self.append_edge(RoadEdge(self.location, end, name, road_type, length))

    def append_edge(self, edge: RoadEdge) -> bool:
        """Append an already built road segment leaving this intersection."""
        if edge.start != self.location:
            raise ValueError(f"Road from {edge.start} cannot leave {self.location}")
        self._outgoing.append(edge)
        return True

    def relax_distance(self, candidate: float) -> bool:
        """Lower ``distance_to_start`` to ``candidate`` if strictly smaller."""
        if candidate < self.distance_to_start:
            self.distance_to_start = candidate
            return True
        return False

    def relax_time(self, candidate: float) -> bool:
        """Lower ``time_to_start`` to ``candidate`` if strictly smaller."""
        if candidate < self.time_to_start:
            self.time_to_start = candidate
            return True
        return False

    def relax(self, metric: Metric, candidate: float) -> bool:
        if metric is Metric.LENGTH:
            return self.relax_distance(candidate)
        return self.relax_time(candidate)

    def score(self, metric: Metric) -> float:
        """Score under ``metric``; use as a sort key to order intersections."""
        if metric is Metric.LENGTH:
            return self.distance_to_start
        return self.time_to_start

    def reset_scores(self) -> None:
        """Restore both scores to +infinity."""
        self.distance_to_start = math.inf
        self.time_to_start = math.inf

    @property
    def degree(self) -> int:
        """Number of road segments leaving this intersection."""
        return len(self._outgoing)

    def __repr__(self) -> str:
        return f"Intersection({self.location!r}, roads={len(self._outgoing)})"

    def __str__(self) -> str:
        return (
            f"distanceToStart {self.distance_to_start}; "
            f"timeToStart {self.time_to_start}; {self.location}"
        )
