"""
Data models for route finding.

This module provides the data structures returned by the route finders:
- Route: A found route with its segments, totals and search metrics
- PerformanceMetrics: Container for search performance metrics
- RouteValidationError: Exception for route validation failures

A search returns ``Optional[Route]``: ``None`` means no route exists (or the
endpoints were unusable), so "no path" can never be mistaken for a route.

Example:
    >>> route = graph.dijkstra(a, c, metric=Metric.TIME)
    >>> if route is not None:
    ...     print(route.locations, route.total_time)
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Union

from ..enums import Metric
from ..models import RoadEdge

if TYPE_CHECKING:
    from ..graph import RoadGraph


class RouteValidationError(Exception):
    """
    Raised when a route fails validation checks.

    This exception indicates issues such as:
    - Discontinuities in the route (segments not joined end to start)
    - Segment count not matching the number of locations
    - Segments that do not exist in the graph
    - Stored cost disagreeing with the segment weights
    """


@dataclass
class PerformanceMetrics:
    """
    Container for route finding performance metrics.

    Attributes:
        operation: Name of the search operation
        start_time: Operation start timestamp
        end_time: Operation end timestamp (0.0 if not completed)
        nodes_explored: Number of intersections finalised during search
        max_memory_used: Peak process memory during the search (bytes)
        cache_hit: Whether the route came from the route cache

    Example:
        >>> metrics = PerformanceMetrics(operation="dijkstra", start_time=time())
        >>> # ... perform search ...
        >>> metrics.end_time = time()
        >>> print(f"Search took {metrics.duration:.2f}ms")
    """

    operation: str
    start_time: float
    end_time: float = 0.0
    nodes_explored: int = 0
    max_memory_used: Optional[int] = None
    cache_hit: bool = False

    def __post_init__(self):
        """Validate metrics after initialization."""
        if not isinstance(self.operation, str) or not self.operation.strip():
            raise ValueError("operation must be a non-empty string")
        if self.end_time and self.end_time < self.start_time:
            raise ValueError("end_time cannot be before start_time")
        if self.nodes_explored < 0:
            raise ValueError("nodes_explored cannot be negative")

    @property
    def duration(self) -> float:
        """Operation duration in milliseconds."""
        return (self.end_time - self.start_time) * 1000 if self.end_time else 0.0

    def to_dict(self) -> Dict[str, Union[str, float, int, bool, None]]:
        return {
            "operation": self.operation,
            "duration_ms": self.duration,
            "nodes_explored": self.nodes_explored,
            "max_memory_used": self.max_memory_used,
            "cache_hit": self.cache_hit,
        }


@dataclass
class Route:
    """
    A route found through the road graph.

    The route reads as a sequence of locations from start to goal inclusive;
    ``edges`` holds the road segment taken between each consecutive pair.

    Attributes:
        locations: Ordered locations, start first and goal last
        edges: Road segments travelled, ``len(locations) - 1`` of them
        metric: Metric the route minimises, ``None`` for breadth-first routes
        metrics: Performance metrics of the search that produced the route

    Example:
        >>> route = graph.breadth_first_search(a, c)
        >>> list(route)
        [PlanarPoint(x=0, y=0), PlanarPoint(x=0, y=3), PlanarPoint(x=4, y=3)]
        >>> route.hops
        2
    """

    locations: List[Any]
    edges: List[RoadEdge] = field(default_factory=list)
    metric: Optional[Metric] = None
    metrics: Optional[PerformanceMetrics] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate initialization parameters."""
        if not isinstance(self.locations, list) or not self.locations:
            raise TypeError("locations must be a non-empty list")
        if not all(isinstance(edge, RoadEdge) for edge in self.edges):
            raise TypeError("edges must contain only RoadEdge objects")
        if len(self.edges) != len(self.locations) - 1:
            raise RouteValidationError(
                f"Route has {len(self.locations)} locations but {len(self.edges)} segments"
            )

    def __len__(self) -> int:
        """Return the number of locations on the route."""
        return len(self.locations)

    def __getitem__(self, index: int) -> Any:
        return self.locations[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.locations)

    @property
    def start(self) -> Any:
        return self.locations[0]

    @property
    def goal(self) -> Any:
        return self.locations[-1]

    @property
    def hops(self) -> int:
        """Number of road segments travelled."""
        return len(self.edges)

    @property
    def total_length(self) -> float:
        """Route length in km."""
        return sum(edge.length for edge in self.edges)

    @property
    def total_time(self) -> float:
        """Estimated travel time in minutes."""
        return sum(edge.time for edge in self.edges)

    @property
    def cost(self) -> float:
        """Total under the search metric; segment count for breadth-first routes."""
        if self.metric is None:
            return float(self.hops)
        return sum(self.metric.edge_cost(edge) for edge in self.edges)

    def validate(self, graph: "RoadGraph") -> None:
        """
        Validate the route against ``graph``.

        Performs these checks:
        - Each segment starts where the previous location is and ends at the next
        - Every location is a vertex of the graph
        - Every segment is one of the graph's road segments

        Raises:
            RouteValidationError: If any validation check fails
        """
        for location in self.locations:
            if not graph.has_vertex(location):
                raise RouteValidationError(f"Location {location} not in graph")

        for i, edge in enumerate(self.edges):
            if edge.start != self.locations[i] or edge.end != self.locations[i + 1]:
                raise RouteValidationError(
                    f"Route discontinuity at segment {i}: "
                    f"{edge.start} -> {edge.end} does not join "
                    f"{self.locations[i]} and {self.locations[i + 1]}"
                )
            if edge not in graph.get_outgoing(edge.start):
                raise RouteValidationError(
                    f"Road from {edge.start} to {edge.end} not found in graph"
                )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "locations": [str(location) for location in self.locations],
            "metric": self.metric.value if self.metric else None,
            "hops": self.hops,
            "total_length_km": self.total_length,
            "total_time_min": self.total_time,
        }
