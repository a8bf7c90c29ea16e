"""
Road network graph with route search entry points.

This module provides the RoadGraph class: a directed graph whose vertices are
intersections keyed by location and whose edges are typed road segments. An
external map loader populates it through ``add_vertex`` and ``add_edge``; a
routing application then asks it for routes by breadth-first search,
Dijkstra's algorithm or A*.

Graph mutation is serialised by a re-entrant lock. Searches keep all of their
working state in per-call tables and read adjacency through locked snapshots,
so any number of searches may run concurrently on one graph.
"""

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Set, Tuple, Union

from ..config import RoutingConfig
from .enums import Metric
from .exceptions import UnknownVertexError
from .graph_paths import RouteFinding
from .graph_paths.cache import RouteCache
from .graph_paths.models import Route
from .graph_paths.types import Heuristic, MetricLike, PathType, VisitHook
from .graph_paths.utils import coerce_metric, reconstruct_path
from .models import Intersection, RoadEdge

logger = logging.getLogger(__name__)

# (start, end, name, road_type, length) as produced by map loaders
EdgeSpec = Tuple[Any, Any, Optional[str], Optional[str], float]


@dataclass
class GraphState:
    """Encapsulates the state of a road graph."""

    intersections: Dict[Any, Intersection] = field(default_factory=dict)
    edge_count: int = 0
    generation: int = 0  # Bumped on every mutation; guards the route cache


class RoadGraph:
    """
    Directed road network keyed by location.

    Attributes:
        config (RoutingConfig): Routing settings used by the search entry points
        _state (GraphState): Internal state of the graph
        _state_lock (RLock): Lock for thread-safe state access
        _route_cache (RouteCache): Cache for found routes, disabled by default
    """

    def __init__(self, config: Optional[RoutingConfig] = None):
        """
        Create an empty road graph.

        Args:
            config (Optional[RoutingConfig]): Routing settings; defaults apply when omitted
        """
        self.config = config or RoutingConfig()
        self._state = GraphState()
        self._state_lock = RLock()
        self._route_cache = RouteCache(
            max_size=self.config.cache_size, ttl=self.config.cache_ttl
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def add_vertex(self, location: Any) -> bool:
        """
        Add an intersection at ``location``.

        Returns:
            bool: True if a vertex was added, False if ``location`` is None or
                already present (the graph is left unchanged)
        """
        if location is None:
            return False
        with self._state_lock:
            if location in self._state.intersections:
                return False
            self._state.intersections[location] = Intersection(location)
            self._mutated()
            return True

    def add_edge(
        self,
        from_location: Any,
        to_location: Any,
        road_name: Optional[str],
        road_type: Optional[str],
        length: float,
    ) -> None:
        """
        Add a directed road segment from ``from_location`` to ``to_location``.

        Args:
            from_location: Start of the segment; must already be a vertex
            to_location: End of the segment; must already be a vertex
            road_name: Street name
            road_type: Road type tag, matched case-insensitively
            length: Segment length in km

        Raises:
            UnknownVertexError: If either endpoint is not a vertex
            InvalidEdgeError: If ``length`` is negative or not finite,
                or ``road_type`` is not a string
        """
        with self._state_lock:
            intersection = self._endpoints(from_location, to_location)
            if intersection.add_edge(to_location, road_name, road_type, length):
                self._state.edge_count += 1
                self._mutated()

    def add_edges_batch(self, edges: Iterable[EdgeSpec]) -> None:
        """
        Add several road segments; either all of them are kept or none are.

        Every segment is checked and built before the first one is appended,
        so a bad entry leaves the graph and its intersections untouched.

        Raises:
            UnknownVertexError: If any endpoint is not a vertex
            InvalidEdgeError: If any segment has an invalid length or tag
        """
        with self._state_lock:
            pending = []
            for from_location, to_location, road_name, road_type, length in edges:
                intersection = self._endpoints(from_location, to_location)
                edge = RoadEdge(from_location, to_location, road_name, road_type, length)
                pending.append((intersection, edge))

            for intersection, edge in pending:
                intersection.append_edge(edge)
            if pending:
                self._state.edge_count += len(pending)
                self._mutated()

    def _endpoints(self, from_location: Any, to_location: Any) -> Intersection:
        """Intersection at ``from_location``, once both ends are known vertices."""
        intersection = self._state.intersections.get(from_location)
        if intersection is None:
            raise UnknownVertexError(from_location, "start")
        if to_location not in self._state.intersections:
            raise UnknownVertexError(to_location, "end")
        return intersection

    def _mutated(self) -> None:
        self._state.generation += 1
        self._route_cache.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def num_vertices(self) -> int:
        """Get the number of intersections in the graph."""
        with self._state_lock:
            return len(self._state.intersections)

    def num_edges(self) -> int:
        """Get the number of road segments in the graph."""
        with self._state_lock:
            return self._state.edge_count

    def get_vertices(self) -> Set[Any]:
        """Get the locations of all intersections."""
        with self._state_lock:
            return set(self._state.intersections)

    def has_vertex(self, location: Any) -> bool:
        """Check if ``location`` is an intersection of the graph."""
        if location is None:
            return False
        with self._state_lock:
            return location in self._state.intersections

    def get_intersection(self, location: Any) -> Optional[Intersection]:
        """Get the intersection at ``location`` if it exists."""
        with self._state_lock:
            return self._state.intersections.get(location)

    def get_outgoing(self, location: Any) -> Optional[Tuple[RoadEdge, ...]]:
        """Snapshot of the road segments leaving ``location``; None if not a vertex."""
        with self._state_lock:
            intersection = self._state.intersections.get(location)
            return intersection.outgoing if intersection is not None else None

    def get_edges(self) -> Iterator[RoadEdge]:
        """Get all road segments in the graph."""
        with self._state_lock:
            intersections = list(self._state.intersections.values())
        for intersection in intersections:
            yield from intersection.outgoing

    def reset_scores(self) -> None:
        """Reset the node-local scores of every intersection to +infinity."""
        with self._state_lock:
            for intersection in self._state.intersections.values():
                intersection.reset_scores()

    # ------------------------------------------------------------------
    # Route search
    # ------------------------------------------------------------------

    def breadth_first_search(
        self, start: Any, goal: Any, on_visit: Optional[VisitHook] = None
    ) -> Optional[Route]:
        """
        Find the route from ``start`` to ``goal`` with the fewest road segments.

        Args:
            start: Starting location
            goal: Goal location
            on_visit: Called with each location as it is expanded

        Returns:
            Optional[Route]: The route including both ends, or None if no route exists
        """
        return self._search(PathType.BREADTH_FIRST, start, goal, on_visit, None)

    bfs = breadth_first_search

    def dijkstra(
        self,
        start: Any,
        goal: Any,
        on_visit: Optional[VisitHook] = None,
        metric: MetricLike = Metric.LENGTH,
    ) -> Optional[Route]:
        """
        Find the shortest (``Metric.LENGTH``) or quickest (``Metric.TIME``) route.

        Args:
            start: Starting location
            goal: Goal location
            on_visit: Called with each location as it is settled
            metric: Cost to minimise

        Returns:
            Optional[Route]: The route including both ends, or None if no route exists
        """
        return self._search(PathType.DIJKSTRA, start, goal, on_visit, coerce_metric(metric))

    def a_star_search(
        self,
        start: Any,
        goal: Any,
        on_visit: Optional[VisitHook] = None,
        metric: MetricLike = Metric.LENGTH,
        heuristic: Optional[Heuristic] = None,
    ) -> Optional[Route]:
        """
        Find the shortest or quickest route with A* search.

        Uses the straight-line heuristic unless ``heuristic`` is given; the
        time heuristic drives at ``config.heuristic_speed_kph``.

        Args:
            start: Starting location
            goal: Goal location
            on_visit: Called with each location as it is settled
            metric: Cost to minimise
            heuristic: Optional ``(location, goal) -> cost`` estimate

        Returns:
            Optional[Route]: The route including both ends, or None if no route exists
        """
        return self._search(
            PathType.A_STAR, start, goal, on_visit, coerce_metric(metric), heuristic
        )

    @staticmethod
    def reconstruct_path(
        start: Any, goal: Any, predecessors: Mapping[Any, Any]
    ) -> Optional[list]:
        """Walk ``predecessors`` back from ``goal``; None if it never reaches ``start``."""
        return reconstruct_path(start, goal, predecessors)

    def _search(
        self,
        path_type: PathType,
        start: Any,
        goal: Any,
        on_visit: Optional[VisitHook],
        metric: Optional[Metric],
        heuristic: Optional[Heuristic] = None,
    ) -> Optional[Route]:
        # Custom heuristics and hooks bypass the cache
        use_cache = self._route_cache.enabled and on_visit is None and heuristic is None
        cache_key = RouteCache.get_cache_key(path_type, start, goal, metric)
        if use_cache:
            cached = self._route_cache.get(cache_key)
            if cached is not None:
                return cached

        with self._state_lock:
            generation = self._state.generation

        finder = RouteFinding.get_finder(
            path_type,
            self,
            max_memory_mb=self.config.max_memory_mb,
            heuristic_speed_kph=self.config.heuristic_speed_kph,
            heuristic=heuristic,
        )
        route = finder.find_path(start, goal, on_visit, metric or Metric.LENGTH)

        if use_cache and route is not None:
            with self._state_lock:
                if self._state.generation == generation:
                    self._route_cache.put(cache_key, route)
        return route

    def clear_route_cache(self) -> None:
        """Clear the route cache."""
        self._route_cache.clear()

    def get_route_cache_stats(self) -> Dict[str, Union[int, float]]:
        """Get statistics about the route cache."""
        return self._route_cache.get_metrics()

    def __repr__(self) -> str:
        return f"RoadGraph(vertices={self.num_vertices()}, edges={self.num_edges()})"
