"""Route finding functionality."""

from typing import Any, Optional

from ..enums import Metric
from .algorithms import AStarFinder, BreadthFirstFinder, DijkstraFinder
from .base import PathFinder
from .cache import RouteCache
from .models import PerformanceMetrics, Route, RouteValidationError
from .types import Heuristic, MetricLike, PathType, VisitHook
from .utils import reconstruct_path

__all__ = [
    "RouteFinding",
    "PathFinder",
    "PathType",
    "Route",
    "RouteCache",
    "RouteValidationError",
    "PerformanceMetrics",
    "VisitHook",
    "Heuristic",
    "reconstruct_path",
]

_FINDERS = {
    PathType.BREADTH_FIRST: BreadthFirstFinder,
    PathType.DIJKSTRA: DijkstraFinder,
    PathType.A_STAR: AStarFinder,
}


class RouteFinding:
    """Static interface for route finding operations."""

    @classmethod
    def get_finder(cls, path_type: PathType, graph: Any, **kwargs) -> PathFinder:
        """Instantiate the finder for ``path_type``.

        Keyword arguments go to the finder constructor; ``heuristic_speed_kph``
        and ``heuristic`` only apply to A*.
        """
        if path_type not in _FINDERS:
            raise ValueError(
                f"Unknown path type '{path_type}'. "
                f"Must be one of: {', '.join(p.value for p in _FINDERS)}"
            )
        if path_type is not PathType.A_STAR:
            kwargs.pop("heuristic_speed_kph", None)
            kwargs.pop("heuristic", None)
        return _FINDERS[path_type](graph, **kwargs)

    @classmethod
    def breadth_first_search(
        cls, graph: Any, start: Any, goal: Any, on_visit: Optional[VisitHook] = None
    ) -> Optional[Route]:
        """Find the route with the fewest road segments."""
        return BreadthFirstFinder(graph).find_path(start, goal, on_visit)

    @classmethod
    def dijkstra(
        cls,
        graph: Any,
        start: Any,
        goal: Any,
        on_visit: Optional[VisitHook] = None,
        metric: MetricLike = Metric.LENGTH,
    ) -> Optional[Route]:
        """Find the shortest or quickest route with Dijkstra's algorithm."""
        return DijkstraFinder(graph).find_path(start, goal, on_visit, metric)

    @classmethod
    def a_star_search(
        cls,
        graph: Any,
        start: Any,
        goal: Any,
        on_visit: Optional[VisitHook] = None,
        metric: MetricLike = Metric.LENGTH,
        **kwargs,
    ) -> Optional[Route]:
        """Find the shortest or quickest route with A* search."""
        return AStarFinder(graph, **kwargs).find_path(start, goal, on_visit, metric)

    @classmethod
    def find_route(
        cls,
        graph: Any,
        start: Any,
        goal: Any,
        path_type: PathType = PathType.DIJKSTRA,
        on_visit: Optional[VisitHook] = None,
        metric: MetricLike = Metric.LENGTH,
        **kwargs,
    ) -> Optional[Route]:
        """Generic route finding interface."""
        finder = cls.get_finder(path_type, graph, **kwargs)
        return finder.find_path(start, goal, on_visit, metric)
