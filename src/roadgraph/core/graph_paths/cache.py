"""
Caching of route finding results.

A ``RouteCache`` belongs to one ``RoadGraph`` and stores found routes keyed by
the algorithm, endpoints and metric that produced them. The graph clears it
whenever a vertex or edge is added, so a cached route is always a route of
the current graph.

Example:
    >>> key = RouteCache.get_cache_key(PathType.DIJKSTRA, a, c, Metric.TIME)
    >>> if (route := cache.get(key)) is None:
    ...     route = finder.find_path(a, c, metric=Metric.TIME)
    ...     cache.put(key, route)
"""

from dataclasses import replace
from typing import Any, Dict, Hashable, Optional

from ...infrastructure.cache import LRUCache
from ..enums import Metric
from .models import Route
from .types import PathType


class RouteCache:
    """
    LRU + TTL cache of found routes.

    Only found routes are cached; "no path" outcomes are always recomputed.
    Hits are returned as copies flagged with ``metrics.cache_hit``.
    """

    def __init__(self, max_size: int, ttl: float):
        self.cache = LRUCache[Route](max_size=max_size, ttl=ttl)

    @property
    def enabled(self) -> bool:
        return self.cache.enabled

    @staticmethod
    def get_cache_key(
        path_type: PathType, start: Any, goal: Any, metric: Optional[Metric] = None
    ) -> Hashable:
        """Cache key for a search; breadth-first keys ignore the metric."""
        if path_type is PathType.BREADTH_FIRST:
            metric = None
        return (path_type, start, goal, metric)

    def get(self, key: Hashable) -> Optional[Route]:
        route = self.cache.get(key)
        if route is None:
            return None
        metrics = replace(route.metrics, cache_hit=True) if route.metrics else None
        return replace(route, locations=list(route.locations), edges=list(route.edges), metrics=metrics)

    def put(self, key: Hashable, route: Route) -> None:
        self.cache.put(key, route)

    def clear(self) -> None:
        self.cache.clear()

    def get_metrics(self) -> Dict[str, float]:
        return self.cache.get_metrics()
