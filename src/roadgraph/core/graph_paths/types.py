"""Type definitions for route finding."""

from enum import Enum
from typing import Any, Callable, Union

from ..enums import Metric


class PathType(Enum):
    """Enumeration of route finding strategies."""

    BREADTH_FIRST = "breadth_first"  # Fewest road segments, ignores weights
    DIJKSTRA = "dijkstra"  # Exact, non-negative weights only
    A_STAR = "a_star"  # Exact with an admissible, consistent heuristic


# Observer called once per intersection a search finalises; return value ignored
VisitHook = Callable[[Any], None]

# Remaining-cost estimate: (location, goal) -> cost under the search metric
Heuristic = Callable[[Any, Any], float]

# Metric arguments may be given as the enum or its value ("length"/"time")
MetricLike = Union[Metric, str]
