"""
Utility functions and structures shared by the route finders.
"""

import gc
import logging
import math
import os
import time
from dataclasses import dataclass, field
from heapq import heappop, heappush
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

import psutil

from ..enums import Metric
from ..models import RoadEdge
from .types import MetricLike, VisitHook

# Configure logging
logger = logging.getLogger(__name__)

# Constants
MEMORY_CHECK_INTERVAL = 0.1  # Seconds between RSS samples


def coerce_metric(metric: MetricLike) -> Metric:
    """Accept a ``Metric`` or its string value."""
    if isinstance(metric, Metric):
        return metric
    try:
        return Metric(str(metric).lower())
    except ValueError:
        raise ValueError(
            f"Unknown metric '{metric}'. Must be one of: "
            f"{', '.join(m.value for m in Metric)}"
        ) from None


def notify_visit(on_visit: Optional[VisitHook], location: Any) -> None:
    """Invoke the visitation hook, if any, ignoring its return value."""
    if on_visit is not None:
        on_visit(location)


class PriorityQueue:
    """
    Min-priority frontier with lazy deletion.

    Items are pushed freely, so one location may sit in the queue several
    times with different priorities. Callers drop stale pops by checking
    their settled set. Equal priorities pop in insertion order, so items
    only need to be hashable, not orderable.
    """

    def __init__(self):
        self._queue: List[Tuple[float, int, Any]] = []
        self._counter = 0  # Unique counter to break ties

    def push(self, item: Any, priority: float) -> None:
        heappush(self._queue, (priority, self._counter, item))
        self._counter += 1

    def pop(self) -> Optional[Tuple[float, Any]]:
        """Remove and return ``(priority, item)`` with the lowest priority."""
        if not self._queue:
            return None
        priority, _, item = heappop(self._queue)
        return priority, item

    def empty(self) -> bool:
        """Return True if the queue is empty."""
        return not self._queue

    def __len__(self) -> int:
        """Return the number of entries, stale ones included."""
        return len(self._queue)


@dataclass
class SearchState:
    """
    Scoring and predecessor tables owned by a single search invocation.

    A location without a score entry has not been reached yet and counts as
    +infinity. Nothing here is shared with the graph, so concurrent searches
    on the same graph never see each other's state.
    """

    scores: Dict[Any, float] = field(default_factory=dict)
    predecessors: Dict[Any, Any] = field(default_factory=dict)
    via_edge: Dict[Any, RoadEdge] = field(default_factory=dict)
    settled: Set[Any] = field(default_factory=set)

    def score(self, location: Any) -> float:
        return self.scores.get(location, math.inf)

    def seed(self, location: Any) -> None:
        self.scores[location] = 0.0

    def relax(self, location: Any, candidate: float, parent: Any, edge: RoadEdge) -> bool:
        """Record ``candidate`` if strictly better than the best known score."""
        if candidate < self.score(location):
            self.scores[location] = candidate
            self.predecessors[location] = parent
            self.via_edge[location] = edge
            return True
        return False


def reconstruct_path(start: Any, goal: Any, predecessors: Mapping[Any, Any]) -> Optional[List[Any]]:
    """
    Walk the predecessor chain back from ``goal`` to ``start``.

    Args:
        start: Search start
        goal: Search goal
        predecessors: Map from each reached location to the location it was reached from

    Returns:
        Locations from start to goal inclusive, ``[start]`` when start equals goal,
        or None when the chain is empty or does not lead back to start.
    """
    if start == goal:
        return [start]
    if not predecessors:
        return None

    path = [goal]
    seen = {goal}
    current = goal
    while current != start:
        current = predecessors.get(current)
        if current is None or current in seen:
            logger.error(f"Broken predecessor chain from {goal} towards {start} at {path[-1]}")
            return None
        seen.add(current)
        path.append(current)

    path.reverse()
    return path


def collect_edges(path: List[Any], via_edge: Mapping[Any, RoadEdge]) -> List[RoadEdge]:
    """Road segments used to reach each location of ``path`` after the first."""
    return [via_edge[location] for location in path[1:]]


class MemoryManager:
    """Memory management utilities for route finders."""

    def __init__(self, max_memory_mb: Optional[float] = None):
        """Initialize memory manager."""
        self.max_memory = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._last_check = time.monotonic()

    def check_memory(self) -> None:
        """Check if memory growth exceeds the limit.

        Raises:
            MemoryError: If growth since the last reset stays above the limit
                after a forced garbage collection
        """
        if not self.max_memory:
            return

        current_time = time.monotonic()
        if current_time - self._last_check < MEMORY_CHECK_INTERVAL:
            return
        self._last_check = current_time

        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)

        if current - self.start_memory > self.max_memory:
            # Try to reclaim memory
            gc.collect()
            current = get_memory_usage()

            if current - self.start_memory > self.max_memory:
                raise MemoryError(
                    f"Memory usage grew by {(current - self.start_memory)/1024/1024:.1f}MB, "
                    f"exceeding limit of {self.max_memory/1024/1024:.1f}MB"
                )

    @property
    def peak_memory(self) -> int:
        """Peak memory usage in bytes."""
        return self._peak_memory

    def reset(self) -> None:
        """Start a new measurement window."""
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._last_check = time.monotonic()


def get_memory_usage() -> int:
    """Get current memory usage in bytes."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss
