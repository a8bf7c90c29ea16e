from abc import ABC, abstractmethod
from contextlib import contextmanager
from time import time
import logging
from typing import Any, Generator, List, Optional

from ..enums import Metric
from .models import PerformanceMetrics, Route
from .types import MetricLike, VisitHook
from .utils import MemoryManager, SearchState, collect_edges, reconstruct_path

logger = logging.getLogger(__name__)


class PathFinder(ABC):
    """Abstract base class for route finding algorithms."""

    operation = "search"

    def __init__(self, graph: Any, max_memory_mb: Optional[float] = None):
        """Initialize finder with graph and optional memory limit."""
        self.graph = graph
        self.memory_manager = MemoryManager(max_memory_mb)

    @abstractmethod
    def find_path(
        self,
        start: Any,
        goal: Any,
        on_visit: Optional[VisitHook] = None,
        metric: MetricLike = Metric.LENGTH,
    ) -> Optional[Route]:
        """Find a route from ``start`` to ``goal``; None when there is none."""
        pass

    @contextmanager
    def _search_context(self) -> Generator[PerformanceMetrics, None, None]:
        """Track timing and memory for one search."""
        self.memory_manager.reset()
        metrics = PerformanceMetrics(operation=self.operation, start_time=time())
        try:
            yield metrics
        finally:
            metrics.end_time = time()
            metrics.max_memory_used = self.memory_manager.peak_memory
            logger.debug(f"{self.operation} finished: {metrics.to_dict()}")

    def validate_endpoints(self, start: Any, goal: Any) -> bool:
        """Check that both endpoints are usable; logs and returns False if not."""
        if start is None or goal is None:
            logger.warning(f"{self.operation}: Start or goal node is null! No path exists.")
            return False
        if not self.graph.has_vertex(start):
            logger.warning(f"{self.operation}: Start {start} is not in the graph")
            return False
        if not self.graph.has_vertex(goal):
            logger.warning(f"{self.operation}: Goal {goal} is not in the graph")
            return False
        return True

    def build_route(
        self,
        start: Any,
        goal: Any,
        state: SearchState,
        metric: Optional[Metric],
        metrics: PerformanceMetrics,
    ) -> Optional[Route]:
        """Turn the search tables into a Route, or None if the chain is broken."""
        path: Optional[List[Any]] = reconstruct_path(start, goal, state.predecessors)
        if path is None:
            return None
        return Route(
            locations=path,
            edges=collect_edges(path, state.via_edge),
            metric=metric,
            metrics=metrics,
        )
