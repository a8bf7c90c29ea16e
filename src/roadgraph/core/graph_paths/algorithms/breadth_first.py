"""
Breadth-first route search.

Finds the route with the fewest road segments, ignoring lengths and speeds.
The goal is recognised when it is dequeued, not when it is first discovered.
"""

import logging
from collections import deque
from typing import Any, Deque, Optional

from ...enums import Metric
from ..base import PathFinder
from ..models import Route
from ..types import MetricLike, VisitHook
from ..utils import SearchState, notify_visit

logger = logging.getLogger(__name__)


class BreadthFirstFinder(PathFinder):
    """Unweighted shortest route by segment count."""

    operation = "breadth_first_search"

    def find_path(
        self,
        start: Any,
        goal: Any,
        on_visit: Optional[VisitHook] = None,
        metric: MetricLike = Metric.LENGTH,
    ) -> Optional[Route]:
        """
        Find the route from ``start`` to ``goal`` with the fewest segments.

        ``metric`` is accepted for interface compatibility and ignored.

        Args:
            start: Starting location
            goal: Goal location
            on_visit: Called once with each location expanded (the goal is not expanded)

        Returns:
            The route, or None when either endpoint is unusable or goal is unreachable
        """
        if not self.validate_endpoints(start, goal):
            return None

        with self._search_context() as metrics:
            state = SearchState()
            frontier: Deque[Any] = deque([start])
            state.settled.add(start)  # visited set, seeded with start
            found = False

            while frontier:
                self.memory_manager.check_memory()
                current = frontier.popleft()
                metrics.nodes_explored += 1

                if current == goal:
                    found = True
                    break

                outgoing = self.graph.get_outgoing(current)
                if outgoing is None:
                    continue

                notify_visit(on_visit, current)
                for edge in outgoing:
                    if edge.end not in state.settled:
                        state.settled.add(edge.end)
                        frontier.append(edge.end)
                        state.predecessors[edge.end] = current
                        state.via_edge[edge.end] = edge

            if not found:
                logger.info(f"bfs: No path exists from {start} to {goal}")
                return None

            return self.build_route(start, goal, state, None, metrics)
