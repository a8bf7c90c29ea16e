"""
Dijkstra's algorithm over road length or travel time.
"""

import logging
from typing import Any, Optional

from ...enums import Metric
from ..base import PathFinder
from ..models import Route
from ..types import MetricLike, VisitHook
from ..utils import PriorityQueue, SearchState, coerce_metric, notify_visit

logger = logging.getLogger(__name__)


class DijkstraFinder(PathFinder):
    """
    Weighted shortest route under a length or time metric.

    Scores and predecessors live in a per-call ``SearchState``; the frontier
    uses lazy deletion, so a location may be queued more than once and stale
    entries are skipped once it is settled. Road lengths are non-negative by
    construction, so a location's score is final the first time it is settled.
    """

    operation = "dijkstra"

    def find_path(
        self,
        start: Any,
        goal: Any,
        on_visit: Optional[VisitHook] = None,
        metric: MetricLike = Metric.LENGTH,
    ) -> Optional[Route]:
        metric = coerce_metric(metric)
        if not self.validate_endpoints(start, goal):
            return None

        with self._search_context() as metrics:
            state = SearchState()
            frontier = PriorityQueue()
            state.seed(start)
            frontier.push(start, 0.0)
            found = False

            while not frontier.empty():
                self.memory_manager.check_memory()
                _, current = frontier.pop()
                if current in state.settled:
                    continue

                state.settled.add(current)
                metrics.nodes_explored += 1
                logger.debug(f"Settled {current} with {metric.value} {state.score(current)}")
                notify_visit(on_visit, current)
                if current == goal:
                    found = True
                    break

                current_score = state.score(current)
                for edge in self.graph.get_outgoing(current) or ():
                    if edge.end in state.settled:
                        continue
                    candidate = current_score + metric.edge_cost(edge)
                    if state.relax(edge.end, candidate, current, edge):
                        logger.debug(f"  Relaxed {edge.end} to {candidate}")
                        frontier.push(edge.end, candidate)

            if not found:
                logger.info(
                    f"dijkstra: No path exists from {start} to {goal} "
                    f"({metrics.nodes_explored} nodes explored)"
                )
                return None

            return self.build_route(start, goal, state, metric, metrics)
