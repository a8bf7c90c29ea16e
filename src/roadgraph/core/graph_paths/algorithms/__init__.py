"""Route finding algorithm implementations."""

from .astar import AStarFinder, straight_line_heuristic
from .breadth_first import BreadthFirstFinder
from .dijkstra import DijkstraFinder

__all__ = [
    "AStarFinder",
    "BreadthFirstFinder",
    "DijkstraFinder",
    "straight_line_heuristic",
]
