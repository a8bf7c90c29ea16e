"""
Roadgraph - Road Network Routing Library

This package models a geographic road network as a directed graph of
intersections joined by typed road segments, and finds routes over it with
three strategies:

- Breadth-first search (fewest road segments)
- Dijkstra's algorithm (shortest distance or quickest travel time)
- A* search guided by straight-line distance to the goal

The network itself is populated by an external loader through
``RoadGraph.add_vertex`` and ``RoadGraph.add_edge``.
"""

__version__ = "0.1.0"
__author__ = "Roadgraph Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 12):
    raise RuntimeError("Roadgraph requires Python 3.12 or higher")

# Import commonly used components for easier access
from .core.enums import Metric, RoadType
from .core.geography import Coordinate, GeographicPoint, PlanarPoint
from .core.graph import RoadGraph
from .core.graph_paths.models import Route
from .core.models import Intersection, RoadEdge

__all__ = [
    "RoadGraph",
    "Intersection",
    "RoadEdge",
    "Route",
    "Metric",
    "RoadType",
    "Coordinate",
    "GeographicPoint",
    "PlanarPoint",
]
