"""
Core domain models package for the road network.

This package provides the vertex and edge types of the road graph.
"""

from .base import normalize_road_type, travel_time_minutes, validate_length
from .edge import RoadEdge
from .node import Intersection

__all__ = [
    # Base utilities
    "validate_length",
    "normalize_road_type",
    "travel_time_minutes",
    # Models
    "RoadEdge",
    "Intersection",
]
