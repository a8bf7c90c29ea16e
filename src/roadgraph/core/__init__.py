"""Core road network functionality."""

from .enums import Metric, RoadType
from .exceptions import (
    ConfigurationError,
    InvalidEdgeError,
    NodeNotFoundError,
    UnknownVertexError,
    ValidationError,
)
from .geography import Coordinate, GeographicPoint, PlanarPoint
from .models import Intersection, RoadEdge
from .graph import RoadGraph

__all__ = [
    "ConfigurationError",
    "Coordinate",
    "GeographicPoint",
    "Intersection",
    "InvalidEdgeError",
    "Metric",
    "NodeNotFoundError",
    "PlanarPoint",
    "RoadEdge",
    "RoadGraph",
    "RoadType",
    "UnknownVertexError",
    "ValidationError",
]
