"""
Coordinate types for road network vertices.

The router only needs three things from a location: value equality, hashing
and a ``distance`` to another location. ``Coordinate`` states that contract as
a protocol so that map loaders can bring their own point type. Two ready-made
implementations are provided:

- GeographicPoint: latitude/longitude in degrees, great-circle distance in km
- PlanarPoint: x/y on a flat grid, Euclidean distance in the same units

Both distances are symmetric, non-negative and obey the triangle inequality,
which is what makes straight-line distance an admissible A* heuristic.
"""

import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

EARTH_RADIUS_KM = 6371.0


@runtime_checkable
class Coordinate(Protocol):
    """Protocol for immutable, hashable locations with a distance function."""

    def distance(self, other: "Coordinate") -> float:
        """Return the straight-line distance to ``other`` in km."""

    def __hash__(self) -> int: ...

    def __eq__(self, other: object) -> bool: ...


@dataclass(frozen=True)
class GeographicPoint:
    """
    A point on the earth's surface.

    Attributes:
        latitude (float): Latitude in decimal degrees
        longitude (float): Longitude in decimal degrees
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate coordinate ranges after initialization."""
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude {self.latitude} must be between -90 and 90")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude {self.longitude} must be between -180 and 180")

    def distance(self, other: "GeographicPoint") -> float:
        """Great-circle distance to ``other`` in km (haversine formula)."""
        lat1, lon1 = math.radians(self.latitude), math.radians(self.longitude)
        lat2, lon2 = math.radians(other.latitude), math.radians(other.longitude)
        dlat = lat2 - lat1
        dlon = lon2 - lon1
        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))

    def __str__(self) -> str:
        return f"Lat: {self.latitude}, Lon: {self.longitude}"


@dataclass(frozen=True)
class PlanarPoint:
    """A point on a flat grid; distances are in the grid's units (km)."""

    x: float
    y: float

    def distance(self, other: "PlanarPoint") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
