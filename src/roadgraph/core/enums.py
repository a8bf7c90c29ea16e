"""
Enumerations for road classification and routing metrics.

This module defines the two enumeration types used throughout the router:
- RoadType: The road classes a map can tag a segment with, and the speed
  assumed for each of them
- Metric: The cost functions a weighted search can minimise
"""

from enum import Enum
from typing import Optional


class RoadType(Enum):
    """
    Road classes and their assumed travel speed in km/h.

    The member value is the lowercase tag used in map files. Tags that are
    not listed here are routed at ``UNKNOWN`` speed; the table is advisory,
    not a closed vocabulary.
    """

    MOTORWAY = "motorway"
    MOTORWAY_LINK = "motorway_link"
    TRUNK = "trunk"
    TRUNK_LINK = "trunk_link"
    PRIMARY = "primary"
    PRIMARY_LINK = "primary_link"
    SECONDARY = "secondary"
    SECONDARY_LINK = "secondary_link"
    TERTIARY = "tertiary"
    TERTIARY_LINK = "tertiary_link"
    UNCLASSIFIED = "unclassified"
    RESIDENTIAL = "residential"
    UNKNOWN = "unknown"

    @property
    def speed_kph(self) -> int:
        """Assumed travel speed for this road class."""
        return ROAD_SPEEDS_KPH[self]

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "RoadType":
        """Resolve a map tag case-insensitively, falling back to UNKNOWN."""
        if not isinstance(tag, str):
            return cls.UNKNOWN
        try:
            return cls(tag.strip().lower())
        except ValueError:
            return cls.UNKNOWN


ROAD_SPEEDS_KPH = {
    RoadType.MOTORWAY: 110,
    RoadType.MOTORWAY_LINK: 45,
    RoadType.TRUNK: 100,
    RoadType.TRUNK_LINK: 40,
    RoadType.PRIMARY: 100,
    RoadType.PRIMARY_LINK: 30,
    RoadType.SECONDARY: 55,
    RoadType.SECONDARY_LINK: 25,
    RoadType.TERTIARY: 40,
    RoadType.TERTIARY_LINK: 20,
    RoadType.UNCLASSIFIED: 25,
    RoadType.RESIDENTIAL: 25,
    RoadType.UNKNOWN: 40,
}

# Fastest speed any road class allows; keeps the A* time heuristic optimistic.
MAX_ROAD_SPEED_KPH = max(ROAD_SPEEDS_KPH.values())


class Metric(Enum):
    """Cost function minimised by a weighted search."""

    LENGTH = "length"  # Cumulative road length in km
    TIME = "time"  # Cumulative travel time in minutes

    def edge_cost(self, edge) -> float:
        """Return the weight of a road segment under this metric."""
        if self is Metric.LENGTH:
            return edge.length
        return edge.time
