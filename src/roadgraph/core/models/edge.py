"""
Road segment model for the road network.

This module defines ``RoadEdge``, the directed connection between two
intersections. A segment's speed and travel time are derived once, at
construction, from its road type tag.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..enums import RoadType
from .base import normalize_road_type, travel_time_minutes, validate_length


@dataclass(frozen=True)
class RoadEdge:
    """
    Directed road segment between two intersections.

    Attributes:
        start (Coordinate): Location the segment leaves from
        end (Coordinate): Location the segment arrives at
        name (Optional[str]): Street name as given by the map
        road_type (Optional[str]): Stripped, lowercased road type tag, ``None`` if untagged
        length (float): Segment length in km
        speed (int): Assumed speed in km/h, derived from ``road_type``
        time (float): Travel time in minutes, derived from ``length`` and ``speed``

    Raises:
        InvalidEdgeError: If ``length`` is negative or not finite, or
            ``road_type`` is not a string
    """

    start: Any
    end: Any
    name: Optional[str]
    road_type: Optional[str]
    length: float
    speed: int = field(init=False)
    time: float = field(init=False)

    def __post_init__(self):
        """Normalise the tag and derive speed and travel time."""
        object.__setattr__(self, "length", validate_length(self.length))
        object.__setattr__(self, "road_type", normalize_road_type(self.road_type))
        speed = RoadType.from_tag(self.road_type).speed_kph
        object.__setattr__(self, "speed", speed)
        object.__setattr__(self, "time", travel_time_minutes(self.length, speed))

    @property
    def road_class(self) -> RoadType:
        """Road class the segment's tag resolves to."""
        return RoadType.from_tag(self.road_type)

    def __str__(self) -> str:
        return (
            f"{self.name or '<unnamed>'} ({self.road_type}) {self.start} -> {self.end}: "
            f"{self.length:.3f} km, {self.time:.2f} min"
        )
