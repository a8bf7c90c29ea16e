"""
Shared validation helpers for the road network models.
"""

import math
from typing import Optional

from ..exceptions import InvalidEdgeError


def validate_length(length: float) -> float:
    """Validate a road segment length and return it as a float.

    Raises:
        InvalidEdgeError: If the length is not a finite number >= 0
    """
    if isinstance(length, bool) or not isinstance(length, (int, float)):
        raise InvalidEdgeError(f"length must be a numeric value, got {type(length).__name__}")
    if math.isnan(length) or math.isinf(length):
        raise InvalidEdgeError(f"length must be a finite number, got {length}")
    if length < 0:
        raise InvalidEdgeError(f"length must be non-negative, got {length}")
    return float(length)


def travel_time_minutes(length: float, speed_kph: float) -> float:
    """Minutes needed to cover ``length`` km at ``speed_kph``."""
    if speed_kph == 0:
        return float("inf")
    return length / speed_kph * 60


def normalize_road_type(road_type: Optional[str]) -> Optional[str]:
    """Canonical form of a road type tag: stripped and lowercased.

    Raises:
        InvalidEdgeError: If the tag is neither None nor a string
    """
    if road_type is None:
        return None
    if not isinstance(road_type, str):
        raise InvalidEdgeError(f"road_type must be a string, got {type(road_type).__name__}")
    return road_type.strip().lower()
