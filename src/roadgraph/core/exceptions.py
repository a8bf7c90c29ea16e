"""
Custom exceptions for the road network routing system.

This module defines the hierarchy of exceptions raised while building a road
graph or configuring the router. Construction-time and insertion-time problems
are reported through these types so that a bad map never silently corrupts the
graph. Search-time "no route" outcomes are ordinary results and never raise.
"""


class ValidationError(Exception):
    """
    Raised when data validation fails.

    This exception is raised when input data fails to meet the required validation
    criteria, such as a road segment with an impossible length.

    Examples:
        * Negative road length
        * Non-finite road length
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class InvalidEdgeError(ValidationError):
    """
    Raised when a road segment cannot be constructed.

    Edge weights feed Dijkstra and A*, both of which are only correct for
    non-negative weights, so a segment length must be a finite number >= 0.

    Examples:
        * ``RoadEdge(..., length=-1.0)``
        * ``RoadEdge(..., length=float("nan"))``
    """


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid.

    This exception is raised when routing configuration issues are detected,
    such as unknown settings or out-of-range values.

    Examples:
        * Unknown configuration keys
        * Non-positive heuristic speed
        * Malformed configuration file
    """


class ResourceNotFoundError(Exception):
    """
    Raised when a requested resource is not found.

    This exception is raised when attempting to access or operate on a
    resource that does not exist in the graph.
    """


class NodeNotFoundError(ResourceNotFoundError):
    """
    Raised when a requested intersection is not found.

    This exception is a specialized version of ResourceNotFoundError specifically
    for intersection lookups where the requested location is not a vertex.
    """


class UnknownVertexError(NodeNotFoundError):
    """
    Raised when a road segment references a location that is not a vertex.

    The graph population contract requires every intersection to be added with
    ``add_vertex`` before any ``add_edge`` call referencing it.

    Examples:
        * ``add_edge`` whose start was never added
        * ``add_edge`` whose end was never added
    """

    def __init__(self, location, role: str = "start"):
        self.location = location
        self.role = role
        super().__init__(f"Road {role} {location} is not a vertex of the graph")
