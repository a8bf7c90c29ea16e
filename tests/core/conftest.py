"""Shared test fixtures."""

import pytest

from roadgraph.core.geography import PlanarPoint
from roadgraph.core.graph import RoadGraph


@pytest.fixture
def point_a() -> PlanarPoint:
    return PlanarPoint(0, 0)


@pytest.fixture
def point_b() -> PlanarPoint:
    return PlanarPoint(0, 3)


@pytest.fixture
def point_c() -> PlanarPoint:
    return PlanarPoint(4, 3)


@pytest.fixture
def simple_graph(point_a, point_b, point_c) -> RoadGraph:
    """
    Fixture providing a two-segment residential road:
    A --3.0--> B --4.0--> C
    """
    graph = RoadGraph()
    for location in (point_a, point_b, point_c):
        graph.add_vertex(location)
    graph.add_edge(point_a, point_b, "First Ave", "residential", 3.0)
    graph.add_edge(point_b, point_c, "Second Ave", "residential", 4.0)
    return graph


@pytest.fixture
def shortcut_graph(simple_graph, point_a, point_c) -> RoadGraph:
    """The simple graph plus a direct motorway A --4.0--> C."""
    simple_graph.add_edge(point_a, point_c, "Express Way", "motorway", 4.0)
    return simple_graph
