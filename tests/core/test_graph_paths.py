"""
Tests for route finding algorithms.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from roadgraph.core.enums import Metric
from roadgraph.core.geography import GeographicPoint, PlanarPoint
from roadgraph.core.graph import RoadGraph
from roadgraph.core.graph_paths import (
    PathType,
    Route,
    RouteFinding,
    RouteValidationError,
    reconstruct_path,
)
from roadgraph.core.graph_paths import utils as path_utils
from roadgraph.core.graph_paths.algorithms import AStarFinder, DijkstraFinder
from roadgraph.core.models import RoadEdge

SEARCHES = ["breadth_first_search", "dijkstra", "a_star_search"]


def run_search(graph, name, start, goal, **kwargs):
    return getattr(graph, name)(start, goal, **kwargs)


def assert_scores_reset(graph):
    for location in graph.get_vertices():
        node = graph.get_intersection(location)
        assert node.distance_to_start == math.inf
        assert node.time_to_start == math.inf


# ---------------------------------------------------------------------------
# Reference scenario: A(0,0) -> B(0,3) -> C(4,3), residential
# ---------------------------------------------------------------------------


def test_bfs_basic(simple_graph, point_a, point_b, point_c):
    """Test breadth-first route on the reference scenario."""
    route = simple_graph.bfs(point_a, point_c)
    assert route.locations == [point_a, point_b, point_c]
    assert route.hops == 2
    assert route.cost == 2.0
    assert route.metric is None


def test_dijkstra_length(simple_graph, point_a, point_b, point_c):
    """Test shortest route by length."""
    route = simple_graph.dijkstra(point_a, point_c, metric=Metric.LENGTH)
    assert route.locations == [point_a, point_b, point_c]
    assert route.total_length == pytest.approx(7.0)
    assert route.cost == pytest.approx(7.0)


def test_dijkstra_time(simple_graph, point_a, point_c):
    """Test quickest route by travel time."""
    route = simple_graph.dijkstra(point_a, point_c, metric=Metric.TIME)
    assert route.total_time == pytest.approx(16.8)
    assert route.cost == pytest.approx(16.8)
    assert [edge.time for edge in route.edges] == [pytest.approx(7.2), pytest.approx(9.6)]


def test_a_star_matches_dijkstra(simple_graph, point_a, point_b, point_c):
    """Test that A* finds the same route and cost as Dijkstra."""
    for metric in Metric:
        expected = simple_graph.dijkstra(point_a, point_c, metric=metric)
        route = simple_graph.a_star_search(point_a, point_c, metric=metric)
        assert route.locations == [point_a, point_b, point_c]
        assert route.cost == pytest.approx(expected.cost)


def test_metric_accepts_string(simple_graph, point_a, point_c):
    """Test that metrics may be passed by value."""
    route = simple_graph.dijkstra(point_a, point_c, metric="time")
    assert route.metric is Metric.TIME
    with pytest.raises(ValueError, match="Unknown metric"):
        simple_graph.dijkstra(point_a, point_c, metric="speed")


def test_direct_motorway_overrides_two_hop_route(shortcut_graph, point_a, point_c):
    """Test that a shorter direct segment wins under both metrics."""
    route = shortcut_graph.dijkstra(point_a, point_c, metric=Metric.LENGTH)
    assert route.locations == [point_a, point_c]
    assert route.cost == pytest.approx(4.0)
    assert route.edges[0].road_type == "motorway"

    quickest = shortcut_graph.dijkstra(point_a, point_c, metric=Metric.TIME)
    assert quickest.locations == [point_a, point_c]
    assert quickest.cost == pytest.approx(4.0 / 110 * 60)

    assert shortcut_graph.bfs(point_a, point_c).locations == [point_a, point_c]
    assert shortcut_graph.a_star_search(point_a, point_c).locations == [point_a, point_c]


def test_time_and_length_can_disagree(point_a, point_c):
    """Test that the quickest route is not always the shortest one."""
    via = PlanarPoint(4, 0)
    graph = RoadGraph()
    for location in (point_a, point_c, via):
        graph.add_vertex(location)
    graph.add_edge(point_a, point_c, "Short Cut", "residential", 5.0)  # 12 min
    graph.add_edge(point_a, via, "Ring Rd", "motorway", 4.0)  # ~2.18 min
    graph.add_edge(via, point_c, "Ring Rd", "motorway", 3.0)  # ~1.64 min

    for name in ("dijkstra", "a_star_search"):
        shortest = run_search(graph, name, point_a, point_c, metric=Metric.LENGTH)
        quickest = run_search(graph, name, point_a, point_c, metric=Metric.TIME)
        assert shortest.locations == [point_a, point_c]
        assert quickest.locations == [point_a, via, point_c]
        assert quickest.cost == pytest.approx(7.0 / 110 * 60)


def test_parallel_edges_use_the_cheapest(point_a, point_b):
    """Test that the route records the segment that won the relaxation."""
    graph = RoadGraph()
    graph.add_vertex(point_a)
    graph.add_vertex(point_b)
    graph.add_edge(point_a, point_b, "Long Way", "motorway", 9.0)
    graph.add_edge(point_a, point_b, "Short Way", "residential", 3.0)

    shortest = graph.dijkstra(point_a, point_b, metric=Metric.LENGTH)
    assert shortest.edges[0].name == "Short Way"
    quickest = graph.dijkstra(point_a, point_b, metric=Metric.TIME)
    assert quickest.edges[0].name == "Long Way"  # 4.9 min vs 7.2 min
    assert graph.bfs(point_a, point_b).edges[0].name == "Long Way"


# ---------------------------------------------------------------------------
# Edge cases shared by all algorithms
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("search", SEARCHES)
def test_start_equals_goal(simple_graph, point_b, search):
    """Test that searching from a location to itself yields one location."""
    visited = []
    route = run_search(simple_graph, search, point_b, point_b, on_visit=visited.append)
    assert route.locations == [point_b]
    assert route.hops == 0
    assert route.cost == 0.0
    assert len(route) == 1


@pytest.mark.parametrize("search", SEARCHES)
def test_unreachable_goal(simple_graph, point_a, point_c, search):
    """Test that a disconnected goal gives no route."""
    island = PlanarPoint(10, 10)
    simple_graph.add_vertex(island)
    assert run_search(simple_graph, search, point_a, island) is None
    # Roads are directed: C cannot get back to A
    assert run_search(simple_graph, search, point_c, point_a) is None
    assert_scores_reset(simple_graph)


@pytest.mark.parametrize("search", SEARCHES)
def test_null_endpoints(simple_graph, point_a, search, caplog):
    """Test that missing endpoints are reported as no route, not an error."""
    with caplog.at_level(logging.WARNING, logger="roadgraph"):
        assert run_search(simple_graph, search, None, point_a) is None
        assert run_search(simple_graph, search, point_a, None) is None
    assert "null" in caplog.text


@pytest.mark.parametrize("search", SEARCHES)
def test_endpoints_not_in_graph(simple_graph, point_a, search):
    """Test that locations that are not vertices give no route."""
    stranger = PlanarPoint(-5, -5)
    assert run_search(simple_graph, search, stranger, point_a) is None
    assert run_search(simple_graph, search, point_a, stranger) is None
    assert run_search(simple_graph, search, stranger, stranger) is None


@pytest.mark.parametrize("search", ["dijkstra", "a_star_search"])
def test_repeat_search_is_identical(shortcut_graph, point_a, point_c, search):
    """Test that searches leave no state behind on the graph."""
    for metric in Metric:
        first = run_search(shortcut_graph, search, point_a, point_c, metric=metric)
        assert_scores_reset(shortcut_graph)
        second = run_search(shortcut_graph, search, point_a, point_c, metric=metric)
        assert first == second
        assert_scores_reset(shortcut_graph)


def test_found_routes_validate(shortcut_graph, point_a, point_c):
    """Test that every returned route is consistent with the graph."""
    for search in SEARCHES:
        run_search(shortcut_graph, search, point_a, point_c).validate(shortcut_graph)


# ---------------------------------------------------------------------------
# Visitation hook
# ---------------------------------------------------------------------------


def test_bfs_visit_hook(simple_graph, point_a, point_b, point_c):
    """Test that BFS reports each expanded location once; the goal is not expanded."""
    visited = []
    simple_graph.bfs(point_a, point_c, on_visit=visited.append)
    assert visited == [point_a, point_b]


@pytest.mark.parametrize("search", ["dijkstra", "a_star_search"])
def test_weighted_visit_hook(simple_graph, point_a, point_b, point_c, search):
    """Test that weighted searches report each settled location once, goal included."""
    visited = []
    run_search(simple_graph, search, point_a, point_c, on_visit=visited.append)
    assert visited == [point_a, point_b, point_c]


def test_visit_hook_return_value_ignored(simple_graph, point_a, point_c):
    """Test that the hook is purely observational."""
    route = simple_graph.dijkstra(point_a, point_c, on_visit=lambda location: False)
    assert route.cost == pytest.approx(7.0)


def test_a_star_settles_fewer_intersections():
    """Test that the heuristic steers A* away from roads leading elsewhere."""
    start, goal = PlanarPoint(0, 0), PlanarPoint(10, 0)
    graph = RoadGraph()
    graph.add_vertex(start)
    graph.add_vertex(goal)
    graph.add_edge(start, goal, "Highway", "primary", 10.0)
    for i in range(-2, 3):
        spur = PlanarPoint(-1, i)
        graph.add_vertex(spur)
        graph.add_edge(start, spur, f"Spur {i}", "residential", start.distance(spur))

    dijkstra_visits, a_star_visits = [], []
    expected = graph.dijkstra(start, goal, on_visit=dijkstra_visits.append)
    route = graph.a_star_search(start, goal, on_visit=a_star_visits.append)

    assert route.cost == pytest.approx(expected.cost)
    assert a_star_visits == [start, goal]
    assert len(dijkstra_visits) == 7
    assert route.metrics.nodes_explored < expected.metrics.nodes_explored


def test_a_star_custom_heuristic(shortcut_graph, point_a, point_b, point_c):
    """Test that a zero heuristic turns A* into Dijkstra."""
    visits = []
    route = shortcut_graph.a_star_search(
        point_a, point_c, on_visit=visits.append, heuristic=lambda location, goal: 0.0
    )
    assert route.locations == [point_a, point_c]
    assert visits == [point_a, point_b, point_c]


def test_a_star_time_heuristic_speed(shortcut_graph, point_a, point_c):
    """Test that the time heuristic drives at the configured speed."""
    finder = AStarFinder(shortcut_graph, heuristic_speed_kph=40)
    route = finder.find_path(point_a, point_c, metric=Metric.TIME)
    assert route.locations == [point_a, point_c]
    with pytest.raises(ValueError):
        AStarFinder(shortcut_graph, heuristic_speed_kph=0)


def test_geographic_routing():
    """Test routing over latitude/longitude points."""
    campus = GeographicPoint(32.8648772, -117.2254046)
    library = GeographicPoint(32.8660691, -117.217393)
    corner = GeographicPoint(32.8648772, -117.217393)
    graph = RoadGraph()
    for location in (campus, library, corner):
        graph.add_vertex(location)
    graph.add_edge(campus, corner, "Gilman Dr", "secondary", campus.distance(corner) * 1.1)
    graph.add_edge(corner, library, "Library Walk", "residential", corner.distance(library))
    graph.add_edge(campus, library, "Scenic Dr", "residential", campus.distance(library) * 1.5)

    expected = graph.dijkstra(campus, library, metric=Metric.LENGTH)
    route = graph.a_star_search(campus, library, metric=Metric.LENGTH)
    assert route.cost == pytest.approx(expected.cost)
    assert route.locations == [campus, corner, library]


# ---------------------------------------------------------------------------
# Path reconstruction
# ---------------------------------------------------------------------------


def test_reconstruct_path(point_a, point_b, point_c):
    """Test walking a predecessor map back to the start."""
    predecessors = {point_b: point_a, point_c: point_b}
    assert reconstruct_path(point_a, point_c, predecessors) == [point_a, point_b, point_c]
    assert RoadGraph.reconstruct_path(point_a, point_b, predecessors) == [point_a, point_b]


def test_reconstruct_path_start_equals_goal(point_a):
    """Test that start == goal needs no predecessors."""
    assert reconstruct_path(point_a, point_a, {}) == [point_a]


def test_reconstruct_path_empty_map(point_a, point_c):
    """Test that an empty map yields no route."""
    assert reconstruct_path(point_a, point_c, {}) is None


def test_reconstruct_path_broken_chain(point_a, point_b, point_c, caplog):
    """Test that a chain which never reaches start is reported, not followed."""
    with caplog.at_level(logging.ERROR, logger="roadgraph"):
        assert reconstruct_path(point_a, point_c, {point_c: point_b}) is None
    assert "Broken predecessor chain" in caplog.text


def test_reconstruct_path_cyclic_chain(point_a, point_b, point_c):
    """Test that a cyclic chain terminates."""
    assert reconstruct_path(point_a, point_c, {point_c: point_b, point_b: point_c}) is None


# ---------------------------------------------------------------------------
# Route model
# ---------------------------------------------------------------------------


def test_route_sequence_behaviour(simple_graph, point_a, point_b, point_c):
    """Test that a route reads as a sequence of locations."""
    route = simple_graph.dijkstra(point_a, point_c)
    assert len(route) == 3
    assert route[0] == point_a
    assert route[-1] == point_c
    assert list(route) == [point_a, point_b, point_c]
    assert route.start == point_a and route.goal == point_c
    summary = route.to_dict()
    assert summary["hops"] == 2
    assert summary["metric"] == "length"
    assert summary["total_length_km"] == pytest.approx(7.0)


def test_route_requires_matching_segments(point_a, point_b, point_c):
    """Test construction-time consistency checks."""
    with pytest.raises(TypeError):
        Route(locations=[])
    edge = RoadEdge(point_a, point_b, "First Ave", "residential", 3.0)
    with pytest.raises(RouteValidationError, match="segments"):
        Route(locations=[point_a, point_b, point_c], edges=[edge])


def test_route_validate_discontinuity(simple_graph, point_a, point_b, point_c):
    """Test that a route whose segments do not join is rejected."""
    edge = RoadEdge(point_b, point_c, "Second Ave", "residential", 4.0)
    route = Route(locations=[point_a, point_c], edges=[edge])
    with pytest.raises(RouteValidationError, match="discontinuity"):
        route.validate(simple_graph)


def test_route_validate_missing_edge(simple_graph, point_a, point_c):
    """Test that a route over a road the graph lacks is rejected."""
    edge = RoadEdge(point_a, point_c, "Imaginary Rd", "primary", 5.0)
    route = Route(locations=[point_a, point_c], edges=[edge])
    with pytest.raises(RouteValidationError, match="not found in graph"):
        route.validate(simple_graph)


def test_route_validate_unknown_location(simple_graph, point_a):
    """Test that a route through a non-vertex is rejected."""
    stranger = PlanarPoint(7, 7)
    edge = RoadEdge(point_a, stranger, "Nowhere Rd", "primary", 5.0)
    route = Route(locations=[point_a, stranger], edges=[edge])
    with pytest.raises(RouteValidationError, match="not in graph"):
        route.validate(simple_graph)


def test_performance_metrics(simple_graph, point_a, point_c):
    """Test that searches record basic performance metrics."""
    route = simple_graph.dijkstra(point_a, point_c)
    metrics = route.metrics
    assert metrics.operation == "dijkstra"
    assert metrics.nodes_explored == 3
    assert metrics.end_time >= metrics.start_time
    assert metrics.duration >= 0.0
    assert metrics.cache_hit is False
    assert metrics.to_dict()["nodes_explored"] == 3


# ---------------------------------------------------------------------------
# Facade, memory guard and concurrency
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("path_type", list(PathType))
def test_route_finding_facade(simple_graph, point_a, point_b, point_c, path_type):
    """Test the static route finding interface."""
    route = RouteFinding.find_route(simple_graph, point_a, point_c, path_type=path_type)
    assert route.locations == [point_a, point_b, point_c]


def test_route_finding_helpers(simple_graph, point_a, point_c):
    """Test the per-algorithm helpers of the facade."""
    assert RouteFinding.breadth_first_search(simple_graph, point_a, point_c).hops == 2
    assert RouteFinding.dijkstra(simple_graph, point_a, point_c, metric="time").cost == (
        pytest.approx(16.8)
    )
    assert RouteFinding.a_star_search(simple_graph, point_a, point_c).cost == pytest.approx(7.0)
    with pytest.raises(ValueError, match="Unknown path type"):
        RouteFinding.get_finder("teleport", simple_graph)


def test_memory_limit_exceeded(simple_graph, point_a, point_c, monkeypatch):
    """Test that the memory guard aborts a search that grows too much."""
    readings = iter([0, 0] + [512 * 1024 * 1024] * 10)
    monkeypatch.setattr(path_utils, "get_memory_usage", lambda: next(readings))
    monkeypatch.setattr(path_utils, "MEMORY_CHECK_INTERVAL", -1.0)

    finder = DijkstraFinder(simple_graph, max_memory_mb=1)
    with pytest.raises(MemoryError, match="exceeding limit"):
        finder.find_path(point_a, point_c)


def test_memory_manager_without_limit(monkeypatch):
    """Test that no limit means no checks."""
    manager = path_utils.MemoryManager()
    monkeypatch.setattr(
        path_utils, "get_memory_usage", lambda: pytest.fail("memory was sampled")
    )
    manager.check_memory()
    assert manager.peak_memory > 0


def test_concurrent_searches_share_a_graph():
    """Test that parallel searches on one graph do not disturb each other."""
    graph = RoadGraph()
    points = [PlanarPoint(x, y) for x in range(6) for y in range(6)]
    for point in points:
        graph.add_vertex(point)
    for point in points:
        for dx, dy, road_type in ((1, 0, "primary"), (0, 1, "residential")):
            neighbour = PlanarPoint(point.x + dx, point.y + dy)
            if graph.has_vertex(neighbour):
                graph.add_edge(point, neighbour, "Grid", road_type, 1.0)
                graph.add_edge(neighbour, point, "Grid", road_type, 1.0)

    pairs = [(points[i], points[-1 - i]) for i in range(len(points))]
    jobs = [(pair, metric) for pair in pairs for metric in Metric]
    expected = [graph.dijkstra(a, b, metric=m).cost for (a, b), m in jobs]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda job: graph.dijkstra(*job[0], metric=job[1]).cost, jobs))

    assert results == pytest.approx(expected)
    assert_scores_reset(graph)
