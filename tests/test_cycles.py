import sys

import pytest

from roadplan import (
    UncoverableRoadError,
    UnknownNodeError,
    build_exterior_cycle,
    build_graph,
    connected_components,
    enumerate_cycles,
    find_interior_cycles,
    reachable_nodes,
    unique_roads,
)
from roadplan.model import Node

from helpers import builders, figure_eight, grid, keys, ring


def _first(graph):
    return next(iter(graph))


@pytest.mark.parametrize('n', [3, 4, 7])
def test_ring_has_exactly_one_cycle(n):
    graph = build_graph(ring(n))

    cycles = enumerate_cycles(graph, _first(graph))

    assert len(cycles) == 1
    assert len(cycles[0]) == n
    assert set(cycles[0].roads) == set(unique_roads(graph))


def test_tree_has_no_cycles():
    graph = build_graph(
        builders(
            {'A': (0, 0, 0), 'B': (1, 0, 0), 'C': (2, 0, 0), 'D': (1, 0, 1)},
            [('A', 'B'), ('B', 'C'), ('B', 'D')],
        )
    )

    assert enumerate_cycles(graph, _first(graph)) == ()


def test_figure_eight_cycles():
    graph = build_graph(figure_eight())

    cycles = enumerate_cycles(graph, _first(graph))

    assert keys(cycles) == [
        ('A-B', 'B-C', 'C-D', 'D-A'),
        ('A-B', 'B-E', 'C-D', 'D-A', 'E-F', 'F-C'),
        ('B-C', 'B-E', 'E-F', 'F-C'),
    ]


@pytest.mark.parametrize('start', ['A', 'B', 'C', 'D', 'E', 'F'])
def test_cycles_do_not_depend_on_start(start):
    graph = build_graph(figure_eight())
    node = next(node for node in graph if node.name == start)

    assert len(enumerate_cycles(graph, node)) == 3


def test_grid_cycles_are_unique():
    graph = build_graph(grid(2))

    cycles = enumerate_cycles(graph, _first(graph))

    assert len(cycles) == 13
    assert len({cycle.key for cycle in cycles}) == len(cycles)


def test_search_is_not_limited_by_recursion_depth():
    n = sys.getrecursionlimit() + 500
    graph = build_graph(ring(n))

    cycles = enumerate_cycles(graph, _first(graph))

    assert len(cycles) == 1
    assert len(cycles[0]) == n


def test_unknown_start_node_is_rejected():
    graph = build_graph(figure_eight())

    with pytest.raises(UnknownNodeError):
        enumerate_cycles(graph, Node('Z', (0, 0, 0)))


def test_interior_cycles_of_figure_eight():
    graph = build_graph(figure_eight())
    cycles = enumerate_cycles(graph, _first(graph))

    interior = find_interior_cycles(cycles, unique_roads(graph))

    assert keys(interior) == [
        ('A-B', 'B-C', 'C-D', 'D-A'),
        ('B-C', 'B-E', 'E-F', 'F-C'),
    ]


def test_interior_cycles_cover_every_road():
    graph = build_graph(grid(2))
    roads = unique_roads(graph)

    interior = find_interior_cycles(enumerate_cycles(graph, _first(graph)), roads)

    assert len(interior) == 4
    assert all(len(cycle) == 4 for cycle in interior)
    covered = {road for cycle in interior for road in cycle}
    assert covered == set(roads)


def test_interior_ties_break_by_road_names():
    # Complete graph on four nodes: four triangles share every road twice.
    positions = {'A': (0, 0, 0), 'B': (2, 0, 0), 'C': (1, 0, 2), 'D': (1, 0, 1)}
    edges = [('A', 'B'), ('A', 'C'), ('A', 'D'), ('B', 'C'), ('B', 'D'), ('C', 'D')]
    graph = build_graph(builders(positions, edges))
    cycles = enumerate_cycles(graph, _first(graph))

    interior = find_interior_cycles(cycles, unique_roads(graph))

    assert len(cycles) == 7
    assert [cycle.key for cycle in interior] == [
        ('A-B', 'A-C', 'B-C'),
        ('A-B', 'A-D', 'B-D'),
        ('A-C', 'A-D', 'C-D'),
    ]
    assert build_exterior_cycle(interior).key == ('B-C', 'B-D', 'C-D')


def test_bridge_road_is_uncoverable():
    graph = build_graph(
        builders(
            {'A': (0, 0, 0), 'B': (1, 0, 0), 'C': (0, 0, 1), 'D': (-1, 0, 0)},
            [('A', 'B'), ('B', 'C'), ('C', 'A'), ('A', 'D')],
        )
    )
    cycles = enumerate_cycles(graph, _first(graph))

    with pytest.raises(UncoverableRoadError) as exc:
        find_interior_cycles(cycles, unique_roads(graph))

    assert [road.name for road in exc.value.roads] == ['A-D']


def test_exterior_cycle_of_figure_eight_skips_shared_road():
    graph = build_graph(figure_eight())
    interior = find_interior_cycles(enumerate_cycles(graph, _first(graph)), unique_roads(graph))

    exterior = build_exterior_cycle(interior)

    assert exterior.key == ('A-B', 'B-E', 'C-D', 'D-A', 'E-F', 'F-C')


def test_exterior_of_single_ring_is_the_ring():
    graph = build_graph(ring(5))
    interior = find_interior_cycles(enumerate_cycles(graph, _first(graph)), unique_roads(graph))

    assert build_exterior_cycle(interior) == interior[0]


def test_exterior_of_no_cycles_is_none():
    assert build_exterior_cycle(()) is None


def test_components_and_reachability():
    graph = build_graph(
        builders(
            {'A': (0, 0, 0), 'B': (1, 0, 0), 'C': (5, 0, 0), 'D': (6, 0, 0)},
            [('A', 'B'), ('C', 'D')],
        )
    )
    a = _first(graph)

    assert [node.name for node in reachable_nodes(graph, a)] == ['A', 'B']
    assert [[node.name for node in comp] for comp in connected_components(graph)] == [['A', 'B'], ['C', 'D']]
