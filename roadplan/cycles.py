"""Cycle search over road graphs and the interior/exterior face selection."""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .logging_utils import apply_debug_logging
from .model import Cycle, Graph, Node, Road, UncoverableRoadError, UnknownNodeError

logger = logging.getLogger(__name__)

# (node, node it was entered from, pending neighbours, road it was entered by)
_Frame = Tuple[Node, Optional[Node], Iterator[Node], Optional[Road]]


def reachable_nodes(graph: Graph, start: Node) -> List[Node]:
    """Breadth-first list of the nodes reachable from ``start``, ``start`` first."""

    if start not in graph:
        raise UnknownNodeError(f"start node '{start.name}' is not in the graph")
    seen: Set[Node] = {start}
    order: List[Node] = [start]
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for neighbour in graph[node]:
            if neighbour not in seen:
                seen.add(neighbour)
                order.append(neighbour)
                queue.append(neighbour)
    return order


def connected_components(graph: Graph) -> List[List[Node]]:
    """Split ``graph`` into components, each led by its first node in graph order."""

    seen: Set[Node] = set()
    components: List[List[Node]] = []
    for node in graph:
        if node in seen:
            continue
        component = reachable_nodes(graph, node)
        seen.update(component)
        components.append(component)
    return components


def _close_cycle(graph: Graph, trace: Sequence[Node], connection: Node) -> Cycle:
    # Walk back along the trace from the current node to where the loop started.
    current = trace[-1]
    roads = [graph[current][connection]]
    index = len(trace) - 1
    while trace[index] is not connection:
        roads.append(graph[trace[index]][trace[index - 1]])
        index -= 1
    return Cycle.from_roads(roads)


def enumerate_cycles(graph: Graph, start: Node) -> Tuple[Cycle, ...]:
    """Find every simple cycle reachable from ``start``, each exactly once.

    Depth-first search over simple paths. The trace holds the current path
    and ``travelled`` the roads along it; reaching a node already on the trace
    closes a cycle. Cycles are kept in discovery order and deduplicated by
    their sorted road names, so a loop found from either direction or from a
    different entry road is recorded once.

    The search keeps its own stack, so deep graphs do not hit the recursion
    limit.
    """

    if start not in graph:
        raise UnknownNodeError(f"start node '{start.name}' is not in the graph")

    found: Dict[Tuple[str, ...], Cycle] = {}
    trace: List[Node] = [start]
    on_trace: Set[Node] = {start}
    travelled: Set[Road] = set()
    stack: List[_Frame] = [(start, None, iter(graph[start]), None)]

    while stack:
        current, previous, pending, _ = stack[-1]
        descended = False
        for connection in pending:
            # Don't go whence we came.
            if connection is previous:
                continue
            road = graph[connection][current]
            if road in travelled:
                continue

            if connection in on_trace:
                cycle = _close_cycle(graph, trace, connection)
                if cycle.key not in found:
                    found[cycle.key] = cycle
                continue

            travelled.add(road)
            trace.append(connection)
            on_trace.add(connection)
            stack.append((connection, current, iter(graph[connection]), road))
            descended = True
            break

        if descended:
            continue

        _, _, _, entered_by = stack.pop()
        on_trace.discard(trace.pop())
        if entered_by is not None:
            travelled.discard(entered_by)

    return tuple(found.values())


def _cycle_order(cycle: Cycle) -> Tuple[int, Tuple[str, ...]]:
    return len(cycle), cycle.key


def find_interior_cycles(cycles: Iterable[Cycle], roads: Iterable[Road]) -> Tuple[Cycle, ...]:
    """Cover ``roads`` with the shortest cycles.

    Cycles are taken by ascending size, ties by sorted road names; a cycle is
    kept when it covers at least one road no earlier pick covered. Raises
    :class:`UncoverableRoadError` when some road lies on no cycle.
    """

    roads = list(roads)
    remaining: Dict[Road, None] = dict.fromkeys(roads)
    selected: List[Cycle] = []
    for cycle in sorted(cycles, key=_cycle_order):
        if not remaining:
            break
        if not any(road in remaining for road in cycle):
            continue
        for road in cycle:
            remaining.pop(road, None)
        selected.append(cycle)

    if remaining:
        raise UncoverableRoadError(list(remaining))
    return tuple(selected)


def build_exterior_cycle(interior_cycles: Sequence[Cycle]) -> Optional[Cycle]:
    """Build the outer boundary from roads used by exactly one interior cycle.

    Interior walls are shared by two cycles and drop out. Returns ``None`` when
    there are no interior cycles.
    """

    if not interior_cycles:
        return None
    counts: Dict[Road, int] = {}
    for cycle in interior_cycles:
        for road in cycle:
            counts[road] = counts.get(road, 0) + 1
    return Cycle.from_roads(road for road, count in counts.items() if count == 1)


apply_debug_logging(globals(), logger=logger)


__all__ = [
    "reachable_nodes",
    "connected_components",
    "enumerate_cycles",
    "find_interior_cycles",
    "build_exterior_cycle",
]
