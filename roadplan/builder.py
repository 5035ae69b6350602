"""Build undirected road graphs from nodes that declare forward connections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .model import DuplicateConnectionError, Graph, Node, Road, StraightRoad, UnknownNodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class RoadBuilder(Node):
    """A node that builds roads to the nodes it connects forward to."""

    connections: List["RoadBuilder"] = field(default_factory=list)
    road_names: Dict[str, str] = field(default_factory=dict)

    def connect(self, other: "RoadBuilder", name: Optional[str] = None) -> "RoadBuilder":
        self.connections.append(other)
        if name is not None:
            self.road_names[other.name] = name
        return self

    def build(self, node: Node) -> Road:
        name = self.road_names.get(node.name, f"{self.name}-{node.name}")
        return StraightRoad(self, node, name)

    def __repr__(self) -> str:
        targets = ", ".join(other.name for other in self.connections)
        return f"RoadBuilder({self.name!r}, -> [{targets}])"


def unique_roads(graph: Graph) -> Tuple[Road, ...]:
    """Return every road of ``graph`` once, in first-seen order."""

    seen: Dict[int, Road] = {}
    for connections in graph.values():
        for road in connections.values():
            seen.setdefault(id(road), road)
    return tuple(seen.values())


def build_graph(nodes: Iterable[RoadBuilder]) -> Graph:
    """Build every road as an undirected graph of nodes sharing directed roads.

    A connection declared by one side is enough; declaring it from both sides,
    or twice from the same side, raises :class:`DuplicateConnectionError`.
    """

    nodes = list(nodes)
    graph: Graph = {node: {} for node in nodes}
    for node in nodes:
        for connection in node.connections:
            if connection not in graph:
                raise UnknownNodeError(
                    f"node '{node.name}' connects to '{connection.name}', which is not in the plan"
                )
            if connection in graph[node]:
                raise DuplicateConnectionError(node, connection)
            road = node.build(connection)
            graph[node][connection] = road
            graph[connection][node] = road

    logger.debug(
        "Built graph with %d node(s) and %d road(s)", len(graph), len(unique_roads(graph))
    )
    return graph


__all__ = ["RoadBuilder", "build_graph", "unique_roads"]
