"""Plan façade: a road graph together with the cycles that bound its districts."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .builder import RoadBuilder, build_graph, unique_roads
from .config import PlanOptions, get_plan_options
from .cycles import (
    build_exterior_cycle,
    connected_components,
    enumerate_cycles,
    find_interior_cycles,
    reachable_nodes,
)
from .geometry import PointLike, as_point, sqr_distance
from .model import (
    Cycle,
    DisconnectedGraphError,
    District,
    DistrictLookupError,
    Graph,
    Node,
    NoConnectionError,
    Road,
    Side,
    Tracking,
    UnknownNodeError,
)
from .validate import validate_graph

_logger = logging.getLogger(__name__)


class Plan:
    """A plan of nodes, which form roads, which form districts.

    Everything is computed on construction: the unique roads, every simple
    cycle, the interior cycles that cover all roads with the smallest loops,
    and the exterior cycle around the whole network. A built plan is never
    mutated.

    Progress is reported to ``logger`` (the module logger by default).
    """

    def __init__(
        self,
        graph: Mapping[Node, Mapping[Node, Road]],
        options: Optional[PlanOptions] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        options = options if options is not None else get_plan_options()
        log = logger or _logger

        validate_graph(graph)
        self._graph: Graph = {node: dict(connections) for node, connections in graph.items()}
        self._roads: Tuple[Road, ...] = unique_roads(self._graph)
        self._nodes_by_name: Dict[str, Node] = {node.name: node for node in self._graph}
        self._up = as_point(options.up)

        # Districts are not built yet, so every road side is unassigned.
        self._districts_by_road_side: Dict[Road, Dict[Side, District]] = {road: {} for road in self._roads}

        self._cycles = self._build_all_cycles(options)
        if self._cycles:
            self._interior_cycles = find_interior_cycles(self._cycles, self._roads)
        else:
            if self._roads:
                log.warning("Plan has %d road(s) but no cycles; no districts can be formed", len(self._roads))
            self._interior_cycles = ()
        self._exterior_cycle = build_exterior_cycle(self._interior_cycles)

        log.info(
            "From %d cycles, found %d interior cycles and an exterior cycle of %d roads.",
            len(self._cycles),
            len(self._interior_cycles),
            len(self._exterior_cycle) if self._exterior_cycle is not None else 0,
        )
        if log.isEnabledFor(logging.DEBUG):
            for cycle in self._cycles:
                log.debug("Cycle: %s", ", ".join(cycle.key))
            for cycle in self._interior_cycles:
                log.debug("Interior cycle: %s", ", ".join(cycle.key))
            if self._exterior_cycle is not None:
                log.debug("Exterior cycle: %s", ", ".join(self._exterior_cycle.key))

    @classmethod
    def from_builders(
        cls,
        nodes: Iterable[RoadBuilder],
        options: Optional[PlanOptions] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> "Plan":
        return cls(build_graph(nodes), options, logger=logger)

    def _build_all_cycles(self, options: PlanOptions) -> Tuple[Cycle, ...]:
        if not self._graph:
            return ()
        start = self.node(options.start) if options.start is not None else next(iter(self._graph))

        if options.require_connected:
            reachable = set(reachable_nodes(self._graph, start))
            unreachable = [node for node in self._graph if node not in reachable]
            if unreachable:
                raise DisconnectedGraphError(start, unreachable)
            return enumerate_cycles(self._graph, start)

        # Search each component on its own, beginning with the start node's.
        components = connected_components(self._graph)
        components.sort(key=lambda component: start not in component)
        found: Dict[Tuple[str, ...], Cycle] = {}
        for component in components:
            head = start if start in component else component[0]
            for cycle in enumerate_cycles(self._graph, head):
                found.setdefault(cycle.key, cycle)
        return tuple(found.values())

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._graph)

    @property
    def roads(self) -> Tuple[Road, ...]:
        return self._roads

    @property
    def graph(self) -> Mapping[Node, Mapping[Node, Road]]:
        return MappingProxyType({node: MappingProxyType(conns) for node, conns in self._graph.items()})

    @property
    def cycles(self) -> Tuple[Cycle, ...]:
        return self._cycles

    @property
    def interior_cycles(self) -> Tuple[Cycle, ...]:
        return self._interior_cycles

    @property
    def exterior_cycle(self) -> Optional[Cycle]:
        return self._exterior_cycle

    @property
    def districts(self) -> Tuple[District, ...]:
        seen: Dict[int, District] = {}
        for sides in self._districts_by_road_side.values():
            for district in sides.values():
                seen.setdefault(id(district), district)
        return tuple(seen.values())

    def interior_roads(self) -> Tuple[Road, ...]:
        """Roads shared by more than one interior cycle."""
        exterior = self._exterior_cycle
        if exterior is None:
            return ()
        return tuple(road for road in self._roads if road not in exterior)

    def node(self, name: str) -> Node:
        try:
            return self._nodes_by_name[name]
        except KeyError:
            raise UnknownNodeError(f"unknown node '{name}'") from None

    def _connections(self, node: Node) -> Dict[Node, Road]:
        try:
            return self._graph[node]
        except KeyError:
            raise UnknownNodeError(f"node '{node.name}' is not part of this plan") from None

    def connecting_nodes(self, node: Node) -> Tuple[Node, ...]:
        """Get all the nodes connecting to a node."""
        return tuple(self._connections(node).keys())

    def connecting_roads(self, node: Node) -> Tuple[Road, ...]:
        """Get all the roads connecting to a node."""
        return tuple(self._connections(node).values())

    def connecting_road(self, a: Node, b: Node) -> Road:
        """Get the road connecting two nodes."""
        road = self._connections(a).get(b)
        if road is None:
            raise NoConnectionError(f"no road connects '{a.name}' and '{b.name}'")
        return road

    def closest_road(self, position: PointLike, district: Optional[District] = None) -> Road:
        """Get the closest road to a position, optionally among a district's roads.

        Equal distances resolve to the road whose name sorts first.
        """
        p = as_point(position)
        candidates: Iterable[Road] = district.roads if district is not None else self._roads
        best: Optional[Tuple[float, str, Road]] = None
        for road in candidates:
            entry = (sqr_distance(road.closest_point(p), p), road.name, road)
            if best is None or entry[:2] < best[:2]:
                best = entry
        if best is None:
            raise LookupError("there are no roads to search")
        return best[2]

    def adjacent_district(self, side: Side, road: Road) -> District:
        """Get the district adjacent to a side of a road."""
        try:
            sides = self._districts_by_road_side[road]
        except KeyError:
            raise LookupError(f"road '{road.name}' is not part of this plan") from None
        try:
            return sides[side]
        except KeyError:
            raise DistrictLookupError(
                f"no district on the {side.value} side of road '{road.name}'"
            ) from None

    def track(self, position: PointLike) -> Tracking:
        """Locate ``position`` relative to its closest road."""
        p = as_point(position)
        road = self.closest_road(p)
        side = road.side_of_point(p, self._up)
        return Tracking(
            position=p,
            closest_road=road,
            closest_point=road.closest_point(p),
            closest_side=side,
            closest_district=self._districts_by_road_side[road].get(side),
        )


__all__ = ["Plan"]
