"""Core data structures for road plans."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

import numpy as np

from .geometry import (
    UP,
    PointLike,
    as_point,
    closest_point_on_segment,
    frozen_point,
    normalized,
    sign_of_point_on_axis,
)


class DuplicateConnectionError(ValueError):
    """Raised when the same node pair is connected more than once."""

    def __init__(self, a: "Node", b: "Node"):
        super().__init__(f"connection between '{a.name}' and '{b.name}' is declared more than once")
        self.nodes = (a, b)


class UncoverableRoadError(RuntimeError):
    """Raised when some roads belong to no cycle, so districts cannot cover them."""

    def __init__(self, roads: Sequence["Road"]):
        names = ", ".join(road.name for road in roads)
        super().__init__(f"roads not part of any cycle: {names}")
        self.roads = tuple(roads)


class DisconnectedGraphError(RuntimeError):
    """Raised when the start node cannot reach every node of the graph."""

    def __init__(self, start: "Node", unreachable: Sequence["Node"]):
        names = ", ".join(node.name for node in unreachable)
        super().__init__(f"nodes unreachable from '{start.name}': {names}")
        self.start = start
        self.unreachable = tuple(unreachable)


class UnknownNodeError(LookupError):
    """Raised for node names or node objects that are not part of a graph."""


class NoConnectionError(LookupError):
    """Raised when two nodes are not joined by a road."""


class DistrictLookupError(LookupError):
    """Raised when no district is assigned to a side of a road."""


class Side(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, eq=False)
class Node:
    """A named junction position."""

    name: str
    position: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", frozen_point(self.position))

    def __repr__(self) -> str:
        x, y, z = self.position
        return f"Node({self.name!r}, ({x:g}, {y:g}, {z:g}))"


class Road(ABC):
    """A named connection from ``start`` to ``end`` with some geometry.

    Roads compare and hash by identity; the same instance is shared by both
    endpoints in a graph.
    """

    def __init__(self, start: Node, end: Node, name: str):
        if start is end:
            raise ValueError(f"road '{name}' must join two distinct nodes")
        self._start = start
        self._end = end
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def start(self) -> Node:
        return self._start

    @property
    def end(self) -> Node:
        return self._end

    @property
    def nodes(self) -> Tuple[Node, Node]:
        return self._start, self._end

    def other(self, node: Node) -> Node:
        if node is self._start:
            return self._end
        if node is self._end:
            return self._start
        raise UnknownNodeError(f"node '{node.name}' is not an end of road '{self._name}'")

    @property
    @abstractmethod
    def length(self) -> float:
        ...

    @abstractmethod
    def closest_point(self, position: PointLike) -> np.ndarray:
        """Return the closest point on the road to ``position``."""

    @abstractmethod
    def side_of_point(self, position: PointLike, up: PointLike = UP) -> Side:
        """Return which side of the road ``position`` lies on, relative to its direction."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {self._start.name}->{self._end.name})"


class StraightRoad(Road):
    """A straight segment between its two nodes."""

    @property
    def length(self) -> float:
        return float(np.linalg.norm(self.end.position - self.start.position))

    def closest_point(self, position: PointLike) -> np.ndarray:
        return closest_point_on_segment(position, self.start.position, self.end.position)

    def side_of_point(self, position: PointLike, up: PointLike = UP) -> Side:
        axis = normalized(self.end.position - self.start.position)
        sign = sign_of_point_on_axis(as_point(position) - self.start.position, axis, up)
        return Side.RIGHT if sign > 0.0 else Side.LEFT


Graph = Dict[Node, Dict[Node, Road]]


@dataclass(frozen=True)
class Cycle:
    """A closed loop of roads, compared as a set.

    ``roads`` is kept sorted by road name so equal road sets produce equal
    cycles regardless of the direction or starting road of the traversal.
    """

    roads: Tuple[Road, ...]

    @classmethod
    def from_roads(cls, roads: Iterable[Road]) -> "Cycle":
        unique = {id(road): road for road in roads}
        return cls(tuple(sorted(unique.values(), key=lambda road: road.name)))

    @property
    def key(self) -> Tuple[str, ...]:
        return tuple(road.name for road in self.roads)

    @property
    def nodes(self) -> Tuple[Node, ...]:
        seen: Dict[int, Node] = {}
        for road in self.roads:
            for node in road.nodes:
                seen.setdefault(id(node), node)
        return tuple(sorted(seen.values(), key=lambda node: node.name))

    def __contains__(self, road: object) -> bool:
        return any(road is own for own in self.roads)

    def __iter__(self) -> Iterator[Road]:
        return iter(self.roads)

    def __len__(self) -> int:
        return len(self.roads)


@dataclass(frozen=True, eq=False)
class District:
    """A named region bounded by roads, with the side of each road it lies on."""

    name: str
    sides: Mapping[Road, Side] = field(default_factory=dict)

    @property
    def roads(self) -> Tuple[Road, ...]:
        return tuple(self.sides.keys())


@dataclass(frozen=True, eq=False)
class Tracking:
    """Where a position sits within a plan."""

    position: np.ndarray
    closest_road: Road
    closest_point: np.ndarray
    closest_side: Side
    closest_district: Optional[District] = None

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.closest_point - self.position))


__all__ = [
    "DuplicateConnectionError",
    "UncoverableRoadError",
    "DisconnectedGraphError",
    "UnknownNodeError",
    "NoConnectionError",
    "DistrictLookupError",
    "Side",
    "Node",
    "Road",
    "StraightRoad",
    "Graph",
    "Cycle",
    "District",
    "Tracking",
]
