from typing import Dict, Mapping, Set, Tuple

from .ast import Network, Span
from .model import Node, Road


class ValidationError(Exception):
    pass


def _at(sp: Span) -> str:
    return f'[line {sp.line}, col {sp.col}]'


def validate(network: Network) -> None:
    """Check a parsed network description before any roads are built."""
    plans = network.of_kind('plan')
    if len(plans) > 1:
        raise ValidationError(f'{_at(plans[1].span)} plan title declared more than once')

    nodes: Dict[str, Span] = {}
    for s in network.of_kind('node'):
        name = s.data['id']
        if name in nodes:
            first = nodes[name]
            raise ValidationError(
                f'{_at(s.span)} node {name} already declared at line {first.line}'
            )
        nodes[name] = s.span

    for s in network.of_kind('road'):
        for key, val in s.opts.items():
            if key != 'name':
                raise ValidationError(f'{_at(s.span)} unknown road option "{key}"')
            if not isinstance(val, str) or not val:
                raise ValidationError(f'{_at(s.span)} road option "name" must be a non-empty string')

    for s in network.of_kind('roads'):
        if len(s.data['ids']) < 2:
            raise ValidationError(f'{_at(s.span)} roads needs at least two nodes')

    pairs: Set[Tuple[str, str]] = set()
    names: Dict[str, Span] = {}
    for c in network.connections():
        for end in (c.start, c.end):
            if end not in nodes:
                raise ValidationError(f'{_at(c.span)} unknown node {end}')
        if c.start == c.end:
            raise ValidationError(f'{_at(c.span)} road {c.start}-{c.end} connects a node to itself')
        pair = (c.start, c.end) if c.start < c.end else (c.end, c.start)
        if pair in pairs:
            raise ValidationError(
                f'{_at(c.span)} connection {c.start}-{c.end} is declared more than once'
            )
        pairs.add(pair)
        if c.road_name in names:
            raise ValidationError(
                f'{_at(c.span)} road name "{c.road_name}" already used at line {names[c.road_name].line}'
            )
        names[c.road_name] = c.span


def validate_graph(graph: Mapping[Node, Mapping[Node, Road]]) -> None:
    """Check that an adjacency mapping is a well formed undirected road graph."""
    names: Dict[str, Road] = {}
    for node, connections in graph.items():
        for other, road in connections.items():
            if other not in graph:
                raise ValidationError(f'node {other.name} is connected to {node.name} but not in the graph')
            if {id(road.start), id(road.end)} != {id(node), id(other)}:
                raise ValidationError(
                    f'road {road.name} joins {road.start.name}-{road.end.name}, '
                    f'not {node.name}-{other.name}'
                )
            back = graph[other].get(node)
            if back is not road:
                raise ValidationError(f'road {road.name} is not shared by {other.name} -> {node.name}')
            seen = names.setdefault(road.name, road)
            if seen is not road:
                raise ValidationError(f'road name {road.name} is used by more than one road')
