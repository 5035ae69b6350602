from .ast import Connection, Network, Span, Stmt
from .builder import RoadBuilder, build_graph, unique_roads
from .config import PlanOptions, get_plan_options, set_plan_options
from .cycles import (
    build_exterior_cycle,
    connected_components,
    enumerate_cycles,
    find_interior_cycles,
    reachable_nodes,
)
from .model import (
    Cycle,
    DisconnectedGraphError,
    District,
    DistrictLookupError,
    DuplicateConnectionError,
    Graph,
    Node,
    NoConnectionError,
    Road,
    Side,
    StraightRoad,
    Tracking,
    UncoverableRoadError,
    UnknownNodeError,
)
from .network import load_plan, network_builders, plan_from_network
from .parser import parse_network
from .plan import Plan
from .printer import format_cycle, format_plan_report, format_stmt, format_tracking, print_network
from .validate import ValidationError, validate, validate_graph

__all__ = [
    'Connection',
    'Network',
    'Span',
    'Stmt',
    'RoadBuilder',
    'build_graph',
    'unique_roads',
    'PlanOptions',
    'get_plan_options',
    'set_plan_options',
    'build_exterior_cycle',
    'connected_components',
    'enumerate_cycles',
    'find_interior_cycles',
    'reachable_nodes',
    'Cycle',
    'DisconnectedGraphError',
    'District',
    'DistrictLookupError',
    'DuplicateConnectionError',
    'Graph',
    'Node',
    'NoConnectionError',
    'Road',
    'Side',
    'StraightRoad',
    'Tracking',
    'UncoverableRoadError',
    'UnknownNodeError',
    'load_plan',
    'network_builders',
    'plan_from_network',
    'parse_network',
    'Plan',
    'format_cycle',
    'format_plan_report',
    'format_stmt',
    'format_tracking',
    'print_network',
    'ValidationError',
    'validate',
    'validate_graph',
]
