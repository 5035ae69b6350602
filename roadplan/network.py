"""Turn parsed road network descriptions into builders and plans."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .ast import Network
from .builder import RoadBuilder
from .config import PlanOptions
from .parser import parse_network
from .plan import Plan
from .validate import validate


def network_builders(network: Network) -> List[RoadBuilder]:
    """Create one :class:`RoadBuilder` per node, wired with the declared connections."""

    builders: Dict[str, RoadBuilder] = {}
    for stmt in network.of_kind("node"):
        name = stmt.data["id"]
        builders[name] = RoadBuilder(name, stmt.data["position"])
    for connection in network.connections():
        builders[connection.start].connect(builders[connection.end], connection.road_name)
    return list(builders.values())


def plan_from_network(
    network: Network,
    options: Optional[PlanOptions] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> Plan:
    validate(network)
    return Plan.from_builders(network_builders(network), options, logger=logger)


def load_plan(
    text: str,
    options: Optional[PlanOptions] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> Plan:
    """Parse, validate and build a plan from road network description text."""

    network = parse_network(text)
    return plan_from_network(network, options, logger=logger)
