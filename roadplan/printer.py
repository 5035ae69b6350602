from typing import Dict, Iterable, Optional, Sequence

from .ast import Network, Stmt
from .model import Cycle, Road, Tracking


def _num(value: float) -> str:
    return f"{value:g}"


def position_str(position: Sequence[float]) -> str:
    return "(" + ", ".join(_num(float(c)) for c in position) + ")"


def _format_opts(opts: Dict[str, object]) -> str:
    if not opts:
        return ""
    parts = []
    for key in sorted(opts.keys()):
        value = opts[key]
        if isinstance(value, bool):
            rendered = "true" if value else "false"
        elif isinstance(value, (int, float)):
            rendered = _num(value)
        else:
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            rendered = f'"{escaped}"'
        parts.append(f"{key}={rendered}")
    return " [" + ", ".join(parts) + "]"


def format_stmt(stmt: Stmt) -> str:
    if stmt.kind == "plan":
        title = stmt.data["title"].replace("\\", "\\\\").replace('"', '\\"')
        return f'plan "{title}"'
    if stmt.kind == "node":
        return f"node {stmt.data['id']} at {position_str(stmt.data['position'])}"
    if stmt.kind == "road":
        a, b = stmt.data["edge"]
        return f"road {a}-{b}{_format_opts(stmt.opts)}"
    if stmt.kind == "roads":
        return "roads " + "-".join(stmt.data["ids"])
    raise ValueError(f"unknown statement kind {stmt.kind!r}")


def print_network(network: Network) -> str:
    return "".join(format_stmt(stmt) + "\n" for stmt in network.stmts)


def format_cycle(cycle: Optional[Cycle]) -> str:
    if cycle is None:
        return "(none)"
    return f"[{len(cycle)}] " + ", ".join(cycle.key)


def _road_list(roads: Iterable[Road]) -> str:
    names = sorted(road.name for road in roads)
    return ", ".join(names) if names else "(none)"


def format_plan_report(plan, *, title: Optional[str] = None, all_cycles: bool = False) -> str:
    """Render a human readable summary of a built plan."""
    lines = []
    if title:
        lines.append(f"Plan: {title}")
    lines.append(f"Nodes: {len(plan.nodes)}")
    lines.append(f"Roads: {len(plan.roads)}")
    lines.append(f"Cycles found: {len(plan.cycles)}")
    if all_cycles:
        for cycle in plan.cycles:
            lines.append(f"  {format_cycle(cycle)}")
    lines.append(f"Interior cycles: {len(plan.interior_cycles)}")
    for cycle in plan.interior_cycles:
        lines.append(f"  {format_cycle(cycle)}")
    lines.append(f"Exterior cycle: {format_cycle(plan.exterior_cycle)}")
    lines.append(f"Interior roads: {_road_list(plan.interior_roads())}")
    return "\n".join(lines)


def format_tracking(tracking: Tracking) -> str:
    district = tracking.closest_district.name if tracking.closest_district is not None else "(none)"
    return "\n".join(
        [
            f"Position: {position_str(tracking.position)}",
            f"  closest road: {tracking.closest_road.name}",
            f"  closest point: {position_str(tracking.closest_point)}",
            f"  distance: {tracking.distance:.6g}",
            f"  side: {tracking.closest_side.value}",
            f"  district: {district}",
        ]
    )
