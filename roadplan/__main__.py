import argparse
import logging
import sys
from typing import Optional, Sequence, Tuple

from roadplan import (
    DisconnectedGraphError,
    DuplicateConnectionError,
    PlanOptions,
    UncoverableRoadError,
    UnknownNodeError,
    format_plan_report,
    format_tracking,
    parse_network,
    plan_from_network,
    print_network,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_position(value: str) -> Tuple[float, float, float]:
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if len(parts) != 3:
        raise argparse.ArgumentTypeError("position must be X,Y,Z")
    try:
        x, y, z = (float(part) for part in parts)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid position {value!r}") from exc
    return x, y, z


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Decompose a road network into districts")
    parser.add_argument("path", help="Path to the road network description")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--start",
        help="Name of the node the cycle search starts from (default: first node)",
    )
    parser.add_argument(
        "--allow-disconnected",
        action="store_true",
        help="Search every connected component instead of requiring one",
    )
    parser.add_argument(
        "--all-cycles",
        action="store_true",
        help="List every cycle found, not only the interior ones",
    )
    parser.add_argument(
        "--closest",
        type=_parse_position,
        action="append",
        default=[],
        metavar="X,Y,Z",
        help="Report the closest road to a position (repeatable)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    with open(args.path) as fin:
        text = fin.read()

    logger.info("Parsing road network from %s", args.path)
    network = parse_network(text)
    logger.debug("Network:\n%s", print_network(network))

    options = PlanOptions(start=args.start, require_connected=not args.allow_disconnected)
    try:
        plan = plan_from_network(network, options)
    except (DuplicateConnectionError, UncoverableRoadError, DisconnectedGraphError, UnknownNodeError) as exc:
        logger.error("Cannot build plan: %s", exc)
        raise SystemExit(1)

    print(format_plan_report(plan, title=network.title, all_cycles=args.all_cycles))

    for position in args.closest:
        print(format_tracking(plan.track(position)))


if __name__ == "__main__":
    main(sys.argv[1:])
