"""Example pipeline: build a plan from code and query it."""

from roadplan import Plan, RoadBuilder, format_plan_report, format_tracking


def main() -> None:
    gate = RoadBuilder("Gate", (0.0, 0.0, 0.0))
    church = RoadBuilder("Church", (0.0, 0.0, 40.0))
    square = RoadBuilder("Square", (30.0, 0.0, 40.0))
    market = RoadBuilder("Market", (30.0, 0.0, 0.0))
    quay = RoadBuilder("Quay", (60.0, 0.0, 0.0))
    pier = RoadBuilder("Pier", (60.0, 0.0, 40.0))

    gate.connect(market, "South Wall")
    market.connect(square, "Market Street")
    square.connect(church)
    church.connect(gate)
    market.connect(quay)
    quay.connect(pier)
    pier.connect(square)

    plan = Plan.from_builders([gate, church, square, market, quay, pier])
    print(format_plan_report(plan, title="Old Town"))
    print(format_tracking(plan.track((28.0, 0.0, 12.0))))


if __name__ == "__main__":
    main()
