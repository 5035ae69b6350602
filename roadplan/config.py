"""Configuration helpers for plan construction."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class PlanOptions:
    """Plan construction options."""

    start: Optional[str] = None
    require_connected: bool = True
    up: Tuple[float, float, float] = (0.0, 1.0, 0.0)


_PLAN_OPTIONS = PlanOptions()


def get_plan_options() -> PlanOptions:
    return copy.deepcopy(_PLAN_OPTIONS)


def set_plan_options(options: PlanOptions) -> None:
    global _PLAN_OPTIONS
    _PLAN_OPTIONS = copy.deepcopy(options)
