"""Point and straight-segment helpers shared by roads and spatial queries."""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

PointLike = Union[Sequence[float], np.ndarray]

UP = np.array([0.0, 1.0, 0.0])

_EPS = 1e-12


def as_point(value: PointLike) -> np.ndarray:
    """Return ``value`` as a float array of shape ``(3,)``."""

    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3D point, got shape {arr.shape}")
    return arr


def frozen_point(value: PointLike) -> np.ndarray:
    arr = as_point(value).copy()
    arr.flags.writeable = False
    return arr


def normalized(v: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(v))
    if norm <= _EPS:
        return np.zeros(3)
    return v / norm


def sqr_distance(a: PointLike, b: PointLike) -> float:
    d = as_point(a) - as_point(b)
    return float(np.dot(d, d))


def closest_point_on_segment(position: PointLike, start: PointLike, end: PointLike) -> np.ndarray:
    """Project ``position`` onto the segment ``start``-``end``, clamped to its ends."""

    p = as_point(position)
    a = as_point(start)
    b = as_point(end)
    ab = b - a
    denom = float(np.dot(ab, ab))
    if denom <= _EPS:
        return a.copy()
    t = float(np.dot(p - a, ab)) / denom
    t = min(max(t, 0.0), 1.0)
    return a + t * ab


def sign_of_point_on_axis(offset: PointLike, axis: PointLike, up: PointLike = UP) -> float:
    """Signed scalar telling which side of ``axis`` the ``offset`` vector lies on.

    Positive values are to the right when looking along ``axis`` with ``up``
    pointing up (a road heading +Z has +X on its right for the default +Y up).
    """

    return float(np.dot(np.cross(as_point(axis), as_point(offset)), as_point(up)))


__all__ = [
    "PointLike",
    "UP",
    "as_point",
    "frozen_point",
    "normalized",
    "sqr_distance",
    "closest_point_on_segment",
    "sign_of_point_on_axis",
]
