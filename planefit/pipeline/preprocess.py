"""Preprocessing helpers: point-cloud coercion and bounds."""

from __future__ import annotations

import numpy as np

from planefit.core.errors import InvalidParameterError
from planefit.core.types import BBox, Vec3


def as_point_cloud(points) -> np.ndarray:
    """Coerce *points* into an (N, 3) float64 array.

    Accepts anything ``np.asarray`` understands (nested lists, float32
    arrays, ...).  An empty input becomes a ``(0, 3)`` array.
    """
    try:
        arr = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(f"Points are not a numeric (N, 3) array: {e}") from e
    if arr.size == 0:
        return np.empty((0, 3), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise InvalidParameterError(
            f"Expected an (N, 3) point array, got shape {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError("Point cloud contains NaN or infinite coordinates")
    return arr


def compute_bounds(points: np.ndarray) -> BBox:
    """Return the axis-aligned bounding box of an (N, 3) point array."""
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    return BBox(
        min=Vec3(x=float(mins[0]), y=float(mins[1]), z=float(mins[2])),
        max=Vec3(x=float(maxs[0]), y=float(maxs[1]), z=float(maxs[2])),
    )
