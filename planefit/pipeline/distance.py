"""Point-to-plane distances and inlier/outlier classification."""

from __future__ import annotations

import math

import numpy as np

from planefit.core.errors import InvalidParameterError
from planefit.core.types import Classification, PlaneModel
from planefit.pipeline.preprocess import as_point_cloud


def point_plane_distances(points: np.ndarray, plane: PlaneModel) -> np.ndarray:
    """Absolute distance of every point to *plane*.

    The plane normal is assumed to be unit length already.
    """
    return np.abs(points @ plane.normal + plane.d)


def classify_points(points, plane: PlaneModel, threshold: float) -> Classification:
    """Split *points* into inliers and outliers relative to *plane*.

    A point is an inlier when its distance is strictly below *threshold*;
    a point lying exactly at the threshold is an outlier.
    """
    if not math.isfinite(threshold) or threshold <= 0:
        raise InvalidParameterError(f"threshold must be positive, got {threshold}")

    pts = as_point_cloud(points)
    distances = point_plane_distances(pts, plane)
    return Classification(distances=distances, is_inlier=distances < threshold)
