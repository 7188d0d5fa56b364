"""Total-least-squares plane fitting.

The normal of the best plane through a point set is the direction of least
variance: the eigenvector of the centred scatter matrix ``Xᵀ·X`` with the
smallest eigenvalue.  The plane is anchored at the centroid.
"""

from __future__ import annotations

import logging

import numpy as np

from planefit.core.errors import DegenerateGeometryError, InsufficientPointsError
from planefit.core.types import PlaneModel
from planefit.pipeline.preprocess import as_point_cloud

logger = logging.getLogger(__name__)

MIN_PLANE_POINTS = 3

# Relative eigenvalue gap below which the normal direction is not determined.
DEGENERACY_TOL = 1e-10


def fit_plane_least_squares(
    points,
    *,
    degeneracy_tol: float = DEGENERACY_TOL,
) -> PlaneModel:
    """Fit a plane to *points* minimising the sum of squared distances.

    Returns a :class:`PlaneModel` with a unit normal.  The sign of the normal
    is whatever the eigen-solver produced.

    Raises :class:`InsufficientPointsError` for fewer than three points and
    :class:`DegenerateGeometryError` when the two smallest eigenvalues of
    the scatter matrix are indistinguishable relative to the largest one
    (collinear or coincident points).
    """
    pts = as_point_cloud(points)
    n = len(pts)
    if n < MIN_PLANE_POINTS:
        raise InsufficientPointsError(n, MIN_PLANE_POINTS)

    centroid = pts.mean(axis=0)
    centered = pts - centroid
    scatter = centered.T @ centered

    # eigh returns eigenvalues in ascending order
    eigvals, eigvecs = np.linalg.eigh(scatter)
    if eigvals[1] - eigvals[0] <= degeneracy_tol * eigvals[2]:
        raise DegenerateGeometryError(
            f"Scatter matrix is ill-conditioned (eigenvalues {eigvals.tolist()}); "
            f"the {n} points do not span a plane"
        )

    normal = eigvecs[:, 0]
    d = -float(np.dot(normal, centroid))
    logger.debug(
        "Least-squares plane over %d points: n=(%.4f, %.4f, %.4f) d=%.4f",
        n, normal[0], normal[1], normal[2], d,
    )
    return PlaneModel.from_normal(normal, d)
