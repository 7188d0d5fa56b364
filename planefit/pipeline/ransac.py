"""RANSAC single-plane fitting.

Each trial fits a candidate plane to three randomly chosen points and scores
it by the number of points within the distance threshold.  The best
candidate's consensus set is then refitted with the least-squares fitter,
so the returned plane is never a raw minimal-sample candidate.
"""

from __future__ import annotations

import concurrent.futures
import logging
import math
from typing import NamedTuple

import numpy as np

from planefit.core.errors import (
    DegenerateGeometryError,
    InsufficientPointsError,
    InvalidParameterError,
)
from planefit.core.types import PlaneModel
from planefit.pipeline.distance import classify_points
from planefit.pipeline.fit import MIN_PLANE_POINTS, fit_plane_least_squares
from planefit.pipeline.preprocess import as_point_cloud

logger = logging.getLogger(__name__)


class _Trial(NamedTuple):
    indices: np.ndarray
    plane: PlaneModel
    score: int


def _better(candidate: _Trial | None, incumbent: _Trial | None) -> bool:
    """Strictly-greater score wins; ties keep the incumbent."""
    if candidate is None:
        return False
    return candidate.score > (incumbent.score if incumbent is not None else 0)


def _select_best(trials) -> _Trial | None:
    """Scan *trials* in order and keep the first one with the highest score."""
    best: _Trial | None = None
    for trial in trials:
        if _better(trial, best):
            best = trial
    return best


def _run_trials(
    points: np.ndarray,
    threshold: float,
    n_trials: int,
    rng: np.random.Generator,
) -> _Trial | None:
    best: _Trial | None = None
    n = len(points)

    for _ in range(n_trials):
        idx = rng.choice(n, size=3, replace=False)
        try:
            plane = fit_plane_least_squares(points[idx])
        except DegenerateGeometryError:
            logger.debug("Skipping collinear sample %s", idx.tolist())
            continue

        score = classify_points(points, plane, threshold).inlier_count
        trial = _Trial(indices=idx, plane=plane, score=score)
        if _better(trial, best):
            best = trial

    return best


def _run_trials_threaded(
    points: np.ndarray,
    threshold: float,
    iterations: int,
    rng: np.random.Generator,
    workers: int,
) -> _Trial | None:
    """Split *iterations* into contiguous blocks, one per worker.

    Every block gets its own child generator and block winners are merged
    in block order, so the result only depends on the seed of *rng*.
    """
    base, extra = divmod(iterations, workers)
    block_sizes = [base + (1 if i < extra else 0) for i in range(workers)]
    child_rngs = rng.spawn(workers)

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_run_trials, points, threshold, size, child)
            for size, child in zip(block_sizes, child_rngs)
        ]
        block_results = [future.result() for future in futures]

    return _select_best(block_results)


def fit_plane_ransac(
    points,
    threshold: float,
    iterations: int,
    *,
    rng: np.random.Generator | None = None,
    workers: int = 1,
) -> PlaneModel:
    """Fit a single plane to *points* using RANSAC.

    Runs exactly *iterations* trials.  Pass a seeded *rng* for reproducible
    output; ``workers > 1`` evaluates trials on a thread pool.

    Raises :class:`InsufficientPointsError` for fewer than three points,
    :class:`InvalidParameterError` for a non-positive *threshold*,
    *iterations* or *workers*, and :class:`DegenerateGeometryError` when no
    consensus set of at least three points is found.
    """
    pts = as_point_cloud(points)
    n = len(pts)
    if n < MIN_PLANE_POINTS:
        raise InsufficientPointsError(n, MIN_PLANE_POINTS)
    if not math.isfinite(threshold) or threshold <= 0:
        raise InvalidParameterError(f"threshold must be positive, got {threshold}")
    if iterations <= 0:
        raise InvalidParameterError(f"iterations must be positive, got {iterations}")
    if workers <= 0:
        raise InvalidParameterError(f"workers must be positive, got {workers}")

    rng = rng or np.random.default_rng()
    workers = min(workers, iterations)

    if workers == 1:
        best = _run_trials(pts, threshold, iterations, rng)
    else:
        best = _run_trials_threaded(pts, threshold, iterations, rng, workers)

    if best is None:
        raise DegenerateGeometryError(
            f"No RANSAC trial out of {iterations} produced a plane with inliers"
        )

    consensus = classify_points(pts, best.plane, threshold)
    if consensus.inlier_count < MIN_PLANE_POINTS:
        raise DegenerateGeometryError(
            f"Best consensus set has {consensus.inlier_count} points; "
            f"at least {MIN_PLANE_POINTS} are needed to refit"
        )

    plane = fit_plane_least_squares(consensus.inliers(pts))
    logger.info(
        "RANSAC: %d/%d inliers after %d trials (sample %s)",
        consensus.inlier_count, n, iterations, best.indices.tolist(),
    )
    return plane
