"""Build a PlaneFitReport from fitted planes and point-cloud metadata."""

from __future__ import annotations

from typing import Optional

from planefit.core.types import BBox, Classification, PlaneFitReport, PlaneModel


def build_fit_report(
    *,
    source_file: str,
    point_count: int,
    bounds: BBox,
    threshold: float,
    iterations: int,
    seed: Optional[int],
    least_squares_plane: Optional[PlaneModel],
    robust_plane: PlaneModel,
    classification: Classification,
) -> PlaneFitReport:
    """Assemble pipeline outputs into a :class:`PlaneFitReport`."""
    return PlaneFitReport(
        source_file=source_file,
        point_count=point_count,
        bounds=bounds,
        threshold=threshold,
        iterations=iterations,
        seed=seed,
        least_squares_plane=least_squares_plane,
        robust_plane=robust_plane,
        inlier_count=classification.inlier_count,
        outlier_count=classification.outlier_count,
    )
