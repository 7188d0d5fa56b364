"""End-to-end pipeline: load a point cloud → fit planes → classify → report JSON."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from planefit.core.errors import DegenerateGeometryError
from planefit.core.types import Classification, PlaneFitReport, PlaneModel
from planefit.pipeline.colorize import write_classified_ply
from planefit.pipeline.distance import classify_points
from planefit.pipeline.fit import fit_plane_least_squares
from planefit.pipeline.loader import load_point_cloud
from planefit.pipeline.preprocess import as_point_cloud, compute_bounds
from planefit.pipeline.ransac import fit_plane_ransac
from planefit.pipeline.report import build_fit_report

logger = logging.getLogger(__name__)


def _log_plane(label: str, plane: PlaneModel) -> None:
    logger.info(
        "%s: A=%.6f B=%.6f C=%.6f D=%.6f", label, *plane.coefficients,
    )


def process_points(
    points,
    *,
    threshold: float = 0.02,
    iterations: int = 1000,
    seed: int | None = None,
    workers: int = 1,
    source_file: str = "",
) -> tuple[PlaneFitReport, Classification]:
    """Fit and classify an in-memory cloud.

    1. Least-squares plane over the whole cloud (for reference).
    2. RANSAC plane.
    3. Inlier / outlier split against the RANSAC plane.
    4. Assemble a :class:`PlaneFitReport`.
    """
    pts = as_point_cloud(points)

    least_squares: PlaneModel | None = None
    try:
        least_squares = fit_plane_least_squares(pts)
    except DegenerateGeometryError as e:
        # outliers can leave the whole cloud without a preferred normal
        logger.warning("No least-squares plane for the whole cloud: %s", e)
    else:
        _log_plane("Least-squares plane (all points)", least_squares)

    logger.info("Running RANSAC (threshold=%.4f, iterations=%d) …", threshold, iterations)
    robust = fit_plane_ransac(
        pts,
        threshold,
        iterations,
        rng=np.random.default_rng(seed),
        workers=workers,
    )
    _log_plane("RANSAC plane", robust)

    classification = classify_points(pts, robust, threshold)
    logger.info(
        "Classified %d points: %d inliers, %d outliers",
        len(pts), classification.inlier_count, classification.outlier_count,
    )

    report = build_fit_report(
        source_file=source_file,
        point_count=len(pts),
        bounds=compute_bounds(pts),
        threshold=threshold,
        iterations=iterations,
        seed=seed,
        least_squares_plane=least_squares,
        robust_plane=robust,
        classification=classification,
    )
    return report, classification


def process_scan(
    input_path: str | Path,
    *,
    threshold: float = 0.02,
    iterations: int = 1000,
    seed: int | None = None,
    workers: int = 1,
    colored_output: str | Path | None = None,
) -> PlaneFitReport:
    """Run the full pipeline on a single point-cloud file.

    When *colored_output* is given, the classified cloud is also written
    there as a green/red PLY.
    """
    input_path = Path(input_path)
    logger.info("Loading %s …", input_path.name)
    cloud_data = load_point_cloud(input_path)
    points = cloud_data["positions"]
    logger.info("Loaded %d points", len(points))

    report, classification = process_points(
        points,
        threshold=threshold,
        iterations=iterations,
        seed=seed,
        workers=workers,
        source_file=input_path.name,
    )

    if colored_output is not None:
        write_classified_ply(
            colored_output, points, classification, source_colors=cloud_data["colors"],
        )
    return report


def process_scan_to_json(
    input_path: str | Path,
    output_path: str | Path | None = None,
    **kwargs,
) -> str:
    """Run the pipeline and write the fit report to a JSON file.

    Returns the JSON string.
    """
    report = process_scan(input_path, **kwargs)
    json_str = report.model_dump_json(indent=2)

    if output_path is None:
        output_path = Path(input_path).with_suffix(".planefit.json")
    Path(output_path).write_text(json_str)
    logger.info("Wrote fit report → %s", output_path)
    return json_str
