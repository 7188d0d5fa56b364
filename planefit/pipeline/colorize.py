"""Colour a classified cloud (inliers green, outliers red) and export it."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from plyfile import PlyData, PlyElement

from planefit.core.types import Classification

logger = logging.getLogger(__name__)

INLIER_COLOR = (0.0, 1.0, 0.0)
OUTLIER_COLOR = (1.0, 0.0, 0.0)


def classification_colors(classification: Classification) -> np.ndarray:
    """Return an (N, 3) RGB array in [0, 1]: green for inliers, red otherwise."""
    return np.where(
        classification.is_inlier[:, None],
        np.array(INLIER_COLOR),
        np.array(OUTLIER_COLOR),
    )


def write_classified_ply(
    path: str | Path,
    points: np.ndarray,
    classification: Classification,
    source_colors: np.ndarray | None = None,
) -> Path:
    """Write *points* as a binary PLY with per-vertex colour and inlier flag.

    The red/green/blue properties carry the classification colours.  When
    *source_colors* (N, 3) in [0, 1] are given, the scanner colours are kept
    as ``source_red``, ``source_green`` and ``source_blue``.
    """
    if len(points) != len(classification.is_inlier):
        raise ValueError(
            f"{len(points)} points but {len(classification.is_inlier)} classified"
        )

    rgb = (classification_colors(classification) * 255).astype(np.uint8)
    dtype = [
        ("x", "f4"), ("y", "f4"), ("z", "f4"),
        ("red", "u1"), ("green", "u1"), ("blue", "u1"),
        ("inlier", "u1"),
    ]
    if source_colors is not None:
        dtype += [("source_red", "u1"), ("source_green", "u1"), ("source_blue", "u1")]
    vertices = np.empty(len(points), dtype=dtype)
    vertices["x"] = points[:, 0]
    vertices["y"] = points[:, 1]
    vertices["z"] = points[:, 2]
    vertices["red"] = rgb[:, 0]
    vertices["green"] = rgb[:, 1]
    vertices["blue"] = rgb[:, 2]
    vertices["inlier"] = classification.is_inlier.astype(np.uint8)
    if source_colors is not None:
        src = np.round(np.clip(source_colors, 0.0, 1.0) * 255).astype(np.uint8)
        vertices["source_red"] = src[:, 0]
        vertices["source_green"] = src[:, 1]
        vertices["source_blue"] = src[:, 2]

    path = Path(path)
    PlyData([PlyElement.describe(vertices, "vertex")], text=False).write(str(path))
    logger.info(
        "Wrote classified cloud → %s (%d inliers, %d outliers)",
        path, classification.inlier_count, classification.outlier_count,
    )
    return path
