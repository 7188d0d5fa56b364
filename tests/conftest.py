"""Shared test fixtures – synthetic point clouds around known planes."""

from __future__ import annotations

import numpy as np
import pytest

from tests.synthetic import make_contaminated_cloud, make_plane_points


@pytest.fixture()
def tilted_normal() -> np.ndarray:
    n = np.array([1.0, -2.0, 3.0])
    return n / np.linalg.norm(n)


@pytest.fixture()
def contaminated_cloud(tilted_normal: np.ndarray) -> np.ndarray:
    """80 % exact inliers on a tilted plane, 20 % outliers ≥ 0.2 m away.

    Plane: ``tilted_normal · p - 1.5 = 0``.
    """
    return make_contaminated_cloud(tilted_normal, -1.5, rng=np.random.default_rng(7))


@pytest.fixture()
def floor_points() -> np.ndarray:
    """A noisy 4 m × 4 m floor at z = 0."""
    return make_plane_points(
        np.array([0.0, 0.0, 1.0]), 0.0, extent=4.0, n=300, noise=0.002,
        rng=np.random.default_rng(42),
    )


@pytest.fixture()
def unit_square_with_outlier() -> np.ndarray:
    """Corners of the unit square at z=0 plus one point far above it."""
    return np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [1.0, 1.0, 0.0],
            [0.5, 0.5, 10.0],
        ]
    )
