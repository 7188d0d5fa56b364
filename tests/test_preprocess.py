"""Tests for preprocessing utilities."""

from __future__ import annotations

import numpy as np
import pytest

from planefit.core.errors import InvalidParameterError
from planefit.pipeline.preprocess import as_point_cloud, compute_bounds


class TestComputeBounds:
    def test_simple(self):
        pts = np.array([[0, 0, 0], [1, 2, 3], [-1, -2, -3]], dtype=np.float64)
        bbox = compute_bounds(pts)
        assert bbox.min.x == -1.0
        assert bbox.max.z == 3.0
        np.testing.assert_array_equal(bbox.max.as_array(), [1.0, 2.0, 3.0])


class TestAsPointCloud:
    def test_list_input(self):
        arr = as_point_cloud([[1, 2, 3], [4, 5, 6]])
        assert arr.dtype == np.float64
        assert arr.shape == (2, 3)

    def test_float32_is_upcast(self):
        arr = as_point_cloud(np.ones((4, 3), dtype=np.float32))
        assert arr.dtype == np.float64

    def test_empty(self):
        assert as_point_cloud([]).shape == (0, 3)

    @pytest.mark.parametrize(
        "points",
        [
            np.zeros((5, 2)),
            np.zeros(3),
            [[0.0, 0.0, 0.0], [1.0, 1.0]],
            [[0.0, 0.0, np.inf]],
            [["a", "b", "c"]],
        ],
    )
    def test_rejects_bad_input(self, points):
        with pytest.raises(InvalidParameterError):
            as_point_cloud(points)
