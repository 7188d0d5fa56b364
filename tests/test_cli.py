"""Tests for the click CLI."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
from click.testing import CliRunner
from plyfile import PlyData, PlyElement

from planefit.pipeline.cli import main


def _write_ply(path: Path, points: np.ndarray) -> None:
    structured = np.empty(len(points), dtype=[("x", "f4"), ("y", "f4"), ("z", "f4")])
    structured["x"] = points[:, 0]
    structured["y"] = points[:, 1]
    structured["z"] = points[:, 2]
    PlyData([PlyElement.describe(structured, "vertex")], text=False).write(str(path))


class TestProcessCommand:
    def test_prints_report(self, unit_square_with_outlier: np.ndarray, tmp_path: Path):
        ply_file = tmp_path / "square.ply"
        _write_ply(ply_file, unit_square_with_outlier)
        out_json = tmp_path / "out.json"

        result = CliRunner().invoke(
            main,
            ["process", str(ply_file), "-o", str(out_json), "--threshold", "0.01", "--iterations", "100"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(out_json.read_text())["inlier_count"] == 4

    def test_fit_error_is_reported(self, tmp_path: Path):
        ply_file = tmp_path / "pair.ply"
        _write_ply(ply_file, np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0]]))

        result = CliRunner().invoke(main, ["process", str(ply_file)])

        assert result.exit_code == 1
        assert "at least 3 points" in result.output

    def test_missing_file(self, tmp_path: Path):
        result = CliRunner().invoke(main, ["process", str(tmp_path / "nope.ply")])
        assert result.exit_code == 2

    def test_unsupported_format_is_reported(self, tmp_path: Path):
        xyz_file = tmp_path / "scan.xyz"
        xyz_file.write_text("0 0 0\n1 0 0\n0 1 0\n")

        result = CliRunner().invoke(main, ["process", str(xyz_file)])

        assert result.exit_code == 1
        assert "Unsupported point-cloud format '.xyz'" in result.output
        assert isinstance(result.exception, SystemExit)
