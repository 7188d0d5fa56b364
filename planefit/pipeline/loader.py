"""Load point-cloud files into a NumPy (N, 3) array.

Supported formats
-----------------
* **PLY** – via the ``plyfile`` library.
* **E57** – via the ``pye57`` library (ASTM E2807, written by most laser
  scanners).
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pye57
from plyfile import PlyData

logger = logging.getLogger(__name__)

# PLY exporters disagree on colour property names.
_COLOR_CANDIDATES = (
    ("red", "diffuse_red", "r"),
    ("green", "diffuse_green", "g"),
    ("blue", "diffuse_blue", "b"),
)


def _unit_colors(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Stack colour channels into an (N, 3) array scaled to [0, 1]."""
    colors = np.column_stack((r, g, b)).astype(np.float64)
    if colors.size and colors.max() > 1.0:
        colors /= 255.0
    return colors


def load_ply(path: str | Path) -> dict:
    """Read a binary or ASCII PLY file and return positions + optional RGB.

    Returns a dict with:
      - 'positions': (N, 3) float64 array of XYZ coordinates
      - 'colors': (N, 3) float64 array of RGB values in [0, 1], or None
    """
    ply = PlyData.read(str(path))
    vertex = ply["vertex"]
    positions = np.column_stack(
        [np.asarray(vertex[axis], dtype=np.float64) for axis in ("x", "y", "z")]
    )
    logger.info("PLY loaded: %s vertices", f"{len(positions):,}")

    prop_names = [p.name for p in vertex.properties]
    names = [next((n for n in cands if n in prop_names), None) for cands in _COLOR_CANDIDATES]

    colors = None
    if all(names):
        colors = _unit_colors(*(np.asarray(vertex[n]) for n in names))
        logger.debug("PLY colour properties: %s", names)

    return {"positions": positions, "colors": colors}


def load_e57(path: str | Path, scan_index: int = 0) -> dict:
    """Read an E57 file and return positions + optional RGB.

    Parameters
    ----------
    path : str | Path
        Path to the ``.e57`` file.
    scan_index : int, optional
        Which scan (``Data3D`` entry) to read when the file contains
        multiple scans.  Defaults to ``0`` (the first scan).
    """
    e57 = pye57.E57(str(path))
    try:
        raw = e57.read_scan_raw(scan_index)
        positions = np.column_stack(
            [
                np.asarray(raw[key], dtype=np.float64)
                for key in ("cartesianX", "cartesianY", "cartesianZ")
            ]
        )
        logger.info("E57 scan %d loaded: %s points", scan_index, f"{len(positions):,}")

        colors = None
        if all(key in raw for key in ("colorRed", "colorGreen", "colorBlue")):
            colors = _unit_colors(raw["colorRed"], raw["colorGreen"], raw["colorBlue"])

        return {"positions": positions, "colors": colors}
    finally:
        e57.close()


def load_point_cloud(path: str | Path) -> dict:
    """Auto-detect format and return a dict with 'positions' and optional 'colors'.

    Raises ``ValueError`` for unsupported extensions.
    """
    p = Path(path)
    ext = p.suffix.lower()
    if ext == ".ply":
        return load_ply(p)
    if ext == ".e57":
        return load_e57(p)
    raise ValueError(
        f"Unsupported point-cloud format '{ext}'. Supported: .ply, .e57"
    )
