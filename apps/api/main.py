"""FastAPI application for the plane-fitting service.

Accepts uploaded point-cloud files, fits the dominant plane, and serves the
fit report plus green/red classified point data to a viewer.
"""

from __future__ import annotations

import json
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Optional

import numpy as np
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from planefit.core.errors import PlaneFitError
from planefit.core.types import PlaneFitReport
from planefit.pipeline.colorize import classification_colors
from planefit.pipeline.loader import load_point_cloud
from planefit.pipeline.process import process_points

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Plane Fitting API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── In-memory store (single-scan) ────────────────────────────────────
_state: dict = {
    "points": None,          # np.ndarray (N, 3) or None
    "colors": None,          # scanner RGB (N, 3) in [0, 1] or None
    "classification": None,  # Classification or None
    "report": None,          # PlaneFitReport or None
}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/upload")
async def upload_scan(
    file: UploadFile = File(...),
    threshold: float = 0.02,
    iterations: int = 1000,
    seed: int = 42,
):
    """Upload a point-cloud file (PLY or E57), fit its plane, and store results."""
    if not file.filename:
        raise HTTPException(400, "No filename provided")

    suffix = Path(file.filename).suffix.lower()
    if suffix not in (".ply", ".e57"):
        raise HTTPException(400, f"Unsupported format '{suffix}'. Use .ply or .e57")

    logger.info("Receiving file: %s", file.filename)

    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        shutil.copyfileobj(file.file, tmp)
        tmp_path = Path(tmp.name)

    try:
        cloud_data = load_point_cloud(tmp_path)
        points = cloud_data["positions"]
        report, classification = process_points(
            points,
            threshold=threshold,
            iterations=iterations,
            seed=seed,
            source_file=file.filename,
        )
    except PlaneFitError as e:
        raise HTTPException(400, f"Plane fit failed: {e}") from e
    except Exception as e:
        logger.exception("Processing failed")
        raise HTTPException(500, f"Processing failed: {e}") from e
    finally:
        tmp_path.unlink(missing_ok=True)

    _state["points"] = points
    _state["colors"] = cloud_data["colors"]
    _state["classification"] = classification
    _state["report"] = report

    return {
        "filename": file.filename,
        "point_count": len(points),
        "inlier_count": classification.inlier_count,
    }


@app.get("/points")
def get_points():
    """Return the cloud as flat [x, y, z, ...] positions with classification colours.

    Positions and colours are flat Float32 lists the viewer can load
    straight into a BufferGeometry.
    ``source_colors`` carries the scanner RGB when the file had any.
    """
    if _state["points"] is None:
        raise HTTPException(404, "No scan uploaded yet")

    pts: np.ndarray = _state["points"]
    classification = _state["classification"]
    source: np.ndarray | None = _state["colors"]
    return {
        "count": len(pts),
        "positions": pts.astype(np.float32).ravel().tolist(),
        "colors": classification_colors(classification).astype(np.float32).ravel().tolist(),
        "is_inlier": classification.is_inlier.tolist(),
        "has_source_colors": source is not None,
        "source_colors": source.astype(np.float32).ravel().tolist() if source is not None else None,
    }


@app.get("/report")
def get_report():
    """Return the fit report JSON (both planes, counts, bounds)."""
    if _state["report"] is None:
        raise HTTPException(404, "No scan uploaded yet")

    report: PlaneFitReport = _state["report"]
    return JSONResponse(content=json.loads(report.model_dump_json()))


class FitRequest(BaseModel):
    """Body for the direct fitting endpoint."""
    points: list[list[float]]
    threshold: float = 0.02
    iterations: int = 1000
    seed: Optional[int] = Field(default=None, ge=0)


@app.post("/fit")
def fit_points(req: FitRequest):
    """Fit a plane to points posted as JSON; nothing is stored."""
    logger.info("Fit requested for %d points", len(req.points))
    try:
        report, _ = process_points(
            req.points,
            threshold=req.threshold,
            iterations=req.iterations,
            seed=req.seed,
        )
    except PlaneFitError as e:
        raise HTTPException(400, str(e)) from e

    least_squares = report.least_squares_plane
    return {
        "least_squares_plane": least_squares.model_dump() if least_squares else None,
        "robust_plane": report.robust_plane.model_dump(),
        "inlier_count": report.inlier_count,
        "outlier_count": report.outlier_count,
    }
