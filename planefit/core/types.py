"""Pydantic models for planes, classifications, and the fit report.

A plane is stored in implicit form ``a·x + b·y + c·z + d = 0``.  Planes
produced by the least-squares fitter carry a unit normal ``(a, b, c)`` whose
sign is arbitrary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import numpy as np
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    model_validator,
)


# ── tiny helpers ──────────────────────────────────────────────────────
class Vec3(BaseModel):
    """A 3-component vector (x, y, z) in metres."""

    x: float
    y: float
    z: float

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


class BBox(BaseModel):
    """Axis-aligned bounding box."""

    min: Vec3
    max: Vec3


# ── plane / classification ───────────────────────────────────────────
class PlaneModel(BaseModel):
    """Plane in implicit form ``a·x + b·y + c·z + d = 0``."""

    model_config = ConfigDict(frozen=True)

    a: float
    b: float
    c: float
    d: float = Field(description="Offset term; -(normal · centroid) for fitted planes")

    @property
    def normal(self) -> np.ndarray:
        return np.array([self.a, self.b, self.c], dtype=np.float64)

    @property
    def coefficients(self) -> tuple[float, float, float, float]:
        return (self.a, self.b, self.c, self.d)

    @classmethod
    def from_normal(cls, normal: np.ndarray, d: float) -> PlaneModel:
        return cls(a=float(normal[0]), b=float(normal[1]), c=float(normal[2]), d=float(d))


class Classification(BaseModel):
    """Per-point distances and inlier flags, index-aligned with the cloud."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    distances: np.ndarray
    is_inlier: np.ndarray

    @model_validator(mode="after")
    def check_alignment(self) -> Classification:
        if self.distances.shape != self.is_inlier.shape:
            raise ValueError(
                f"distances {self.distances.shape} and is_inlier "
                f"{self.is_inlier.shape} must have the same shape"
            )
        return self

    @computed_field
    @property
    def inlier_count(self) -> int:
        return int(np.count_nonzero(self.is_inlier))

    @property
    def outlier_count(self) -> int:
        return len(self.is_inlier) - self.inlier_count

    def inliers(self, points: np.ndarray) -> np.ndarray:
        """Rows of *points* flagged as inliers."""
        return points[self.is_inlier]

    def outliers(self, points: np.ndarray) -> np.ndarray:
        return points[~self.is_inlier]

    @field_serializer("distances", "is_inlier")
    def serialize_array(self, value: np.ndarray) -> list:
        return value.tolist()


# ── fit report ───────────────────────────────────────────────────────
class PlaneFitReport(BaseModel):
    """Top-level JSON artefact produced by the fitting pipeline."""

    version: str = "0.1.0"
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    units: str = "metres"
    source_file: str = ""
    point_count: int = 0
    bounds: Optional[BBox] = None
    threshold: float
    iterations: int
    seed: Optional[int] = None
    least_squares_plane: Optional[PlaneModel] = None
    robust_plane: PlaneModel
    inlier_count: int = 0
    outlier_count: int = 0
