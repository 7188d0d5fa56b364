"""Errors raised by the plane-fitting core.

All of them derive from :class:`ValueError` so callers that already guard
numeric input with ``except ValueError`` keep working.
"""

from __future__ import annotations


class PlaneFitError(ValueError):
    """Base class for every failure reported by the plane fitters."""


class InsufficientPointsError(PlaneFitError):
    """The cloud holds fewer points than the operation needs."""

    def __init__(self, count: int, required: int = 3) -> None:
        self.count = count
        self.required = required
        super().__init__(
            f"Need at least {required} points to fit a plane, got {count}"
        )


class InvalidParameterError(PlaneFitError):
    """A threshold, iteration count, or worker count is out of range."""


class DegenerateGeometryError(PlaneFitError):
    """The points do not determine a stable plane normal.

    Raised for collinear or coincident input, and when a RANSAC consensus
    set is too small to refit.
    """
