"""Stroke normalization: resampling, rotation, scaling and translation.

Templates and queries both pass through :func:`normalize`, so every
comparison happens in the same normalized space:

    1. resample to a fixed number of points spaced evenly by arc length
    2. measure the indicative angle (first point -> centroid)
    3. rotate about the centroid by minus that angle
    4. scale each axis by ``bbox_extent / normalized_size``
    5. translate the centroid to the origin

Usage:
    stroke = normalize([(0, 0), (10, 5), (20, 0)])
    stroke.points.shape  # (64, 2)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple, Sequence

import numpy as np

from unistroke_engine.errors import InvalidInputError

NUM_POINTS = 64
NORMALIZED_SIZE = 256.0


class Point(NamedTuple):
    """A 2-D coordinate."""
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounds of a point set."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class NormalizedStroke:
    """Output of the normalization pipeline."""
    points: np.ndarray  # shape (N, 2)
    indicative_angle: float  # radians, measured before rotation


def as_points(points: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    """Coerce a stroke into a float64 array of shape (N, 2).

    Always returns a fresh array, so callers' data is never mutated.

    Raises:
        InvalidInputError: if the stroke is empty, not 2-D, or contains
            NaN/inf coordinates.
    """
    try:
        pts = np.array(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Stroke is not a sequence of (x, y) pairs: {e}") from e

    if pts.size == 0:
        raise InvalidInputError("Stroke must contain at least one point")
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise InvalidInputError(f"Expected points of shape (N, 2), got {pts.shape}")
    if not np.all(np.isfinite(pts)):
        raise InvalidInputError("Stroke contains non-finite coordinates")
    return pts


def path_length(points: np.ndarray) -> float:
    """Sum of distances between consecutive points."""
    if len(points) < 2:
        return 0.0
    return float(np.sum(np.linalg.norm(np.diff(points, axis=0), axis=1)))


def resample(points: Sequence[Sequence[float]] | np.ndarray, n: int = NUM_POINTS) -> np.ndarray:
    """Rewrite a stroke as exactly ``n`` points evenly spaced by arc length.

    Walks the original path accumulating distance; each time the next raw
    point would carry the accumulator to ``interval`` or beyond, a point is
    interpolated at the exact crossing and the walk resumes from it.
    Floating-point shortfall is padded with the final raw point.

    A zero-length path (a single point, or all points coincident) yields
    ``n`` copies of its first point.

    Raises:
        InvalidInputError: if the stroke is malformed or its length
            overflows a float.
    """
    if n < 2:
        raise InvalidInputError(f"Cannot resample to fewer than 2 points (got {n})")

    pts = as_points(points)
    with np.errstate(over="ignore", invalid="ignore"):
        total = path_length(pts)
    if not math.isfinite(total):
        raise InvalidInputError("Stroke coordinates are too large to measure")

    interval = total / (n - 1)
    if interval <= 0.0:
        # zero length, or so short the interval underflows
        return np.tile(pts[0], (n, 1))

    accumulated = 0.0
    previous = pts[0]
    resampled = [previous]

    i = 1
    while i < len(pts) and len(resampled) < n:
        point = pts[i]
        delta = point - previous
        dist = math.hypot(delta[0], delta[1])

        if accumulated + dist >= interval:
            # interval > 0 and accumulated < interval, so dist > 0
            q = previous + ((interval - accumulated) / dist) * delta
            resampled.append(q)
            previous = q
            accumulated = 0.0
        else:
            accumulated += dist
            previous = point
            i += 1

    while len(resampled) < n:
        resampled.append(pts[-1])

    return np.array(resampled, dtype=np.float64)


def centroid(points: np.ndarray) -> np.ndarray:
    """Arithmetic mean of the points."""
    return points.mean(axis=0)


def indicative_angle(points: np.ndarray) -> float:
    """Direction, in radians, from the first point toward the centroid."""
    delta = centroid(points) - points[0]
    return math.atan2(delta[1], delta[0])


def rotate_by(points: np.ndarray, angle: float) -> np.ndarray:
    """Rotate points about their centroid by ``angle`` radians."""
    c = centroid(points)
    cos, sin = math.cos(angle), math.sin(angle)
    delta = points - c
    rotated = np.empty_like(delta)
    rotated[:, 0] = delta[:, 0] * cos - delta[:, 1] * sin
    rotated[:, 1] = delta[:, 0] * sin + delta[:, 1] * cos
    return rotated + c


def bounding_box(points: np.ndarray) -> BoundingBox:
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    return BoundingBox(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))


def scale_to(points: np.ndarray, normalized_size: float = NORMALIZED_SIZE) -> np.ndarray:
    """Scale each axis by its bounding-box extent over ``normalized_size``.

    Note this multiplies by ``extent / size`` rather than ``size / extent``;
    matching behaviour depends on it, so keep it as is. A flat axis collapses
    to zero.
    """
    box = bounding_box(points)
    scale = np.array([box.width, box.height]) / normalized_size
    return points * scale


def translate_to(points: np.ndarray, target: Sequence[float] = (0.0, 0.0)) -> np.ndarray:
    """Shift points so their centroid lands on ``target``."""
    return points + (np.asarray(target, dtype=np.float64) - centroid(points))


def normalize(
    points: Sequence[Sequence[float]] | np.ndarray,
    num_points: int = NUM_POINTS,
    normalized_size: float = NORMALIZED_SIZE,
) -> NormalizedStroke:
    """Run the full normalization pipeline on a raw stroke.

    Raises:
        InvalidInputError: if the stroke is empty, malformed, or its
            coordinates overflow during normalization.
    """
    working = resample(points, num_points)
    with np.errstate(over="ignore", invalid="ignore"):
        angle = indicative_angle(working)
        working = rotate_by(working, -angle)
        working = scale_to(working, normalized_size)
        working = translate_to(working)

    if not (math.isfinite(angle) and np.all(np.isfinite(working))):
        raise InvalidInputError("Stroke coordinates overflow during normalization")
    return NormalizedStroke(points=working, indicative_angle=angle)
