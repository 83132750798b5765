"""Feature vectors and the closed-form rotation-invariant distance.

The distance is the Protractor optimal cosine distance: for two unit vectors
of interleaved (x, y) coordinates it finds, analytically, the rotation of the
second that best aligns it with the first, and returns the remaining angle
between them in radians (0 = identical, pi = opposite).
"""

from __future__ import annotations

import math

import numpy as np

from unistroke_engine.errors import DimensionMismatchError


def vectorize(points: np.ndarray) -> np.ndarray:
    """Flatten (N, 2) points to ``[x0, y0, x1, y1, ...]`` with unit norm.

    An all-zero input (a fully collapsed stroke) yields a zero vector.
    """
    flat = np.asarray(points, dtype=np.float64).reshape(-1)
    magnitude = float(np.linalg.norm(flat))
    if magnitude == 0.0 or not math.isfinite(magnitude):
        return np.zeros_like(flat)
    return flat / magnitude


def optimal_cosine_distance(v1: np.ndarray, v2: np.ndarray) -> float:
    """Angular distance between two feature vectors at their best rotation.

    Raises:
        DimensionMismatchError: if the vectors differ in length or hold an
            odd number of values.
    """
    v1 = np.asarray(v1, dtype=np.float64).reshape(-1)
    v2 = np.asarray(v2, dtype=np.float64).reshape(-1)
    if v1.shape != v2.shape:
        raise DimensionMismatchError(
            f"Cannot compare vectors of length {v1.size} and {v2.size}"
        )
    if v1.size % 2:
        raise DimensionMismatchError(f"Vector length must be even, got {v1.size}")

    x1, y1 = v1[0::2], v1[1::2]
    x2, y2 = v2[0::2], v2[1::2]
    a = float(np.dot(x1, x2) + np.dot(y1, y2))
    b = float(np.dot(x1, y2) - np.dot(y1, x2))

    if a != 0.0:
        angle = math.atan(b / a)
    else:
        angle = math.copysign(math.pi / 2, b)

    cosine = a * math.cos(angle) + b * math.sin(angle)
    return math.acos(float(np.clip(cosine, -1.0, 1.0)))
