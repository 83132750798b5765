"""Single-stroke recognition against a template library.

:func:`recognize` is a pure function of ``(points, library)``: it normalizes
the stroke exactly as templates were normalized, scores it against every
template with the optimal cosine distance and returns the closest one.

Usage:
    library = build_library().freeze()
    result = recognize(points, library)
    if result.matched and result.score > 2.0:
        print(f"{result.name} (score={result.score:.2f})")

:class:`StrokeClassifier` wraps a library with the input-side policy a UI
needs (ignore taps, threshold on confidence).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from unistroke_engine.config import RecognizerConfig
from unistroke_engine.distance import optimal_cosine_distance, vectorize
from unistroke_engine.errors import EmptyLibraryError
from unistroke_engine.geometry import normalize
from unistroke_engine.library import Template, TemplateLibrary
from unistroke_engine.shapes import build_library

logger = logging.getLogger("unistroke_engine.recognizer")

# Floor applied to the distance before inverting it, so an exact match
# scores 1e9 instead of inf.
MIN_DISTANCE = 1e-9


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one recognition call."""
    matched_template: Optional[Template]
    score: float  # 1 / distance, higher = better
    angle_offset_degrees: float  # template angle minus drawn angle

    @property
    def matched(self) -> bool:
        return self.matched_template is not None

    @property
    def name(self) -> Optional[str]:
        return self.matched_template.name if self.matched_template else None

    @classmethod
    def none(cls) -> MatchResult:
        """The "no match" sentinel."""
        return cls(matched_template=None, score=0.0, angle_offset_degrees=0.0)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "example_index": self.matched_template.example_index if self.matched_template else None,
            "score": self.score,
            "angle_offset_degrees": self.angle_offset_degrees,
        }

    def __str__(self) -> str:
        return f"{self.matched_template} @{self.angle_offset_degrees:.1f} ({self.score:.2f})"


def recognize(
    points: Sequence[Sequence[float]] | np.ndarray,
    library: TemplateLibrary,
    strict: bool = False,
) -> MatchResult:
    """Return the template closest to ``points``.

    Templates are scanned in insertion order and the earliest one wins ties.
    An empty library yields :meth:`MatchResult.none`, or raises
    :class:`EmptyLibraryError` when ``strict`` is set.

    Raises:
        InvalidInputError: if ``points`` is empty or malformed.
    """
    query = normalize(points, library.num_points, library.normalized_size)
    vector = vectorize(query.points)

    best: Optional[Template] = None
    best_distance = math.inf
    for template in library:
        distance = optimal_cosine_distance(template.feature_vector, vector)
        if distance < best_distance:
            best_distance = distance
            best = template

    if best is None:
        if strict:
            raise EmptyLibraryError("No templates to match against")
        logger.debug("Recognition against an empty library")
        return MatchResult.none()

    return MatchResult(
        matched_template=best,
        score=1.0 / max(best_distance, MIN_DISTANCE),
        angle_offset_degrees=math.degrees(best.indicative_angle - query.indicative_angle),
    )


class StrokeClassifier:
    """Classifies finished strokes against a shared, read-only library.

    Strokes with fewer than ``config.min_points`` points are treated as taps
    and ignored; matches scoring below ``config.min_score`` are rejected.
    """

    def __init__(
        self,
        library: TemplateLibrary,
        config: Optional[RecognizerConfig] = None,
    ):
        self._config = config or RecognizerConfig()
        self._library = library

    @classmethod
    def with_defaults(cls, config: Optional[RecognizerConfig] = None) -> StrokeClassifier:
        """Create a classifier over a frozen library of the built-in shapes."""
        config = config or RecognizerConfig()
        return cls(build_library(config).freeze(), config)

    @property
    def library(self) -> TemplateLibrary:
        return self._library

    @property
    def config(self) -> RecognizerConfig:
        return self._config

    def recognize(self, points: Sequence[Sequence[float]] | np.ndarray) -> MatchResult:
        return recognize(points, self._library)

    def classify_match(
        self, points: Sequence[Sequence[float]] | np.ndarray
    ) -> Optional[MatchResult]:
        """Recognize a stroke, applying the tap filter and ``min_score``.

        Returns:
            The accepted MatchResult, or None if the stroke was ignored or no
            template scored at least ``min_score``.
        """
        if len(points) < self._config.min_points:
            logger.debug(
                "Too few points (%d < %d), stroke ignored",
                len(points), self._config.min_points,
            )
            return None

        result = self.recognize(points)
        if not result.matched:
            return None

        if result.score < self._config.min_score:
            logger.debug(
                "Best match %s below min_score %.2f", result, self._config.min_score
            )
            return None

        logger.debug("Recognized %s", result)
        return result

    def classify(
        self, points: Sequence[Sequence[float]] | np.ndarray
    ) -> Optional[tuple[str, float]]:
        """Classify a stroke.

        Returns:
            (shape_name, score) or None, as for :meth:`classify_match`.
        """
        result = self.classify_match(points)
        if result is None:
            return None
        return result.name, result.score
