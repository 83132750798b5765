"""Template library: normalized reference strokes grouped by name.

Many templates may share a name; each is one example variant of the class
(e.g. clockwise and counter-clockwise circles are both "Circle").

Usage:
    library = TemplateLibrary()
    library.add_template("HorizontalLine", [(-100, 0), (100, 0)])
    library.freeze()  # share read-only between recognizers
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np

from unistroke_engine.config import RecognizerConfig
from unistroke_engine.distance import vectorize
from unistroke_engine.geometry import NORMALIZED_SIZE, NUM_POINTS, normalize

logger = logging.getLogger("unistroke_engine.library")


@dataclass(frozen=True, eq=False)
class Template:
    """A named, fully normalized reference stroke."""
    name: str
    example_index: int  # position among templates sharing this name
    points: np.ndarray  # shape (N, 2), normalized
    indicative_angle: float  # radians, of the un-rotated resampled stroke
    feature_vector: np.ndarray  # shape (2N,), unit norm

    def __str__(self) -> str:
        return f"{self.name} #{self.example_index}"


class TemplateLibrary:
    """Ordered collection of templates plus a name -> indices index.

    Templates are never removed individually; call :meth:`clear` and reseed.
    Once :meth:`freeze` is called the library is read-only and may be shared
    across threads.
    """

    def __init__(self, num_points: int = NUM_POINTS, normalized_size: float = NORMALIZED_SIZE):
        if num_points < 2:
            raise ValueError(f"num_points must be at least 2, got {num_points}")
        if normalized_size <= 0:
            raise ValueError(f"normalized_size must be positive, got {normalized_size}")

        self.num_points = num_points
        self.normalized_size = normalized_size
        self._templates: list[Template] = []
        self._index: dict[str, list[int]] = {}
        self._frozen = False

    @classmethod
    def from_config(cls, config: RecognizerConfig) -> TemplateLibrary:
        return cls(num_points=config.num_points, normalized_size=config.normalized_size)

    def add_template(self, name: str, points: Sequence[Sequence[float]] | np.ndarray) -> Template:
        """Normalize a raw stroke and store it under ``name``.

        Raises:
            InvalidInputError: if ``points`` is empty or malformed.
            RuntimeError: if the library is frozen.
        """
        self._check_mutable()

        stroke = normalize(points, self.num_points, self.normalized_size)
        stroke.points.setflags(write=False)
        vector = vectorize(stroke.points)
        vector.setflags(write=False)

        examples = self._index.setdefault(name, [])
        template = Template(
            name=name,
            example_index=len(examples),
            points=stroke.points,
            indicative_angle=stroke.indicative_angle,
            feature_vector=vector,
        )
        examples.append(len(self._templates))
        self._templates.append(template)

        logger.debug("Added template %s (%d raw points)", template, len(points))
        return template

    def clear(self):
        """Remove every template."""
        self._check_mutable()
        self._templates.clear()
        self._index.clear()

    def list_names(self) -> set[str]:
        return set(self._index)

    def enumerate_names(self) -> list[str]:
        """Distinct names in order of first insertion."""
        return list(self._index)

    def examples(self, name: str) -> list[Template]:
        """All templates sharing ``name``, in insertion order."""
        return [self._templates[i] for i in self._index.get(name, [])]

    def freeze(self) -> TemplateLibrary:
        """Make the library read-only. Returns self for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def templates(self) -> tuple[Template, ...]:
        return tuple(self._templates)

    def _check_mutable(self):
        if self._frozen:
            raise RuntimeError("Template library is frozen")

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._index
