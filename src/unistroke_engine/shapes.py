"""Built-in stroke shapes and the default template set.

Each class is seeded with several geometrically distinct examples (mirrored
direction, different size, sharp vs smoothed corners) so the matcher is
robust to how people actually draw the same symbol.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np

from unistroke_engine.config import RecognizerConfig
from unistroke_engine.library import TemplateLibrary

logger = logging.getLogger("unistroke_engine.shapes")


def line_points(
    start: Sequence[float], end: Sequence[float], steps: int = 64
) -> np.ndarray:
    """Straight line from ``start`` to ``end`` (both included)."""
    t = np.linspace(0.0, 1.0, steps)[:, None]
    return (1.0 - t) * np.asarray(start, dtype=np.float64) + t * np.asarray(end, dtype=np.float64)


def circle_points(radius: float, clockwise: bool = True, steps: int = 64) -> np.ndarray:
    """Open circle starting at angle 0; the closing point is not repeated."""
    angles = 2 * math.pi * np.arange(steps) / steps
    if not clockwise:
        angles = -angles
    return np.column_stack([np.cos(angles), np.sin(angles)]) * radius


def spiral_points(
    inner_radius: float,
    outer_radius: float,
    turns: float,
    clockwise: bool = True,
    steps: int = 128,
) -> np.ndarray:
    """Spiral whose radius moves linearly from ``inner_radius`` to ``outer_radius``.

    Passing ``inner_radius > outer_radius`` gives an inward spiral.
    """
    t = np.linspace(0.0, 1.0, steps)
    angles = t * turns * 2 * math.pi
    if not clockwise:
        angles = -angles
    radii = inner_radius + (outer_radius - inner_radius) * t
    return np.column_stack([np.cos(angles) * radii, np.sin(angles) * radii])


def star_points(radius: float, clockwise: bool = True, points_per_segment: int = 16) -> np.ndarray:
    """Five-pointed star drawn as one stroke, visiting every other vertex.

    Vertices start at the top (-90 degrees). The stroke returns to its first
    vertex but, like each segment, does not repeat the closing point.
    """
    angles = -math.pi / 2 + 2 * math.pi * np.arange(5) / 5
    vertices = np.column_stack([np.cos(angles), np.sin(angles)]) * radius
    order = [0, 2, 4, 1, 3, 0] if clockwise else [0, 3, 1, 4, 2, 0]

    t = (np.arange(points_per_segment) / points_per_segment)[:, None]
    segments = [
        (1.0 - t) * vertices[a] + t * vertices[b]
        for a, b in zip(order[:-1], order[1:])
    ]
    return np.concatenate(segments)


def chevron_points(
    start: Sequence[float],
    apex: Sequence[float],
    end: Sequence[float],
    steps_per_arm: Optional[int] = None,
) -> np.ndarray:
    """Angle glyph (``^ V < >``) through ``apex``.

    Without ``steps_per_arm`` this is the sharp 3-point version; otherwise
    each arm is densely interpolated (the apex appears once per arm).
    """
    if steps_per_arm is None:
        return np.array([start, apex, end], dtype=np.float64)
    return np.concatenate([
        line_points(start, apex, steps_per_arm),
        line_points(apex, end, steps_per_arm),
    ])


DEFAULT_SHAPES: list[tuple[str, np.ndarray]] = [
    # Lines, both directions plus a slight slant
    ("VerticalLine", line_points((0, -100), (0, 100))),
    ("VerticalLine", line_points((0, 100), (0, -100))),
    ("VerticalLine", line_points((-5, -100), (5, 100))),
    ("HorizontalLine", line_points((-100, 0), (100, 0))),
    ("HorizontalLine", line_points((100, 0), (-100, 0))),
    ("HorizontalLine", line_points((-100, -5), (100, 5))),

    ("Circle", circle_points(100, clockwise=True)),
    ("Circle", circle_points(100, clockwise=False)),
    ("Circle", circle_points(60, clockwise=True)),
    ("Circle", circle_points(80, clockwise=False)),

    ("Spiral", spiral_points(30, 100, 2.5, clockwise=True, steps=128)),
    ("Spiral", spiral_points(30, 100, 2.5, clockwise=False, steps=128)),
    ("Spiral", spiral_points(20, 80, 2.0, clockwise=True, steps=96)),
    ("Spiral", spiral_points(25, 90, 3.0, clockwise=True, steps=128)),
    ("Spiral", spiral_points(100, 30, 2.5, clockwise=True, steps=128)),  # inward

    ("Star", star_points(100, clockwise=True)),
    ("Star", star_points(100, clockwise=False)),
    ("Star", star_points(80, clockwise=True)),
    ("Star", star_points(120, clockwise=False)),

    ("^", chevron_points((-80, -80), (0, 100), (80, -80))),
    ("^", chevron_points((-100, -60), (0, 90), (100, -60))),
    ("^", chevron_points((-100, -100), (0, 100), (100, -100), steps_per_arm=32)),

    ("V", chevron_points((-80, 80), (0, -100), (80, 80))),
    ("V", chevron_points((-100, 60), (0, -90), (100, 60))),
    ("V", chevron_points((-100, 100), (0, -100), (100, 100), steps_per_arm=32)),

    ("<", chevron_points((80, -80), (-100, 0), (80, 80))),
    ("<", chevron_points((100, -60), (-80, 0), (100, 60))),
    ("<", chevron_points((100, -100), (-100, 0), (100, 100), steps_per_arm=32)),

    (">", chevron_points((-80, -80), (100, 0), (-80, 80))),
    (">", chevron_points((-100, -60), (80, 0), (-100, 60))),
    (">", chevron_points((-100, -100), (100, 0), (-100, 100), steps_per_arm=32)),
]


def seed_default_templates(library: TemplateLibrary) -> TemplateLibrary:
    """Clear ``library`` and insert the built-in shapes."""
    library.clear()
    for name, points in DEFAULT_SHAPES:
        library.add_template(name, points)

    logger.info(
        "Seeded %d default templates across %d shapes",
        len(library), len(library.list_names()),
    )
    return library


def build_library(config: Optional[RecognizerConfig] = None) -> TemplateLibrary:
    """Create a new library seeded with the default shapes."""
    library = TemplateLibrary.from_config(config or RecognizerConfig())
    return seed_default_templates(library)
