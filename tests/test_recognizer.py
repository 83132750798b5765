"""Tests for recognition against template libraries."""

import math

import numpy as np
import pytest

from unistroke_engine.config import RecognizerConfig
from unistroke_engine.distance import vectorize
from unistroke_engine.errors import EmptyLibraryError, InvalidInputError
from unistroke_engine.geometry import Point, normalize
from unistroke_engine.library import TemplateLibrary
from unistroke_engine.recognizer import MatchResult, StrokeClassifier, recognize
from unistroke_engine.shapes import DEFAULT_SHAPES, build_library, circle_points, line_points

# Shapes that are rotations of one another normalize to the same thing, so
# the recognizer can only be expected to land in the right family.
FAMILIES = [
    {"VerticalLine", "HorizontalLine"},
    {"^", "V", "<", ">"},
]
MIN_SCORE = 2.0


def family(name):
    for group in FAMILIES:
        if name in group:
            return group
    return {name}


def rotate_about_centroid(points, theta):
    c = points.mean(axis=0)
    cos, sin = math.cos(theta), math.sin(theta)
    d = points - c
    return np.column_stack([d[:, 0] * cos - d[:, 1] * sin, d[:, 0] * sin + d[:, 1] * cos]) + c


@pytest.fixture(scope="module")
def library():
    return build_library().freeze()


class TestScenarios:
    def test_wiggle_matches_horizontal_line(self):
        lib = TemplateLibrary()
        lib.add_template("HorizontalLine", [(-100, 0), (100, 0)])
        result = recognize([(-50, 1), (0, -1), (50, 1)], lib)
        assert result.name == "HorizontalLine"
        assert result.score > 0

    def test_jittered_circle_beats_vertical_line(self):
        lib = TemplateLibrary()
        lib.add_template("Circle", circle_points(1.0, clockwise=True))
        lib.add_template("VerticalLine", line_points((0, -1), (0, 1)))

        rng = np.random.default_rng(0)
        angles = 2 * math.pi * np.arange(32) / 32
        drawn = np.column_stack([np.cos(angles), np.sin(angles)]) * 50
        drawn += rng.normal(scale=1.0, size=drawn.shape)  # 2% of the radius

        result = recognize(drawn, lib)
        assert result.name == "Circle"

    def test_angle_offset(self):
        lib = TemplateLibrary()
        lib.add_template("HorizontalLine", [(-100, 0), (100, 0)])
        drawn = rotate_about_centroid(np.array([[-100.0, 0.0], [100.0, 0.0]]), math.radians(30))
        result = recognize(drawn, lib)
        assert result.angle_offset_degrees == pytest.approx(-30.0, abs=1e-6)

    def test_accepts_point_tuples(self):
        lib = TemplateLibrary()
        lib.add_template("HorizontalLine", [(-100, 0), (100, 0)])
        result = recognize([Point(-10, 0), Point(0, 0.5), Point(10, 0)], lib)
        assert result.name == "HorizontalLine"


class TestProperties:
    def test_deterministic(self, library):
        pts = circle_points(70) + np.random.default_rng(5).normal(size=(64, 2))
        r1 = recognize(pts, library)
        r2 = recognize(pts, library)
        assert r1.matched_template is r2.matched_template
        assert r1.score == r2.score
        assert r1.angle_offset_degrees == r2.angle_offset_degrees

    @pytest.mark.parametrize("theta", [0.3, 1.2, 2.5, -2.0])
    def test_rotation_invariance(self, library, theta):
        for name, points in DEFAULT_SHAPES:
            result = recognize(rotate_about_centroid(points, theta), library)
            assert result.name in family(name), name
            assert result.score > MIN_SCORE, name

    @pytest.mark.parametrize("factor", [0.1, 3.0, 25.0])
    def test_scale_invariance(self, library, factor):
        for name, points in DEFAULT_SHAPES:
            result = recognize(points * factor, library)
            assert result.name in family(name), name

    def test_distinct_shapes_recognized_exactly(self, library):
        for name, points in DEFAULT_SHAPES:
            if name in ("Circle", "Spiral", "Star"):
                assert recognize(points, library).name == name

    def test_query_vector_is_unit_norm(self):
        rng = np.random.default_rng(11)
        for _ in range(5):
            stroke = normalize(rng.random((20, 2)) * 300)
            assert stroke.points.shape == (64, 2)
            assert np.linalg.norm(vectorize(stroke.points)) == pytest.approx(1.0)

    def test_earliest_template_wins_ties(self):
        lib = TemplateLibrary()
        pts = [(0, 0), (10, 5), (20, 0)]
        lib.add_template("First", pts)
        lib.add_template("Second", pts)
        assert recognize(pts, lib).name == "First"

    def test_exact_match_score_is_finite(self):
        lib = TemplateLibrary()
        pts = circle_points(10)
        lib.add_template("Circle", pts)
        result = recognize(pts, lib)
        assert math.isfinite(result.score)
        assert result.score > 1000


class TestEdgeCases:
    def test_empty_library_returns_sentinel(self):
        result = recognize([(0, 0), (10, 10)], TemplateLibrary())
        assert result == MatchResult.none()
        assert not result.matched
        assert result.name is None
        assert result.score == 0.0
        assert result.angle_offset_degrees == 0.0

    def test_empty_library_strict(self):
        with pytest.raises(EmptyLibraryError):
            recognize([(0, 0), (10, 10)], TemplateLibrary(), strict=True)

    def test_degenerate_path(self, library):
        result = recognize([(12, 34)] * 64, library)
        assert not math.isnan(result.score)
        assert result.score == pytest.approx(2 / math.pi)
        # every distance ties at pi/2, so the first template wins
        assert result.name == "VerticalLine"

    def test_single_point(self, library):
        result = recognize([(1, 1)], library)
        assert math.isfinite(result.score)

    def test_empty_path_rejected(self, library):
        with pytest.raises(InvalidInputError):
            recognize([], library)

    def test_overflowing_coordinates_rejected(self, library):
        with pytest.raises(InvalidInputError):
            recognize([(-1e308, 0.0), (1e308, 0.0)], library)

    def test_huge_offset_rejected(self, library):
        # short path, but the centroid of 64 such points overflows
        with pytest.raises(InvalidInputError):
            recognize([(1e308, 0.0), (1e308, 1.0)], library)

    def test_to_dict(self, library):
        result = recognize(circle_points(40), library)
        data = result.to_dict()
        assert data["name"] == "Circle"
        assert data["example_index"] == result.matched_template.example_index
        assert data["score"] == result.score


class TestStrokeClassifier:
    def test_with_defaults_is_frozen(self):
        classifier = StrokeClassifier.with_defaults()
        assert classifier.library.frozen
        assert len(classifier.library) == len(DEFAULT_SHAPES)

    def test_classify_circle(self, library):
        classifier = StrokeClassifier(library)
        result = classifier.classify(circle_points(30))
        assert result is not None
        name, score = result
        assert name == "Circle"
        assert score > MIN_SCORE

    def test_taps_ignored(self, library):
        classifier = StrokeClassifier(library)
        assert classifier.classify([(0, 0), (1, 1), (2, 0)]) is None

    def test_min_score_threshold(self, library):
        classifier = StrokeClassifier(library, RecognizerConfig(min_score=1e12))
        assert classifier.classify(circle_points(30) + 0.5) is None

    def test_empty_library(self):
        classifier = StrokeClassifier(TemplateLibrary())
        assert classifier.classify(circle_points(30)) is None
