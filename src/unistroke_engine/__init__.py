"""UnistrokeEngine - single-stroke shape recognition with rotation-invariant matching."""

__version__ = "0.1.0"

from unistroke_engine.errors import (
    RecognizerError,
    InvalidInputError,
    DimensionMismatchError,
    EmptyLibraryError,
)
from unistroke_engine.geometry import Point, NormalizedStroke, normalize, resample
from unistroke_engine.distance import vectorize, optimal_cosine_distance
from unistroke_engine.config import RecognizerConfig
from unistroke_engine.library import Template, TemplateLibrary
from unistroke_engine.shapes import DEFAULT_SHAPES, build_library, seed_default_templates
from unistroke_engine.recognizer import MatchResult, StrokeClassifier, recognize
