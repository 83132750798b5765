"""Exceptions raised by the unistroke recognizer.

All of them derive from ``ValueError`` so callers that already guard input
handling with ``except ValueError`` keep working.
"""

from __future__ import annotations


class RecognizerError(ValueError):
    """Base class for recognizer failures."""


class InvalidInputError(RecognizerError):
    """A stroke is empty, malformed, or contains non-finite coordinates."""


class DimensionMismatchError(RecognizerError):
    """Two feature vectors cannot be compared."""


class EmptyLibraryError(RecognizerError):
    """Strict recognition was attempted against a library with no templates."""
