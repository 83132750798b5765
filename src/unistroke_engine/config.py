"""Recognizer configuration.

Loaded from YAML, either flat or nested under a ``recognizer:`` key:

    recognizer:
      num_points: 64
      normalized_size: 256.0
      min_points: 4
      min_score: 1.5
      log_level: debug
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path

import yaml

from unistroke_engine.geometry import NORMALIZED_SIZE, NUM_POINTS

# Field annotations are strings under postponed evaluation
_FIELD_TYPES = {"int": int, "float": float, "str": str}


@dataclass
class RecognizerConfig:
    num_points: int = NUM_POINTS
    normalized_size: float = NORMALIZED_SIZE
    min_points: int = 4  # shorter strokes are treated as taps and ignored
    min_score: float = 0.0
    log_level: str = "info"

    def validate(self) -> RecognizerConfig:
        """Raise ValueError on out-of-range settings; returns self."""
        if self.num_points < 2:
            raise ValueError(f"num_points must be at least 2, got {self.num_points}")
        if self.normalized_size <= 0:
            raise ValueError(f"normalized_size must be positive, got {self.normalized_size}")
        if self.min_points < 1:
            raise ValueError(f"min_points must be at least 1, got {self.min_points}")
        if self.min_score < 0:
            raise ValueError(f"min_score must not be negative, got {self.min_score}")
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> RecognizerConfig:
        """Build a config, coercing each known key to its field type.

        YAML 1.1 reads scalars such as ``1.0e12`` as strings, so values are
        converted rather than trusted.
        """
        types = {f.name: _FIELD_TYPES[f.type] for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in types:
                continue
            kind = types[key]
            try:
                values[key] = kind(value)
            except (TypeError, ValueError):
                raise ValueError(
                    f"{key} must be {kind.__name__}, got {value!r}"
                ) from None
        return cls(**values).validate()

    @classmethod
    def from_yaml(cls, path: str | Path) -> RecognizerConfig:
        """Load settings from a YAML file. Missing keys keep their defaults."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        section = data.get("recognizer", data) if isinstance(data, dict) else data
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return cls.from_dict(section)

    def to_yaml(self, path: str | Path):
        with open(path, "w") as f:
            yaml.safe_dump({"recognizer": self.to_dict()}, f, sort_keys=False)
