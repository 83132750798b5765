"""UnistrokeEngine CLI.

Usage:
    unistroke-engine shapes                 — List the built-in template shapes
    unistroke-engine recognize STROKE.json  — Recognize a stroke from a JSON file
    unistroke-engine benchmark              — Time recognition on synthetic strokes
"""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import Optional

import numpy as np
import typer

from unistroke_engine.config import RecognizerConfig
from unistroke_engine.errors import RecognizerError
from unistroke_engine.geometry import as_points
from unistroke_engine.recognizer import StrokeClassifier
from unistroke_engine.shapes import DEFAULT_SHAPES, build_library

app = typer.Typer(
    name="unistroke-engine",
    help="✍️  Single-stroke shape recognition.",
    add_completion=False,
)


def _load_config(config_path: Optional[str]) -> RecognizerConfig:
    if not config_path:
        return RecognizerConfig()
    try:
        return RecognizerConfig.from_yaml(config_path)
    except (OSError, ValueError) as e:
        typer.echo(f"❌ Could not load config {config_path}: {e}", err=True)
        raise typer.Exit(1)


def _setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_stroke(source: str) -> list:
    """Read a stroke: a JSON list of [x, y] pairs or {"points": [...]}."""
    text = sys.stdin.read() if source == "-" else Path(source).read_text()
    data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("points", [])
    return data


@app.command()
def shapes():
    """List the built-in template shapes and their example counts."""
    library = build_library()
    typer.echo(f"📚 {len(library)} templates, {len(library.list_names())} shapes")
    for name in library.enumerate_names():
        typer.echo(f"   {name:16s} {len(library.examples(name))} examples")


@app.command()
def recognize(
    stroke_file: str = typer.Argument(..., help="JSON stroke file, or '-' for stdin"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to recognizer YAML config"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Recognize a single stroke against the built-in shapes."""
    cfg = _load_config(config)
    _setup_logging(cfg.log_level)

    try:
        points = _read_stroke(stroke_file)
    except (OSError, ValueError) as e:
        typer.echo(f"❌ Could not read stroke {stroke_file}: {e}", err=True)
        raise typer.Exit(1)

    classifier = StrokeClassifier.with_defaults(cfg)
    try:
        points = as_points(points)
        if as_json:
            typer.echo(json.dumps(classifier.recognize(points).to_dict()))
            return
        result = classifier.classify_match(points)
    except RecognizerError as e:
        typer.echo(f"❌ Invalid stroke: {e}", err=True)
        raise typer.Exit(1)

    if result is None:
        typer.echo("🤷 No match")
        return

    typer.echo(f"✅ {result.name} (template {result.matched_template})")
    typer.echo(f"   Score:        {result.score:.3f}")
    typer.echo(f"   Angle offset: {result.angle_offset_degrees:.1f}°")


@app.command()
def benchmark(
    iterations: int = typer.Option(500, help="Number of strokes to recognize"),
    seed: int = typer.Option(42, help="Random seed for stroke jitter"),
):
    """Time recognition of jittered built-in shapes."""
    classifier = StrokeClassifier.with_defaults()
    rng = np.random.default_rng(seed)

    typer.echo(
        f"⚡ Running benchmark: {iterations} strokes against "
        f"{len(classifier.library)} templates"
    )

    times = []
    correct = 0
    for i in range(iterations):
        name, points = DEFAULT_SHAPES[i % len(DEFAULT_SHAPES)]
        noisy = points + rng.normal(scale=2.0, size=points.shape)

        t0 = time.perf_counter()
        result = classifier.recognize(noisy)
        times.append(time.perf_counter() - t0)

        if result.name == name:
            correct += 1

    if not times:
        typer.echo("Nothing to measure.")
        return

    avg_ms = sum(times) / len(times) * 1000
    p95_ms = sorted(times)[int(len(times) * 0.95)] * 1000

    typer.echo(f"\n📊 Results:")
    typer.echo(f"   Average latency: {avg_ms:.2f} ms")
    typer.echo(f"   P95 latency:     {p95_ms:.2f} ms")
    typer.echo(f"   Exact-name hits: {correct}/{len(times)}")


def main():
    app()


if __name__ == "__main__":
    main()
