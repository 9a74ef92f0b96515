"""Batch evaluation harness — run the detector over named fixtures and score it.

Each fixture is scored by multiset matching of detected against expected
shape types. An image expected to be empty and detected empty scores 1.0.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from shapescan.engine.config import PipelineConfig
from shapescan.engine.pipeline import detect_shapes
from shapescan.imaging.loader import load_image
from shapescan.models.evaluation import EvaluationReport, FixtureScore
from shapescan.models.image import RasterImage

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp", ".gif")
EXPECTED_FILE = "expected.json"


@dataclass
class Fixture:
    name: str
    image: RasterImage
    expected: list[str] = field(default_factory=list)


def _canonical(shape_type: str, config: PipelineConfig) -> str:
    if shape_type == "square" and not config.distinguish_squares:
        return "rectangle"
    return shape_type


def score_types(expected: list[str], detected: list[str]) -> tuple[int, float, float, float]:
    """(true_positives, precision, recall, f1) for two multisets of shape types."""
    if not expected and not detected:
        return 0, 1.0, 1.0, 1.0
    tp = sum((Counter(expected) & Counter(detected)).values())
    precision = tp / len(detected) if detected else 0.0
    recall = tp / len(expected) if expected else 0.0
    if precision + recall == 0:
        return tp, precision, recall, 0.0
    return tp, precision, recall, 2 * precision * recall / (precision + recall)


def evaluate(fixtures: list[Fixture], config: PipelineConfig | None = None) -> EvaluationReport:
    """Detect every fixture in sequence and aggregate the scores."""
    config = config or PipelineConfig()
    scores: list[FixtureScore] = []

    for fixture in fixtures:
        result = detect_shapes(fixture.image, config)
        expected = [_canonical(t, config) for t in fixture.expected]
        detected = [s.type for s in result.shapes]
        tp, precision, recall, f1 = score_types(expected, detected)
        scores.append(
            FixtureScore(
                name=fixture.name,
                expected=expected,
                detected=detected,
                true_positives=tp,
                precision=precision,
                recall=recall,
                f1=f1,
                processing_time_ms=result.processing_time,
            )
        )
        logger.info("Fixture %s: expected=%s detected=%s f1=%.2f", fixture.name, expected, detected, f1)

    if not scores:
        return EvaluationReport(config=config.to_dict())

    n = len(scores)
    total_time = sum(s.processing_time_ms for s in scores)
    return EvaluationReport(
        config=config.to_dict(),
        fixtures=scores,
        mean_precision=sum(s.precision for s in scores) / n,
        mean_recall=sum(s.recall for s in scores) / n,
        mean_f1=sum(s.f1 for s in scores) / n,
        accuracy=sum(1 for s in scores if s.passed) / n,
        total_processing_time_ms=total_time,
        mean_processing_time_ms=total_time / n,
    )


def load_fixture_dir(directory: str | Path) -> list[Fixture]:
    """Load every image in ``directory``; expected types come from an optional expected.json."""
    root = Path(directory)
    expected_map: dict[str, list[str]] = {}
    expected_path = root / EXPECTED_FILE
    if expected_path.is_file():
        expected_map = json.loads(expected_path.read_text(encoding="utf-8"))

    fixtures = []
    for path in sorted(root.iterdir()):
        if path.suffix.lower() not in IMAGE_SUFFIXES:
            continue
        fixtures.append(Fixture(path.name, load_image(path), list(expected_map.get(path.name, []))))
    logger.info("Loaded %d fixtures from %s", len(fixtures), root)
    return fixtures
