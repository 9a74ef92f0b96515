"""Command-line entry point: detect shapes in an image or evaluate a fixture set."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from shapescan.config import settings
from shapescan.engine.config import CONTOUR_MODES, PipelineConfig
from shapescan.engine.pipeline import detect_shapes
from shapescan.evaluation.fixtures import synthetic_fixtures
from shapescan.evaluation.harness import evaluate, load_fixture_dir
from shapescan.imaging.loader import load_image
from shapescan.models.image import InvalidImageError
from shapescan.report.summary import format_result


def _add_threshold_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--edge-threshold", type=float, default=None, help="Sobel magnitude cutoff")
    parser.add_argument("--min-region-size", type=int, default=None, help="Drop regions this small or smaller")
    parser.add_argument("--circularity-threshold", type=float, default=None)
    parser.add_argument("--rdp-epsilon-factor", type=float, default=None)
    parser.add_argument("--contour-mode", choices=CONTOUR_MODES, default=None)
    parser.add_argument("--squares", action="store_true", help="Report squares separately from rectangles")
    parser.add_argument("--baseline", action="store_true", help="Angle-sort contours with 0.6 circularity and 0.02 RDP factor")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a text summary")


def _build_config(args: argparse.Namespace) -> PipelineConfig:
    base = PipelineConfig.baseline() if args.baseline else PipelineConfig.from_settings(settings)
    return base.with_overrides(
        edge_threshold=args.edge_threshold,
        min_region_size=args.min_region_size,
        circularity_threshold=args.circularity_threshold,
        rdp_epsilon_factor=args.rdp_epsilon_factor,
        contour_mode=args.contour_mode,
        distinguish_squares=True if args.squares else None,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shapescan", description="Detect geometric primitives in raster images.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    detect = sub.add_parser("detect", help="Detect shapes in one image")
    detect.add_argument("image", help="Path to an image file")
    _add_threshold_args(detect)

    ev = sub.add_parser("evaluate", help="Score the detector over a fixture directory")
    ev.add_argument("directory", nargs="?", default=None, help="Fixture directory (default: synthetic set)")
    _add_threshold_args(ev)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help=f"Bind address (default: {settings.host})")
    serve.add_argument("--port", type=int, default=None, help=f"Port (default: {settings.port})")
    serve.add_argument("--reload", action="store_true", help="Restart on code changes")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "serve":
        uvicorn.run(
            "shapescan.main:app",
            host=args.host or settings.host,
            port=settings.port if args.port is None else args.port,
            log_level=settings.log_level,
            reload=args.reload,
        )
        return 0

    try:
        config = _build_config(args)
        if args.command == "detect":
            result = detect_shapes(load_image(Path(args.image)), config)
            print(json.dumps(result.to_dict(), indent=2) if args.json else format_result(result))
            return 0

        fixtures = load_fixture_dir(args.directory) if args.directory else synthetic_fixtures()
        report = evaluate(fixtures, config)
    except (InvalidImageError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        for score in report.fixtures:
            status = "PASS" if score.passed else "FAIL"
            print(f"{status} {score.name}: expected={score.expected} detected={score.detected} f1={score.f1:.2f}")
        print(f"Accuracy: {report.accuracy * 100:.1f}%  mean F1: {report.mean_f1:.3f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
