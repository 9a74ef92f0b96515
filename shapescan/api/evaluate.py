"""POST /api/evaluate — score the detector over a batch of fixtures."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from shapescan.config import Settings
from shapescan.dependencies import build_config, get_settings
from shapescan.evaluation.fixtures import synthetic_fixtures
from shapescan.evaluation.harness import Fixture, evaluate
from shapescan.imaging.loader import decode_data_url, decode_image_bytes
from shapescan.models.evaluation import EvaluationReport
from shapescan.models.image import InvalidImageError
from shapescan.models.requests import EvaluateRequest

router = APIRouter()


@router.post("/evaluate", response_model=EvaluationReport)
async def evaluate_batch(req: EvaluateRequest, settings: Settings = Depends(get_settings)) -> EvaluationReport:
    try:
        config = build_config(settings, req.options)
        fixtures = [Fixture(f.name, decode_image_bytes(decode_data_url(f.image)), f.expected) for f in req.fixtures]
    except (InvalidImageError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if req.synthetic:
        fixtures.extend(synthetic_fixtures())
    if not fixtures:
        raise HTTPException(status_code=422, detail="no fixtures to evaluate")

    return await asyncio.to_thread(evaluate, fixtures, config)
