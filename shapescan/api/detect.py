"""POST /api/detect — run the detection pipeline on one image."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from shapescan.config import Settings
from shapescan.dependencies import build_config, get_settings
from shapescan.engine.pipeline import detect_shapes
from shapescan.imaging.loader import decode_data_url, decode_image_bytes
from shapescan.models.image import InvalidImageError
from shapescan.models.requests import DetectRequest
from shapescan.models.responses import DetectResponse
from shapescan.report.summary import format_result

router = APIRouter()


@router.post("/detect", response_model=DetectResponse)
async def detect(req: DetectRequest, settings: Settings = Depends(get_settings)) -> DetectResponse:
    try:
        image = decode_image_bytes(decode_data_url(req.image))
        config = build_config(settings, req.options)
    except (InvalidImageError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    # CPU-bound; keep the event loop free
    result = await asyncio.to_thread(detect_shapes, image, config)
    return DetectResponse(result=result, summary=format_result(result))
