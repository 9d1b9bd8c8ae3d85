from __future__ import annotations

import asyncio
import json
import uuid
from functools import partial
from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from PIL import Image

from thumbnail_studio.core.config import Settings
from thumbnail_studio.core.errors import CompositingEngineError, DecodeError, GeometryError
from thumbnail_studio.core.logger import TaskLogger
from thumbnail_studio.domain.geometry import PlacementIntent
from thumbnail_studio.domain.scene import SceneDesign
from thumbnail_studio.services.image_io import decode_image, encode_png_b64
from thumbnail_studio.services.pipelines import (
    CompositeResult,
    composite_contextual,
    composite_flat,
    composite_lifestyle,
)
from thumbnail_studio.services.variations import composite_variations

router = APIRouter(tags=["composite"])


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or Settings.from_env()


async def _read_image(upload: UploadFile, field: str) -> Image.Image:
    data = await upload.read()
    try:
        return decode_image(data)
    except DecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {field}: {exc}") from exc


def _parse_scene(scene_design: str) -> SceneDesign:
    try:
        return SceneDesign.from_dict(json.loads(scene_design))
    except (json.JSONDecodeError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=f"Invalid scene_design: {exc}") from exc


def _parse_position(position: str) -> PlacementIntent:
    try:
        return PlacementIntent.parse(position)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


async def _run(fn, logger: TaskLogger) -> CompositeResult:
    try:
        return await asyncio.to_thread(fn)
    except DecodeError as exc:
        logger.error("decode failed", error=str(exc))
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except GeometryError as exc:
        logger.error("placement failed", error=str(exc))
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except CompositingEngineError as exc:
        logger.error("compositing failed", error=str(exc))
        raise HTTPException(status_code=500, detail=f"Compositing failed: {exc}") from exc


def _response(task_id: str, result: CompositeResult) -> dict:
    return {
        "task_id": task_id,
        "pipeline": result.pipeline,
        "composited": result.composited,
        "position": result.position.to_dict(),
        "image_base64_png": encode_png_b64(result.image),
    }


@router.post("/composite/flat")
async def composite_flat_endpoint(
    background_image: UploadFile = File(...),
    cutout_image: UploadFile = File(...),
    category: Optional[str] = Form(None),
):
    task_id = str(uuid.uuid4())
    logger = TaskLogger(trace_id=task_id)
    background = await _read_image(background_image, "background_image")
    cutout = await _read_image(cutout_image, "cutout_image")

    result = await _run(partial(composite_flat, background, cutout, category, logger=logger), logger)
    return _response(task_id, result)


@router.post("/composite/contextual")
async def composite_contextual_endpoint(
    background_image: UploadFile = File(...),
    cutout_image: UploadFile = File(...),
    scene_design: str = Form(...),
):
    task_id = str(uuid.uuid4())
    logger = TaskLogger(trace_id=task_id)
    scene = _parse_scene(scene_design)
    background = await _read_image(background_image, "background_image")
    cutout = await _read_image(cutout_image, "cutout_image")

    result = await _run(partial(composite_contextual, background, cutout, scene, logger=logger), logger)
    return _response(task_id, result)


@router.post("/composite/lifestyle")
async def composite_lifestyle_endpoint(
    request: Request,
    background_image: UploadFile = File(...),
    cutout_image: UploadFile = File(...),
    position: str = Form("center"),
    blur_radius: Optional[float] = Form(None),
    gradient_opacity: Optional[float] = Form(None),
):
    settings = _settings(request)
    task_id = str(uuid.uuid4())
    logger = TaskLogger(trace_id=task_id)
    intent = _parse_position(position)
    background = await _read_image(background_image, "background_image")
    cutout = await _read_image(cutout_image, "cutout_image")

    fn = partial(
        composite_lifestyle,
        background,
        cutout,
        intent,
        settings.lifestyle_blur_radius if blur_radius is None else blur_radius,
        settings.lifestyle_vignette_opacity if gradient_opacity is None else gradient_opacity,
        logger=logger,
    )
    result = await _run(fn, logger)
    return _response(task_id, result)


@router.post("/composite/contextual/batch")
async def composite_contextual_batch_endpoint(
    request: Request,
    background_images: List[UploadFile] = File(...),
    cutout_image: UploadFile = File(...),
    scene_design: str = Form(...),
):
    settings = _settings(request)
    if not background_images:
        raise HTTPException(status_code=400, detail="background_images required")
    if len(background_images) > settings.max_variations:
        raise HTTPException(status_code=400, detail=f"at most {settings.max_variations} background_images allowed")

    task_id = str(uuid.uuid4())
    logger = TaskLogger(trace_id=task_id)
    scene = _parse_scene(scene_design)
    cutout = await _read_image(cutout_image, "cutout_image")
    backgrounds = []
    for idx, upload in enumerate(background_images):
        backgrounds.append(await _read_image(upload, f"background_images[{idx}]"))

    logger.info("batch compositing started", variations=len(backgrounds))
    results = await asyncio.to_thread(
        partial(
            composite_variations,
            backgrounds,
            partial(composite_contextual, cutout=cutout, scene=scene, logger=logger),
            executor=getattr(request.app.state, "executor", None),
            max_workers=settings.composite_workers,
            logger=logger,
        )
    )

    return {
        "task_id": task_id,
        "variations": [
            {
                "index": r.index,
                "composited": r.composited,
                "position": r.position.to_dict() if r.position else None,
                "error": r.error,
                "image_base64_png": encode_png_b64(r.image),
            }
            for r in results
        ],
    }
