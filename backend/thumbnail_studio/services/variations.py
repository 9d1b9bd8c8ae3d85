from __future__ import annotations

import os
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from PIL import Image

from thumbnail_studio.core.logger import TaskLogger
from thumbnail_studio.domain.geometry import BoundingBox
from thumbnail_studio.services.pipelines import CompositeResult


@dataclass
class VariationResult:
    index: int
    image: Image.Image
    composited: bool
    position: Optional[BoundingBox] = None
    error: Optional[str] = None


def composite_variations(
    backgrounds: Sequence[Image.Image],
    run_one: Callable[[Image.Image], CompositeResult],
    *,
    executor: Optional[Executor] = None,
    max_workers: Optional[int] = None,
    logger: Optional[TaskLogger] = None,
) -> List[VariationResult]:
    """Composite every background independently, in parallel.

    Results come back in input order. A failing variation does not touch its
    siblings: it is returned uncomposited with the raw background and the error.
    """
    logger = logger or TaskLogger()

    def _run(index: int, background: Image.Image) -> VariationResult:
        try:
            result = run_one(background)
        except Exception as exc:
            logger.error("variation compositing failed", index=index, error=str(exc)[:500])
            return VariationResult(index=index, image=background, composited=False, error=str(exc)[:500])
        logger.info("variation composited", index=index, position=result.position.to_dict())
        return VariationResult(
            index=index,
            image=result.image,
            composited=result.composited,
            position=result.position,
        )

    if not backgrounds:
        return []

    own_executor = executor is None
    if own_executor:
        workers = max_workers or os.cpu_count() or 1
        executor = ThreadPoolExecutor(max_workers=max(1, min(workers, len(backgrounds))))
    try:
        futures = [executor.submit(_run, idx, bg) for idx, bg in enumerate(backgrounds)]
        return [f.result() for f in futures]
    finally:
        if own_executor:
            executor.shutdown(wait=True)
