from __future__ import annotations

import math
from typing import Optional

from thumbnail_studio.core.errors import GeometryError
from thumbnail_studio.domain.geometry import BoundingBox, Canvas, PlacementIntent

EDGE_MARGIN = 20
MIN_PRODUCT_SIZE = 200

DEFAULT_WIDTH_RATIO = 0.40
MIN_SPACE_RATIO = 0.2
MAX_SPACE_RATIO = 0.6

# Horizontal anchors for the third placements.
LEFT_THIRD_X = 0.33
RIGHT_THIRD_X = 0.67
# Bottom edge of a pedestal-resting product, as a fraction of canvas height.
PEDESTAL_BASELINE_Y = 0.65

# Flat pipeline rule: right side, 45% width, 5% right margin.
FLAT_WIDTH_RATIO = 0.45
FLAT_RIGHT_MARGIN_RATIO = 0.05


def _validate(canvas: Canvas, cutout_w: int, cutout_h: int) -> None:
    if canvas.width <= 0 or canvas.height <= 0:
        raise GeometryError(f"canvas must be positive, got {canvas.width}x{canvas.height}")
    if cutout_w <= 0 or cutout_h <= 0:
        raise GeometryError(f"cutout must be positive, got {cutout_w}x{cutout_h}")


def clamp_space_ratio(ratio: Optional[float]) -> float:
    if ratio is None:
        return DEFAULT_WIDTH_RATIO
    return max(MIN_SPACE_RATIO, min(MAX_SPACE_RATIO, float(ratio)))


def _fit_size(canvas: Canvas, cutout_w: int, cutout_h: int, target_w: int) -> tuple[int, int]:
    # Integer arithmetic keeps the aspect derivations exact.
    max_h = canvas.height * 80 // 100
    if cutout_w > cutout_h:
        # wider than tall
        w = target_w
        h = w * cutout_h // cutout_w
        if h > max_h:
            h = max_h
            w = h * cutout_w // cutout_h
    else:
        # taller than wide (bottles, tubes)
        h = canvas.height * 85 // 100
        w = h * cutout_w // cutout_h
        if w > target_w:
            w = target_w
            h = w * cutout_h // cutout_w
    return w, h


def resolve_placement(
    canvas: Canvas,
    cutout_w: int,
    cutout_h: int,
    intent: PlacementIntent,
    product_space_ratio: Optional[float] = None,
) -> BoundingBox:
    """Aspect-preserving product box for one of the shared anchor intents.

    The box is derived from canvas-relative ratios only, so an oversized
    cutout never leaks its own dimensions into the result. The returned box
    always keeps EDGE_MARGIN pixels from every canvas edge and is at least
    MIN_PRODUCT_SIZE on both axes.
    """
    _validate(canvas, cutout_w, cutout_h)
    min_side = 2 * EDGE_MARGIN + MIN_PRODUCT_SIZE
    if canvas.width < min_side or canvas.height < min_side:
        raise GeometryError(
            f"canvas {canvas.width}x{canvas.height} cannot hold a {MIN_PRODUCT_SIZE}px product with {EDGE_MARGIN}px margins"
        )

    intent = PlacementIntent.parse(intent)
    target_w = math.floor(canvas.width * clamp_space_ratio(product_space_ratio))
    w, h = _fit_size(canvas, cutout_w, cutout_h, target_w)

    w = min(max(w, MIN_PRODUCT_SIZE), canvas.width - 2 * EDGE_MARGIN)
    h = min(max(h, MIN_PRODUCT_SIZE), canvas.height - 2 * EDGE_MARGIN)

    if intent is PlacementIntent.CENTER_BOTTOM:
        x = math.floor((canvas.width - w) / 2)
        y = math.floor(canvas.height * PEDESTAL_BASELINE_Y - h)
    elif intent is PlacementIntent.LEFT_THIRD:
        x = math.floor(canvas.width * LEFT_THIRD_X - w / 2)
        y = math.floor((canvas.height - h) / 2)
    elif intent is PlacementIntent.RIGHT_THIRD:
        x = math.floor(canvas.width * RIGHT_THIRD_X - w / 2)
        y = math.floor((canvas.height - h) / 2)
    else:
        x = math.floor((canvas.width - w) / 2)
        y = math.floor((canvas.height - h) / 2)

    x = max(EDGE_MARGIN, min(x, canvas.width - w - EDGE_MARGIN))
    y = max(EDGE_MARGIN, min(y, canvas.height - h - EDGE_MARGIN))
    return BoundingBox(x=x, y=y, width=w, height=h)


def resolve_flat_placement(canvas: Canvas, cutout_w: int, cutout_h: int) -> BoundingBox:
    """Right-aligned box used by the flat pipeline.

    Kept separate from `resolve_placement`: 45% width target, never upscaled
    past the cutout's own size, 5% margin from the right edge, vertically
    centered.
    """
    _validate(canvas, cutout_w, cutout_h)
    target_w = math.floor(canvas.width * FLAT_WIDTH_RATIO)

    if cutout_w > cutout_h:
        w = min(target_w, cutout_w)
        h = w * cutout_h // cutout_w
    else:
        h = min(canvas.height * 85 // 100, cutout_h)
        w = h * cutout_w // cutout_h

    w = min(max(w, MIN_PRODUCT_SIZE), canvas.width)
    h = min(max(h, MIN_PRODUCT_SIZE), canvas.height)

    x = canvas.width - w - math.floor(canvas.width * FLAT_RIGHT_MARGIN_RATIO)
    y = math.floor((canvas.height - h) / 2)

    x = max(0, min(x, canvas.width - w))
    y = max(0, min(y, canvas.height - h))
    return BoundingBox(x=x, y=y, width=w, height=h)
