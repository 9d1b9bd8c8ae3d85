from __future__ import annotations

import math
from typing import Dict, Tuple

import numpy as np
from PIL import Image

from thumbnail_studio.core.errors import GeometryError
from thumbnail_studio.domain.geometry import Canvas, PlacementIntent

MIN_OPACITY = 0.20
MAX_OPACITY = 0.30
DEFAULT_OPACITY = 0.25

# Gradient radius in canvas-relative units.
VIGNETTE_RADIUS = 0.7
# Inner share of the radius that stays fully transparent.
CLEAR_STOP = 0.6

VIGNETTE_CENTERS: Dict[PlacementIntent, Tuple[float, float]] = {
    PlacementIntent.CENTER: (0.5, 0.55),
    PlacementIntent.RIGHT_THIRD: (0.67, 0.55),
    PlacementIntent.LEFT_THIRD: (0.33, 0.55),
    PlacementIntent.CENTER_BOTTOM: (0.5, 0.7),
}


def vignette_center(intent: PlacementIntent) -> Tuple[float, float]:
    return VIGNETTE_CENTERS[PlacementIntent.parse(intent)]


def clamp_vignette_opacity(opacity: float) -> float:
    return max(MIN_OPACITY, min(MAX_OPACITY, float(opacity)))


def vignette_alpha(opacity: float) -> int:
    """8-bit edge alpha, rounded half up (0.30 -> 77, 0.20 -> 51)."""
    return int(math.floor(clamp_vignette_opacity(opacity) * 255 + 0.5))


def vignette_alpha_hex(opacity: float) -> str:
    return f"{vignette_alpha(opacity):02x}"


def generate_vignette(
    canvas: Canvas,
    intent: PlacementIntent,
    opacity: float = DEFAULT_OPACITY,
) -> Image.Image:
    """Radial transparent-to-black overlay centered on the product anchor.

    Distances are measured in canvas-relative units on each axis, so the
    gradient is an ellipse matching the canvas aspect. Alpha is 0 up to 60%
    of the radius, then ramps linearly to the edge alpha at the radius and
    stays there beyond it.
    """
    if canvas.width <= 0 or canvas.height <= 0:
        raise GeometryError(f"canvas must be positive, got {canvas.width}x{canvas.height}")

    cx, cy = vignette_center(intent)
    edge_alpha = vignette_alpha(opacity)

    w, h = canvas.width, canvas.height
    # Sample pixel centers.
    xs = (np.arange(w, dtype=np.float32) + 0.5) / w
    ys = (np.arange(h, dtype=np.float32) + 0.5) / h
    dx = (xs[None, :] - cx) / VIGNETTE_RADIUS
    dy = (ys[:, None] - cy) / VIGNETTE_RADIUS
    dist = np.sqrt(dx * dx + dy * dy)

    t = np.clip((dist - CLEAR_STOP) / (1.0 - CLEAR_STOP), 0.0, 1.0)
    alpha = np.rint(t * edge_alpha).astype(np.uint8)

    overlay = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    overlay.putalpha(Image.fromarray(alpha, mode="L"))
    return overlay


def apply_vignette(raster: Image.Image, vignette: Image.Image) -> Image.Image:
    """Composite the overlay over `raster`; the vignette is resized if needed."""
    base = raster.convert("RGBA")
    if vignette.size != base.size:
        vignette = vignette.resize(base.size, Image.Resampling.BILINEAR)
    return Image.alpha_composite(base, vignette.convert("RGBA"))
