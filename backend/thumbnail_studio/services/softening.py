from __future__ import annotations

from PIL import Image, ImageFilter

from thumbnail_studio.core.errors import EffectSynthesisError

# Light blur keeps the scene recognizable while pulling focus to the product.
MIN_BLUR_RADIUS = 8
MAX_BLUR_RADIUS = 15
DEFAULT_BLUR_RADIUS = 12


def clamp_blur_radius(radius: float) -> float:
    return max(MIN_BLUR_RADIUS, min(MAX_BLUR_RADIUS, float(radius)))


def soften(raster: Image.Image, radius: float = DEFAULT_BLUR_RADIUS) -> Image.Image:
    """Gaussian blur with the radius clamped to [8, 15]; size is unchanged."""
    w, h = raster.size
    if w <= 0 or h <= 0:
        raise EffectSynthesisError(f"cannot blur empty raster {w}x{h}")
    if raster.mode not in {"L", "RGB", "RGBA"}:
        raster = raster.convert("RGBA")
    return raster.filter(ImageFilter.GaussianBlur(radius=clamp_blur_radius(radius)))
