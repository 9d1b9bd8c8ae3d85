from __future__ import annotations

import numpy as np
from PIL import Image, ImageEnhance, ImageFilter

from thumbnail_studio.core.errors import EffectSynthesisError
from thumbnail_studio.domain.effects import EffectPreset
from thumbnail_studio.domain.geometry import BoundingBox, Canvas

# Smallest blur magnitude we apply; lower requests are raised to it.
MIN_SHADOW_BLUR = 0.3

REFLECTION_BRIGHTNESS = 0.3
REFLECTION_BLUR = 3
REFLECTION_OPACITY = 0.3
# A reflection never starts lower than this many pixels above the canvas bottom.
REFLECTION_BOTTOM_GUARD = 50


def _scale_alpha(alpha: Image.Image, opacity: float) -> Image.Image:
    if opacity >= 1.0:
        return alpha
    arr = np.asarray(alpha, dtype=np.float32) * max(0.0, float(opacity))
    return Image.fromarray(np.clip(arr, 0, 255).astype(np.uint8), mode="L")


def _require_pixels(subject: Image.Image, what: str) -> Image.Image:
    w, h = subject.size
    if w <= 0 or h <= 0:
        raise EffectSynthesisError(f"cannot build {what} from empty raster {w}x{h}")
    return subject.convert("RGBA")


class ShadowService:
    def create_drop_shadow(self, subject: Image.Image, preset: EffectPreset) -> Image.Image:
        """
        Build a drop shadow from the subject's alpha silhouette.
        Args:
            subject: resized product cutout (RGBA)
            preset: blur radius and opacity are used here; offsets apply at placement
        Returns:
            Image: RGBA, pure black, alpha = blurred silhouette * opacity
        """
        rgba = _require_pixels(subject, "shadow")
        try:
            # Grayscale, then brightness to zero: a pure black silhouette.
            black = ImageEnhance.Brightness(rgba.convert("L")).enhance(0.0)
            alpha = rgba.getchannel("A")

            radius = max(float(preset.blur_radius), MIN_SHADOW_BLUR)
            black = black.filter(ImageFilter.GaussianBlur(radius))
            alpha = alpha.filter(ImageFilter.GaussianBlur(radius))

            alpha = _scale_alpha(alpha, preset.opacity)
            return Image.merge("RGBA", (black, black, black, alpha))
        except (ValueError, OSError) as exc:
            raise EffectSynthesisError(f"shadow synthesis failed: {exc}") from exc

    def create_reflection(self, subject: Image.Image) -> Image.Image:
        """Flipped, darkened, softened copy of the subject for glossy pedestals."""
        rgba = _require_pixels(subject, "reflection")
        try:
            flipped = rgba.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
            r, g, b, a = flipped.split()
            rgb = ImageEnhance.Brightness(Image.merge("RGB", (r, g, b))).enhance(REFLECTION_BRIGHTNESS)
            out = Image.merge("RGBA", (*rgb.split(), a))
            out = out.filter(ImageFilter.GaussianBlur(REFLECTION_BLUR))
            out.putalpha(_scale_alpha(out.getchannel("A"), REFLECTION_OPACITY))
            return out
        except (ValueError, OSError) as exc:
            raise EffectSynthesisError(f"reflection synthesis failed: {exc}") from exc

    @staticmethod
    def shadow_origin(box: BoundingBox, preset: EffectPreset) -> tuple[int, int]:
        """(top, left) for the shadow layer, never negative."""
        return (max(0, box.y + int(preset.offset_y)), max(0, box.x + int(preset.offset_x)))

    @staticmethod
    def reflection_origin(box: BoundingBox, canvas: Canvas) -> tuple[int, int]:
        """(top, left) directly below the subject box."""
        return (min(canvas.height - REFLECTION_BOTTOM_GUARD, box.bottom), box.x)
