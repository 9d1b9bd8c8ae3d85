from __future__ import annotations

from typing import Iterable

from PIL import Image, ImageChops

from thumbnail_studio.core.errors import CompositingError
from thumbnail_studio.domain.layers import BlendMode, CompositeLayer


class Compositor:
    @staticmethod
    def composite(base: Image.Image, layers: Iterable[CompositeLayer]) -> Image.Image:
        """
        Draw layers onto the base in list order (first drawn first).

        Args:
            base: background raster; its size is the output size
            layers: CompositeLayer entries; raster is pasted with its top-left at (left, top)
        Returns:
            Image: opaque RGBA raster of the base's size
        """
        try:
            canvas = base.convert("RGBA")
            canvas.putalpha(255)
            w, h = canvas.size

            for layer in layers:
                # Full-size transparent layer; paste clips anything outside the canvas.
                placed = Image.new("RGBA", (w, h), (0, 0, 0, 0))
                placed.paste(layer.raster.convert("RGBA"), (int(layer.left), int(layer.top)))

                if layer.blend is BlendMode.MULTIPLY:
                    canvas = Compositor._multiply(canvas, placed)
                else:
                    canvas = Image.alpha_composite(canvas, placed)

            return canvas
        except CompositingError:
            raise
        except (ValueError, OSError, AttributeError) as exc:
            raise CompositingError(f"layer compositing failed: {exc}") from exc

    @staticmethod
    def _multiply(canvas: Image.Image, placed: Image.Image) -> Image.Image:
        # Result = Background * Layer, weighted by the layer's alpha.
        alpha = placed.getchannel("A")
        white = Image.new("RGB", canvas.size, (255, 255, 255))
        layer_rgb = Image.composite(placed.convert("RGB"), white, alpha)
        multiplied = ImageChops.multiply(canvas.convert("RGB"), layer_rgb)
        out = Image.composite(multiplied, canvas.convert("RGB"), alpha).convert("RGBA")
        out.putalpha(255)
        return out
