from __future__ import annotations

import base64
import binascii
import io
from typing import Union

from PIL import Image, ImageOps

from thumbnail_studio.core.errors import DecodeError
from thumbnail_studio.domain.geometry import Canvas


def _b64_to_bytes(b64: str) -> bytes:
    if "," in b64:
        b64 = b64.split(",", 1)[1]
    return base64.b64decode(b64.strip())


def decode_image(data: Union[bytes, bytearray, str]) -> Image.Image:
    """Decode raw bytes or a base64 string (optionally a data: URL) into a loaded image."""
    try:
        if isinstance(data, str):
            data = _b64_to_bytes(data)
        if not data:
            raise DecodeError("empty image payload")
        img = Image.open(io.BytesIO(bytes(data)))
        # Force a full decode so the image no longer depends on the buffer
        # and can be shared across worker threads.
        img.load()
        return img
    except DecodeError:
        raise
    except (OSError, ValueError, binascii.Error, Image.DecompressionBombError) as exc:
        raise DecodeError(f"cannot decode image: {exc}") from exc


def encode_png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def encode_png_b64(img: Image.Image) -> str:
    return base64.b64encode(encode_png(img)).decode("utf-8")


def cover_fit(img: Image.Image, canvas: Canvas) -> Image.Image:
    """Scale to cover the canvas and center-crop the overflow."""
    img = img.convert("RGBA")
    iw, ih = img.size
    if iw <= 0 or ih <= 0:
        raise DecodeError(f"background has no pixels ({iw}x{ih})")
    box_w, box_h = canvas.width, canvas.height
    r = max(box_w / iw, box_h / ih)
    nw, nh = max(box_w, round(iw * r)), max(box_h, round(ih * r))
    if (nw, nh) != (iw, ih):
        img = img.resize((nw, nh), Image.Resampling.LANCZOS)
    # center crop
    x1 = max(0, (nw - box_w) // 2)
    y1 = max(0, (nh - box_h) // 2)
    return img.crop((x1, y1, x1 + box_w, y1 + box_h))


def contain_fit(img: Image.Image, width: int, height: int) -> Image.Image:
    """Scale to fit inside width x height, centered on transparent padding."""
    return ImageOps.pad(
        img.convert("RGBA"),
        (width, height),
        method=Image.Resampling.LANCZOS,
        color=(0, 0, 0, 0),
    )
