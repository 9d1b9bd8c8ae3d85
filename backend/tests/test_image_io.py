import base64
import io
import unittest

from PIL import Image

from thumbnail_studio.core.errors import DecodeError
from thumbnail_studio.domain.geometry import Canvas
from thumbnail_studio.services.image_io import contain_fit, cover_fit, decode_image, encode_png, encode_png_b64


def _png_bytes(img):
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


class TestDecode(unittest.TestCase):
    def test_decodes_bytes_base64_and_data_url(self):
        img = Image.new("RGBA", (7, 5), (1, 2, 3, 4))
        raw = _png_bytes(img)
        b64 = base64.b64encode(raw).decode("ascii")

        for payload in (raw, b64, "data:image/png;base64," + b64):
            out = decode_image(payload)
            self.assertEqual(out.size, (7, 5))
            self.assertEqual(out.convert("RGBA").getpixel((0, 0)), (1, 2, 3, 4))

    def test_garbage_raises_decode_error(self):
        for payload in (b"", b"not an image", "%%%not-base64%%%", "aGVsbG8="):
            with self.subTest(payload=payload):
                with self.assertRaises(DecodeError):
                    decode_image(payload)

    def test_encode_png_roundtrips_pixels(self):
        img = Image.new("RGBA", (3, 3), (9, 8, 7, 255))
        self.assertEqual(decode_image(encode_png(img)).getpixel((1, 1)), (9, 8, 7, 255))
        self.assertEqual(decode_image(encode_png_b64(img)).size, (3, 3))


class TestResize(unittest.TestCase):
    def test_cover_fit_fills_and_crops_center(self):
        # 400x100: left quarter red, rest blue; covering 100x100 keeps the center
        img = Image.new("RGB", (400, 100), (0, 0, 255))
        img.paste((255, 0, 0), (0, 0, 100, 100))
        out = cover_fit(img, Canvas(100, 100))
        self.assertEqual(out.size, (100, 100))
        self.assertEqual(out.getpixel((50, 50))[:3], (0, 0, 255))

    def test_cover_fit_upscales_small_background(self):
        out = cover_fit(Image.new("RGB", (64, 36), (10, 10, 10)), Canvas(1280, 720))
        self.assertEqual(out.size, (1280, 720))

    def test_cover_fit_handles_odd_aspect(self):
        out = cover_fit(Image.new("RGB", (1024, 1024), (10, 10, 10)), Canvas(1280, 720))
        self.assertEqual(out.size, (1280, 720))

    def test_contain_fit_pads_transparently(self):
        img = Image.new("RGBA", (100, 50), (255, 0, 0, 255))
        out = contain_fit(img, 200, 200)
        self.assertEqual(out.size, (200, 200))
        self.assertEqual(out.getpixel((0, 0))[3], 0)
        self.assertEqual(out.getpixel((100, 100)), (255, 0, 0, 255))


if __name__ == "__main__":
    unittest.main()
