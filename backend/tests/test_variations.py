import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from unittest import mock

from PIL import Image

from thumbnail_studio.core.logger import TaskLogger
from thumbnail_studio.domain.scene import SceneDesign
from thumbnail_studio.services.pipelines import composite_contextual
from thumbnail_studio.services.variations import composite_variations


def _quiet_logger():
    logger = TaskLogger(trace_id="variations")
    logger.info = mock.Mock()
    logger.warning = mock.Mock()
    logger.error = mock.Mock()
    return logger


class TestVariations(unittest.TestCase):
    def setUp(self):
        self.cutout = Image.new("RGBA", (200, 300), (255, 0, 0, 255))
        self.scene = SceneDesign.from_dict({"pedestal": {"position": "center-bottom"}})
        self.run_one = partial(composite_contextual, cutout=self.cutout, scene=self.scene, logger=_quiet_logger())

    def test_results_keep_input_order(self):
        colors = [(10, 0, 0), (0, 20, 0), (0, 0, 30), (40, 40, 40)]
        backgrounds = [Image.new("RGB", (640, 360), c) for c in colors]

        results = composite_variations(backgrounds, self.run_one, max_workers=4, logger=_quiet_logger())

        self.assertEqual([r.index for r in results], [0, 1, 2, 3])
        for r, color in zip(results, colors):
            self.assertTrue(r.composited)
            self.assertEqual(r.image.size, (1280, 720))
            self.assertEqual(r.image.getpixel((0, 0))[:3], color)

    def test_failure_is_isolated(self):
        good = Image.new("RGB", (640, 360), (0, 0, 255))
        broken = Image.new("RGB", (0, 0))
        logger = _quiet_logger()

        results = composite_variations([good, broken, good], self.run_one, max_workers=2, logger=logger)

        self.assertTrue(results[0].composited)
        self.assertTrue(results[2].composited)
        self.assertFalse(results[1].composited)
        self.assertIs(results[1].image, broken)
        self.assertIsNone(results[1].position)
        self.assertTrue(results[1].error)
        logger.error.assert_called_once()

    def test_uses_supplied_executor_without_closing_it(self):
        seen = set()

        def run_one(bg):
            seen.add(threading.current_thread().name)
            return self.run_one(bg)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="shared") as pool:
            composite_variations([Image.new("RGB", (64, 64))] * 3, run_one, executor=pool, logger=_quiet_logger())
            # still usable afterwards
            self.assertEqual(pool.submit(lambda: 1).result(), 1)

        self.assertTrue(all(name.startswith("shared") for name in seen))

    def test_empty_batch(self):
        self.assertEqual(composite_variations([], self.run_one), [])


if __name__ == "__main__":
    unittest.main()
