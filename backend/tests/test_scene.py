import unittest

from thumbnail_studio.domain.geometry import PlacementIntent
from thumbnail_studio.domain.scene import SceneDesign

SCENE = {
    "id": "scene-1",
    "environment": {
        "type": "gym",
        "description": "moody gym floor",
        "props": ["dumbbells"],
        "lighting": {"type": "dramatic", "direction": "side", "intensity": "high-contrast"},
    },
    "colorScheme": {
        "primary": "#ff0000",
        "secondary": "#111111",
        "background": "#1c1c1e",
        "textColor": "#ffffff",
        "mood": "energetic",
    },
    "pedestal": {
        "style": "black-glossy",
        "shape": "circular",
        "position": "center-bottom",
        "hasReflection": True,
        "productSpaceRatio": 0.4,
    },
    "textLayout": {"headline": {"text": "GO HARDER"}, "iconCallouts": []},
    "productCharacteristics": {"aspectRatio": "tall"},
    "createdAt": 1700000000,
}


class TestSceneDesign(unittest.TestCase):
    def test_reads_consumed_fields(self):
        scene = SceneDesign.from_dict(SCENE)
        self.assertEqual(scene.pedestal.position, PlacementIntent.CENTER_BOTTOM)
        self.assertEqual(scene.pedestal.product_space_ratio, 0.4)
        self.assertTrue(scene.pedestal.has_reflection)
        self.assertEqual(scene.environment.lighting.type, "dramatic")
        self.assertEqual(scene.environment.lighting.intensity, "high-contrast")
        self.assertEqual(scene.color_scheme.background, "#1c1c1e")
        self.assertEqual(scene.color_scheme.mood, "energetic")

    def test_keeps_raw_payload_and_does_not_mutate_it(self):
        payload = dict(SCENE)
        scene = SceneDesign.from_dict(payload)
        self.assertEqual(scene.raw["textLayout"]["headline"]["text"], "GO HARDER")
        self.assertEqual(payload, SCENE)

    def test_defaults_when_sections_missing(self):
        scene = SceneDesign.from_dict({})
        self.assertEqual(scene.pedestal.position, PlacementIntent.CENTER_BOTTOM)
        self.assertIsNone(scene.pedestal.product_space_ratio)
        self.assertFalse(scene.pedestal.has_reflection)

    def test_unknown_position_falls_back_to_center_bottom(self):
        for position in ("bottom", "top-left", 5):
            with self.subTest(position=position):
                with self.assertLogs("thumbnail-studio", level="WARNING"):
                    scene = SceneDesign.from_dict({"pedestal": {"position": position}})
                self.assertEqual(scene.pedestal.position, PlacementIntent.CENTER_BOTTOM)

    def test_position_accepts_underscores_and_case(self):
        scene = SceneDesign.from_dict({"pedestal": {"position": "Right_Third"}})
        self.assertEqual(scene.pedestal.position, PlacementIntent.RIGHT_THIRD)

    def test_reflection_flag_only_true_for_real_truthy_values(self):
        for value in (True, "true", "TRUE", "1", 1):
            with self.subTest(value=value):
                scene = SceneDesign.from_dict({"pedestal": {"hasReflection": value}})
                self.assertTrue(scene.pedestal.has_reflection)
        for value in (False, "false", "0", "no", "", None, 0):
            with self.subTest(value=value):
                scene = SceneDesign.from_dict({"pedestal": {"hasReflection": value}})
                self.assertFalse(scene.pedestal.has_reflection)

    def test_rejects_bad_ratio(self):
        with self.assertRaises(ValueError):
            SceneDesign.from_dict({"pedestal": {"productSpaceRatio": "wide"}})

    def test_rejects_non_object(self):
        with self.assertRaises(ValueError):
            SceneDesign.from_dict(["not", "a", "scene"])
        with self.assertRaises(ValueError):
            SceneDesign.from_dict({"pedestal": "center"})


if __name__ == "__main__":
    unittest.main()
