import unittest

from thumbnail_studio.domain.effects import ProductCategory, ScenePreset
from thumbnail_studio.domain.scene import SceneDesign
from thumbnail_studio.services.presets import (
    CATEGORY_PRESETS,
    SCENE_PRESETS,
    _parse_hex,
    classify_scene,
    is_dark_background,
    resolve_category_preset,
    resolve_scene_preset,
)


def _scene(lighting_type=None, intensity=None, background=None, mood=None):
    return SceneDesign.from_dict(
        {
            "environment": {"lighting": {"type": lighting_type, "intensity": intensity}},
            "colorScheme": {"background": background, "mood": mood},
            "pedestal": {"position": "center"},
        }
    )


class TestCategoryPresets(unittest.TestCase):
    def test_every_category_has_a_preset(self):
        self.assertEqual(set(CATEGORY_PRESETS), set(ProductCategory))

    def test_baby_shadow_lighter_than_fitness(self):
        baby = resolve_category_preset("baby")
        fitness = resolve_category_preset("fitness")
        self.assertEqual(baby.opacity, 0.15)
        self.assertEqual(fitness.opacity, 0.4)
        self.assertLess(baby.opacity, fitness.opacity)

    def test_case_insensitive(self):
        self.assertEqual(resolve_category_preset("TeCh"), CATEGORY_PRESETS[ProductCategory.TECH])
        self.assertEqual(resolve_category_preset("  Beauty "), CATEGORY_PRESETS[ProductCategory.BEAUTY])

    def test_unknown_and_missing_fall_back_to_default(self):
        default = CATEGORY_PRESETS[ProductCategory.DEFAULT]
        self.assertEqual(resolve_category_preset(None), default)
        self.assertEqual(resolve_category_preset(""), default)
        self.assertEqual(resolve_category_preset("furniture"), default)

    def test_fitness_values(self):
        p = resolve_category_preset("fitness")
        self.assertEqual((p.blur_radius, p.offset_x, p.offset_y), (25, 8, 15))


class TestScenePresets(unittest.TestCase):
    def test_dramatic_and_neon_lighting_win(self):
        self.assertEqual(classify_scene(_scene("dramatic", background="#ffffff")), ScenePreset.DRAMATIC)
        self.assertEqual(classify_scene(_scene("neon", "low-key", mood="bold")), ScenePreset.DRAMATIC)

    def test_soft_lighting_or_low_key(self):
        self.assertEqual(classify_scene(_scene("soft", mood="bold")), ScenePreset.SOFT)
        self.assertEqual(classify_scene(_scene("studio", "low-key", background="#000000")), ScenePreset.SOFT)

    def test_dark_background(self):
        self.assertEqual(classify_scene(_scene("studio", background="#000000")), ScenePreset.DARK)
        self.assertEqual(classify_scene(_scene("natural", background="#1C1C1E")), ScenePreset.DARK)
        self.assertEqual(classify_scene(_scene("natural", background="#f5f5f5", mood="energetic")), ScenePreset.DARK)

    def test_light_background(self):
        self.assertEqual(classify_scene(_scene("natural", "balanced", "#f5f5f5", "calm")), ScenePreset.LIGHT)
        self.assertEqual(classify_scene(_scene("golden-hour", mood="premium")), ScenePreset.LIGHT)

    def test_no_color_information_reads_as_light(self):
        self.assertEqual(classify_scene(SceneDesign()), ScenePreset.LIGHT)
        self.assertEqual(classify_scene(_scene("studio", background="", mood="")), ScenePreset.LIGHT)
        self.assertEqual(resolve_scene_preset(_scene("studio")), SCENE_PRESETS[ScenePreset.LIGHT])

    def test_malformed_hex_is_not_parsed(self):
        # 5 digits is neither #rgb nor #rrggbb(aa)
        self.assertIsNone(_parse_hex("#abcde"))
        self.assertIsNone(_parse_hex("#1234"))
        self.assertEqual(_parse_hex("#102030ff"), (0x10, 0x20, 0x30))
        self.assertEqual(_parse_hex("fff"), (255, 255, 255))
        self.assertFalse(is_dark_background(_scene("studio", background="#00000")))

    def test_resolves_matching_preset(self):
        preset = resolve_scene_preset(_scene("dramatic"))
        self.assertEqual(preset, SCENE_PRESETS[ScenePreset.DRAMATIC])
        self.assertEqual(preset.opacity, 0.6)
        self.assertEqual(resolve_scene_preset(_scene("soft")).opacity, 0.2)


if __name__ == "__main__":
    unittest.main()
