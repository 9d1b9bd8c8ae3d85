from __future__ import annotations

import re
from typing import Dict, Optional

from thumbnail_studio.domain.effects import EffectPreset, ProductCategory, ScenePreset
from thumbnail_studio.domain.scene import SceneDesign

CATEGORY_PRESETS: Dict[ProductCategory, EffectPreset] = {
    ProductCategory.FITNESS: EffectPreset(blur_radius=25, offset_x=8, offset_y=15, opacity=0.4),
    ProductCategory.SUPPLEMENTS: EffectPreset(blur_radius=25, offset_x=8, offset_y=15, opacity=0.4),
    ProductCategory.TECH: EffectPreset(blur_radius=20, offset_x=5, offset_y=10, opacity=0.3),
    ProductCategory.ELECTRONICS: EffectPreset(blur_radius=20, offset_x=5, offset_y=10, opacity=0.3),
    ProductCategory.BEAUTY: EffectPreset(blur_radius=15, offset_x=3, offset_y=8, opacity=0.2),
    ProductCategory.HOME: EffectPreset(blur_radius=20, offset_x=5, offset_y=12, opacity=0.25),
    ProductCategory.FOOD: EffectPreset(blur_radius=18, offset_x=4, offset_y=10, opacity=0.3),
    ProductCategory.OUTDOOR: EffectPreset(blur_radius=25, offset_x=8, offset_y=15, opacity=0.35),
    ProductCategory.BABY: EffectPreset(blur_radius=12, offset_x=3, offset_y=6, opacity=0.15),
    ProductCategory.PET: EffectPreset(blur_radius=18, offset_x=5, offset_y=10, opacity=0.3),
    ProductCategory.FASHION: EffectPreset(blur_radius=15, offset_x=4, offset_y=8, opacity=0.25),
    ProductCategory.LIFESTYLE: EffectPreset(blur_radius=18, offset_x=5, offset_y=10, opacity=0.25),
    ProductCategory.DEFAULT: EffectPreset(blur_radius=20, offset_x=5, offset_y=10, opacity=0.3),
}

SCENE_PRESETS: Dict[ScenePreset, EffectPreset] = {
    ScenePreset.DRAMATIC: EffectPreset(blur_radius=35, offset_x=10, offset_y=25, opacity=0.6),
    ScenePreset.SOFT: EffectPreset(blur_radius=15, offset_x=3, offset_y=8, opacity=0.2),
    ScenePreset.DARK: EffectPreset(blur_radius=30, offset_x=0, offset_y=20, opacity=0.5),
    ScenePreset.LIGHT: EffectPreset(blur_radius=25, offset_x=5, offset_y=15, opacity=0.4),
    ScenePreset.DEFAULT: EffectPreset(blur_radius=20, offset_x=5, offset_y=12, opacity=0.35),
}

DRAMATIC_LIGHTING = {"dramatic", "neon"}
DARK_MOODS = {"bold", "energetic"}
# Channels at or below this read as near-black (#000000, #1c1c1e, ...).
NEAR_BLACK_MAX_CHANNEL = 0x20

_HEX_COLOR = re.compile(r"#?([0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def resolve_category_preset(category: Optional[str] = None) -> EffectPreset:
    return CATEGORY_PRESETS[ProductCategory.parse(category)]


def _parse_hex(color: str) -> Optional[tuple[int, int, int]]:
    m = _HEX_COLOR.match(color.strip())
    if not m:
        return None
    # #rrggbbaa: alpha is ignored
    digits = m.group(1)[:6]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))


def is_dark_background(scene: SceneDesign) -> bool:
    """Dark mood, or a near-black background color. Anything else reads as light."""
    colors = scene.color_scheme
    mood = (colors.mood or "").lower()
    if mood in DARK_MOODS:
        return True

    if colors.background:
        rgb = _parse_hex(colors.background)
        if rgb is not None:
            return max(rgb) <= NEAR_BLACK_MAX_CHANNEL
        return "1c1c1e" in colors.background.lower()
    return False


def classify_scene(scene: SceneDesign) -> ScenePreset:
    lighting = scene.environment.lighting
    lighting_type = (lighting.type or "").lower()
    intensity = (lighting.intensity or "").lower()

    if lighting_type in DRAMATIC_LIGHTING:
        return ScenePreset.DRAMATIC
    if lighting_type == "soft" or intensity == "low-key":
        return ScenePreset.SOFT

    if is_dark_background(scene):
        return ScenePreset.DARK
    return ScenePreset.LIGHT


def resolve_scene_preset(scene: SceneDesign) -> EffectPreset:
    return SCENE_PRESETS.get(classify_scene(scene), SCENE_PRESETS[ScenePreset.DEFAULT])
