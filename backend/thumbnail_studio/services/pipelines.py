from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PIL import Image

from thumbnail_studio.core.errors import EffectSynthesisError
from thumbnail_studio.core.logger import TaskLogger
from thumbnail_studio.domain.geometry import STANDARD_CANVAS, BoundingBox, Canvas, PlacementIntent
from thumbnail_studio.domain.layers import LayerRole, LayerStack
from thumbnail_studio.domain.scene import SceneDesign
from thumbnail_studio.services.compositor import Compositor
from thumbnail_studio.services.image_io import contain_fit, cover_fit
from thumbnail_studio.services.placement import resolve_flat_placement, resolve_placement
from thumbnail_studio.services.presets import classify_scene, resolve_category_preset, resolve_scene_preset
from thumbnail_studio.services.shadow import ShadowService
from thumbnail_studio.services.softening import DEFAULT_BLUR_RADIUS, soften
from thumbnail_studio.services.vignette import DEFAULT_OPACITY, apply_vignette, generate_vignette

LIFESTYLE_WIDTH_RATIO = 0.35

shadow_service = ShadowService()
compositor = Compositor()


@dataclass(frozen=True)
class CompositeResult:
    image: Image.Image
    position: BoundingBox
    pipeline: str
    composited: bool = True


def _place_cutout(cutout: Image.Image, box: BoundingBox) -> Image.Image:
    return contain_fit(cutout, box.width, box.height)


def composite_flat(
    background: Image.Image,
    cutout: Image.Image,
    category: Optional[str] = None,
    *,
    canvas: Canvas = STANDARD_CANVAS,
    logger: Optional[TaskLogger] = None,
) -> CompositeResult:
    """Product on the right side of the frame with a category drop shadow."""
    logger = logger or TaskLogger()

    bg = cover_fit(background, canvas)
    preset = resolve_category_preset(category)
    box = resolve_flat_placement(canvas, *cutout.size)
    subject = _place_cutout(cutout, box)

    shadow = shadow_service.create_drop_shadow(subject, preset)
    top, left = shadow_service.shadow_origin(box, preset)

    layers = (
        LayerStack()
        .add(shadow, top, left, LayerRole.SHADOW)
        .add(subject, box.y, box.x, LayerRole.SUBJECT)
    )
    final = compositor.composite(bg, layers)

    logger.info("flat composite done", category=category or "default", position=box.to_dict())
    return CompositeResult(image=final, position=box, pipeline="flat")


def composite_contextual(
    background: Image.Image,
    cutout: Image.Image,
    scene: SceneDesign,
    *,
    canvas: Canvas = STANDARD_CANVAS,
    logger: Optional[TaskLogger] = None,
) -> CompositeResult:
    """Scene-aware composite: pedestal placement, lighting shadow, optional reflection."""
    logger = logger or TaskLogger()
    pedestal = scene.pedestal

    bg = cover_fit(background, canvas)
    box = resolve_placement(
        canvas,
        *cutout.size,
        intent=pedestal.position,
        product_space_ratio=pedestal.product_space_ratio,
    )
    subject = _place_cutout(cutout, box)

    preset_name = classify_scene(scene)
    preset = resolve_scene_preset(scene)
    shadow = shadow_service.create_drop_shadow(subject, preset)

    layers = LayerStack()
    layers.add(shadow, *shadow_service.shadow_origin(box, preset), LayerRole.SHADOW)

    if pedestal.has_reflection and pedestal.position is PlacementIntent.CENTER_BOTTOM:
        try:
            reflection = shadow_service.create_reflection(subject)
        except EffectSynthesisError as exc:
            # Cosmetic only: drop the layer and keep going.
            logger.warning("reflection skipped", error=str(exc))
        else:
            layers.add(reflection, *shadow_service.reflection_origin(box, canvas), LayerRole.REFLECTION)

    layers.add(subject, box.y, box.x, LayerRole.SUBJECT)
    final = compositor.composite(bg, layers)

    logger.info(
        "contextual composite done",
        preset=preset_name.value,
        layers=[role.value for role in layers.roles],
        position=box.to_dict(),
    )
    return CompositeResult(image=final, position=box, pipeline="contextual")


def composite_lifestyle(
    background: Image.Image,
    cutout: Image.Image,
    position: PlacementIntent,
    blur_radius: float = DEFAULT_BLUR_RADIUS,
    vignette_opacity: float = DEFAULT_OPACITY,
    *,
    canvas: Canvas = STANDARD_CANVAS,
    logger: Optional[TaskLogger] = None,
) -> CompositeResult:
    """
    Lifestyle thumbnail:
    1. soften the background (dreamy look)
    2. radial vignette centered on the product anchor (spotlight)
    3. product cutout on top, no shadow
    """
    logger = logger or TaskLogger()
    intent = PlacementIntent.parse(position)

    bg = cover_fit(background, canvas)
    bg = soften(bg, blur_radius)
    bg = apply_vignette(bg, generate_vignette(canvas, intent, vignette_opacity))

    box = resolve_placement(canvas, *cutout.size, intent=intent, product_space_ratio=LIFESTYLE_WIDTH_RATIO)
    subject = _place_cutout(cutout, box)

    layers = LayerStack().add(subject, box.y, box.x, LayerRole.SUBJECT)
    final = compositor.composite(bg, layers)

    logger.info("lifestyle composite done", position_intent=intent.value, position=box.to_dict())
    return CompositeResult(image=final, position=box, pipeline="lifestyle")
