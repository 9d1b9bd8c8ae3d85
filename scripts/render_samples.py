import json
import sys
import os
from pathlib import Path

from PIL import Image, ImageDraw

# Add backend to path
sys.path.append(os.path.join(os.path.dirname(__file__), '../backend'))

from thumbnail_studio.core.logger import TaskLogger
from thumbnail_studio.domain.geometry import PlacementIntent
from thumbnail_studio.domain.scene import SceneDesign
from thumbnail_studio.services.pipelines import composite_contextual, composite_flat, composite_lifestyle

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURES_DIR = REPO_ROOT / "scripts" / "fixtures"
ARTIFACTS_DIR = REPO_ROOT / "artifacts" / "samples"

SCENE = {
    "environment": {"lighting": {"type": "studio", "intensity": "balanced"}},
    "colorScheme": {"background": "#1c1c1e", "mood": "premium"},
    "pedestal": {"position": "center-bottom", "productSpaceRatio": 0.4, "hasReflection": True},
}


def create_fixtures():
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)

    # Product: red bottle on transparent
    product = Image.new('RGBA', (300, 600), (0, 0, 0, 0))
    draw = ImageDraw.Draw(product)
    draw.rounded_rectangle((60, 120, 240, 590), radius=40, fill=(220, 30, 30, 255))
    draw.rectangle((110, 20, 190, 130), fill=(240, 240, 240, 255))
    product.save(FIXTURES_DIR / "sample_product.png")

    # Background: wall and table, deliberately not 16:9
    background = Image.new('RGB', (1024, 1024), (235, 230, 220))
    draw = ImageDraw.Draw(background)
    draw.rectangle((0, 640, 1024, 1024), fill=(150, 120, 90))
    background.save(FIXTURES_DIR / "sample_background.png")

    return product, background


def render_samples():
    product, background = create_fixtures()
    logger = TaskLogger(trace_id="render-samples")
    ARTIFACTS_DIR.mkdir(parents=True, exist_ok=True)

    outputs = {
        "flat_fitness.png": composite_flat(background, product, "fitness", logger=logger),
        "contextual_pedestal.png": composite_contextual(
            background, product, SceneDesign.from_dict(SCENE), logger=logger
        ),
    }
    for intent in PlacementIntent:
        outputs[f"lifestyle_{intent.value}.png"] = composite_lifestyle(background, product, intent, logger=logger)

    for name, result in outputs.items():
        out = ARTIFACTS_DIR / name
        result.image.save(out)
        print(f"{name}: {json.dumps(result.position.to_dict())} -> {out}")


if __name__ == "__main__":
    render_samples()
