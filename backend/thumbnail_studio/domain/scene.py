from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from thumbnail_studio.core.logger import logger
from thumbnail_studio.domain.geometry import PlacementIntent


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) if isinstance(data, Mapping) else None
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"scene design field {key!r} must be an object")
    return value


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1"}
    return value == 1


def _position(value: Any) -> PlacementIntent:
    if not value:
        return PlacementIntent.CENTER_BOTTOM
    try:
        return PlacementIntent.parse(value)
    except (ValueError, AttributeError):
        logger.warning(f"unknown pedestal position {value!r}, using center-bottom")
        return PlacementIntent.CENTER_BOTTOM


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class Lighting:
    type: Optional[str] = None  # dramatic|soft|natural|studio|golden-hour|neon
    intensity: Optional[str] = None  # high-contrast|balanced|low-key


@dataclass(frozen=True)
class Environment:
    lighting: Lighting = field(default_factory=Lighting)


@dataclass(frozen=True)
class ColorScheme:
    background: Optional[str] = None
    mood: Optional[str] = None  # energetic|premium|calm|natural|bold|elegant|playful


@dataclass(frozen=True)
class Pedestal:
    position: PlacementIntent = PlacementIntent.CENTER_BOTTOM
    product_space_ratio: Optional[float] = None
    has_reflection: bool = False


@dataclass(frozen=True)
class SceneDesign:
    """Read-only view over a scene designer payload.

    Only the fields the compositor consumes are modelled; the full payload
    (text layout, product characteristics, ...) stays available on `raw`.
    """

    environment: Environment = field(default_factory=Environment)
    color_scheme: ColorScheme = field(default_factory=ColorScheme)
    pedestal: Pedestal = field(default_factory=Pedestal)
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SceneDesign":
        if not isinstance(data, Mapping):
            raise ValueError("scene design must be an object")

        lighting = _section(_section(data, "environment"), "lighting")
        colors = _section(data, "colorScheme")
        pedestal = _section(data, "pedestal")

        ratio = pedestal.get("productSpaceRatio")
        if ratio is not None:
            try:
                ratio = float(ratio)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"invalid productSpaceRatio: {ratio!r}") from exc

        return cls(
            environment=Environment(
                lighting=Lighting(
                    type=_text(lighting.get("type")),
                    intensity=_text(lighting.get("intensity")),
                )
            ),
            color_scheme=ColorScheme(
                background=_text(colors.get("background")),
                mood=_text(colors.get("mood")),
            ),
            pedestal=Pedestal(
                position=_position(pedestal.get("position")),
                product_space_ratio=ratio,
                has_reflection=_flag(pedestal.get("hasReflection", False)),
            ),
            raw=dict(data),
        )
