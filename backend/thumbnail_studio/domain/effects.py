from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class EffectPreset:
    blur_radius: float
    offset_x: int
    offset_y: int
    opacity: float


class ProductCategory(str, Enum):
    FITNESS = "fitness"
    SUPPLEMENTS = "supplements"
    TECH = "tech"
    ELECTRONICS = "electronics"
    BEAUTY = "beauty"
    HOME = "home"
    FOOD = "food"
    OUTDOOR = "outdoor"
    BABY = "baby"
    PET = "pet"
    FASHION = "fashion"
    LIFESTYLE = "lifestyle"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ProductCategory":
        """Case-insensitive lookup; unknown or missing categories map to DEFAULT."""
        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return cls.DEFAULT


class ScenePreset(str, Enum):
    DRAMATIC = "dramatic"
    SOFT = "soft"
    DARK = "dark"
    LIGHT = "light"
    DEFAULT = "default"
