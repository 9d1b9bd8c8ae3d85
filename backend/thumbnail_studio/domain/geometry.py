from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Canvas:
    width: int
    height: int

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


# Standard YouTube-style thumbnail frame.
STANDARD_CANVAS = Canvas(1280, 720)


@dataclass(frozen=True)
class BoundingBox:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class PlacementIntent(str, Enum):
    CENTER = "center"
    LEFT_THIRD = "left-third"
    RIGHT_THIRD = "right-third"
    CENTER_BOTTOM = "center-bottom"

    @classmethod
    def parse(cls, value: "str | PlacementIntent") -> "PlacementIntent":
        """Case-insensitive parse; accepts `right_third` as well as `right-third`."""
        if isinstance(value, cls):
            return value
        key = (value or "").strip().lower().replace("_", "-")
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"unknown placement intent: {value!r}")
