from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

from PIL import Image

from thumbnail_studio.core.errors import CompositingError


class LayerRole(str, Enum):
    SHADOW = "shadow"
    REFLECTION = "reflection"
    SUBJECT = "subject"


class BlendMode(str, Enum):
    OVER = "over"
    MULTIPLY = "multiply"


# Draw rank per role; a stack may only move forward through these.
_ROLE_RANK = {LayerRole.SHADOW: 0, LayerRole.REFLECTION: 1, LayerRole.SUBJECT: 2}


@dataclass(frozen=True)
class CompositeLayer:
    raster: Image.Image
    top: int
    left: int
    role: LayerRole = LayerRole.SUBJECT
    blend: BlendMode = BlendMode.OVER


class LayerStack:
    """Ordered layers, drawn first to last.

    Insertion order is the draw order: shadow, then reflection, then the
    subject, which is always last. Anything pushed out of that order is
    rejected instead of being silently reordered.
    """

    def __init__(self) -> None:
        self._layers: List[CompositeLayer] = []

    def push(self, layer: CompositeLayer) -> "LayerStack":
        if self._layers:
            last = self._layers[-1]
            if last.role is LayerRole.SUBJECT:
                raise CompositingError("subject layer must be drawn last")
            if _ROLE_RANK[layer.role] < _ROLE_RANK[last.role]:
                raise CompositingError(f"{layer.role.value} layer cannot follow {last.role.value} layer")
        self._layers.append(layer)
        return self

    def add(
        self,
        raster: Image.Image,
        top: int,
        left: int,
        role: LayerRole,
        blend: BlendMode = BlendMode.OVER,
    ) -> "LayerStack":
        return self.push(CompositeLayer(raster=raster, top=int(top), left=int(left), role=role, blend=blend))

    @property
    def roles(self) -> List[LayerRole]:
        return [layer.role for layer in self._layers]

    def __iter__(self) -> Iterator[CompositeLayer]:
        return iter(list(self._layers))

    def __len__(self) -> int:
        return len(self._layers)
