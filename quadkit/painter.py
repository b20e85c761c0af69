"""Element state, draw commands and label parameters used by the UI painter."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any, Union

from quadkit.geometry import Color, Rect, RectOffset, Vec2

_BLACK = Color(0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class ElementState:
    """Interaction state of a widget, used to choose its colours."""

    focused: bool = False
    hovered: bool = False
    clicked: bool = False
    selected: bool = False


@dataclass(frozen=True)
class DrawCharacter:
    """Draw one glyph from the atlas into a destination rectangle."""

    dest: Rect
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> DrawCharacter:
        """The same command moved by offset."""
        return replace(self, dest=self.dest.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        """Upper estimate of (vertices, indices) this command produces."""
        return (10, 10)


@dataclass(frozen=True)
class DrawRect:
    """Draw a rectangle with an optional fill and an optional outline."""

    rect: Rect
    source: Rect
    fill: Color | None = None
    stroke: Color | None = None

    def offset(self, offset: Vec2) -> DrawRect:
        """The same command moved by offset."""
        return replace(self, rect=self.rect.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        """Upper estimate of (vertices, indices) this command produces."""
        return (10, 10)


@dataclass(frozen=True)
class DrawSprite:
    """Draw a nine-patch sprite from the atlas."""

    rect: Rect
    source: Rect
    color: Color
    offsets: RectOffset | None = None
    offsets_uv: RectOffset | None = None

    def offset(self, offset: Vec2) -> DrawSprite:
        """The same command moved by offset."""
        return replace(self, rect=self.rect.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        """Upper estimate of (vertices, indices) this command produces."""
        return (0, 0)


@dataclass(frozen=True)
class DrawTriangle:
    """Draw a solid triangle."""

    p0: Vec2
    p1: Vec2
    p2: Vec2
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> DrawTriangle:
        """The same command moved by offset."""
        return replace(self, p0=self.p0 + offset, p1=self.p1 + offset, p2=self.p2 + offset)

    def estimate_triangles_budget(self) -> tuple[int, int]:
        """Upper estimate of (vertices, indices) this command produces."""
        return (10, 10)


@dataclass(frozen=True)
class DrawLine:
    """Draw a one pixel wide line segment."""

    start: Vec2
    end: Vec2
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> DrawLine:
        """The same command moved by offset."""
        return replace(self, start=self.start + offset, end=self.end + offset)

    def estimate_triangles_budget(self) -> tuple[int, int]:
        """Upper estimate of (vertices, indices) this command produces."""
        return (10, 10)


@dataclass(frozen=True)
class DrawRawTexture:
    """Draw a whole texture stretched over a rectangle."""

    rect: Rect
    texture: Any = field(compare=True)

    def offset(self, offset: Vec2) -> DrawRawTexture:
        """The same command moved by offset."""
        return replace(self, rect=self.rect.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        """Upper estimate of (vertices, indices) this command produces."""
        return (10, 10)


@dataclass(frozen=True)
class Clip:
    """Set the clipping rectangle for following commands; None removes it."""

    rect: Rect | None = None

    def offset(self, offset: Vec2) -> Clip:
        """The same command moved by offset."""
        return Clip(None if self.rect is None else self.rect.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        """Upper estimate of (vertices, indices) this command produces."""
        return (0, 0)


DrawCommand = Union[
    DrawCharacter, DrawRect, DrawSprite, DrawTriangle, DrawLine, DrawRawTexture, Clip
]


class Alignment(enum.Enum):
    """Horizontal alignment of a label."""

    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class LabelParams:
    """Colour and alignment used to draw a label."""

    color: Color = _BLACK
    alignment: Alignment = Alignment.LEFT

    @classmethod
    def from_value(cls, value: Any) -> LabelParams:
        """Build parameters from None, a Color, a (Color, Alignment) pair or LabelParams."""
        if isinstance(value, LabelParams):
            return value
        if value is None:
            return cls()
        if isinstance(value, Color):
            return cls(color=value)
        if isinstance(value, tuple) and len(value) == 2:
            color, alignment = value
            if isinstance(color, Color) and isinstance(alignment, Alignment):
                return cls(color=color, alignment=alignment)
        raise TypeError(f"cannot build label parameters from {value!r}")