"""Turns draw commands into vertex and index lists ready for the GPU."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from quadkit.geometry import Color, Rect, RectOffset, Vec2
from quadkit.painter import (
    Clip,
    DrawCharacter,
    DrawCommand,
    DrawLine,
    DrawRawTexture,
    DrawRect,
    DrawSprite,
    DrawTriangle,
)

MAX_VERTICES = 8000
MAX_INDICES = 4000

_F32_EPSILON = 1.1920929e-07
_WHITE = Color(1.0, 1.0, 1.0, 1.0)
_UNIT_UV = Rect(0.0, 0.0, 1.0, 1.0)

_RECT_INDICES = (0, 1, 2, 0, 2, 3)
_TRIANGLE_INDICES = (0, 1, 2)
_LINE_INDICES = (0, 1, 2, 2, 1, 3)
_SPRITE_INDICES = tuple(
    index
    for row in range(3)
    for column in range(3)
    for index in (
        row * 4 + column,
        row * 4 + column + 1,
        (row + 1) * 4 + column,
        row * 4 + column + 1,
        (row + 1) * 4 + column,
        (row + 1) * 4 + column + 1,
    )
)


@dataclass(frozen=True)
class Vertex:
    """A mesh vertex: position, texture coordinate and colour."""

    pos: tuple[float, float, float]
    uv: tuple[float, float]
    color: tuple[float, float, float, float]

    @classmethod
    def create(cls, x: float, y: float, u: float, v: float, color: Color) -> Vertex:
        """A vertex on the z=0 plane."""
        r, g, b, a = color.as_list()
        return cls((x, y, 0.0), (u, v), (r, g, b, a))

    def as_tuple(self) -> tuple[tuple[float, float, float], tuple[float, float], tuple[float, ...]]:
        """The vertex as (pos, uv, color)."""
        return (self.pos, self.uv, self.color)


@dataclass
class DrawList:
    """A batch of triangles sharing one texture and one clipping rectangle."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    clipping_zone: Rect | None = None
    texture: Any = None

    def _extend(self, vertices: Iterable[Vertex], indices: Iterable[int]) -> None:
        base = len(self.vertices)
        self.vertices.extend(vertices)
        self.indices.extend(base + index for index in indices)

    def clear(self) -> None:
        """Drop the geometry and the clipping rectangle; the texture is kept."""
        self.vertices.clear()
        self.indices.clear()
        self.clipping_zone = None

    def draw_rectangle_lines(self, rect: Rect, source: Rect, color: Color) -> None:
        """Outline a rectangle with one pixel wide edges."""
        x, y, w, h = rect.x, rect.y, rect.w, rect.h
        self.draw_rectangle(Rect(x, y, w, 1.0), source, color)
        self.draw_rectangle(Rect(x + w - 1.0, y + 1.0, 1.0, h - 2.0), source, color)
        self.draw_rectangle(Rect(x, y + h - 1.0, w, 1.0), source, color)
        self.draw_rectangle(Rect(x, y + 1.0, 1.0, h - 2.0), source, color)

    def draw_sprite(
        self,
        rect: Rect,
        src: Rect,
        offsets: RectOffset,
        uv_offsets: RectOffset,
        color: Color,
    ) -> None:
        """Draw a nine-patch sprite: borders keep their size, the middle stretches."""
        x, y, w, h = rect.x, rect.y, rect.w, rect.h
        xs = (x, x + offsets.left, x + w - offsets.right, x + w)
        ys = (y, y + offsets.top, y + h - offsets.top, y + h)
        us = (src.x, src.x + uv_offsets.left, src.x + src.w - uv_offsets.right, src.x + src.w)
        vs = (src.y, src.y + uv_offsets.top, src.y + src.h - uv_offsets.bottom, src.y + src.h)

        vertices = [
            Vertex.create(vx, vy, u, v, color)
            for vx, u in zip(xs, us)
            for vy, v in zip(ys, vs)
        ]
        self._extend(vertices, _SPRITE_INDICES)

    def draw_rectangle(self, rect: Rect, src: Rect, color: Color) -> None:
        """Draw a filled rectangle mapped to the given texture area."""
        x, y, w, h = rect.x, rect.y, rect.w, rect.h
        vertices = (
            Vertex.create(x, y, src.x, src.y, color),
            Vertex.create(x + w, y, src.x + src.w, src.y, color),
            Vertex.create(x + w, y + h, src.x + src.w, src.y + src.h, color),
            Vertex.create(x, y + h, src.x, src.y + src.h, color),
        )
        self._extend(vertices, _RECT_INDICES)

    def draw_triangle(self, p0: Vec2, p1: Vec2, p2: Vec2, source: Rect, color: Color) -> None:
        """Draw a solid triangle."""
        vertices = [Vertex.create(p.x, p.y, source.x, source.y, color) for p in (p0, p1, p2)]
        self._extend(vertices, _TRIANGLE_INDICES)

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        thickness: float,
        source: Rect,
        color: Color,
    ) -> None:
        """Draw a line segment as a quad; segments of no length draw nothing."""
        nx = -(y2 - y1)
        ny = x2 - x1
        tlen = math.sqrt(nx * nx + ny * ny) / (thickness * 0.5)
        if tlen < _F32_EPSILON:
            return
        tx = nx / tlen
        ty = ny / tlen
        vertices = (
            Vertex.create(x1 + tx, y1 + ty, source.x, source.y, color),
            Vertex.create(x1 - tx, y1 - ty, source.x, source.y, color),
            Vertex.create(x2 + tx, y2 + ty, source.x, source.y, color),
            Vertex.create(x2 - tx, y2 - ty, source.x, source.y, color),
        )
        self._extend(vertices, _LINE_INDICES)


_GEOMETRY_COMMANDS = (DrawCharacter, DrawLine, DrawRect, DrawSprite, DrawTriangle)


def _active_draw_list(draw_lists: list[DrawList], command: DrawCommand) -> DrawList:
    if not draw_lists:
        draw_lists.append(DrawList())
    last = draw_lists[-1]

    if isinstance(command, Clip):
        if last.clipping_zone != command.rect:
            draw_lists.append(DrawList())
    elif isinstance(command, DrawRawTexture):
        if last.texture is None or last.texture != command.texture:
            draw_lists.append(DrawList(texture=command.texture, clipping_zone=last.clipping_zone))
    elif isinstance(command, _GEOMETRY_COMMANDS):
        vertices, indices = command.estimate_triangles_budget()
        if (
            last.texture is not None
            or len(last.vertices) + vertices >= MAX_VERTICES
            or len(last.indices) + indices >= MAX_INDICES
        ):
            draw_lists.append(DrawList(clipping_zone=last.clipping_zone))
    else:
        raise TypeError(f"unknown draw command: {command!r}")
    return draw_lists[-1]


def render_command(draw_lists: list[DrawList], command: DrawCommand) -> None:
    """Rasterize one command into the last fitting draw list, starting new ones as needed."""
    target = _active_draw_list(draw_lists, command)

    if isinstance(command, Clip):
        target.clipping_zone = command.rect
    elif isinstance(command, DrawRect):
        if command.fill is not None:
            target.draw_rectangle(command.rect, command.source, command.fill)
        if command.stroke is not None:
            target.draw_rectangle_lines(command.rect, command.source, command.stroke)
    elif isinstance(command, DrawSprite):
        target.draw_sprite(
            command.rect,
            command.source,
            command.offsets or RectOffset(),
            command.offsets_uv or RectOffset(),
            command.color,
        )
    elif isinstance(command, DrawLine):
        target.draw_line(
            command.start.x,
            command.start.y,
            command.end.x,
            command.end.y,
            1.0,
            command.source,
            command.color,
        )
    elif isinstance(command, DrawCharacter):
        target.draw_rectangle(command.dest, command.source, command.color)
    elif isinstance(command, DrawRawTexture):
        target.draw_rectangle(command.rect, _UNIT_UV, _WHITE)
    elif isinstance(command, DrawTriangle):
        target.draw_triangle(command.p0, command.p1, command.p2, command.source, command.color)