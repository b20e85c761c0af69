"""The layout cursor that decides where the next widget is placed."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace

from quadkit.geometry import Rect, Vec2


@dataclass
class Scroll:
    """Scroll state of a window's content area."""

    scroll: Vec2
    dragging_x: bool
    dragging_y: bool
    rect: Rect
    inner_rect: Rect
    inner_rect_previous_frame: Rect
    initial_scroll: Vec2

    def _clamped(self, y: float) -> float:
        prev = self.inner_rect_previous_frame
        return min(max(y, prev.y), prev.h - self.rect.h + prev.y)

    def scroll_to(self, y: float) -> None:
        """Move the visible area to y, kept within last frame's content."""
        self.rect = replace(self.rect, y=self._clamped(y))

    def update(self) -> None:
        """Clamp the visible area to last frame's content."""
        self.rect = replace(self.rect, y=self._clamped(self.rect.y))


class Layout(enum.Enum):
    """How a widget is placed relative to the previous one."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class FreeLayout:
    """Place a widget at an explicit point."""

    point: Vec2


@dataclass
class Cursor:
    """Tracks where the next widget goes inside a window area."""

    area: Rect
    margin: float
    x: float = field(init=False)
    y: float = field(init=False)
    start_x: float = field(init=False)
    start_y: float = field(init=False)
    ident: float = field(init=False, default=0.0)
    scroll: Scroll = field(init=False)
    next_same_line: float | None = field(init=False, default=None)
    max_row_y: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.x = self.y = self.start_x = self.start_y = self.margin
        whole = Rect(0.0, 0.0, self.area.w, self.area.h)
        self.scroll = Scroll(
            scroll=Vec2(0.0, 0.0),
            dragging_x=False,
            dragging_y=False,
            rect=whole,
            inner_rect=whole,
            inner_rect_previous_frame=whole,
            initial_scroll=Vec2(0.0, 0.0),
        )

    def _origin(self) -> Vec2:
        return self.area.point() + self.scroll.scroll + Vec2(self.ident, 0.0)

    def reset(self) -> None:
        """Start a new frame: rewind the cursor and remember the content size."""
        self.x = self.start_x
        self.y = self.start_y
        self.max_row_y = 0.0
        self.ident = 0.0
        self.scroll.inner_rect_previous_frame = self.scroll.inner_rect
        self.scroll.inner_rect = Rect(0.0, 0.0, self.area.w, self.area.h)

    def current_position(self) -> Vec2:
        """Absolute position the cursor points at."""
        return Vec2(self.x, self.y) + self._origin()

    def fit(self, size: Vec2, layout: Layout | FreeLayout) -> Vec2:
        """Reserve space of the given size and return its absolute position."""
        if self.next_same_line is not None:
            same_line_x = self.next_same_line
            self.next_same_line = None
            if same_line_x != 0.0:
                self.x = same_line_x
            layout = Layout.HORIZONTAL

        if isinstance(layout, FreeLayout):
            res = layout.point
        elif layout is Layout.HORIZONTAL:
            self.max_row_y = max(self.max_row_y, size.y)
            if self.x + size.x >= self.area.w - self.margin * 2.0:
                # the extra 1 makes a following vertical widget start a new row
                self.x = self.margin + 1.0
                self.y += self.max_row_y + self.margin
                self.max_row_y = 0.0
            res = Vec2(self.x, self.y)
            self.x += size.x + self.margin
        elif layout is Layout.VERTICAL:
            if self.x != self.margin:
                self.x = self.margin
                self.y += self.max_row_y
            res = Vec2(self.x, self.y)
            self.x += size.x + self.margin
            self.max_row_y = size.y + self.margin
        else:
            raise TypeError(f"unknown layout: {layout!r}")

        self.scroll.inner_rect = self.scroll.inner_rect.combine_with(
            Rect(res.x, res.y, size.x, size.y)
        )
        return res + self._origin()