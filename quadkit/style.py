"""Visual style of a UI element: colours, margins and background sprites."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from quadkit.geometry import Color, RectOffset
from quadkit.painter import ElementState

_BLACK = Color.from_rgba(0, 0, 0, 255)
_WHITE = Color.from_rgba(255, 255, 255, 255)
_INACTIVE_TEXT_FACTOR = 0.6
_INACTIVE_ALPHA_FACTOR = 0.8


def _to_byte(value: float) -> int:
    """Saturating, truncating conversion of a 0..255 float to a byte."""
    if math.isnan(value):
        return 0
    return int(max(0.0, min(255.0, value)))


@dataclass
class Style:
    """Colours, margins, font and background sprites of one kind of element.

    background_margin is the part of the background sprite that is not scaled,
    useful for borders; margin is extra space between border and content and
    may be negative to let content overlap the border.
    """

    background: int | None = None
    background_hovered: int | None = None
    background_clicked: int | None = None
    color: Color = _WHITE
    color_inactive: Color | None = None
    color_hovered: Color = _WHITE
    color_clicked: Color = _WHITE
    color_selected: Color = _WHITE
    color_selected_hovered: Color = _WHITE
    background_margin: RectOffset | None = None
    margin: RectOffset | None = None
    font: Any = None
    text_color: Color = _BLACK
    text_color_hovered: Color = _BLACK
    text_color_clicked: Color = _BLACK
    font_size: int = 16
    reverse_background_z: bool = False

    def border_margin(self) -> RectOffset:
        """Background margin and content margin added together."""
        background = self.background_margin or RectOffset()
        margin = self.margin or RectOffset()
        return RectOffset(
            left=background.left + margin.left,
            right=background.right + margin.right,
            top=background.top + margin.top,
            bottom=background.bottom + margin.bottom,
        )

    def text_color_for(self, element_state: ElementState) -> Color:
        """Text colour for the given state; dimmed when not focused."""
        if element_state.clicked:
            return self.text_color_clicked
        if element_state.hovered:
            return self.text_color_hovered
        if element_state.focused:
            return self.text_color
        c = self.text_color
        f = _INACTIVE_TEXT_FACTOR
        return Color(c.r * f, c.g * f, c.b * f, c.a * f)

    def color_for(self, element_state: ElementState) -> Color:
        """Fill colour for the given state."""
        if not element_state.focused:
            if self.color_inactive is not None:
                return self.color_inactive
            c = self.color
            return Color.from_rgba(
                _to_byte(c.r * 255.0),
                _to_byte(c.g * 255.0),
                _to_byte(c.b * 255.0),
                _to_byte(c.a * 255.0 * _INACTIVE_ALPHA_FACTOR),
            )
        if element_state.clicked:
            return self.color_clicked
        if element_state.selected and element_state.hovered:
            return self.color_selected_hovered
        if element_state.selected:
            return self.color_selected
        if element_state.hovered:
            return self.color_hovered
        return self.color

    def background_sprite(self, element_state: ElementState) -> int | None:
        """Background sprite id for the given state, if any."""
        if element_state.clicked and self.background_clicked is not None:
            return self.background_clicked
        if element_state.hovered and self.background_hovered is not None:
            return self.background_hovered
        return self.background