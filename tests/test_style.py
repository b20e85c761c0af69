import pytest

from quadkit.geometry import Color, RectOffset
from quadkit.painter import ElementState
from quadkit.style import Style

RED = Color.from_rgba(255, 0, 0, 255)
GREEN = Color.from_rgba(0, 255, 0, 255)
BLUE = Color.from_rgba(0, 0, 255, 255)
GREY = Color.from_rgba(128, 128, 128, 255)
YELLOW = Color.from_rgba(255, 255, 0, 255)
CYAN = Color.from_rgba(0, 255, 255, 255)


def _colorful() -> Style:
    return Style(
        color=RED,
        color_hovered=GREEN,
        color_clicked=BLUE,
        color_selected=GREY,
        color_selected_hovered=YELLOW,
        text_color=RED,
        text_color_hovered=GREEN,
        text_color_clicked=BLUE,
    )


def test_defaults_match_documented_colours():
    style = Style()
    assert style.font_size == 16
    assert style.color == Color.from_rgba(255, 255, 255, 255)
    assert style.text_color == Color.from_rgba(0, 0, 0, 255)
    assert style.reverse_background_z is False


def test_border_margin_without_margins_is_zero():
    assert Style().border_margin() == RectOffset(0.0, 0.0, 0.0, 0.0)


def test_border_margin_sums_both_offsets():
    style = Style(
        background_margin=RectOffset(1.0, 14.0, 1.0, 1.0),
        margin=RectOffset(2.0, 2.0, 2.0, 2.0),
    )
    result = style.border_margin()
    assert result.left == 1.0 + 2.0
    assert result.right == 14.0 + 2.0
    assert result.top == 1.0 + 2.0
    assert result.bottom == 1.0 + 2.0


def test_border_margin_with_only_one_side_set():
    offset = RectOffset(3.0, 4.0, 5.0, 6.0)
    assert Style(margin=offset).border_margin() == offset
    assert Style(background_margin=offset).border_margin() == offset


def test_color_priorities_when_focused():
    style = _colorful()
    assert style.color_for(ElementState(focused=True)) == RED
    assert style.color_for(ElementState(focused=True, hovered=True)) == GREEN
    assert style.color_for(ElementState(focused=True, selected=True)) == GREY
    assert style.color_for(ElementState(focused=True, selected=True, hovered=True)) == YELLOW
    assert (
        style.color_for(ElementState(focused=True, clicked=True, selected=True, hovered=True))
        == BLUE
    )


def test_color_inactive_used_when_unfocused():
    style = Style(color=RED, color_inactive=CYAN)
    assert style.color_for(ElementState(focused=False, clicked=True)) == CYAN


def test_color_unfocused_without_inactive_dims_alpha():
    style = Style(color=GREY)
    result = style.color_for(ElementState())
    assert result.r == GREY.r
    assert result.g == GREY.g
    assert result.b == GREY.b
    assert result.a < GREY.a
    assert result.a == pytest.approx(GREY.a * 0.8, abs=1 / 255)


def test_text_color_priorities():
    style = _colorful()
    assert style.text_color_for(ElementState(clicked=True, hovered=True)) == BLUE
    assert style.text_color_for(ElementState(hovered=True)) == GREEN
    assert style.text_color_for(ElementState(focused=True)) == RED


def test_text_color_unfocused_is_dimmed():
    style = Style(text_color=Color(1.0, 0.5, 0.25, 1.0))
    result = style.text_color_for(ElementState())
    assert result.r / 1.0 == pytest.approx(0.6)
    assert result.g / 0.5 == pytest.approx(0.6)
    assert result.b / 0.25 == pytest.approx(0.6)
    assert result.a / 1.0 == pytest.approx(0.6)


def test_background_sprite_selection():
    style = Style(background=1, background_hovered=2, background_clicked=3)
    assert style.background_sprite(ElementState()) == 1
    assert style.background_sprite(ElementState(hovered=True)) == 2
    assert style.background_sprite(ElementState(hovered=True, clicked=True)) == 3


def test_background_sprite_falls_back_to_plain_background():
    style = Style(background=7)
    assert style.background_sprite(ElementState(hovered=True, clicked=True)) == 7
    assert Style().background_sprite(ElementState(clicked=True)) is None