import pytest

from quadkit.geometry import Color, Rect, RectOffset, Vec2
from quadkit.mesh import MAX_VERTICES, DrawList, Vertex, render_command
from quadkit.painter import Clip, DrawLine, DrawRawTexture, DrawRect, DrawSprite

RED = Color(1.0, 0.0, 0.0, 1.0)
SRC = Rect(0.0, 0.0, 1.0, 1.0)


def test_vertex_create_and_tuple():
    v = Vertex.create(3.0, 4.0, 0.25, 0.5, RED)
    assert v.pos == (3.0, 4.0, 0.0)
    assert v.uv == (0.25, 0.5)
    assert v.color == (1.0, 0.0, 0.0, 1.0)
    assert v.as_tuple() == (v.pos, v.uv, v.color)


def test_draw_rectangle_vertices_and_indices():
    dl = DrawList()
    dl.draw_rectangle(Rect(10.0, 20.0, 30.0, 40.0), SRC, RED)
    assert [v.pos[:2] for v in dl.vertices] == [
        (10.0, 20.0),
        (10.0 + 30.0, 20.0),
        (10.0 + 30.0, 20.0 + 40.0),
        (10.0, 20.0 + 40.0),
    ]
    assert dl.indices == [0, 1, 2, 0, 2, 3]
    assert dl.vertices[2].uv == (SRC.x + SRC.w, SRC.y + SRC.h)


def test_second_shape_indices_are_offset():
    dl = DrawList()
    dl.draw_rectangle(Rect(0.0, 0.0, 5.0, 5.0), SRC, RED)
    first = list(dl.indices)
    count = len(dl.vertices)
    dl.draw_rectangle(Rect(5.0, 5.0, 5.0, 5.0), SRC, RED)
    assert dl.indices[len(first):] == [i + count for i in first]


def test_rectangle_lines_are_four_rectangles():
    single = DrawList()
    single.draw_rectangle(Rect(0.0, 0.0, 10.0, 10.0), SRC, RED)
    lines = DrawList()
    lines.draw_rectangle_lines(Rect(0.0, 0.0, 10.0, 10.0), SRC, RED)
    assert len(lines.vertices) == 4 * len(single.vertices)
    assert len(lines.indices) == 4 * len(single.indices)
    assert max(lines.indices) == len(lines.vertices) - 1


def test_draw_sprite_nine_patch():
    dl = DrawList()
    dl.draw_sprite(Rect(0.0, 0.0, 20.0, 20.0), SRC, RectOffset(2.0, 2.0, 2.0, 2.0), RectOffset(), RED)
    assert len(dl.vertices) == 16
    assert len(dl.indices) == 54
    assert all(0 <= i < 16 for i in dl.indices)
    assert {v.pos[0] for v in dl.vertices} == {0.0, 2.0, 20.0 - 2.0, 20.0}
    assert dl.vertices[0].pos == (0.0, 0.0, 0.0)
    assert dl.vertices[-1].pos == (20.0, 20.0, 0.0)


def test_draw_line_zero_length_draws_nothing():
    dl = DrawList()
    dl.draw_line(5.0, 5.0, 5.0, 5.0, 2.0, SRC, RED)
    assert dl.vertices == []
    assert dl.indices == []


def test_draw_line_horizontal_thickness():
    dl = DrawList()
    thickness = 2.0
    dl.draw_line(0.0, 0.0, 10.0, 0.0, thickness, SRC, RED)
    assert dl.indices == [0, 1, 2, 2, 1, 3]
    assert {v.pos[1] for v in dl.vertices} == {thickness / 2, -thickness / 2}
    assert {v.pos[0] for v in dl.vertices} == {0.0, 10.0}


def test_draw_triangle():
    dl = DrawList()
    source = Rect(0.5, 0.25, 1.0, 1.0)
    dl.draw_triangle(Vec2(0.0, 0.0), Vec2(1.0, 0.0), Vec2(0.0, 1.0), source, RED)
    assert dl.indices == [0, 1, 2]
    assert all(v.uv == (source.x, source.y) for v in dl.vertices)


def test_clear_keeps_texture():
    dl = DrawList(clipping_zone=Rect(0.0, 0.0, 1.0, 1.0), texture="tex")
    dl.draw_rectangle(Rect(0.0, 0.0, 1.0, 1.0), SRC, RED)
    dl.clear()
    assert dl.vertices == [] and dl.indices == []
    assert dl.clipping_zone is None
    assert dl.texture == "tex"


def test_render_rect_fill_and_stroke():
    rect = Rect(0.0, 0.0, 10.0, 10.0)
    lists: list[DrawList] = []
    render_command(lists, DrawRect(rect, SRC, fill=RED, stroke=RED))
    expected = DrawList()
    expected.draw_rectangle(rect, SRC, RED)
    expected.draw_rectangle_lines(rect, SRC, RED)
    assert len(lists) == 1
    assert lists[0].vertices == expected.vertices
    assert lists[0].indices == expected.indices


def test_render_line_uses_unit_thickness():
    lists: list[DrawList] = []
    render_command(lists, DrawLine(Vec2(0.0, 0.0), Vec2(4.0, 3.0), SRC, RED))
    expected = DrawList()
    expected.draw_line(0.0, 0.0, 4.0, 3.0, 1.0, SRC, RED)
    assert lists[0].vertices == expected.vertices


def test_render_raw_texture_starts_textured_list():
    clip = Rect(0.0, 0.0, 50.0, 50.0)
    lists = [DrawList(clipping_zone=clip)]
    render_command(lists, DrawRawTexture(Rect(0.0, 0.0, 5.0, 5.0), "tex"))
    assert len(lists) == 2
    assert lists[1].texture == "tex"
    assert lists[1].clipping_zone == clip
    assert lists[1].vertices[0].color == (1.0, 1.0, 1.0, 1.0)

    render_command(lists, DrawRawTexture(Rect(5.0, 0.0, 5.0, 5.0), "tex"))
    assert len(lists) == 2

    render_command(lists, DrawRect(Rect(0.0, 0.0, 1.0, 1.0), SRC, fill=RED))
    assert len(lists) == 3
    assert lists[2].texture is None
    assert lists[2].clipping_zone == clip


def test_render_clip_switches_list_only_on_change():
    clip = Rect(1.0, 2.0, 3.0, 4.0)
    lists: list[DrawList] = []
    render_command(lists, Clip(clip))
    count = len(lists)
    assert lists[-1].clipping_zone == clip
    render_command(lists, Clip(clip))
    assert len(lists) == count
    render_command(lists, Clip(None))
    assert len(lists) == count + 1
    assert lists[-1].clipping_zone is None


def test_render_splits_when_vertex_budget_exceeded():
    clip = Rect(0.0, 0.0, 9.0, 9.0)
    full = DrawList(clipping_zone=clip)
    full.vertices = [Vertex.create(0.0, 0.0, 0.0, 0.0, RED)] * (MAX_VERTICES - 5)
    lists = [full]
    render_command(lists, DrawRect(Rect(0.0, 0.0, 1.0, 1.0), SRC, fill=RED))
    assert len(lists) == 2
    assert lists[1].clipping_zone == clip
    assert len(lists[0].vertices) == MAX_VERTICES - 5


def test_render_sprite_default_offsets():
    lists: list[DrawList] = []
    render_command(lists, DrawSprite(Rect(0.0, 0.0, 8.0, 8.0), SRC, RED))
    expected = DrawList()
    expected.draw_sprite(Rect(0.0, 0.0, 8.0, 8.0), SRC, RectOffset(), RectOffset(), RED)
    assert lists[0].vertices == expected.vertices
    assert lists[0].indices == expected.indices


def test_render_unknown_command_raises():
    with pytest.raises(TypeError):
        render_command([], "not a command")