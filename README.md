# quadkit

Building blocks for an immediate-mode user interface, plus a loader for maps
saved by the Tiled editor in its JSON format. Everything here is plain Python
with no dependencies and no rendering backend: the package works out *what*
to draw and *where*, and leaves the drawing itself to you.

## Installation

```
pip install quadkit
```

## What is inside

| Module | Contents |
| --- | --- |
| `quadkit.geometry` | `Vec2`, `Rect`, `RectOffset`, `Color` |
| `quadkit.cursor` | `Cursor`, `Scroll`, `Layout`, `FreeLayout`: where the next widget goes |
| `quadkit.text_editor` | `EditboxState`, `ClickState`: caret, selection, mouse clicks, undo and redo for a text box |
| `quadkit.painter` | Draw commands (`DrawCharacter`, `DrawRect`, `DrawSprite`, `DrawTriangle`, `DrawLine`, `DrawRawTexture`, `Clip`), `ElementState`, `Alignment`, `LabelParams` |
| `quadkit.style` | `Style`: colours and background sprites that depend on an element's state |
| `quadkit.mesh` | `Vertex`, `DrawList`, `render_command`: turns draw commands into batched triangles |
| `quadkit.tiled_format` | Data classes for the Tiled JSON format, `parse_map`, `parse_tileset` |
| `quadkit.tiled_map` | `load_map`, `Map`, `TileSet`, `Layer`, `Tile`, `MapObject` |
| `quadkit.tiled_errors` | `TiledError`, `JsonError`, `NonUniqueLayerName`, `TextureNotFound` |

## Laying out widgets

```python
from quadkit.cursor import Cursor, FreeLayout, Layout
from quadkit.geometry import Rect, Vec2

cursor = Cursor(Rect(0, 0, 200, 300), margin=2.0)
first = cursor.fit(Vec2(100, 20), Layout.VERTICAL)
second = cursor.fit(Vec2(100, 20), Layout.VERTICAL)
pinned = cursor.fit(Vec2(50, 20), FreeLayout(Vec2(10, 10)))
```

Each call to `fit` returns the absolute top-left corner for the widget and
moves the cursor on; `Layout.HORIZONTAL` places widgets side by side and wraps
to a new row when the area is full. Call `cursor.reset()` at the start of every
frame; it also remembers last frame's content size, which `Scroll.update` and
`Scroll.scroll_to` use to clamp scrolling.

## Editing text

`EditboxState` holds the caret, the selection and an undo history. Its editing
methods take the current text and return the new one:

```python
from quadkit.text_editor import EditboxState

state = EditboxState()
text = ""
text = state.insert_character(text, "h")
text = state.insert_string(text, "ello")
text = state.delete_current_character(text)   # "hell"
text = state.undo(text)                        # "hello"
state.select_all(text)
state.selected_text(text)                      # "hello"
```

Cursor movement (`move_cursor`, `move_cursor_next_word`,
`move_cursor_prev_word`, `move_cursor_within_line`) extends the selection when
`shift` is true. `click_down`, `click_move` and `click_up` implement mouse
selection: a double click selects a word, a triple click a line.

## Batching draw commands

```python
from quadkit.geometry import Color, Rect
from quadkit.mesh import render_command
from quadkit.painter import DrawRect

draw_lists = []
render_command(
    draw_lists,
    DrawRect(rect=Rect(0, 0, 10, 10), source=Rect(0, 0, 1, 1),
             fill=Color(1, 1, 1, 1), stroke=None),
)
# draw_lists[0].vertices and draw_lists[0].indices are ready to upload
```

A new `DrawList` starts whenever the texture or clipping zone changes or a list
grows too large. `Style.color_for`, `Style.text_color_for` and
`Style.background_sprite` pick the colours and sprite for an `ElementState`.

## Loading a Tiled map

```python
from quadkit.tiled_map import load_map

with open("level.json") as fh:
    level = load_map(fh.read(), {"tiles.png": my_texture}, {})

tile = level.get_tile("ground", 3, 4)
for tileset, tile, dest in level.tile_placements("ground", Rect(0, 0, 320, 240)):
    source = level.sprite_source(tileset, tile.id)
    ...  # draw `source` of that tileset's texture into `dest`
```

`textures` maps the image names used inside the map to whatever texture
objects your renderer uses; `external_tilesets` maps the `source` names of
external tilesets to their JSON text. Both may be dicts or sequences of
pairs. A missing texture raises `TextureNotFound`, two layers with the same
name raise `NonUniqueLayerName`, malformed JSON raises `JsonError` (all
subclasses of `TiledError`), and an external tileset that was not supplied
raises `KeyError`.

`Map.tiles(layer, rect)` walks an area row by row yielding `(x, y, tile)`;
note that it stops one step early and does not yield the area's last cell.

## What this package does not do

It draws nothing and opens no window: draw lists are data for your own
renderer. It has no keyboard or mouse handling and no ready-made widgets
(buttons, edit boxes, windows); you decide when to call the `EditboxState`
and `Cursor` methods from your own input events. There is no font handling
or texture atlas either, so glyph and sprite source rectangles are yours to
supply.

## Running the tests

```
pip install -e ".[test]"
pytest
```