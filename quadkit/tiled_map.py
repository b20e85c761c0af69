"""Tile maps loaded from Tiled JSON, with lookup and placement helpers."""

from __future__ import annotations

import json
import math
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar, Union

from quadkit import tiled_format
from quadkit.geometry import Rect
from quadkit.tiled_errors import JsonError, NonUniqueLayerName, TextureNotFound

_T = TypeVar("_T")
_U32_MAX = 2**32 - 1
_MISSING: Any = object()

Pairs = Union[Mapping[str, _T], Iterable[tuple[str, _T]]]


def _as_u32(value: float) -> int:
    """Saturating, truncating float to unsigned 32-bit conversion."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def _div_u32(numerator: float, denominator: float) -> int:
    if denominator == 0:
        if numerator == 0:
            return 0
        return _as_u32(math.copysign(math.inf, numerator))
    return _as_u32(numerator / denominator)


def _find(pairs: Any, name: str) -> Any:
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    for key, value in items:
        if key == name:
            return value
    return _MISSING


def _parse(parser: Callable[[str], _T], data: str) -> _T:
    try:
        return parser(data)
    except json.JSONDecodeError as error:
        raise JsonError(error.msg, error.lineno, error.colno) from error
    except ValueError as error:
        raise JsonError(str(error)) from error


@dataclass
class MapObject:
    """An object placed on an object layer."""

    gid: int | None
    world_x: float
    world_y: float
    world_w: float
    world_h: float
    tile_x: int
    tile_y: int
    tile_w: int
    tile_h: int
    name: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class Tile:
    """A placed tile: its id within its tileset and the tile's Tiled type."""

    id: int
    tileset: str
    attrs: str


@dataclass
class Layer:
    """A map layer with its objects and row-major tile grid."""

    objects: list[MapObject]
    width: int
    height: int
    data: list[Tile | None]


@dataclass
class TileSet:
    """A tileset image sliced into a grid of tiles."""

    texture: Any
    tilewidth: int
    tileheight: int
    columns: int
    spacing: int
    margin: int

    def sprite_rect(self, ix: int) -> Rect:
        """Pixel area of tile ix, inset slightly to avoid bleeding."""
        sw = float(self.tilewidth)
        sh = float(self.tileheight)
        sx = (ix % self.columns) * (sw + self.spacing) + self.margin
        sy = (ix // self.columns) * (sh + self.spacing) + self.margin
        return Rect(sx + 1.1, sy + 1.1, sw - 2.2, sh - 2.2)


@dataclass
class Map:
    """A loaded map: layers and tilesets by name, plus the raw parsed file."""

    layers: dict[str, Layer]
    tilesets: dict[str, TileSet]
    raw_tiled_map: tiled_format.Map

    def _layer(self, layer: str) -> Layer:
        if layer not in self.layers:
            raise KeyError(f"No such layer: {layer}")
        return self.layers[layer]

    def _full_rect(self) -> Rect:
        return Rect(0.0, 0.0, float(self.raw_tiled_map.width), float(self.raw_tiled_map.height))

    def sprite_source(self, tileset: str, sprite: int) -> Rect:
        """Texture area to draw for a sprite of the named tileset."""
        if tileset not in self.tilesets:
            raise KeyError(
                f"No such tileset: {tileset}, tilesets available: {list(self.tilesets)}"
            )
        rect = self.tilesets[tileset].sprite_rect(sprite)
        return Rect(rect.x - 1.0, rect.y - 1.0, rect.w + 2.0, rect.h + 2.0)

    def contains_layer(self, layer: str) -> bool:
        """True if the map has a layer of that name."""
        return layer in self.layers

    def tile_placements(
        self, layer: str, dest: Rect, source: Rect | None = None
    ) -> list[tuple[str, Tile, Rect]]:
        """Where each tile of the source area lands when drawn into dest.

        Returns (tileset name, tile, destination rect) grouped by tileset.
        The source area defaults to the whole map.
        """
        grid = self._layer(layer)
        source = source or self._full_rect()
        spr_width = dest.w / source.w
        spr_height = dest.h / source.h
        sx, sy = _as_u32(source.x), _as_u32(source.y)

        groups: dict[str, list[tuple[Tile, Rect]]] = {}
        for y in range(sy, sy + _as_u32(source.h)):
            for x in range(sx, sx + _as_u32(source.w)):
                index = y * grid.width + x
                tile = grid.data[index] if index < len(grid.data) else None
                if tile is None:
                    continue
                px = (x - sx) / source.w * dest.w + dest.x
                py = (y - sy) / source.h * dest.h + dest.y
                groups.setdefault(tile.tileset, []).append(
                    (tile, Rect(px, py, spr_width, spr_height))
                )
        return [(name, tile, rect) for name, items in groups.items() for tile, rect in items]

    def tiles(self, layer: str, rect: Rect | None = None) -> Iterator[tuple[int, int, Tile | None]]:
        """Walk the area row by row, yielding (x, y, tile).

        The walk stops once the step after the current cell leaves the area,
        so the area's last cell is not yielded.
        """
        grid = self._layer(layer)
        rect = rect or self._full_rect()
        x0, y0 = _as_u32(rect.x), _as_u32(rect.y)
        x_end = x0 + _as_u32(rect.w)
        y_end = y0 + _as_u32(rect.h)
        return self._walk(grid, x0, y0, x_end, y_end)

    @staticmethod
    def _walk(
        grid: Layer, x0: int, y0: int, x_end: int, y_end: int
    ) -> Iterator[tuple[int, int, Tile | None]]:
        cx, cy = x0, y0
        while True:
            if cx + 1 >= x_end:
                nx, ny = x0, cy + 1
            else:
                nx, ny = cx + 1, cy
            if ny >= y_end:
                return
            yield cx, cy, grid.data[cy * grid.width + cx]
            cx, cy = nx, ny

    def get_tile(self, layer: str, x: int, y: int) -> Tile | None:
        """The tile at a grid cell, or None for an empty or outside cell."""
        grid = self._layer(layer)
        if x >= grid.width or y >= grid.height:
            return None
        return grid.data[y * grid.width + x]


def _find_tileset(tilesets: list[tiled_format.Tileset], gid: int) -> tiled_format.Tileset | None:
    for tileset in tilesets:
        if tileset.firstgid <= gid < tileset.firstgid + tileset.tilecount:
            return tileset
    return None


def _resolve_tile(tilesets: list[tiled_format.Tileset], gid: int) -> Tile | None:
    tileset = _find_tileset(tilesets, gid)
    if tileset is None:
        return None
    local_id = gid - tileset.firstgid
    attrs = next(
        (entry.ty for entry in tileset.tiles if entry.id == local_id),
        None,
    )
    return Tile(id=local_id, tileset=tileset.name, attrs=attrs or "")


def _map_object(obj: tiled_format.Object, tile_width: float, tile_height: float) -> MapObject:
    return MapObject(
        gid=obj.gid,
        world_x=obj.x,
        world_y=obj.y,
        world_w=obj.width,
        world_h=obj.height,
        tile_x=_div_u32(obj.x, tile_width),
        tile_y=_div_u32(obj.y, tile_height),
        tile_w=_div_u32(obj.width, tile_width),
        tile_h=_div_u32(obj.height, tile_height),
        name=obj.name,
        properties={prop.name: prop.value for prop in obj.properties},
    )


def load_map(
    data: str,
    textures: Pairs[Any],
    external_tilesets: Pairs[str] = (),
) -> Map:
    """Load a map from Tiled JSON.

    textures maps image names used in the file to texture objects;
    external_tilesets maps a tileset's "source" name to that tileset's JSON.
    Raises JsonError, TextureNotFound or NonUniqueLayerName, and KeyError
    when an external tileset is not supplied.
    """
    raw = _parse(tiled_format.parse_map, data)

    tilesets: dict[str, TileSet] = {}
    map_tilesets: list[tiled_format.Tileset] = []
    for entry in raw.tilesets:
        if not entry.source:
            tileset = entry
        else:
            tileset_data = _find(external_tilesets, entry.source)
            if tileset_data is _MISSING:
                raise KeyError(f"external tileset not supplied: {entry.source}")
            tileset = _parse(tiled_format.parse_tileset, tileset_data)
            tileset.firstgid = entry.firstgid

        texture = _find(textures, tileset.image)
        if texture is _MISSING:
            raise TextureNotFound(tileset.image)

        tilesets[tileset.name] = TileSet(
            texture=texture,
            tilewidth=tileset.tilewidth,
            tileheight=tileset.tileheight,
            columns=tileset.columns,
            spacing=tileset.spacing,
            margin=tileset.margin,
        )
        map_tilesets.append(tileset)

    tile_width = float(raw.tilewidth)
    tile_height = float(raw.tileheight)
    layers: dict[str, Layer] = {}
    for layer in raw.layers:
        if layer.name in layers:
            raise NonUniqueLayerName(layer.name)
        layers[layer.name] = Layer(
            objects=[_map_object(obj, tile_width, tile_height) for obj in layer.objects],
            width=layer.width,
            height=layer.height,
            data=[_resolve_tile(map_tilesets, gid) for gid in layer.data],
        )

    return Map(layers=layers, tilesets=tilesets, raw_tiled_map=raw)