"""Data model and JSON reader for Tiled map editor files."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

_MISSING = object()

_Converter = Callable[[Any, str], Any]


@dataclass
class Grid:
    width: int = 0
    height: int = 0


@dataclass
class Property:
    name: str = ""
    value: str = ""
    ty: str = ""


@dataclass
class ObjectGroup:
    """Placeholder for a tile's object group; its contents are not read."""


@dataclass
class Frame:
    duration: int = 0
    tileid: int = 0


@dataclass
class Tile:
    animation: list[Frame] = field(default_factory=list)
    id: int = 0
    image: str | None = None
    imagewidth: int = 0
    imageheight: int = 0
    objectgroup: ObjectGroup | None = None
    properties: list[Property] = field(default_factory=list)
    terrain: list[int] = field(default_factory=list)
    ty: str | None = None


@dataclass
class Tileoffset:
    x: int = 0
    y: int = 0


@dataclass
class Terrain:
    name: str = ""
    tile: int = 0


@dataclass
class Tileset:
    columns: int = 0
    firstgid: int = 0
    grid: Grid | None = None
    image: str = ""
    imagewidth: int = 0
    imageheight: int = 0
    margin: int = 0
    name: str = ""
    properties: list[Property] = field(default_factory=list)
    spacing: int = 0
    terrains: list[Terrain] | None = None
    tilecount: int = 0
    tileheight: int = 0
    tileoffset: Tileoffset | None = None
    tiles: list[Tile] = field(default_factory=list)
    tilewidth: int = 0
    transparentcolor: str | None = None
    source: str = ""


@dataclass
class Chunk:
    data: list[int] = field(default_factory=list)
    height: int = 0
    width: int = 0
    x: int = 0
    y: int = 0


@dataclass
class PolyPoint:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Object:
    id: int = 0
    name: str = ""
    ty: str = ""
    gid: int | None = None
    ellipse: bool | None = None
    polygon: list[PolyPoint] | None = None
    properties: list[Property] = field(default_factory=list)
    rotation: float = 0.0
    visible: bool = False
    height: float = 0.0
    width: float = 0.0
    x: float = 0.0
    y: float = 0.0


@dataclass
class Layer:
    chunks: list[Chunk] | None = None
    name: str = ""
    opacity: float = 0.0
    properties: dict[str, str] | None = None
    visible: bool = False
    width: int = 0
    height: int = 0
    ty: str = ""
    data: list[int] = field(default_factory=list)
    draworder: str | None = None
    objects: list[Object] = field(default_factory=list)
    offsetx: int | None = None
    offsety: int | None = None
    x: float | None = None
    y: float | None = None


@dataclass
class Map:
    backgroundcolor: str = ""
    height: int = 0
    properties: list[Property] = field(default_factory=list)
    orientation: str = ""
    renderorder: str = ""
    tileheight: int = 0
    tilewidth: int = 0
    layers: list[Layer] = field(default_factory=list)
    tilesets: list[Tileset] = field(default_factory=list)
    version: str = ""
    width: int = 0
    ty: str = ""


def _object(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{path}: expected an object")
    return value


def _string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{path}: expected a string")
    return value


def _boolean(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{path}: expected a boolean")
    return value


def _signed(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{path}: expected an integer")
    return value


def _unsigned(value: Any, path: str) -> int:
    number = _signed(value, path)
    if number < 0:
        raise ValueError(f"{path}: expected a non-negative integer")
    return number


def _number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{path}: expected a number")
    return float(value)


def _list_of(item: _Converter) -> _Converter:
    def convert(value: Any, path: str) -> list[Any]:
        if not isinstance(value, list):
            raise ValueError(f"{path}: expected an array")
        return [item(entry, f"{path}[{index}]") for index, entry in enumerate(value)]

    return convert


def _optional(inner: _Converter) -> _Converter:
    def convert(value: Any, path: str) -> Any:
        return None if value is None else inner(value, path)

    return convert


def _string_map(value: Any, path: str) -> dict[str, str]:
    data = _object(value, path)
    return {key: _string(entry, f"{path}.{key}") for key, entry in data.items()}


def _field(data: dict[str, Any], key: str, convert: _Converter, path: str, default: Any = _MISSING) -> Any:
    if key not in data:
        if default is _MISSING:
            raise ValueError(f"{path}: missing field '{key}'")
        return list(default) if isinstance(default, list) else default
    return convert(data[key], f"{path}.{key}")


def _grid(value: Any, path: str) -> Grid:
    data = _object(value, path)
    return Grid(
        width=_field(data, "width", _signed, path),
        height=_field(data, "height", _signed, path),
    )


def _property_reader(required: bool) -> _Converter:
    default = _MISSING if required else ""

    def convert(value: Any, path: str) -> Property:
        data = _object(value, path)
        return Property(
            name=_field(data, "name", _string, path, default),
            value=_field(data, "value", _string, path, default),
            ty=_field(data, "type", _string, path, default),
        )

    return convert


_strict_property = _property_reader(required=True)
_lenient_property = _property_reader(required=False)


def _object_group(value: Any, path: str) -> ObjectGroup:
    _object(value, path)
    return ObjectGroup()


def _frame(value: Any, path: str) -> Frame:
    data = _object(value, path)
    return Frame(
        duration=_field(data, "duration", _signed, path),
        tileid=_field(data, "tileid", _signed, path),
    )


def _tile(value: Any, path: str) -> Tile:
    data = _object(value, path)
    return Tile(
        animation=_field(data, "animation", _list_of(_frame), path, []),
        id=_field(data, "id", _unsigned, path, 0),
        image=_field(data, "image", _optional(_string), path, None),
        imagewidth=_field(data, "imagewidth", _signed, path, 0),
        imageheight=_field(data, "imageheight", _signed, path, 0),
        objectgroup=_field(data, "objectgroup", _optional(_object_group), path, None),
        properties=_field(data, "properties", _list_of(_strict_property), path, []),
        terrain=_field(data, "terrain", _list_of(_signed), path, []),
        ty=_field(data, "type", _optional(_string), path, None),
    )


def _tileoffset(value: Any, path: str) -> Tileoffset:
    data = _object(value, path)
    return Tileoffset(x=_field(data, "x", _signed, path), y=_field(data, "y", _signed, path))


def _terrain(value: Any, path: str) -> Terrain:
    data = _object(value, path)
    return Terrain(
        name=_field(data, "name", _string, path),
        tile=_field(data, "tile", _signed, path),
    )


def _tileset(value: Any, path: str) -> Tileset:
    data = _object(value, path)
    return Tileset(
        columns=_field(data, "columns", _signed, path, 0),
        firstgid=_field(data, "firstgid", _unsigned, path, 0),
        grid=_field(data, "grid", _optional(_grid), path, None),
        image=_field(data, "image", _string, path, ""),
        imagewidth=_field(data, "imagewidth", _signed, path, 0),
        imageheight=_field(data, "imageheight", _signed, path, 0),
        margin=_field(data, "margin", _signed, path, 0),
        name=_field(data, "name", _string, path, ""),
        properties=_field(data, "properties", _list_of(_strict_property), path, []),
        spacing=_field(data, "spacing", _signed, path, 0),
        terrains=_field(data, "terrains", _optional(_list_of(_terrain)), path, None),
        tilecount=_field(data, "tilecount", _unsigned, path, 0),
        tileheight=_field(data, "tileheight", _signed, path, 0),
        tileoffset=_field(data, "tileoffset", _optional(_tileoffset), path, None),
        tiles=_field(data, "tiles", _list_of(_tile), path, []),
        tilewidth=_field(data, "tilewidth", _signed, path, 0),
        transparentcolor=_field(data, "transparentcolor", _optional(_string), path, None),
        source=_field(data, "source", _string, path, ""),
    )


def _chunk(value: Any, path: str) -> Chunk:
    data = _object(value, path)
    return Chunk(
        data=_field(data, "data", _list_of(_unsigned), path, []),
        height=_field(data, "height", _unsigned, path, 0),
        width=_field(data, "width", _unsigned, path, 0),
        x=_field(data, "x", _signed, path, 0),
        y=_field(data, "y", _signed, path, 0),
    )


def _poly_point(value: Any, path: str) -> PolyPoint:
    data = _object(value, path)
    return PolyPoint(x=_field(data, "x", _number, path), y=_field(data, "y", _number, path))


def _map_object(value: Any, path: str) -> Object:
    data = _object(value, path)
    return Object(
        id=_field(data, "id", _unsigned, path, 0),
        name=_field(data, "name", _string, path, ""),
        ty=_field(data, "type", _string, path, ""),
        gid=_field(data, "gid", _optional(_unsigned), path, None),
        ellipse=_field(data, "ellipse", _optional(_boolean), path, None),
        polygon=_field(data, "polygon", _optional(_list_of(_poly_point)), path, None),
        properties=_field(data, "properties", _list_of(_lenient_property), path, []),
        rotation=_field(data, "rotation", _number, path, 0.0),
        visible=_field(data, "visible", _boolean, path, False),
        height=_field(data, "height", _number, path, 0.0),
        width=_field(data, "width", _number, path, 0.0),
        x=_field(data, "x", _number, path, 0.0),
        y=_field(data, "y", _number, path, 0.0),
    )


def _layer(value: Any, path: str) -> Layer:
    data = _object(value, path)
    return Layer(
        chunks=_field(data, "chunks", _optional(_list_of(_chunk)), path, None),
        name=_field(data, "name", _string, path, ""),
        opacity=_field(data, "opacity", _number, path, 0.0),
        properties=_field(data, "properties", _optional(_string_map), path, None),
        visible=_field(data, "visible", _boolean, path, False),
        width=_field(data, "width", _unsigned, path, 0),
        height=_field(data, "height", _unsigned, path, 0),
        ty=_field(data, "type", _string, path, ""),
        data=_field(data, "data", _list_of(_unsigned), path, []),
        draworder=_field(data, "draworder", _optional(_string), path, None),
        objects=_field(data, "objects", _list_of(_map_object), path, []),
        offsetx=_field(data, "offsetx", _optional(_signed), path, None),
        offsety=_field(data, "offsety", _optional(_signed), path, None),
        x=_field(data, "x", _optional(_number), path, None),
        y=_field(data, "y", _optional(_number), path, None),
    )


def _map(value: Any, path: str) -> Map:
    data = _object(value, path)
    return Map(
        backgroundcolor=_field(data, "backgroundcolor", _string, path, ""),
        height=_field(data, "height", _unsigned, path, 0),
        properties=_field(data, "properties", _list_of(_strict_property), path, []),
        orientation=_field(data, "orientation", _string, path, ""),
        renderorder=_field(data, "renderorder", _string, path, ""),
        tileheight=_field(data, "tileheight", _unsigned, path, 0),
        tilewidth=_field(data, "tilewidth", _unsigned, path, 0),
        layers=_field(data, "layers", _list_of(_layer), path, []),
        tilesets=_field(data, "tilesets", _list_of(_tileset), path, []),
        version=_field(data, "version", _string, path, ""),
        width=_field(data, "width", _unsigned, path, 0),
        ty=_field(data, "type", _string, path, ""),
    )


def parse_map(data: str | bytes) -> Map:
    """Read a Tiled JSON map. Raises ValueError on malformed input."""
    return _map(json.loads(data), "map")


def parse_tileset(data: str | bytes) -> Tileset:
    """Read a Tiled JSON tileset. Raises ValueError on malformed input."""
    return _tileset(json.loads(data), "tileset")