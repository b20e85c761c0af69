"""Errors raised while loading Tiled maps."""

from __future__ import annotations


class TiledError(Exception):
    """Base class of map loading errors."""


class JsonError(TiledError):
    """The map or tileset JSON could not be read."""

    def __init__(self, msg: str, line: int = 0, col: int = 0) -> None:
        super().__init__(msg, line, col)
        self.msg = msg
        self.line = line
        self.col = col

    def __str__(self) -> str:
        return f"JsonError(msg={self.msg!r}, line={self.line}, col={self.col})"

    __repr__ = __str__


class NonUniqueLayerName(TiledError):
    """Two layers of the map share a name."""

    def __init__(self, layer: str) -> None:
        super().__init__(layer)
        self.layer = layer

    def __str__(self) -> str:
        return (
            "Layer name should be unique to load a tiled level, "
            f"non-unique layer name: {self.layer}"
        )


class TextureNotFound(TiledError):
    """A tileset refers to an image that was not supplied."""

    def __init__(self, texture: str) -> None:
        super().__init__(texture)
        self.texture = texture

    def __str__(self) -> str:
        return f"TextureNotFound(texture={self.texture!r})"

    __repr__ = __str__