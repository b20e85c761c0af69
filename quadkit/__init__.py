"""Immediate-mode UI building blocks (layout, text editing, draw commands, meshes, styles) and a Tiled JSON map loader."""

__version__ = "0.1.0"