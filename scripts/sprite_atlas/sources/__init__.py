"""
Source readers for sprite-sheet metadata, static images and the index document.
"""

from .base import (
    Point,
    Rect,
    SourceFrame,
    SourceTag,
    SpriteSheetData,
    SourceError,
    ReadError,
    ParseError,
)
from .aseprite import read_sprite_sheet, parse_sprite_sheet
from .static_image import read_static_image, read_image_size, STATIC_FRAME_DURATION
from .index import IndexEntry, SpriteSheetEntry, StaticImageEntry, load_index, parse_index

__all__ = [
    "Point",
    "Rect",
    "SourceFrame",
    "SourceTag",
    "SpriteSheetData",
    "SourceError",
    "ReadError",
    "ParseError",
    "read_sprite_sheet",
    "parse_sprite_sheet",
    "read_static_image",
    "read_image_size",
    "STATIC_FRAME_DURATION",
    "IndexEntry",
    "SpriteSheetEntry",
    "StaticImageEntry",
    "load_index",
    "parse_index",
]
