"""
Shared source structures and errors for the sprite-sheet and static-image readers.
Readers only parse; semantic checks belong to the normalizer and validator.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


@dataclass(frozen=True)
class Point:
    """Integer (x, y) offset, used for anchor points."""
    x: int = 0
    y: int = 0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Rect:
    """Rectangle cut from a sprite sheet, in integer pixels."""
    x: int
    y: int
    w: int
    h: int

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True)
class SourceFrame:
    """One physical frame of a source image and its display duration in milliseconds."""
    rect: Rect
    duration: int


@dataclass(frozen=True)
class SourceTag:
    """Named inclusive frame range read from sprite-sheet metadata."""
    name: str
    start: int
    end: int


@dataclass
class SpriteSheetData:
    """Parsed sprite-sheet metadata document."""
    frames: List[SourceFrame] = field(default_factory=list)
    tags: List[SourceTag] = field(default_factory=list)
    image_path: Optional[Path] = None

    @property
    def frame_count(self) -> int:
        return len(self.frames)


class SourceError(Exception):
    """Base exception for source reading errors."""

    def __init__(self, message: str, path: Union[str, Path, None] = None):
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None


class ReadError(SourceError):
    """Exception raised when a file cannot be opened or its container cannot be decoded."""

    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(f"{message}: {path}", path)


class ParseError(SourceError):
    """Exception raised when a file opens but its content does not match the expected schema."""

    def __init__(self, message: str, path: Union[str, Path]):
        super().__init__(f"{message} in {path}", path)
