"""
Uniform atlas records shared by every source kind, and their index.json form.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from ..sources.base import Point, Rect, SourceFrame


@dataclass(frozen=True)
class UniformFrame:
    """Normalized frame: rectangle plus duration in milliseconds."""
    rect: Rect
    duration: int

    @classmethod
    def from_source(cls, frame: SourceFrame) -> "UniformFrame":
        return cls(rect=frame.rect, duration=frame.duration)

    def to_dict(self) -> Dict[str, Any]:
        return {"rect": self.rect.to_dict(), "duration": self.duration}


@dataclass(frozen=True)
class UniformAnimation:
    """Named playback sequence of frame indices."""
    animation_id: str
    frames: Tuple[int, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"animation_id": self.animation_id, "frames": list(self.frames)}


@dataclass(frozen=True)
class UniformModel:
    """One packaged model: frames, animations and anchor point."""
    model_id: str
    anchor_point: Point
    frames: Tuple[UniformFrame, ...]
    animations: Tuple[UniformAnimation, ...]

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def animation_ids(self) -> List[str]:
        return [animation.animation_id for animation in self.animations]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frames": [frame.to_dict() for frame in self.frames],
            "animations": [animation.to_dict() for animation in self.animations],
            "model_id": self.model_id,
            "anchor_point": self.anchor_point.to_dict(),
        }


@dataclass(frozen=True)
class AtlasEntry:
    """A model bound to the image file whose bytes are packed with it."""
    model: UniformModel
    image_path: Path

    @property
    def model_id(self) -> str:
        return self.model.model_id


@dataclass
class Atlas:
    """Ordered collection of atlas entries, in index order."""
    entries: List[AtlasEntry] = field(default_factory=list)

    def add(self, entry: AtlasEntry) -> None:
        self.entries.append(entry)

    @property
    def models(self) -> List[UniformModel]:
        return [entry.model for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        """Build the index.json document."""
        return {"models": [model.to_dict() for model in self.models]}
