"""
Reader for Aseprite JSON sprite-sheet exports.

Both the "array" and the "hash" frame layouts are accepted. Tag ranges are
returned exactly as declared; nothing is checked against the frame count here.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from .base import ParseError, ReadError, Rect, SourceFrame, SourceTag, SpriteSheetData

logger = logging.getLogger(__name__)


def read_sprite_sheet(path: Union[str, Path]) -> SpriteSheetData:
    """
    Read an Aseprite metadata file.

    Args:
        path: Path to the exported JSON document

    Returns:
        SpriteSheetData with frames in source order, all tags, and the
        companion image path resolved against the metadata file's directory

    Raises:
        ReadError: If the file cannot be opened
        ParseError: If the document is not valid JSON or does not match the schema
    """
    path = Path(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except OSError as e:
        raise ReadError(f"Failed to open sprite-sheet data file ({e.strerror or e})", path) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Invalid JSON ({e})", path) from e

    data = parse_sprite_sheet(document, path)
    logger.debug(f"Read {data.frame_count} frames and {len(data.tags)} tags from {path}")
    return data


def parse_sprite_sheet(document: Any, path: Union[str, Path]) -> SpriteSheetData:
    """Build SpriteSheetData from an already decoded JSON document."""
    path = Path(path)

    if not isinstance(document, dict):
        raise ParseError("Sprite-sheet document must be a JSON object", path)

    frames = _parse_frames(_require(document, 'frames', path, 'document'), path)

    meta = _require(document, 'meta', path, 'document')
    if not isinstance(meta, dict):
        raise ParseError("'meta' must be an object", path)

    image = _require(meta, 'image', path, 'meta')
    if not isinstance(image, str) or not image:
        raise ParseError("'meta.image' must be a non-empty string", path)

    raw_tags = _require(meta, 'frameTags', path, 'meta')
    if not isinstance(raw_tags, list):
        raise ParseError("'meta.frameTags' must be a list", path)

    tags = []
    for index, raw_tag in enumerate(raw_tags):
        context = f"meta.frameTags[{index}]"
        if not isinstance(raw_tag, dict):
            raise ParseError(f"'{context}' must be an object", path)
        name = _require(raw_tag, 'name', path, context)
        if not isinstance(name, str):
            raise ParseError(f"'{context}.name' must be a string", path)
        tags.append(SourceTag(
            name=name,
            start=_require_unsigned(raw_tag, 'from', path, context),
            end=_require_unsigned(raw_tag, 'to', path, context),
        ))

    return SpriteSheetData(frames=frames, tags=tags, image_path=path.parent / image)


def _parse_frames(raw_frames: Any, path: Path) -> List[SourceFrame]:
    if isinstance(raw_frames, dict):
        # Hash export: keys are frame file names, insertion order is frame order
        items = [(f"frames[{name!r}]", value) for name, value in raw_frames.items()]
    elif isinstance(raw_frames, list):
        items = [(f"frames[{index}]", value) for index, value in enumerate(raw_frames)]
    else:
        raise ParseError("'frames' must be a list or an object", path)

    frames = []
    for context, raw_frame in items:
        if not isinstance(raw_frame, dict):
            raise ParseError(f"'{context}' must be an object", path)

        raw_rect = _require(raw_frame, 'frame', path, context)
        if not isinstance(raw_rect, dict):
            raise ParseError(f"'{context}.frame' must be an object", path)

        rect_context = f"{context}.frame"
        frames.append(SourceFrame(
            rect=Rect(
                x=_require_int(raw_rect, 'x', path, rect_context),
                y=_require_int(raw_rect, 'y', path, rect_context),
                w=_require_int(raw_rect, 'w', path, rect_context),
                h=_require_int(raw_rect, 'h', path, rect_context),
            ),
            duration=_require_unsigned(raw_frame, 'duration', path, context),
        ))

    return frames


def _require(obj: Dict[str, Any], key: str, path: Path, context: str) -> Any:
    if key not in obj:
        raise ParseError(f"Missing field '{key}' in {context}", path)
    return obj[key]


def _require_int(obj: Dict[str, Any], key: str, path: Path, context: str) -> int:
    value = _require(obj, key, path, context)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(f"'{context}.{key}' must be an integer, got {value!r}", path)
    return value


def _require_unsigned(obj: Dict[str, Any], key: str, path: Path, context: str) -> int:
    value = _require_int(obj, key, path, context)
    if value < 0:
        raise ParseError(f"'{context}.{key}' must not be negative, got {value}", path)
    return value
