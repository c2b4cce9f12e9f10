"""
Index (manifest) document parsing.

Each entry becomes one of two explicit variants. Kind is decided by which
fields are present: an entry with model_id, data_file and anchor_point is a
sprite sheet; otherwise one with model_id and image_file is a static image.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .base import ParseError, Point, ReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexEntry:
    """Common part of every index entry."""
    model_id: str


@dataclass(frozen=True)
class SpriteSheetEntry(IndexEntry):
    """Model built from an Aseprite metadata file."""
    data_file: str
    anchor_point: Point


@dataclass(frozen=True)
class StaticImageEntry(IndexEntry):
    """Model built from a single static image."""
    image_file: str


def load_index(path: Union[str, Path]) -> List[IndexEntry]:
    """
    Load an index document from YAML or JSON.

    Args:
        path: Path to the index file

    Returns:
        Entries in document order

    Raises:
        ReadError: If the file cannot be opened
        ParseError: If the content is not a list of valid entries
    """
    path = Path(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == '.json':
                document = json.load(f)
            else:
                document = yaml.safe_load(f)
    except OSError as e:
        raise ReadError(f"Failed to open index file ({e.strerror or e})", path) from e
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON format ({e})", path) from e
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML format ({e})", path) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"Index file is not UTF-8 text ({e})", path) from e

    entries = parse_index(document, path)
    logger.debug(f"Loaded {len(entries)} index entries from {path}")
    return entries


def parse_index(document: Any, path: Union[str, Path]) -> List[IndexEntry]:
    """Convert a decoded index document into typed entries."""
    if not isinstance(document, list):
        raise ParseError("Index document must be a list of entries", path)

    return [parse_entry(raw, position, path) for position, raw in enumerate(document)]


def parse_entry(raw: Any, position: int, path: Union[str, Path]) -> IndexEntry:
    """Parse one index entry, choosing its kind from the fields it carries."""
    context = f"entry {position}"
    if not isinstance(raw, dict):
        raise ParseError(f"Index {context} must be a mapping", path)

    if all(key in raw for key in ('model_id', 'data_file', 'anchor_point')):
        return SpriteSheetEntry(
            model_id=_require_str(raw, 'model_id', context, path),
            data_file=_require_str(raw, 'data_file', context, path),
            anchor_point=_parse_point(raw['anchor_point'], context, path),
        )

    if all(key in raw for key in ('model_id', 'image_file')):
        return StaticImageEntry(
            model_id=_require_str(raw, 'model_id', context, path),
            image_file=_require_str(raw, 'image_file', context, path),
        )

    raise ParseError(
        f"Index {context} matches no known kind: expected model_id, data_file and anchor_point, "
        f"or model_id and image_file (found: {', '.join(sorted(map(str, raw))) or 'nothing'})",
        path,
    )


def _require_str(raw: Dict[str, Any], key: str, context: str, path: Union[str, Path]) -> str:
    value = raw[key]
    if not isinstance(value, str) or not value:
        raise ParseError(f"'{key}' of index {context} must be a non-empty string", path)
    return value


def _parse_point(raw: Any, context: str, path: Union[str, Path]) -> Point:
    if not isinstance(raw, dict) or 'x' not in raw or 'y' not in raw:
        raise ParseError(f"'anchor_point' of index {context} must have integer x and y", path)

    x, y = raw['x'], raw['y']
    for value in (x, y):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParseError(f"'anchor_point' of index {context} must have integer x and y", path)

    return Point(x=x, y=y)
