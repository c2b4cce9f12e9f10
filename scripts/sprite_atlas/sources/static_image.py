"""
Reader for single static images.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

from PIL import Image, UnidentifiedImageError

from .base import ReadError, Rect, SourceFrame

logger = logging.getLogger(__name__)

STATIC_FRAME_DURATION = 1000


def read_image_size(path: Union[str, Path], require_png: bool = True) -> Tuple[int, int]:
    """
    Read pixel dimensions from an image header.

    Pillow opens images lazily, so only the header is parsed here.

    Raises:
        ReadError: If the file cannot be opened, is not a recognized image,
            or is not a PNG while require_png is set
    """
    path = Path(path)

    try:
        with Image.open(path) as image:
            image_format = image.format
            size = image.size
    except UnidentifiedImageError as e:
        raise ReadError("Failed to decode image header", path) from e
    except (OSError, SyntaxError) as e:
        raise ReadError(f"Failed to open image file ({e})", path) from e

    if require_png and image_format != 'PNG':
        raise ReadError(f"Expected a PNG image, found {image_format}", path)

    return size


def read_static_image(
    path: Union[str, Path],
    duration: int = STATIC_FRAME_DURATION,
    require_png: bool = True,
) -> SourceFrame:
    """Produce the single frame covering a whole static image."""
    width, height = read_image_size(path, require_png=require_png)
    logger.debug(f"Read static image {path} ({width}x{height})")
    return SourceFrame(rect=Rect(x=0, y=0, w=width, h=height), duration=duration)
