"""
Sprite Atlas Packer

Converts Aseprite sprite-sheet exports and static images listed in an index
file into a single atlas archive: an index.json manifest of uniform models
plus one image per model.
"""

__version__ = "0.1.0"

from .config import PackerConfig
from .sources.base import ReadError, ParseError, SourceError
from .processing.atlas import Atlas, AtlasEntry, UniformModel
from .processing.normalizer import ModelNormalizer
from .processing.validator import AtlasValidator, ValidationError
from .processing.archive import ArchiveWriter
from .pipeline import AtlasPipeline, PipelineError

__all__ = [
    "PackerConfig",
    "ReadError",
    "ParseError",
    "SourceError",
    "Atlas",
    "AtlasEntry",
    "UniformModel",
    "ModelNormalizer",
    "AtlasValidator",
    "ValidationError",
    "ArchiveWriter",
    "AtlasPipeline",
    "PipelineError",
]
