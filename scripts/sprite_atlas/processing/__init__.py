"""
Processing modules for model normalization, validation and archive output.
"""

from .atlas import Atlas, AtlasEntry, UniformAnimation, UniformFrame, UniformModel
from .normalizer import ModelNormalizer, NormalizationConfig
from .validator import AtlasValidator, ValidationResult, ValidationError
from .archive import ArchiveWriter, ArchiveConfig, ArchiveError

__all__ = [
    "Atlas",
    "AtlasEntry",
    "UniformAnimation",
    "UniformFrame",
    "UniformModel",
    "ModelNormalizer",
    "NormalizationConfig",
    "AtlasValidator",
    "ValidationResult",
    "ValidationError",
    "ArchiveWriter",
    "ArchiveConfig",
    "ArchiveError",
]
