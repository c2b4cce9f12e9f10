"""
Atlas pipeline coordinator.
Resolves index entries in order, dispatches each to its reader and normalizer,
and writes the resulting atlas as one archive. Any failure aborts the run.
"""

import time
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .config import PackerConfig
from .sources.base import SourceError
from .sources.aseprite import read_sprite_sheet
from .sources.static_image import read_static_image
from .sources.index import IndexEntry, SpriteSheetEntry, StaticImageEntry, load_index
from .processing.atlas import Atlas, AtlasEntry
from .processing.normalizer import ModelNormalizer, NormalizationConfig
from .processing.validator import AtlasValidator, ValidationError
from .processing.archive import ArchiveWriter, ArchiveConfig, ArchiveError


@dataclass
class RunSummary:
    """Statistics of a completed run."""
    index_path: Path
    output_path: Optional[Path] = None
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None
    models_packed: int = 0
    frames_packed: int = 0
    animations_packed: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def duration(self) -> float:
        return (self.end_time or time.time()) - self.start_time


class PipelineError(Exception):
    """Exception raised when an index entry or the archive cannot be processed."""

    def __init__(
        self,
        message: str,
        entry_index: Optional[int] = None,
        model_id: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.entry_index = entry_index
        self.model_id = model_id
        self.cause = cause


class AtlasPipeline:
    """
    Builds an atlas from an index file.

    Entries are processed strictly one at a time in index order; the output
    archive lists models in that same order.
    """

    def __init__(self, config: Optional[PackerConfig] = None):
        self.config = config or PackerConfig()
        self.logger = self._setup_logging()

        self.validator = AtlasValidator(self.config.validation_config())
        self.normalizer = ModelNormalizer(
            NormalizationConfig(
                animation_prefix=self.config.animation_prefix,
                default_animation=self.config.default_animation,
            ),
            self.validator,
        )
        self.writer = ArchiveWriter(
            ArchiveConfig(
                manifest_name=self.config.manifest_name,
                image_extension=self.config.image_extension,
                json_indent=self.config.json_indent,
                compression=self.config.compression,
            ),
            self.validator,
        )
        self.summary: Optional[RunSummary] = None

    def _setup_logging(self) -> logging.Logger:
        """Set up logging for the pipeline."""
        logger = logging.getLogger("sprite_atlas")
        if logger.level == logging.NOTSET:
            logger.setLevel(logging.INFO)

        if not logger.handlers:
            # Console(stderr=True) looks up sys.stderr on every write
            handler = RichHandler(console=Console(stderr=True), show_path=False)
            handler.setFormatter(logging.Formatter('%(name)s - %(message)s'))
            logger.addHandler(handler)

        return logger

    def build(self, index_path: Union[str, Path]) -> Atlas:
        """
        Read and normalize every index entry without writing anything.

        Args:
            index_path: Path to the YAML or JSON index

        Returns:
            Atlas with one entry per index entry, in index order

        Raises:
            PipelineError: On the first entry that fails
        """
        index_path = Path(index_path)
        self.summary = RunSummary(index_path=index_path)

        try:
            entries = load_index(index_path)
        except SourceError as e:
            raise PipelineError(f"Failed to load index: {e}", cause=e) from e

        base_dir = index_path.parent
        atlas = Atlas()

        for position, entry in enumerate(entries):
            try:
                atlas.add(self.resolve_entry(entry, base_dir))
            except (SourceError, ValidationError) as e:
                raise PipelineError(
                    f"Index entry {position} (model_id \"{entry.model_id}\") failed: {e}",
                    entry_index=position,
                    model_id=entry.model_id,
                    cause=e,
                ) from e

        for result in self.validator.validate_atlas(atlas).values():
            for warning in result.warnings:
                self.logger.warning(warning)
                self.summary.warnings.append(warning)

        self.summary.models_packed = len(atlas)
        self.summary.frames_packed = sum(model.frame_count for model in atlas.models)
        self.summary.animations_packed = sum(len(model.animations) for model in atlas.models)
        return atlas

    def resolve_entry(self, entry: IndexEntry, base_dir: Path) -> AtlasEntry:
        """Read and normalize one index entry; file paths are relative to base_dir."""
        if isinstance(entry, SpriteSheetEntry):
            data = read_sprite_sheet(base_dir / entry.data_file)
            model = self.normalizer.normalize_sprite_sheet(data, entry.model_id, entry.anchor_point)
            return AtlasEntry(model=model, image_path=data.image_path)
        elif isinstance(entry, StaticImageEntry):
            image_path = base_dir / entry.image_file
            frame = read_static_image(
                image_path,
                duration=self.config.static_frame_duration,
                require_png=self.config.require_png,
            )
            model = self.normalizer.normalize_static_image(entry.model_id, frame)
            return AtlasEntry(model=model, image_path=image_path)
        else:
            raise TypeError(f"Unsupported index entry type: {type(entry).__name__}")

    def run(self, index_path: Union[str, Path], output_path: Union[str, Path]) -> Atlas:
        """
        Build the atlas and write it to output_path.

        Raises:
            PipelineError: If any entry fails or the archive cannot be written;
                no archive is left behind in that case
        """
        output_path = Path(output_path)
        atlas = self.build(index_path)

        self.logger.info(f"Packing {len(atlas)} models in {output_path}")
        try:
            self.writer.write(atlas, output_path)
        except (SourceError, ValidationError, ArchiveError, OSError) as e:
            raise PipelineError(
                f"Failed to write archive {output_path}: {e}",
                model_id=getattr(e, 'model_id', None),
                cause=e,
            ) from e

        self.summary.output_path = output_path
        self.summary.end_time = time.time()
        self.logger.info("Done!")
        return atlas
