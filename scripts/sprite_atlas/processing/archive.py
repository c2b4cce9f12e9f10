"""
Archive writing: packs index.json and one image per model into a zip file.
"""

import json
import logging
import shutil
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..sources.base import ReadError
from .atlas import Atlas, AtlasEntry
from .validator import AtlasValidator

logger = logging.getLogger(__name__)

COMPRESSION = {
    "deflated": zipfile.ZIP_DEFLATED,
    "stored": zipfile.ZIP_STORED,
}


@dataclass
class ArchiveConfig:
    """Configuration for archive output."""
    manifest_name: str = "index.json"
    image_extension: str = ".png"
    json_indent: int = 2
    compression: str = "deflated"


class ArchiveWriter:
    """Writes an Atlas to a single zip archive."""

    def __init__(self, config: Optional[ArchiveConfig] = None, validator: Optional[AtlasValidator] = None):
        self.config = config or ArchiveConfig()
        self.validator = validator or AtlasValidator()

        if self.config.compression not in COMPRESSION:
            raise ArchiveError(f"Unknown compression method: {self.config.compression}")

    def image_name(self, entry: AtlasEntry) -> str:
        return f"{entry.model_id}{self.config.image_extension}"

    def render_manifest(self, atlas: Atlas) -> str:
        """Render the index.json document."""
        return json.dumps(atlas.to_dict(), indent=self.config.json_indent)

    def write(self, atlas: Atlas, output_path: Union[str, Path]) -> Path:
        """
        Write the manifest followed by each model's image, in atlas order.

        Every model is checked before anything is written. If writing fails
        part way, the incomplete archive is removed.

        Args:
            atlas: Models and their image paths
            output_path: Archive file to create

        Returns:
            Path of the written archive

        Raises:
            ValidationError: If a model has several frames and no animations
            ReadError: If an image file cannot be read
            ArchiveError: If the archive cannot be created
        """
        output_path = Path(output_path)

        for model in atlas.models:
            self.validator.check_model(model)

        try:
            archive = zipfile.ZipFile(output_path, 'w', compression=COMPRESSION[self.config.compression])
        except OSError as e:
            raise ArchiveError(f"Failed to open archive for writing: {output_path} ({e})") from e

        try:
            with archive:
                archive.writestr(self.config.manifest_name, self.render_manifest(atlas))
                for entry in atlas.entries:
                    self._write_image(archive, entry)
        except Exception:
            output_path.unlink(missing_ok=True)
            raise

        return output_path

    def _write_image(self, archive: zipfile.ZipFile, entry: AtlasEntry) -> None:
        model = entry.model
        if not model.animations:
            logger.info(f"Packing model_id={model.model_id} with one default \"idle\" animation")
        else:
            logger.info(
                f"Packing model_id={model.model_id} with {len(model.animations)} animations: "
                f"{', '.join(model.animation_ids)}"
            )

        try:
            source = open(entry.image_path, 'rb')
        except OSError as e:
            raise ReadError(f"Failed to open image file ({e.strerror or e})", entry.image_path) from e

        with source, archive.open(self.image_name(entry), 'w') as target:
            shutil.copyfileobj(source, target)


class ArchiveError(Exception):
    """Exception raised when the archive cannot be produced."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
