"""
Consistency checks for normalized models.

The normalizer relies on these checks while building models, and the archive
writer runs them again on every model it packs.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..config import ValidationConfig
from ..sources.base import SourceTag
from .atlas import Atlas, UniformModel


@dataclass
class ValidationResult:
    """Result of model validation."""
    model_id: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no errors)."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)


class AtlasValidator:
    """Checks frame and animation consistency of uniform models."""

    def __init__(self, config: Optional[ValidationConfig] = None):
        self.config = config or ValidationConfig()

    def validate_model(self, model: UniformModel) -> ValidationResult:
        """
        Validate a single model.

        A model without animations may hold at most one frame. Frame indices
        are only range-checked when check_frame_bounds is enabled.
        """
        result = ValidationResult(model.model_id)

        if not model.animations and model.frame_count > 1:
            result.add_error(
                f"model_id \"{model.model_id}\" has {model.frame_count} frames but 0 animations"
            )

        if self.config.check_frame_bounds:
            for animation in model.animations:
                out_of_range = [i for i in animation.frames if i >= model.frame_count]
                if out_of_range:
                    result.add_error(
                        f"animation \"{animation.animation_id}\" of model_id \"{model.model_id}\" "
                        f"references frames {out_of_range} but the model has {model.frame_count} frames"
                    )

        return result

    def check_model(self, model: UniformModel) -> None:
        """
        Raise if the model fails validation.

        Raises:
            ValidationError: With the model id and observed counts
        """
        result = self.validate_model(model)
        if not result.is_valid:
            raise ValidationError(
                "; ".join(result.errors),
                model_id=model.model_id,
                frame_count=model.frame_count,
                animation_count=len(model.animations),
            )

    def check_tags(self, model_id: str, tags: Iterable[SourceTag], frame_count: int) -> None:
        """Reject tag ranges that fall outside the sprite sheet (bounds checking only)."""
        if not self.config.check_frame_bounds:
            return

        for tag in tags:
            if tag.start > tag.end or tag.end >= frame_count:
                raise ValidationError(
                    f"tag \"{tag.name}\" of model_id \"{model_id}\" spans frames {tag.start}..{tag.end} "
                    f"but the model has {frame_count} frames",
                    model_id=model_id,
                    frame_count=frame_count,
                )

    def validate_atlas(self, atlas: Atlas) -> Dict[str, ValidationResult]:
        """Validate every model; repeated model ids are reported as warnings."""
        results: Dict[str, ValidationResult] = {}

        for model in atlas.models:
            result = self.validate_model(model)
            existing = results.get(model.model_id)
            if existing is None:
                results[model.model_id] = result
                continue

            existing.errors.extend(result.errors)
            existing.add_warning(f"model_id \"{model.model_id}\" appears more than once in the index")

        return results


class ValidationError(Exception):
    """Exception raised when a model's frames and animations are inconsistent."""

    def __init__(
        self,
        message: str,
        model_id: Optional[str] = None,
        frame_count: Optional[int] = None,
        animation_count: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.model_id = model_id
        self.frame_count = frame_count
        self.animation_count = animation_count
