"""
Model normalization: converts sprite-sheet and static-image sources into uniform models.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..sources.base import Point, SourceFrame, SourceTag, SpriteSheetData
from .atlas import UniformAnimation, UniformFrame, UniformModel
from .validator import AtlasValidator, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class NormalizationConfig:
    """Configuration for model normalization."""
    animation_prefix: str = "a_"
    default_animation: str = "idle"


class ModelNormalizer:
    """Builds UniformModel records from parsed sources."""

    def __init__(self, config: Optional[NormalizationConfig] = None, validator: Optional[AtlasValidator] = None):
        """
        Initialize normalizer.

        Args:
            config: Animation naming settings
            validator: Validator used for tag range checks
        """
        self.config = config or NormalizationConfig()
        self.validator = validator or AtlasValidator()

    def extract_animations(self, tags: Iterable[SourceTag]) -> List[UniformAnimation]:
        """
        Turn prefixed tags into animations, in tag order.

        Tags without the animation prefix are ignored. Each animation plays the
        tag's inclusive frame range in ascending order.
        """
        prefix = self.config.animation_prefix
        animations = []

        for tag in tags:
            if not tag.name.startswith(prefix):
                continue
            animations.append(UniformAnimation(
                animation_id=tag.name[len(prefix):],
                frames=tuple(range(tag.start, tag.end + 1)),
            ))

        return animations

    def default_animation(self) -> UniformAnimation:
        return UniformAnimation(animation_id=self.config.default_animation, frames=(0,))

    def normalize_sprite_sheet(self, data: SpriteSheetData, model_id: str, anchor_point: Point) -> UniformModel:
        """
        Normalize a sprite-sheet model.

        A sheet without animation tags gets the default animation only when it
        has a single frame.

        Raises:
            ValidationError: If a multi-frame sheet declares no animations, or
                a tag range is out of bounds while bounds checking is enabled
        """
        self.validator.check_tags(model_id, data.tags, data.frame_count)
        animations = self.extract_animations(data.tags)

        if not animations:
            if data.frame_count > 1:
                raise ValidationError(
                    f"model_id \"{model_id}\" has {data.frame_count} frames but 0 animations, "
                    f"can't use default \"{self.config.default_animation}\" with 1 frame",
                    model_id=model_id,
                    frame_count=data.frame_count,
                    animation_count=0,
                )
            logger.debug(f"Model {model_id} has no animation tags, using default \"{self.config.default_animation}\"")
            animations = [self.default_animation()]

        return UniformModel(
            model_id=model_id,
            anchor_point=anchor_point,
            frames=tuple(UniformFrame.from_source(frame) for frame in data.frames),
            animations=tuple(animations),
        )

    def normalize_static_image(self, model_id: str, frame: SourceFrame) -> UniformModel:
        """Normalize a static image: one frame, the default animation, anchor at the origin."""
        return UniformModel(
            model_id=model_id,
            anchor_point=Point(0, 0),
            frames=(UniformFrame.from_source(frame),),
            animations=(self.default_animation(),),
        )
