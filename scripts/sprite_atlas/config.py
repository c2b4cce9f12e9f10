"""
Configuration management for the atlas packer.
Supports TOML and JSON configuration files with environment overrides and validation.
"""

import os
import json
from dataclasses import dataclass
from typing import Dict, List, Any, Union
from pathlib import Path

import toml


ENV_PREFIX = "SPRITE_ATLAS_"
COMPRESSION_METHODS = ("deflated", "stored")


@dataclass
class PackerConfig:
    """Main configuration class for the atlas packer."""

    # Animation settings
    animation_prefix: str = "a_"
    default_animation: str = "idle"

    # Frame settings
    static_frame_duration: int = 1000
    check_frame_bounds: bool = False

    # Image settings
    require_png: bool = True

    # Archive settings
    manifest_name: str = "index.json"
    image_extension: str = ".png"
    json_indent: int = 2
    compression: str = "deflated"

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "PackerConfig":
        """Load configuration from TOML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == '.toml':
            return cls._from_toml(config_path)
        elif config_path.suffix.lower() == '.json':
            return cls._from_json(config_path)
        else:
            raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

    @classmethod
    def _from_toml(cls, config_path: Path) -> "PackerConfig":
        """Load configuration from TOML file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            data = toml.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_json(cls, config_path: Path) -> "PackerConfig":
        """Load configuration from JSON file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "PackerConfig":
        """Create configuration from dictionary."""
        config_data = {}

        if 'animations' in data:
            animations = data['animations']
            config_data['animation_prefix'] = animations.get('prefix', 'a_')
            config_data['default_animation'] = animations.get('default_id', 'idle')

        if 'frames' in data:
            frames = data['frames']
            config_data['static_frame_duration'] = frames.get('static_duration', 1000)
            config_data['check_frame_bounds'] = frames.get('check_bounds', False)

        if 'images' in data:
            config_data['require_png'] = data['images'].get('require_png', True)

        if 'archive' in data:
            archive = data['archive']
            config_data['manifest_name'] = archive.get('manifest_name', 'index.json')
            config_data['image_extension'] = archive.get('image_extension', '.png')
            config_data['json_indent'] = archive.get('indent', 2)
            config_data['compression'] = archive.get('compression', 'deflated')

        return cls(**config_data)

    @classmethod
    def default(cls) -> "PackerConfig":
        """Create default configuration with environment variable overrides."""
        return cls.apply_env_overrides(cls())

    @classmethod
    def apply_env_overrides(cls, config: "PackerConfig") -> "PackerConfig":
        """Apply environment variable overrides to configuration."""

        if os.getenv('SPRITE_ATLAS_ANIMATION_PREFIX'):
            config.animation_prefix = os.getenv('SPRITE_ATLAS_ANIMATION_PREFIX', 'a_')

        if os.getenv('SPRITE_ATLAS_DEFAULT_ANIMATION'):
            config.default_animation = os.getenv('SPRITE_ATLAS_DEFAULT_ANIMATION', 'idle')

        if os.getenv('SPRITE_ATLAS_STATIC_FRAME_DURATION'):
            config.static_frame_duration = int(os.getenv('SPRITE_ATLAS_STATIC_FRAME_DURATION', '1000'))

        if os.getenv('SPRITE_ATLAS_CHECK_FRAME_BOUNDS'):
            config.check_frame_bounds = os.getenv('SPRITE_ATLAS_CHECK_FRAME_BOUNDS', 'false').lower() == 'true'

        if os.getenv('SPRITE_ATLAS_REQUIRE_PNG'):
            config.require_png = os.getenv('SPRITE_ATLAS_REQUIRE_PNG', 'true').lower() == 'true'

        if os.getenv('SPRITE_ATLAS_MANIFEST_NAME'):
            config.manifest_name = os.getenv('SPRITE_ATLAS_MANIFEST_NAME', 'index.json')

        if os.getenv('SPRITE_ATLAS_IMAGE_EXTENSION'):
            config.image_extension = os.getenv('SPRITE_ATLAS_IMAGE_EXTENSION', '.png')

        if os.getenv('SPRITE_ATLAS_JSON_INDENT'):
            config.json_indent = int(os.getenv('SPRITE_ATLAS_JSON_INDENT', '2'))

        if os.getenv('SPRITE_ATLAS_COMPRESSION'):
            config.compression = os.getenv('SPRITE_ATLAS_COMPRESSION', 'deflated').lower()

        return config

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.animation_prefix:
            errors.append("animation_prefix must not be empty")

        if not self.default_animation:
            errors.append("default_animation must not be empty")

        if self.static_frame_duration <= 0:
            errors.append("static_frame_duration must be positive")

        if self.json_indent < 0:
            errors.append("json_indent must not be negative")

        if self.compression not in COMPRESSION_METHODS:
            errors.append(f"compression must be one of {', '.join(COMPRESSION_METHODS)}")

        if not self.manifest_name:
            errors.append("manifest_name must not be empty")

        if not self.image_extension.startswith('.'):
            errors.append("image_extension must start with '.'")

        return errors

    def validation_config(self) -> "ValidationConfig":
        return ValidationConfig(check_frame_bounds=self.check_frame_bounds)


@dataclass
class ValidationConfig:
    """Configuration for model validation."""
    check_frame_bounds: bool = False
