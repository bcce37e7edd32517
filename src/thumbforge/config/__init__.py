"""Configuration for Thumbforge."""

from thumbforge.config.settings import (
    ImageSettings,
    ModelSettings,
    OutputSettings,
    ThumbforgeConfig,
    load_thumbforge_config,
)

__all__ = [
    "ImageSettings",
    "ModelSettings",
    "OutputSettings",
    "ThumbforgeConfig",
    "load_thumbforge_config",
]
