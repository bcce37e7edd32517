"""Configuration models for Thumbforge.

Supports environment variable overrides with the pattern
THUMBFORGE_SECTION__KEY (e.g., THUMBFORGE_MODELS__REFERENCE).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ModelSettings(BaseModel):
    """Remote model names used for each generation operation."""

    text_to_image: str = Field(
        default="imagen-4.0-generate-001",
        description="Model for text-to-image synthesis",
    )
    reference: str = Field(
        default="gemini-2.5-flash-image",
        description="Model for reference-guided generation and edits",
    )


class ImageSettings(BaseModel):
    """Canonical raster produced by the normalizer and requested from the service."""

    width: int = Field(default=1280, gt=0, description="Canonical width in pixels")
    height: int = Field(default=720, gt=0, description="Canonical height in pixels")
    aspect_ratio: str = Field(default="16:9", description="Aspect ratio requested from the service")
    jpeg_quality: int = Field(default=95, ge=1, le=100, description="Quality for JPEG re-encoding")
    output_mime_type: str = Field(default="image/png", description="Mime type of generated images")

    @field_validator("aspect_ratio")
    @classmethod
    def validate_aspect_ratio(cls, v: str) -> str:
        parts = v.split(":")
        if len(parts) != 2 or not all(p.isdigit() and int(p) > 0 for p in parts):
            msg = f"Invalid aspect ratio {v!r}, expected '<width>:<height>' (e.g. '16:9')"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def check_canvas_matches_ratio(self) -> ImageSettings:
        ratio_w, ratio_h = (int(p) for p in self.aspect_ratio.split(":"))
        if self.width * ratio_h != self.height * ratio_w:
            msg = f"Canvas {self.width}x{self.height} is not {self.aspect_ratio}"
            raise ValueError(msg)
        return self


class OutputSettings(BaseModel):
    """Where and how generated thumbnails are handed to the user."""

    download_filename: str = Field(
        default="generated-thumbnail.png",
        description="Fixed filename used when saving a generated thumbnail",
    )


class ThumbforgeConfig(BaseSettings):
    """Root configuration for Thumbforge."""

    models: ModelSettings = Field(default_factory=ModelSettings, description="Remote model names")
    image: ImageSettings = Field(default_factory=ImageSettings, description="Canonical image settings")
    output: OutputSettings = Field(default_factory=OutputSettings, description="Output settings")

    model_config = SettingsConfigDict(
        env_prefix="THUMBFORGE_",
        env_nested_delimiter="__",
        extra="ignore",
    )


def load_thumbforge_config() -> ThumbforgeConfig:
    """Load configuration from the environment (and defaults)."""
    return ThumbforgeConfig()
