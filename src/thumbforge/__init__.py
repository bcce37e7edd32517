"""Thumbforge: generate and refine 16:9 thumbnails with Gemini image models."""

from thumbforge.exceptions import ThumbforgeError
from thumbforge.generation import GeminiThumbnailClient, build_generation_request, create_thumbnail_client
from thumbforge.imaging import ReferenceImage, normalize
from thumbforge.session import ThumbnailSession

__version__ = "0.1.0"

__all__ = [
    "GeminiThumbnailClient",
    "ReferenceImage",
    "ThumbforgeError",
    "ThumbnailSession",
    "build_generation_request",
    "create_thumbnail_client",
    "normalize",
]
