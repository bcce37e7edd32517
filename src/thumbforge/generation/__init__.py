"""Thumbnail generation through the remote image service.

Requires GOOGLE_API_KEY (or GEMINI_API_KEY) environment variable.
"""

from thumbforge.generation.gemini_client import (
    GeminiThumbnailClient,
    classify_failure,
    create_thumbnail_client,
    enhance_prompt,
)
from thumbforge.generation.requests import (
    GenerationMode,
    GenerationRequest,
    build_generation_request,
)

__all__ = [
    "GeminiThumbnailClient",
    "GenerationMode",
    "GenerationRequest",
    "build_generation_request",
    "classify_failure",
    "create_thumbnail_client",
    "enhance_prompt",
]
