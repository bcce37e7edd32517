"""Gemini implementation of thumbnail generation.

Two remote operations are wrapped:

* text-to-image synthesis through the Imagen ``generate_images`` endpoint,
* reference-guided generation/editing through ``generate_content`` on a
  Gemini image model.

Every failure is classified into the ``GenerationError`` taxonomy before it
leaves this module.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from thumbforge.config.settings import ThumbforgeConfig
from thumbforge.exceptions import (
    ContentBlockedError,
    EmptyResultError,
    GenerationError,
    InvalidRequestError,
    RateLimitError,
    UnexpectedResponseError,
    UnknownError,
)
from thumbforge.generation.requests import (
    MAX_REFERENCE_IMAGES,
    GenerationMode,
    GenerationRequest,
    require_prompt,
)
from thumbforge.utils.env import get_google_api_key

if TYPE_CHECKING:
    from thumbforge.imaging.normalizer import ReferenceImage

logger = logging.getLogger(__name__)

NORMAL_FINISH_REASON = "STOP"
RATE_LIMIT_MARKERS = ("429", "RESOURCE_EXHAUSTED")
RATE_LIMIT_MESSAGE = "You have reached the request limit (quota). Please wait a minute and try again."

# The reference model has no aspect-ratio parameter and tends to copy the
# aspect ratio of the references it is given.
ENHANCED_PROMPT_TEMPLATE = (
    "The final output image MUST have a {aspect_ratio} aspect ratio, perfect for a YouTube "
    "thumbnail. IMPORTANT: Ignore the aspect ratio of any reference images provided. "
    "Now, fulfill this request: {prompt}"
)


def enhance_prompt(prompt: str, aspect_ratio: str = "16:9") -> str:
    """Prepend the aspect-ratio instruction block to ``prompt``."""
    return ENHANCED_PROMPT_TEMPLATE.format(aspect_ratio=aspect_ratio, prompt=prompt)


def is_rate_limited(error: BaseException) -> bool:
    """True when ``error`` carries a quota-exhaustion marker."""
    if isinstance(error, genai_errors.APIError) and error.code == 429:  # noqa: PLR2004
        return True
    text = str(error)
    return any(marker in text for marker in RATE_LIMIT_MARKERS)


def classify_failure(error: BaseException, action: str) -> GenerationError:
    """Map an arbitrary failure to the generation error taxonomy."""
    if isinstance(error, GenerationError):
        return error
    if is_rate_limited(error):
        return RateLimitError(RATE_LIMIT_MESSAGE)
    detail = str(error).strip()
    if detail:
        return UnknownError(f"Failed to {action}: {detail}")
    return UnknownError(f"An unexpected error occurred while trying to {action}.")


def _reason_name(reason: Any) -> str | None:
    if reason is None:
        return None
    value = getattr(reason, "value", reason)
    return str(value) or None


def _as_bytes(data: Any) -> bytes | None:
    if isinstance(data, str):
        return base64.b64decode(data) if data else None
    if isinstance(data, (bytes, bytearray)):
        return bytes(data) if data else None
    return None


class GeminiThumbnailClient:
    """Generate 16:9 thumbnails with the Google GenAI SDK."""

    def __init__(self, client: genai.Client, config: ThumbforgeConfig | None = None) -> None:
        """Initialize the client.

        Args:
            client: Authenticated Google GenAI client.
            config: Model and image settings; defaults are used when omitted.

        """
        self._client = client
        self._config = config or ThumbforgeConfig()

    @property
    def config(self) -> ThumbforgeConfig:
        return self._config

    def generate(self, request: GenerationRequest) -> bytes:
        """Serve ``request`` with the operation its mode selects."""
        if request.mode is GenerationMode.TEXT_ONLY:
            return self.generate_from_text(request.prompt)
        return self.generate_with_references(request.prompt, request.reference_images)

    def generate_from_text(self, prompt: str) -> bytes:
        """Synthesize a single image from ``prompt``.

        Returns:
            Raw PNG bytes of the generated image.

        Raises:
            EmptyPromptError: If the prompt is blank (no remote call is made).
            GenerationError: Any classified remote failure.

        """
        prompt = require_prompt(prompt)
        model = self._config.models.text_to_image
        image_settings = self._config.image
        logger.info("Generating image with prompt (%s): %s", model, prompt)

        try:
            response = self._client.models.generate_images(
                model=model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=1,
                    output_mime_type=image_settings.output_mime_type,
                    aspect_ratio=image_settings.aspect_ratio,
                ),
            )

            generated = response.generated_images
            if not generated:
                msg = "The API did not return any image."
                raise EmptyResultError(msg)

            image = generated[0].image
            image_bytes = _as_bytes(image.image_bytes) if image is not None else None
            if not image_bytes:
                msg = "The received image data is empty."
                raise EmptyResultError(msg)
        except Exception as e:
            failure = classify_failure(e, "generate image")
            logger.error("Error calling text-to-image model %s: %s", model, e)
            if failure is e:
                raise
            raise failure from e

        return image_bytes

    def generate_with_references(self, prompt: str, references: Sequence[ReferenceImage]) -> bytes:
        """Generate or edit an image guided by one or two reference images.

        The references are sent in order, followed by the enhanced prompt.

        Raises:
            EmptyPromptError: If the prompt is blank.
            InvalidRequestError: If the reference count is outside 1..2.
            GenerationError: Any classified remote failure.

        """
        prompt = require_prompt(prompt)
        if not 1 <= len(references) <= MAX_REFERENCE_IMAGES:
            msg = f"Reference-guided generation needs 1 to {MAX_REFERENCE_IMAGES} images, got {len(references)}"
            raise InvalidRequestError(msg)

        model = self._config.models.reference
        enhanced = enhance_prompt(prompt, self._config.image.aspect_ratio)
        logger.info("Generating/editing image with %d reference(s) (%s): %s", len(references), model, enhanced)

        parts = [types.Part.from_bytes(data=ref.data, mime_type=ref.mime_type) for ref in references]
        parts.append(types.Part.from_text(text=enhanced))

        try:
            response = self._client.models.generate_content(
                model=model,
                contents=[types.Content(role="user", parts=parts)],
                config=types.GenerateContentConfig(response_modalities=[types.Modality.IMAGE]),
            )
            return self._extract_image(response)
        except Exception as e:
            failure = classify_failure(e, "generate/edit image with reference")
            logger.error("Error calling reference model %s: %s", model, e)
            if failure is e:
                raise
            raise failure from e

    def _extract_image(self, response: Any) -> bytes:
        candidates = getattr(response, "candidates", None) or []
        candidate = candidates[0] if candidates else None

        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is None:
                continue
            mime_type = getattr(inline, "mime_type", None) or ""
            data = _as_bytes(getattr(inline, "data", None))
            if mime_type.startswith("image/") and data:
                return data

        finish_reason = _reason_name(getattr(candidate, "finish_reason", None))
        if finish_reason and finish_reason != NORMAL_FINISH_REASON:
            raise ContentBlockedError(finish_reason)

        # The prompt itself can be blocked, in which case no candidate exists.
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = _reason_name(getattr(feedback, "block_reason", None))
        if candidate is None and block_reason:
            raise ContentBlockedError(block_reason)

        msg = "The API did not return an image in the expected format."
        raise UnexpectedResponseError(msg)


def create_thumbnail_client(
    api_key: str | None = None,
    config: ThumbforgeConfig | None = None,
) -> GeminiThumbnailClient:
    """Build a client from an explicit key or the environment.

    Raises:
        ConfigurationError: If no API key is available.

    """
    api_key = api_key or get_google_api_key()
    return GeminiThumbnailClient(genai.Client(api_key=api_key), config=config)
