"""Single-user thumbnail session.

Holds the generation state, the attached reference image and the last prompt,
and drives the generation client. One request at a time; no persistence.
"""

from __future__ import annotations

import logging
from pathlib import Path

from thumbforge.exceptions import DecodeError, EmptyPromptError, GenerationError, InvalidRequestError
from thumbforge.generation.gemini_client import GeminiThumbnailClient
from thumbforge.generation.requests import GenerationMode, build_generation_request
from thumbforge.imaging.normalizer import ReferenceImage, ensure_png, normalize
from thumbforge.output import save_thumbnail, to_data_url
from thumbforge.session.state import (
    GenerationState,
    Idle,
    begin_generation,
    complete_generation,
    fail_generation,
    start_over,
)

logger = logging.getLogger(__name__)


class ThumbnailSession:
    """Create a thumbnail, then keep refining it."""

    def __init__(self, client: GeminiThumbnailClient) -> None:
        self._client = client
        self.state: GenerationState = Idle()
        self.reference: ReferenceImage | None = None
        self.prompt: str = ""
        self.error: str | None = None

    @property
    def is_refining(self) -> bool:
        return self.state.prior_result is not None

    @property
    def result(self) -> bytes | None:
        """The image currently on display (the last success)."""
        return self.state.prior_result

    @property
    def data_url(self) -> str | None:
        result = self.result
        return to_data_url(result, self._client.config.image.output_mime_type) if result else None

    def seed_result(self, image: bytes) -> None:
        """Resume refining an image produced earlier.

        Raises:
            DecodeError: If ``image`` is not a readable raster image.

        """
        self.state = complete_generation(begin_generation(Idle()), ensure_png(image))

    def attach_reference(self, source: bytes, mime_type: str | None) -> ReferenceImage | None:
        """Normalize and attach a user-supplied reference image.

        Decode failures are recorded in ``error``; generation state is untouched.
        """
        try:
            reference = normalize(source, mime_type, self._client.config.image)
        except DecodeError as e:
            logger.warning("Rejected reference image: %s", e)
            self.error = str(e)
            return None
        self.reference = reference
        self.error = None
        return reference

    def remove_reference(self) -> None:
        self.reference = None

    def start_over(self) -> None:
        self.state = start_over(self.state)
        self.reference = None
        self.prompt = ""
        self.error = None

    def generate(self, prompt: str | None = None) -> bytes | None:
        """Run one generation for ``prompt`` (or the stored prompt).

        Returns the new image, or None when the request was rejected or failed;
        in both cases ``error`` holds the message to show.
        """
        if prompt is not None:
            self.prompt = prompt

        refining = self.is_refining
        references = [self.reference] if self.reference else []
        try:
            request = build_generation_request(self.prompt, references, self.state.prior_result)
        except EmptyPromptError:
            self.error = (
                "Please describe the adjustment you want."
                if refining
                else "Please enter a description for the thumbnail."
            )
            return None

        self.state = begin_generation(self.state)
        self.error = None
        logger.info(
            "Starting %s generation with %d reference image(s)",
            "refinement" if refining else request.mode.value,
            len(request.reference_images),
        )

        try:
            image = self._client.generate(request)
        except GenerationError as e:
            self.error = str(e) or "An unknown error occurred while generating the image."
            self.state = fail_generation(self.state, self.error)
            return None
        except BaseException:
            self.error = "Generation was interrupted."
            self.state = fail_generation(self.state, self.error)
            raise

        self.state = complete_generation(self.state, image)
        if refining:
            self.prompt = ""
        return image

    def save(self, directory: Path, filename: str | None = None) -> Path:
        """Write the current image to ``directory`` under the download filename."""
        result = self.result
        if result is None:
            msg = "There is no generated thumbnail to save."
            raise InvalidRequestError(msg)
        return save_thumbnail(
            result,
            directory,
            filename or self._client.config.output.download_filename,
        )

    @property
    def mode(self) -> GenerationMode:
        """Mode the next generation will use."""
        if self.is_refining or self.reference is not None:
            return GenerationMode.WITH_REFERENCES
        return GenerationMode.TEXT_ONLY
