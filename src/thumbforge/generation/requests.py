"""Generation requests and mode selection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from thumbforge.exceptions import EmptyPromptError, InvalidRequestError
from thumbforge.imaging.normalizer import PNG_MIME_TYPE, ReferenceImage

MAX_REFERENCE_IMAGES = 2


class GenerationMode(str, Enum):
    """Which remote operation serves a request."""

    TEXT_ONLY = "text_only"
    WITH_REFERENCES = "with_references"


@dataclass(frozen=True)
class GenerationRequest:
    """A single prompt plus the ordered images sent alongside it."""

    prompt: str
    mode: GenerationMode
    reference_images: tuple[ReferenceImage, ...] = field(default_factory=tuple)


def require_prompt(prompt: str | None) -> str:
    """Return the trimmed prompt or raise EmptyPromptError."""
    trimmed = (prompt or "").strip()
    if not trimmed:
        msg = "Please enter a description for the thumbnail."
        raise EmptyPromptError(msg)
    return trimmed


def build_generation_request(
    prompt: str,
    reference_images: Sequence[ReferenceImage] = (),
    prior_result: bytes | None = None,
) -> GenerationRequest:
    """Select the generation mode for the current state.

    When refining, ``prior_result`` is always sent first (as PNG, the format
    this system produces), followed by any user-supplied references. Without
    a prior result or references the request is text-only.
    """
    trimmed = require_prompt(prompt)

    images: list[ReferenceImage] = []
    if prior_result is not None:
        images.append(ReferenceImage(data=prior_result, mime_type=PNG_MIME_TYPE))
    images.extend(reference_images)

    if len(images) > MAX_REFERENCE_IMAGES:
        msg = f"At most {MAX_REFERENCE_IMAGES} reference images are supported, got {len(images)}"
        raise InvalidRequestError(msg)

    if not images:
        return GenerationRequest(prompt=trimmed, mode=GenerationMode.TEXT_ONLY)
    return GenerationRequest(
        prompt=trimmed,
        mode=GenerationMode.WITH_REFERENCES,
        reference_images=tuple(images),
    )
