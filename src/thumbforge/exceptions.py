"""Centralized exceptions for the Thumbforge application."""

from __future__ import annotations


class ThumbforgeError(Exception):
    """Base exception for all Thumbforge errors."""


class ConfigurationError(ThumbforgeError):
    """Raised when the process is not configured correctly (e.g. missing API key)."""


class InvalidRequestError(ThumbforgeError, ValueError):
    """Raised when a generation request is rejected before any remote call."""


class EmptyPromptError(InvalidRequestError):
    """Raised when the prompt is empty after trimming."""


class DecodeError(ThumbforgeError):
    """Raised when an uploaded file cannot be decoded as a raster image."""


class GenerationError(ThumbforgeError):
    """Base exception for failures of the remote image-generation service."""


class EmptyResultError(GenerationError):
    """Raised when the service returns no images or an empty payload."""


class RateLimitError(GenerationError):
    """Raised when the service signals quota exhaustion."""


class ContentBlockedError(GenerationError):
    """Raised when generation stopped with a non-normal finish reason."""

    def __init__(self, finish_reason: str) -> None:
        self.finish_reason = finish_reason
        super().__init__(f"Image generation was interrupted. Reason: {finish_reason}")


class UnexpectedResponseError(GenerationError):
    """Raised when the response does not contain a recognizable image part."""


class UnknownError(GenerationError):
    """Raised for any other failure, including transport errors."""
