"""Generation state and the interactive session built on it."""

from thumbforge.session.session import ThumbnailSession
from thumbforge.session.state import (
    Failed,
    Generating,
    GenerationState,
    Idle,
    Ready,
    begin_generation,
    complete_generation,
    fail_generation,
    start_over,
)

__all__ = [
    "Failed",
    "GenerationState",
    "Generating",
    "Idle",
    "Ready",
    "ThumbnailSession",
    "begin_generation",
    "complete_generation",
    "fail_generation",
    "start_over",
]
