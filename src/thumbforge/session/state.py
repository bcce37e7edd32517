"""Immutable generation state and its transitions.

A session is always in exactly one of four states::

    Idle --begin--> Generating --complete--> Ready
                         |                     |
                         +------fail-----> Failed
    (any) --start_over--> Idle

Refining starts from ``Ready`` (or from a ``Failed`` state that still holds a
prior result), so a failed refinement never loses the image being refined.
"""

from __future__ import annotations

from dataclasses import dataclass

from thumbforge.exceptions import InvalidRequestError


@dataclass(frozen=True)
class Idle:
    """Nothing generated yet."""

    @property
    def prior_result(self) -> bytes | None:
        return None


@dataclass(frozen=True)
class Generating:
    """A request is outstanding."""

    prior_result: bytes | None = None


@dataclass(frozen=True)
class Ready:
    """The latest generation succeeded."""

    result: bytes

    @property
    def prior_result(self) -> bytes | None:
        return self.result


@dataclass(frozen=True)
class Failed:
    """The latest generation failed; the image being refined, if any, is kept."""

    message: str
    prior_result: bytes | None = None


GenerationState = Idle | Generating | Ready | Failed


def begin_generation(state: GenerationState) -> Generating:
    if isinstance(state, Generating):
        msg = "A generation is already in progress."
        raise InvalidRequestError(msg)
    return Generating(prior_result=state.prior_result)


def complete_generation(state: GenerationState, result: bytes) -> Ready:
    if not isinstance(state, Generating):
        msg = f"Cannot complete a generation from state {type(state).__name__}"
        raise InvalidRequestError(msg)
    return Ready(result=result)


def fail_generation(state: GenerationState, message: str) -> Failed:
    if not isinstance(state, Generating):
        msg = f"Cannot fail a generation from state {type(state).__name__}"
        raise InvalidRequestError(msg)
    return Failed(message=message, prior_result=state.prior_result)


def start_over(_state: GenerationState) -> Idle:
    return Idle()
