import pytest

from thumbforge.exceptions import InvalidRequestError
from thumbforge.session.state import (
    Failed,
    Generating,
    Idle,
    Ready,
    begin_generation,
    complete_generation,
    fail_generation,
    start_over,
)


def test_successful_cycle():
    generating = begin_generation(Idle())
    assert generating == Generating(prior_result=None)

    assert complete_generation(generating, b"img") == Ready(result=b"img")


def test_refinement_carries_prior_result():
    generating = begin_generation(Ready(result=b"v1"))

    assert generating.prior_result == b"v1"
    assert complete_generation(generating, b"v2") == Ready(result=b"v2")


def test_failed_refinement_keeps_prior_result():
    failed = fail_generation(begin_generation(Ready(result=b"v1")), "boom")

    assert failed == Failed(message="boom", prior_result=b"v1")
    assert begin_generation(failed).prior_result == b"v1"


def test_failed_first_generation_has_no_prior():
    assert fail_generation(begin_generation(Idle()), "boom").prior_result is None


def test_cannot_begin_while_generating():
    with pytest.raises(InvalidRequestError, match="already in progress"):
        begin_generation(Generating())


@pytest.mark.parametrize("state", [Idle(), Ready(result=b"x"), Failed(message="m")])
def test_complete_and_fail_require_generating(state):
    with pytest.raises(InvalidRequestError):
        complete_generation(state, b"img")
    with pytest.raises(InvalidRequestError):
        fail_generation(state, "boom")


@pytest.mark.parametrize("state", [Idle(), Generating(b"x"), Ready(result=b"x"), Failed(message="m", prior_result=b"x")])
def test_start_over_always_returns_idle(state):
    assert start_over(state) == Idle()
