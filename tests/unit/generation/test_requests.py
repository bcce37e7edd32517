import pytest

from thumbforge.exceptions import EmptyPromptError, InvalidRequestError
from thumbforge.generation.requests import GenerationMode, build_generation_request
from thumbforge.imaging.normalizer import ReferenceImage

R = ReferenceImage(data=b"user-ref", mime_type="image/jpeg")
P = b"prior-result"


def test_no_prior_and_no_references_is_text_only():
    request = build_generation_request("a cat")

    assert request.mode is GenerationMode.TEXT_ONLY
    assert request.reference_images == ()


def test_user_reference_only():
    request = build_generation_request("a cat", [R])

    assert request.mode is GenerationMode.WITH_REFERENCES
    assert request.reference_images == (R,)


def test_refining_injects_prior_result_as_png():
    request = build_generation_request("make it blue", [], prior_result=P)

    assert request.mode is GenerationMode.WITH_REFERENCES
    assert request.reference_images == (ReferenceImage(data=P, mime_type="image/png"),)


def test_refining_with_reference_puts_prior_first():
    request = build_generation_request("make it blue", [R], prior_result=P)

    assert request.mode is GenerationMode.WITH_REFERENCES
    assert [img.data for img in request.reference_images] == [P, R.data]


def test_prompt_is_trimmed():
    assert build_generation_request("  a cat \n").prompt == "a cat"


def test_blank_prompt_is_rejected():
    with pytest.raises(EmptyPromptError):
        build_generation_request("   ", [R])


def test_too_many_references_are_rejected():
    with pytest.raises(InvalidRequestError):
        build_generation_request("a cat", [R, R], prior_result=P)
