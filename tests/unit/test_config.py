import logging

import pytest
from pydantic import ValidationError
from rich.logging import RichHandler

from thumbforge.config.settings import ImageSettings, ThumbforgeConfig
from thumbforge.exceptions import ConfigurationError
from thumbforge.logging_setup import configure_logging
from thumbforge.utils.env import get_google_api_key


def test_defaults():
    config = ThumbforgeConfig()

    assert config.models.text_to_image == "imagen-4.0-generate-001"
    assert config.models.reference == "gemini-2.5-flash-image"
    assert (config.image.width, config.image.height) == (1280, 720)
    assert config.image.aspect_ratio == "16:9"
    assert config.output.download_filename == "generated-thumbnail.png"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("THUMBFORGE_MODELS__REFERENCE", "gemini-test-image")
    monkeypatch.setenv("THUMBFORGE_IMAGE__JPEG_QUALITY", "80")

    config = ThumbforgeConfig()

    assert config.models.reference == "gemini-test-image"
    assert config.image.jpeg_quality == 80


@pytest.mark.parametrize(
    "kwargs",
    [{"width": 1000, "height": 1000}, {"aspect_ratio": "wide"}, {"jpeg_quality": 0}],
)
def test_invalid_image_settings(kwargs):
    with pytest.raises(ValidationError):
        ImageSettings(**kwargs)


def test_api_key_prefers_google_key(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "gemini")
    assert get_google_api_key() == "gemini"

    clean_env.setenv("GOOGLE_API_KEY", "google")
    assert get_google_api_key() == "google"


def test_missing_api_key(clean_env):
    with pytest.raises(ConfigurationError):
        get_google_api_key()


def test_configure_logging_is_idempotent(monkeypatch):
    monkeypatch.setenv("THUMBFORGE_LOG_LEVEL", "debug")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_logging()
        configure_logging()

        rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
