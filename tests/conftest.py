from __future__ import annotations

from types import SimpleNamespace

import pytest

from tests.helpers.genai_fakes import FakeModels


@pytest.fixture
def fake_models():
    return FakeModels()


@pytest.fixture
def fake_genai_client(fake_models):
    return SimpleNamespace(models=fake_models)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("GOOGLE_API_KEY", "GEMINI_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
