"""
Shared pytest fixtures for Design2Code tests.

Provides:
- A real PNG payload built with Pillow
- FakeBackend, a scripted stand-in for a vendor backend
- A TestClient wired to the fake through dependency overrides
"""

import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from config import Settings
from errors import ProviderError
from server import app, get_provider_backend, get_settings


class FakeBackend:
    """Answers from a {(model, mode): text | exception} script; anything unscripted fails."""

    name = "gemini"

    def __init__(self, script=None, configured=True):
        self.script = script or {}
        self.configured = configured
        self.calls = []

    async def generate(self, model, system, user_text, image=None, max_tokens=None):
        mode = "vision" if image is not None else "text-only"
        self.calls.append((model, mode))
        outcome = self.script.get((model, mode))
        if outcome is None:
            outcome = ProviderError(self.name, f"{model} unavailable", status_code=500)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def png_bytes() -> bytes:
    img = Image.effect_noise((32, 32), 64).convert("RGB")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def settings() -> Settings:
    return Settings(provider="gemini", api_key="test-key", models=("gemini-2.5-flash", "gemini-2.0-flash"))


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(settings, backend):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_provider_backend] = lambda: backend
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
