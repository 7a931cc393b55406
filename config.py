import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
ACCEPTED_MIME_PREFIX = "image/"
CLIENT_TIMEOUT_SECONDS = 120

DEFAULT_MODELS = {
    "gemini": ("gemini-2.5-flash", "gemini-2.0-flash"),
    "openai": ("gpt-4o", "gpt-4o-mini"),
}

API_KEY_VARS = {"gemini": "GEMINI_API_KEY", "openai": "OPENAI_API_KEY"}


@dataclass(frozen=True)
class Settings:
    provider: str = "gemini"
    api_key: str = ""
    models: tuple = DEFAULT_MODELS["gemini"]
    timeout: float = 45.0
    # whole model chain must finish inside the client budget
    deadline: float = 100.0
    max_tokens: int = 4000
    client_url: str = "http://localhost:3000"
    port: int = 5000

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    @property
    def api_key_var(self) -> str:
        return API_KEY_VARS[self.provider]


def _parse_models(raw: str, provider: str) -> tuple:
    models = tuple(m.strip() for m in raw.split(",") if m.strip())
    return models or DEFAULT_MODELS[provider]


def load_settings(environ=None) -> Settings:
    """Build Settings from the environment (a .env file is read first if present)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    provider = environ.get("AI_PROVIDER", "gemini").strip().lower()
    if provider not in DEFAULT_MODELS:
        raise ValueError(f"Unsupported AI_PROVIDER: {provider!r} (expected one of {', '.join(DEFAULT_MODELS)})")

    return Settings(
        provider=provider,
        api_key=environ.get(API_KEY_VARS[provider], "").strip(),
        models=_parse_models(environ.get("AI_MODELS", ""), provider),
        timeout=float(environ.get("AI_TIMEOUT_SECONDS", "45")),
        deadline=min(float(environ.get("AI_DEADLINE_SECONDS", "100")), CLIENT_TIMEOUT_SECONDS - 5),
        max_tokens=int(environ.get("AI_MAX_TOKENS", "4000")),
        client_url=environ.get("CLIENT_URL", "http://localhost:3000"),
        port=int(environ.get("PORT", "5000")),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
