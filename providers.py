"""Vendor backends. Each one turns (model, system prompt, user text, image) into raw text."""

import logging

import httpx

from config import Settings
from errors import (
    CapabilityError,
    ProviderAuthError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderQuotaError,
    ProviderTimeoutError,
)
from images import InlineImage

log = logging.getLogger("design2code")

CAPABILITY_HINTS = ("image", "vision", "multimodal", "not supported", "unsupported", "inline_data", "image_url")
QUOTA_CODES = ("insufficient_quota", "rate_limit_exceeded", "RESOURCE_EXHAUSTED")


def classify_error(provider: str, r: httpx.Response, with_image: bool) -> ProviderError:
    """Map a non-200 vendor response onto the error taxonomy."""
    try:
        err = r.json().get("error", {})
        if not isinstance(err, dict):
            err = {"message": str(err)}
    except (ValueError, AttributeError):
        err = {}
    message = err.get("message") or r.text[:200] or f"HTTP {r.status_code}"
    # Gemini puts the numeric status in "code" and the symbolic one in "status"
    code = str(err.get("status") or err.get("code") or err.get("type") or "")

    if r.status_code in (401, 403) or code == "invalid_api_key":
        return ProviderAuthError(provider, message, status_code=401, code=code)
    if r.status_code == 429 or code in QUOTA_CODES:
        return ProviderQuotaError(provider, message, status_code=429, code=code)
    if with_image and r.status_code in (400, 404, 415, 422) and any(h in message.lower() for h in CAPABILITY_HINTS):
        return CapabilityError(provider, message, status_code=r.status_code, code=code)
    return ProviderError(provider, message, status_code=r.status_code, code=code)


class Backend:
    name = ""

    def __init__(self, api_key: str, timeout: float = 45.0, max_tokens: int = 4000, transport=None):
        self.api_key = api_key
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, model: str, system: str, user_text: str,
                       image: InlineImage = None, max_tokens: int = None) -> str:
        if not self.configured:
            raise ProviderNotConfiguredError(self.name, "API key not configured")
        url, headers, payload = self.build_request(model, system, user_text, image, max_tokens or self.max_tokens)
        data = await self._post(url, headers, payload, with_image=image is not None)
        try:
            text = self.extract_text(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderError(self.name, f"malformed response ({type(e).__name__}: {e})") from e
        if not text or not text.strip():
            raise ProviderError(self.name, "empty response")
        return text

    async def _post(self, url: str, headers: dict, payload: dict, with_image: bool) -> dict:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as c:
                r = await c.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(self.name, f"request timed out after {self.timeout:g}s") from e
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"network error: {e}") from e

        if r.status_code != 200:
            raise classify_error(self.name, r, with_image)
        try:
            data = r.json()
        except ValueError as e:
            raise ProviderError(self.name, "response was not valid JSON", status_code=502) from e
        if not isinstance(data, dict):
            raise ProviderError(self.name, f"expected a JSON object, got {type(data).__name__}", status_code=502)
        return data

    def build_request(self, model, system, user_text, image, max_tokens):
        raise NotImplementedError

    def extract_text(self, data: dict) -> str:
        raise NotImplementedError


class GeminiBackend(Backend):
    name = "gemini"
    base_url = "https://generativelanguage.googleapis.com/v1beta/models"

    def build_request(self, model, system, user_text, image, max_tokens):
        parts = []
        if image is not None:
            parts.append(image.gemini_part())
        parts.append({"text": user_text})
        payload = {
            "system_instruction": {"parts": [{"text": system}]},
            "contents": [{"parts": parts}],
            "generationConfig": {"maxOutputTokens": max_tokens},
        }
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        return f"{self.base_url}/{model}:generateContent", headers, payload

    def extract_text(self, data):
        candidates = data.get("candidates") or []
        if not candidates:
            reason = data.get("promptFeedback", {}).get("blockReason")
            raise ProviderError(self.name, f"prompt blocked: {reason}" if reason else "no candidates returned")
        parts = candidates[0]["content"]["parts"]
        return "".join(p.get("text", "") for p in parts)


class OpenAIBackend(Backend):
    name = "openai"
    url = "https://api.openai.com/v1/chat/completions"

    def build_request(self, model, system, user_text, image, max_tokens):
        content = [{"type": "text", "text": user_text}]
        if image is not None:
            content.append(image.openai_part())
        payload = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": content},
            ],
        }
        headers = {"Content-Type": "application/json", "Authorization": f"Bearer {self.api_key}"}
        return self.url, headers, payload

    def extract_text(self, data):
        return data["choices"][0]["message"]["content"]


BACKENDS = {"gemini": GeminiBackend, "openai": OpenAIBackend}


def get_backend(settings: Settings, transport=None) -> Backend:
    cls = BACKENDS[settings.provider]
    return cls(settings.api_key, timeout=settings.timeout, max_tokens=settings.max_tokens, transport=transport)
