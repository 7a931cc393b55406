"""Wire-level tests for the vendor backends using httpx.MockTransport."""

import json

import httpx
import pytest

from config import Settings
from errors import (
    CapabilityError,
    ProviderAuthError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderQuotaError,
    ProviderTimeoutError,
)
from images import encode_image
from models import FALLBACK_PROVIDER
from orchestrator import Orchestrator
from prompts import build_prompt
from providers import GeminiBackend, OpenAIBackend, get_backend
from templates import get_template

IMAGE = encode_image(b"\x89PNG\r\n", "image/png")


def _gemini_ok(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _backend(cls, handler, key="secret"):
    return cls(key, timeout=5, max_tokens=123, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_gemini_vision_request_shape():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_gemini_ok("<div>hi</div>"))

    text = await _backend(GeminiBackend, handler).generate("gemini-2.5-flash", "SYSTEM", "USER", image=IMAGE)

    assert text == "<div>hi</div>"
    assert seen["url"].endswith("/models/gemini-2.5-flash:generateContent")
    assert "secret" not in seen["url"]
    assert seen["key"] == "secret"
    parts = seen["body"]["contents"][0]["parts"]
    assert parts[0] == {"inline_data": {"mime_type": "image/png", "data": IMAGE.data}}
    assert parts[1] == {"text": "USER"}
    assert seen["body"]["system_instruction"]["parts"][0]["text"] == "SYSTEM"
    assert seen["body"]["generationConfig"]["maxOutputTokens"] == 123


@pytest.mark.asyncio
async def test_gemini_text_only_request_has_no_image_part():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_gemini_ok("ok"))

    await _backend(GeminiBackend, handler).generate("m", "S", "U", max_tokens=100)
    assert seen["body"]["contents"][0]["parts"] == [{"text": "U"}]
    assert seen["body"]["generationConfig"]["maxOutputTokens"] == 100


@pytest.mark.asyncio
async def test_openai_request_shape():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "<p>x</p>"}}]})

    text = await _backend(OpenAIBackend, handler).generate("gpt-4o", "S", "U", image=IMAGE)

    assert text == "<p>x</p>"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["model"] == "gpt-4o"
    user = seen["body"]["messages"][1]["content"]
    assert user[1]["image_url"]["url"] == IMAGE.data_url


@pytest.mark.asyncio
@pytest.mark.parametrize("status,payload,expected", [
    (401, {"error": {"message": "bad key", "code": "invalid_api_key"}}, ProviderAuthError),
    (403, {"error": {"code": 403, "message": "denied", "status": "PERMISSION_DENIED"}}, ProviderAuthError),
    (429, {"error": {"message": "quota", "code": "insufficient_quota"}}, ProviderQuotaError),
    (400, {"error": {"code": 400, "message": "Image input is not supported", "status": "INVALID_ARGUMENT"}}, CapabilityError),
    (500, {"error": {"message": "internal"}}, ProviderError),
])
async def test_error_statuses_map_to_taxonomy(status, payload, expected):
    backend = _backend(GeminiBackend, lambda request: httpx.Response(status, json=payload))
    with pytest.raises(expected) as exc_info:
        await backend.generate("m", "S", "U", image=IMAGE)
    assert type(exc_info.value) is expected


@pytest.mark.asyncio
async def test_auth_and_quota_statuses_are_normalised():
    backend = _backend(OpenAIBackend, lambda request: httpx.Response(429, json={"error": {"code": "insufficient_quota", "message": "q"}}))
    with pytest.raises(ProviderQuotaError) as exc_info:
        await backend.generate("m", "S", "U")
    assert exc_info.value.status_code == 429
    assert exc_info.value.code == "insufficient_quota"


@pytest.mark.asyncio
async def test_capability_wording_without_image_is_plain_failure():
    payload = {"error": {"message": "image input not supported"}}
    backend = _backend(GeminiBackend, lambda request: httpx.Response(400, json=payload))
    with pytest.raises(ProviderError) as exc_info:
        await backend.generate("m", "S", "U")
    assert not isinstance(exc_info.value, CapabilityError)


@pytest.mark.asyncio
async def test_timeout_becomes_provider_timeout():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ProviderTimeoutError):
        await _backend(GeminiBackend, handler).generate("m", "S", "U")


@pytest.mark.asyncio
async def test_network_error_becomes_provider_error():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    with pytest.raises(ProviderError):
        await _backend(GeminiBackend, handler).generate("m", "S", "U")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [
    {"candidates": []},
    {"candidates": [], "promptFeedback": {"blockReason": "SAFETY"}},
    {"candidates": [{"content": {}}]},
    {"candidates": [{"content": {"parts": [{"text": "   "}]}}]},
    [],
    "oops",
    {"candidates": [{"content": {"parts": ["x"]}}]},
    {"candidates": "none"},
])
async def test_malformed_or_empty_responses_fail(payload):
    backend = _backend(GeminiBackend, lambda request: httpx.Response(200, json=payload))
    with pytest.raises(ProviderError):
        await backend.generate("m", "S", "U")


@pytest.mark.asyncio
async def test_non_json_body_fails():
    backend = _backend(GeminiBackend, lambda request: httpx.Response(200, text="<html>gateway</html>"))
    with pytest.raises(ProviderError):
        await backend.generate("m", "S", "U")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [[], "oops", {"candidates": [{"content": {"parts": ["x"]}}]}])
async def test_unexpected_response_shapes_fall_back_to_template(payload):
    backend = _backend(GeminiBackend, lambda request: httpx.Response(200, json=payload))
    result = await Orchestrator(backend, ["m1"]).generate(build_prompt("react", image=IMAGE))
    assert result.provider == FALLBACK_PROVIDER
    assert result.code == get_template("react")


@pytest.mark.asyncio
async def test_missing_key_fails_before_any_request():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(ProviderNotConfiguredError):
        await _backend(GeminiBackend, handler, key="").generate("m", "S", "U")


def test_get_backend_follows_settings():
    assert isinstance(get_backend(Settings(provider="gemini", api_key="k")), GeminiBackend)
    backend = get_backend(Settings(provider="openai", api_key="k", timeout=12))
    assert isinstance(backend, OpenAIBackend)
    assert backend.timeout == 12
