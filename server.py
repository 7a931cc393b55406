"""
DESIGN2CODE — Screenshot to front-end code
Step 1: Validate the upload and build the prompt for the chosen framework
Step 2: Walk the candidate models (vision first, then text-only)
Step 3: Fall back to a static template if every model fails
"""

import json
import logging
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from config import CLIENT_TIMEOUT_SECONDS, MAX_UPLOAD_BYTES, Settings, get_settings
from errors import (
    Design2CodeError,
    InvalidFeaturesError,
    MissingImageError,
    ProviderAuthError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderQuotaError,
    ProviderTimeoutError,
)
from images import encode_image, inspect_image, validate_upload
from models import Feature, Framework, GenerationResult, utc_timestamp
from orchestrator import Orchestrator
from preview import SERVED_SANDBOX_POLICY, preview_for
from prompts import build_prompt
from providers import Backend, get_backend

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("design2code")

app = FastAPI(title="Design2Code")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().client_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════
# ERROR HANDLING
# ═══════════════════════════════════════════════════════════

@app.exception_handler(Design2CodeError)
async def design2code_error_handler(request: Request, exc: Design2CodeError) -> JSONResponse:
    log.warning(f"HTTP {exc.status_code}: {exc.message} | path={request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.warning(f"Malformed request | path={request.url.path}")
    details = "; ".join(f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception(f"Unhandled exception | path={request.url.path} | type={type(exc).__name__}")
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to generate code", "details": "An unexpected error occurred. Please try again later."},
    )


def remediation_hint(exc: ProviderError, settings: Settings) -> str:
    if isinstance(exc, ProviderNotConfiguredError):
        return f"Set {settings.api_key_var} in the server environment and restart."
    if isinstance(exc, ProviderAuthError):
        return f"The {settings.provider} API rejected the key. Check that {settings.api_key_var} is valid."
    if isinstance(exc, ProviderQuotaError):
        return f"The {settings.provider} API quota is exhausted. Check your billing details or retry later."
    if isinstance(exc, ProviderTimeoutError):
        return "The provider did not answer in time. Try again or raise AI_TIMEOUT_SECONDS."
    return "Check network connectivity and that AI_MODELS names models available to your key."


# ═══════════════════════════════════════════════════════════
# DEPENDENCIES
# ═══════════════════════════════════════════════════════════

def get_provider_backend(settings: Settings = Depends(get_settings)) -> Backend:
    return get_backend(settings)


def get_orchestrator(settings: Settings = Depends(get_settings),
                     backend: Backend = Depends(get_provider_backend)) -> Orchestrator:
    return Orchestrator(backend, settings.models, deadline=settings.deadline)


def parse_features(raw: str) -> list:
    """Decode the JSON feature list; unknown flags are dropped, not rejected."""
    try:
        parsed = json.loads(raw or "[]")
    except json.JSONDecodeError as e:
        raise InvalidFeaturesError(str(e))
    if not isinstance(parsed, list):
        raise InvalidFeaturesError(f"Expected a JSON array, got {type(parsed).__name__}")
    return Feature.parse_many(parsed)


# ═══════════════════════════════════════════════════════════
# API ENDPOINTS
# ═══════════════════════════════════════════════════════════

@app.post("/api/generate-code", response_model=GenerationResult, response_model_exclude_none=True)
async def generate_code(
    image: Optional[UploadFile] = File(None),
    framework: str = Form("html"),
    features: str = Form("[]"),
    orchestrator: Orchestrator = Depends(get_orchestrator),
):
    log.info("Received request to generate code")
    if image is None:
        raise MissingImageError()

    # One byte past the limit is enough to tell an oversized upload apart
    content = await image.read(MAX_UPLOAD_BYTES + 1)
    validate_upload(content, image.content_type, MAX_UPLOAD_BYTES)
    feature_list = parse_features(features)
    target = Framework.parse(framework)

    log.info(f"Step 1: Building {target.value} prompt ({len(content)} bytes, features={[f.value for f in feature_list]})")
    inspect_image(content)
    spec = build_prompt(target, feature_list, encode_image(content, image.content_type))

    log.info("Step 2: Generating code...")
    result = await orchestrator.generate(spec, feature_list)
    log.info(f"  Responding with provider={result.provider} model={result.model} vision={result.vision}")
    return result


@app.get("/api/health")
async def health(settings: Settings = Depends(get_settings)):
    body = {
        "status": "OK",
        "timestamp": utc_timestamp(),
        settings.provider: "Configured" if settings.configured else "Not configured",
        "provider": settings.provider,
        "available_models": list(settings.models),
        "max_upload_bytes": MAX_UPLOAD_BYTES,
        "client_timeout_seconds": CLIENT_TIMEOUT_SECONDS,
    }
    if not settings.configured:
        body["message"] = f"Set {settings.api_key_var} to enable live generation. Until then every request returns a sample template."
    return body


@app.post("/api/test-{provider}")
async def test_provider(
    provider: str,
    settings: Settings = Depends(get_settings),
    backend: Backend = Depends(get_provider_backend),
):
    if provider != settings.provider:
        raise Design2CodeError(f"Unknown provider: {provider}", f"This server is configured for {settings.provider}", status_code=404)

    model = settings.models[0]
    try:
        output = await backend.generate(
            model,
            "You are a helpful assistant.",
            "Write a simple 'Hello World' HTML page",
            max_tokens=100,
        )
    except ProviderError as e:
        log.warning(f"{provider} API test failed on {model}: {e.message}")
        status = e.status_code if e.status_code in (401, 429, 503, 504) else 500
        return JSONResponse(
            status_code=status,
            content={"error": f"{provider} API test failed", "details": e.message, "hint": remediation_hint(e, settings)},
        )

    return {
        "success": True,
        "message": f"{provider} API is working correctly",
        "model": model,
        "test_output": output,
    }


@app.post("/api/preview")
async def preview(code: str = Form(...), framework: str = Form("html")):
    """Render generated code as a standalone document, sandboxed by CSP."""
    doc = preview_for(code, framework)
    return HTMLResponse(doc.html, headers={
        "Content-Security-Policy": f"sandbox {SERVED_SANDBOX_POLICY}",
        "X-Content-Type-Options": "nosniff",
    })


if __name__ == "__main__":
    settings = get_settings()
    print("\n  🎨 DESIGN2CODE — Screenshot to front-end code")
    print("  ═══════════════════════════════════════════════════════")
    print(f"  Provider: {settings.provider} ({'✅ key set' if settings.configured else '❌ key not set'})")
    print(f"  Models:   {', '.join(settings.models)}")
    print(f"  Health:   http://localhost:{settings.port}/api/health\n")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
