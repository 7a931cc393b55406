"""Error types shared by the request boundary, the providers and the server."""


class Design2CodeError(Exception):
    status_code = 500

    def __init__(self, message: str, details: str = None, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# ── Request validation (always HTTP 400, no provider call) ──

class ValidationError(Design2CodeError):
    status_code = 400


class MissingImageError(ValidationError):
    def __init__(self):
        super().__init__("No image file provided")


class InvalidImageError(ValidationError):
    def __init__(self, mime_type: str):
        super().__init__("Only image files are allowed!", f"Received content type: {mime_type or 'unknown'}")


class ImageTooLargeError(ValidationError):
    def __init__(self, max_bytes: int):
        super().__init__(
            f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB",
            f"Limit: {max_bytes} bytes",
        )


class InvalidFeaturesError(ValidationError):
    def __init__(self, details: str):
        super().__init__("Invalid features format. Expected a JSON array of strings.", details)


# ── Provider failures (recovered by the orchestrator) ──

class ProviderError(Design2CodeError):
    """A vendor call failed. status_code carries the vendor HTTP status when known."""

    status_code = 502

    def __init__(self, provider: str, message: str, status_code: int = None, code: str = None):
        super().__init__(f"{provider}: {message}", status_code=status_code)
        self.provider = provider
        self.code = code


class CapabilityError(ProviderError):
    """The model rejected image input."""


class ProviderAuthError(ProviderError):
    status_code = 401


class ProviderQuotaError(ProviderError):
    status_code = 429


class ProviderTimeoutError(ProviderError):
    status_code = 504


class ProviderNotConfiguredError(ProviderError):
    status_code = 503
