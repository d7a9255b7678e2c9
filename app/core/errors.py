from __future__ import annotations


class CareerServiceError(RuntimeError):
    status_code = 500
    code = "internal"

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class Unauthorized(CareerServiceError):
    status_code = 401
    code = "unauthorized"


class NotFound(CareerServiceError):
    status_code = 404
    code = "not_found"


class InvalidInput(CareerServiceError):
    status_code = 400
    code = "invalid_input"


class UpstreamUnavailable(CareerServiceError):
    """The AI model could not be reached (network, auth, quota or timeout)."""

    status_code = 503
    code = "ai_unavailable"


ModelUnavailable = UpstreamUnavailable


class ModelNotConfigured(UpstreamUnavailable):
    code = "ai_not_configured"


class MalformedUpstreamResponse(CareerServiceError):
    """The AI model answered but the payload failed parsing or validation."""

    status_code = 502
    code = "ai_malformed_response"


class GenerationFailed(CareerServiceError):
    status_code = 502
    code = "generation_failed"


class InternalError(CareerServiceError):
    status_code = 500
    code = "internal"
