"""
Error taxonomy for CampusVoice.

Every application error derives from CampusVoiceError and carries the HTTP
status it maps to plus a message that is safe to show to callers. The
handlers registered in main.py turn them into ``{"error": message}``.

Usage:
    from campusvoice.core.errors import NotFound
    raise NotFound("Complaint not found")
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CampusVoiceError(Exception):
    """Base application error.

    Args:
        message: Client-facing message.
        detail: Internal-only detail, logged but never returned.
    """

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class ValidationError(CampusVoiceError):
    status_code = 400
    default_message = "Invalid request"


class InvalidStatus(ValidationError):
    default_message = "Invalid status"


class NotFound(CampusVoiceError):
    status_code = 404
    default_message = "Not found"


class Unauthorized(CampusVoiceError):
    status_code = 401
    default_message = "Unauthorized"


class StoreError(CampusVoiceError):
    """Underlying datastore failure. The message never includes datastore internals."""

    status_code = 500
    default_message = "Internal server error"


class GenerationExhausted(StoreError):
    """Every generated tracking code collided with an existing one."""

    default_message = "Could not allocate a tracking code, please try again"


class IdentityServiceError(CampusVoiceError):
    status_code = 502
    default_message = "Authentication service unavailable"


async def campusvoice_error_handler(request: Request, exc: CampusVoiceError) -> JSONResponse:
    """Convert CampusVoiceError into a JSON error response."""
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed with %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc.detail or exc.message,
        )
    else:
        logger.info(
            "%s %s -> %d %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and path parameters are client errors (400), not 422."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    if first.get("type") == "json_invalid":
        message = "Invalid JSON body"
    else:
        location = ".".join(
            str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")
        )
        message = f"Invalid {location}" if location else "Invalid request"
    logger.info("%s %s -> 400 %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})
