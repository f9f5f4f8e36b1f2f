"""Error taxonomy and the FastAPI handlers that turn errors into responses.

Every error response has the same envelope: ``{"success": false, "message":
..., "details": ...}``. Clients branch on ``success``; the HTTP status always
agrees with it.
"""

import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from bakery.utils.logging import get_logger

logger = get_logger(__name__)


class BakeryError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InvalidInput(BakeryError):
    status_code = 400
    default_message = "Invalid input"


class Unauthorized(BakeryError):
    status_code = 401
    default_message = "Not authorized"


class Forbidden(BakeryError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(BakeryError):
    status_code = 404
    default_message = "Not found"


class UpstreamFailure(BakeryError):
    status_code = 500
    default_message = "Upstream service failure"


def first_message(messages) -> str:
    """Pull a single human-readable line out of a Protean error payload."""
    if isinstance(messages, dict):
        for value in messages.values():
            return first_message(value)
        return ""
    if isinstance(messages, list | tuple):
        return first_message(messages[0]) if messages else ""
    return str(messages)


def error_body(message: str, details=None) -> dict:
    body = {"success": False, "message": message}
    if details is not None:
        body["details"] = details
    return body


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header", "form")]
    return ".".join(parts) or "request"


def register_error_handlers(app: FastAPI, expose_tracebacks: bool = False) -> None:
    """Attach the error-to-response translation to an app."""

    @app.exception_handler(BakeryError)
    async def bakery_error_handler(request: Request, exc: BakeryError):
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content=error_body(first_message(exc.messages) or "Invalid input", exc.messages),
        )

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content=error_body(first_message(exc.messages) or "Not found"))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = []
        for err in exc.errors():
            field = _field_name(err.get("loc", ()))
            if err.get("type") == "missing":
                message = f"{field} is required"
            elif err.get("type") == "value_error" and "error" in err.get("ctx", {}):
                message = str(err["ctx"]["error"])
            else:
                message = err.get("msg", "Invalid value")
            details.append({"field": field, "message": message})
        message = details[0]["message"] if details else "Invalid request"
        return JSONResponse(status_code=400, content=error_body(message, details))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path)
        details = "".join(traceback.format_exception(exc)) if expose_tracebacks else None
        return JSONResponse(status_code=500, content=error_body("Internal server error", details))
