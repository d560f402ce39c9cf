"""
Custom exception handlers for FastAPI.

Every error body has the shape ``{"msg": "..."}``, except request
validation failures which list field errors as ``{"errors": [...]}``.

Unhandled exceptions are logged with the request id and answered with a
generic 500 body that still carries the ``X-Request-ID`` header.
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from devconnector.constants import MSG_SERVER_ERROR, REQUIRED_FIELD_MESSAGES
from devconnector.logging import get_logger

logger = get_logger("backend.errors")


def _get_request_id() -> str:
    """Get the current request ID from the structlog context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("request_id", "-")


def _field_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Flatten pydantic errors into ``{msg, param, location}`` records.

    Missing or empty required fields get the field's fixed message; any
    other failure keeps pydantic's message.
    """
    result = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        location = loc[0] if loc else "body"
        param = loc[-1] if len(loc) > 1 else location

        msg = err.get("msg", "Invalid value")
        if err.get("type") in ("missing", "string_too_short") and param in REQUIRED_FIELD_MESSAGES:
            msg = REQUIRED_FIELD_MESSAGES[param]

        record: dict[str, Any] = {"msg": msg, "param": param, "location": location}
        if err.get("type") != "missing" and isinstance(err.get("input"), (str, int, float, bool)):
            record["value"] = err["input"]
        result.append(record)
    return result


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Log with request_id for server-side tracing
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            path=request.url.path,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"msg": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = _field_errors(list(exc.errors()))
        logger.warning(
            "validation_error",
            params=[e["param"] for e in errors],
            path=request.url.path,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": errors},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        request_id = _get_request_id()
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            request_id=request_id,
        )
        # Runs outside RequestLoggingMiddleware, so echo the id here
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"msg": MSG_SERVER_ERROR},
            headers={"X-Request-ID": request_id} if request_id != "-" else None,
        )
