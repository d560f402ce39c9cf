"""
structlog setup for DevConnector.

Development gets coloured console output; anything else gets one JSON object
per line. Stdlib logging is routed through the same stream so uvicorn and
SQLAlchemy records interleave with ours.
"""

import logging
import os
import sys
import time
import uuid
from collections.abc import Callable, MutableMapping
from functools import lru_cache, wraps
from typing import Any, TypeVar

import structlog
from structlog.types import EventDict, Processor

F = TypeVar("F", bound=Callable[..., Any])

SERVICE_NAME = "devconnector"
REQUEST_ID_HEADER = b"x-request-id"


def _use_console_renderer() -> bool:
    from .config import get_settings

    return get_settings().debug or os.getenv("ENV", "development") == "development"


def _add_service_name(logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict  # type: ignore[return-value]


def get_processors() -> list[Processor]:
    """Processor chain, ending in a console or JSON renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_service_name,
    ]
    if _use_console_renderer():
        processors.append(structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return processors


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO") -> None:
    """Configure structlog and stdlib logging once per process."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=get_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def bind_context(**kwargs: Any) -> None:
    """Attach key/values to every log line emitted in the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def log_timing(operation: str) -> Callable[[F], F]:
    """
    Log how long a call took, and whether it raised.

    Usage:
        @log_timing("github_repos")
        def fetch_github_repos(username): ...
    """

    def decorator(func: F) -> F:
        logger = get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.warning(
                    "operation_failed",
                    operation=operation,
                    duration_seconds=round(time.perf_counter() - start, 3),
                    error=str(e),
                )
                raise
            logger.info(
                "operation_complete",
                operation=operation,
                duration_seconds=round(time.perf_counter() - start, 3),
            )
            return result

        return wrapper  # type: ignore

    return decorator


def _request_id_from(scope) -> str:
    for key, value in scope.get("headers") or []:
        if key.lower() == REQUEST_ID_HEADER:
            return value.decode("latin-1")
    return uuid.uuid4().hex


class RequestLoggingMiddleware:
    """
    ASGI middleware that tags each HTTP request with an id.

    The id comes from the client's ``X-Request-ID`` header when present,
    is bound into the log context for the whole request, and is returned in
    the response headers.
    """

    def __init__(self, app):
        self.app = app
        self.logger = get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Context must outlive this call; the 500 handler runs outside it
        clear_context()
        request_id = _request_id_from(scope)
        bind_context(request_id=request_id)
        method, path = scope.get("method", ""), scope.get("path", "")
        start = time.perf_counter()
        status_code = 500

        async def send_with_request_id(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
                message.setdefault("headers", []).append((REQUEST_ID_HEADER, request_id.encode()))
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            if status_code >= 500:
                log = self.logger.error
            elif status_code >= 400:
                log = self.logger.warning
            else:
                log = self.logger.info
            log(
                "request_complete",
                method=method,
                path=path,
                status_code=status_code,
                duration_seconds=round(time.perf_counter() - start, 3),
            )


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "log_timing",
    "RequestLoggingMiddleware",
]
