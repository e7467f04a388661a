from __future__ import annotations

import logging
import sys
import time
import uuid
from typing import Any

import structlog
from fastapi import Request

RENDERERS = {
    "development": lambda: structlog.dev.ConsoleRenderer(colors=True),
    "test": lambda: structlog.dev.ConsoleRenderer(colors=False),
}


def configure_logging(env: str = "development", level: str = "INFO") -> None:
    """Route stdlib and structlog output through one stdout stream.

    Development and test get a console renderer. Any other environment emits
    one JSON object per line.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    make_renderer = RENDERERS.get(env, structlog.processors.JSONRenderer)
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        make_renderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


async def request_id_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Tag every log line of a request with its id and log the request's latency.

    The id is taken from an incoming ``x-request-id`` header when present and
    echoed back on the response.
    """
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    started = time.perf_counter()
    status = 500

    with structlog.contextvars.bound_contextvars(
        request_id=request_id, path=request.url.path
    ):
        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            structlog.get_logger("request").info(
                "request.completed",
                method=request.method,
                status=status,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

    response.headers["x-request-id"] = request_id
    return response
