"""
Request correlation middleware.

Every request gets a ``request_id`` bound into the structlog context so
use-case and repository log lines can be traced back to it.
"""

from __future__ import annotations

import time
from typing import Awaitable, Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.infra.config.logging_config import bind_context, clear_context, get_logger

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by load balancers; not worth a log line each
_SILENT_PATHS = frozenset({"/health"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        path = request.url.path
        bind_context(request_id=request_id, path=path, method=request.method)
        log = get_logger("http")
        silent = path in _SILENT_PATHS
        started = time.perf_counter()

        if not silent:
            log.info("request.start", client_ip=request.client.host if request.client else None)
        try:
            response = await call_next(request)
        except Exception:
            log.exception("request.failed")
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            if not silent:
                log.info(
                    "request.end",
                    status_code=response.status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 1),
                )
            return response
        finally:
            clear_context()
