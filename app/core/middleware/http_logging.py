"""Access logging and request correlation.

Every response carries an `X-Request-ID`; every request produces one log record with
method, route template, status and duration. Suggestion bodies describe applicants'
finances and health, so bodies, query strings and headers never reach the logs.
"""

from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.http")

REQUEST_ID_HEADER = "X-Request-ID"
# Accepted inbound ids: short, starting alphanumeric, no whitespace or control characters.
_INBOUND_REQUEST_ID = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]{0,127}")


def resolve_request_id(request: Request) -> str:
    inbound = request.headers.get(REQUEST_ID_HEADER, "")
    if _INBOUND_REQUEST_ID.fullmatch(inbound):
        return inbound
    return uuid.uuid4().hex


def safe_route_label(*, request: Request) -> str:
    """Return the matched route template, or "unmatched" when routing did not match."""

    path = getattr(request.scope.get("route"), "path", None)
    return path if isinstance(path, str) and path else "unmatched"


def _access_fields(
    request: Request, *, request_id: str, status_code: int, started: float
) -> dict[str, Any]:
    return {
        "request_id": request_id,
        "http_method": request.method,
        "request_path": safe_route_label(request=request),
        "status_code": status_code,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
    }


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """Propagate a correlation id and write one metadata-only access record per request.

    Server errors returned as responses are logged at WARNING; exceptions escaping
    the app are logged at ERROR with their traceback and re-raised.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        request_id = resolve_request_id(request)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - logged with traceback, then re-raised
            logger.exception(
                "Unhandled exception while processing request",
                extra=_access_fields(
                    request, request_id=request_id, status_code=500, started=started
                ),
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "Request completed",
            extra=_access_fields(
                request, request_id=request_id, status_code=response.status_code, started=started
            ),
        )
        return response
