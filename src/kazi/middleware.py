"""Request context middleware — request ids, access log, security headers.

Learn: Every request gets an id, either from the incoming X-Request-ID
header (for tracing across services) or a fresh UUID. The id is bound
to structlog's contextvars so every log line written while handling the
request carries it, and it is echoed back in the response header.

One "http.request" line is logged per request with method, path,
status and duration, including requests that end in an unhandled
error. Standard security headers go on every response; HSTS only on HTTPS.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from kazi.errors import ServerError

logger = structlog.get_logger()

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            # Only exceptions with no registered handler reach this point.
            logger.exception("http.unhandled_error", path=request.url.path)
            response = JSONResponse(status_code=500, content=ServerError().to_dict())
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        response.headers["X-Request-ID"] = request_id
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        logger.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        return response
