"""HTTP request logging middleware: request id, latency and outcome per request."""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("app.http")

REQUEST_ID_HEADER = "X-Request-Id"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Assign a request id, log the incoming request and its response status and latency."""

    def __init__(self, app, enabled: bool = True) -> None:
        super().__init__(app)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        if not self.enabled:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        log_extra: dict[str, str | int | float | None] = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent", "Unknown"),
        }
        logger.info("Incoming request %s %s", request.method, request.url.path, extra=log_extra)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log_extra["latency_ms"] = round((time.perf_counter() - start) * 1000, 2)
            logger.exception("Request failed %s %s", request.method, request.url.path, extra=log_extra)
            raise

        log_extra["status_code"] = response.status_code
        log_extra["latency_ms"] = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            "%s %s %s %.2fms",
            request.method,
            request.url.path,
            response.status_code,
            log_extra["latency_ms"],
            extra=log_extra,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
