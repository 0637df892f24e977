import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    """Middleware that extracts or generates a correlation ID for each request.

    Reads X-Request-ID header from the incoming request. If absent,
    generates a new UUID4. The ID is bound to structlog's contextvars so it
    appears on every log line of the request, and is returned to the
    client via the X-Request-ID response header.  Request duration is
    logged with the finish event.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        logger.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
        )
        start = time.monotonic()

        response = self.get_response(request)

        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )

        response["X-Request-ID"] = cid
        return response
