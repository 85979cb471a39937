"""Access logging middleware."""

import logging
import time
from datetime import datetime

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("plainwiki.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs one Apache common format line per request, plus its duration.

    A request whose handler raises is logged with status 500 before the
    exception continues to the server's error handling.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        status = 500
        size = "-"
        try:
            response = await call_next(request)
            status = response.status_code
            size = response.headers.get("content-length", "-")
            return response
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            client = request.client.host if request.client else "-"
            protocol = "HTTP/" + request.scope.get("http_version", "1.1")
            logger.info(
                '%s - - [%s] "%s %s %s" %d %s %.1fms',
                client,
                datetime.now().astimezone().strftime("%d/%b/%Y:%H:%M:%S %z"),
                request.method,
                request.url.path,
                protocol,
                status,
                size,
                duration_ms,
            )
