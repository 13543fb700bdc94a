"""Request logging middleware."""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("pourcost.api")

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-Ms"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every calculation request with timing and a request ID.

    A caller-supplied X-Request-ID is reused so client and server logs line up.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request.state.request_id = request_id

        route = f"{request.method} {request.url.path}"
        if request.url.query:
            route = f"{route}?{request.url.query}"

        start_time = time.perf_counter()
        logger.debug(f"[{request_id}] {route} - Started")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = (time.perf_counter() - start_time) * 1000
            logger.error(f"[{request_id}] {route} - Error after {duration:.2f}ms: {str(e)}")
            raise

        duration = (time.perf_counter() - start_time) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = f"{duration:.2f}"

        log_level = logging.INFO if response.status_code < 400 else logging.WARNING
        logger.log(log_level, f"[{request_id}] {route} - {response.status_code} in {duration:.2f}ms")

        return response
