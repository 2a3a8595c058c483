"""Request logging middleware for the VocabDeck service."""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from vocabdeck.core.utils import ifnone


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with its method, path, status and duration.

    Paths in ``ignored_paths`` (documentation and favicon noise by default) are not logged. When
    ``add_request_id_header`` is set, each response carries an ``X-Request-ID`` header matching the logged id.
    """

    default_ignored_paths = {"/favicon.ico", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app, *, logger, ignored_paths=None, add_request_id_header: bool = True):
        super().__init__(app)
        self.logger = logger
        self.ignored_paths = ifnone(ignored_paths, default=RequestLoggingMiddleware.default_ignored_paths)
        self.add_request_id_header = add_request_id_header

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(f"[{request_id}] {request.method} {request.url.path} raised")
            raise
        duration_ms = (time.perf_counter() - start) * 1000

        if request.url.path not in self.ignored_paths:
            self.logger.info(
                f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} ({duration_ms:.1f} ms)"
            )
        if self.add_request_id_header:
            response.headers["X-Request-ID"] = request_id
        return response
