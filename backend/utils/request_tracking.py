# backend/utils/request_tracking.py
import logging
import threading
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


class RequestCounter:
    """Process-wide request total behind an increment/read interface."""

    def __init__(self):
        self._total = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._total += 1
            return self._total

    @property
    def total(self) -> int:
        with self._lock:
            return self._total


def get_request_counter(request: Request) -> RequestCounter:
    return request.app.state.request_counter


def install_request_tracking(app: FastAPI) -> None:
    """Count every request and log method, path, client, status and timing."""

    @app.middleware("http")
    async def track_requests(request: Request, call_next):
        request.app.state.request_counter.increment()
        client = request.client.host if request.client else None
        logger.info("Request: %s %s from %s", request.method, request.url.path, client)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info("Response: %s in %.0fms", response.status_code, elapsed_ms)
        return response
