"""Request counting for the static file server."""
import threading

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp


# PUBLIC_INTERFACE
class HitCounter:
    """Thread-safe integer counter shared by all requests."""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def load(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


class HitCounterMiddleware(BaseHTTPMiddleware):
    """Count every request that reaches the wrapped app."""

    def __init__(self, app: ASGIApp, counter: HitCounter):
        super().__init__(app)
        self.counter = counter

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        self.counter.increment()
        return await call_next(request)
