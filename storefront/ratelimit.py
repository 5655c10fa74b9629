"""
In-process request rate limiting

Best-effort abuse mitigation only: counters live in this process, reset on
restart and are not shared between workers. Put a shared counter store in
front of the service if limits must hold across processes.
"""
import logging
import time
from collections import deque
from typing import Callable, Deque, Dict, List

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class SlidingWindowLimiter:
    """Counts accepted hits per key over a sliding time window"""
    
    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window = window_seconds
        self.clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._last_sweep = clock()
    
    def hit(self, key: str) -> bool:
        """
        Record a request for key
        
        Rejected requests are not counted, so a client sending faster than
        the limit still gets `limit` requests through per window.
        
        Returns:
            True if the request is within the limit, False if it should be rejected
        """
        now = self.clock()
        self._sweep(now)
        hits = self._hits.get(key)
        if hits is None:
            hits = self._hits[key] = deque()
        while hits and now - hits[0] >= self.window:
            hits.popleft()
        if len(hits) >= self.limit:
            return False
        hits.append(now)
        return True
    
    def _sweep(self, now: float):
        """Forget clients whose last accepted hit has left the window"""
        if now - self._last_sweep < self.window:
            return
        self._last_sweep = now
        expired = [key for key, hits in self._hits.items() if not hits or now - hits[-1] >= self.window]
        for key in expired:
            del self._hits[key]
    
    @property
    def tracked_keys(self) -> int:
        return len(self._hits)
    
    def reset(self):
        self._hits.clear()
        self._last_sweep = self.clock()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects requests to sensitive prefixes once a client exceeds the limit"""
    
    def __init__(self, app, limiter: SlidingWindowLimiter, prefixes: List[str]):
        super().__init__(app)
        self.limiter = limiter
        self.prefixes = tuple(prefixes)
    
    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(self.prefixes):
            client = request.client.host if request.client else "anonymous"
            if not self.limiter.hit(client):
                logger.warning("Rate limit exceeded for %s on %s", client, request.url.path)
                return JSONResponse(
                    status_code=429,
                    content={"error": "Too many requests. Please try again later."},
                )
        return await call_next(request)
