import time
import logging
from typing import Dict, List, Tuple
from fastapi import HTTPException, Request, status
import threading

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sliding-window request counter keyed by client (usually the IP)."""

    def __init__(self, cleanup_interval: int = 3600):
        self.requests: Dict[str, List[float]] = {}
        self.lock = threading.Lock()
        self.cleanup_interval = cleanup_interval
        self.last_cleanup = time.time()

    def _cleanup_old_requests(self, window_seconds: int):
        """Drop clients with no requests inside the window"""
        current_time = time.time()
        cutoff_time = current_time - window_seconds

        with self.lock:
            for key in list(self.requests.keys()):
                self.requests[key] = [t for t in self.requests[key] if t > cutoff_time]
                if not self.requests[key]:
                    del self.requests[key]

        self.last_cleanup = current_time

    def check_rate_limit(self, key: str, max_requests: int, window_seconds: int) -> Tuple[bool, int]:
        """
        Record a request for ``key`` if it is under the limit.
        Returns: (allowed, remaining_requests)
        """
        current_time = time.time()

        if current_time - self.last_cleanup > self.cleanup_interval:
            self._cleanup_old_requests(window_seconds)

        with self.lock:
            cutoff_time = current_time - window_seconds
            recent = [t for t in self.requests.get(key, []) if t > cutoff_time]

            if len(recent) >= max_requests:
                self.requests[key] = recent
                return False, 0

            recent.append(current_time)
            self.requests[key] = recent
            return True, max_requests - len(recent)

    def reset(self):
        with self.lock:
            self.requests.clear()


# Global rate limiter instance
rate_limiter = RateLimiter()


def rate_limit(scope: str, max_requests: int, window_seconds: int):
    """Build a dependency that limits ``scope`` requests per client IP."""

    def dependency(request: Request):
        client_ip = request.client.host if request.client else "unknown"
        allowed, remaining = rate_limiter.check_rate_limit(f"{scope}:{client_ip}", max_requests, window_seconds)

        if not allowed:
            logger.warning(f"Rate limit exceeded for {scope} from {client_ip}")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail={
                    "error": "Rate limit exceeded",
                    "message": f"Maximum {max_requests} requests per {window_seconds} seconds exceeded",
                    "retry_after": f"{window_seconds} seconds"
                }
            )

        return {"remaining_requests": remaining}

    return dependency
