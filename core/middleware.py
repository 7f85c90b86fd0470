import math
import threading
import time
from dataclasses import dataclass

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, RedirectResponse

from core.logger import init_logger

middleware_logger = init_logger("security-middleware")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the fixed security headers to every response, whatever its status."""

    def __init__(self, app, content_security_policy: str, strict_transport_security: bool = False):
        super().__init__(app)
        self.content_security_policy = content_security_policy
        self.strict_transport_security = strict_transport_security

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = self.content_security_policy
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["X-DNS-Prefetch-Control"] = "off"
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"
        response.headers["Cross-Origin-Resource-Policy"] = "same-origin"
        response.headers["Origin-Agent-Cluster"] = "?1"
        response.headers["X-Permitted-Cross-Domain-Policies"] = "none"
        response.headers["X-Download-Options"] = "noopen"
        response.headers["X-XSS-Protection"] = "0"
        if self.strict_transport_security:
            response.headers["Strict-Transport-Security"] = "max-age=15552000; includeSubDomains"
        return response


class ForwardedProtoRedirectMiddleware(BaseHTTPMiddleware):
    """
        Production only: the TLS terminating proxy sets X-Forwarded-Proto,
        anything that did not arrive over https is sent to the https URL
    """

    async def dispatch(self, request: Request, call_next):
        if request.headers.get("x-forwarded-proto") != "https":
            host = request.headers.get("host", request.url.netloc)
            # raw_path keeps percent-encoding intact, e.g. %2F stays %2F
            raw_path = request.scope.get("raw_path") or request.url.path.encode()
            path = raw_path.split(b"?", 1)[0].decode("latin-1")
            url = f"https://{host}{path}"
            if request.url.query:
                url = f"{url}?{request.url.query}"
            middleware_logger.info(f"Redirecting insecure request to : {url}")
            return RedirectResponse(url=url, status_code=301)
        return await call_next(request)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: int = 0


class RateLimiter:
    """
    **RateLimiter**
        Fixed window counter per client key. A window opens on the first request
        from a client and its count resets once `window_seconds` have elapsed.
    """

    def __init__(self, max_requests: int = 100, window_seconds: int = 15 * 60, max_keys: int = 10_000):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_keys = max_keys
        self._lock = threading.Lock()
        self._hits: dict[str, tuple[int, float]] = {}

    def hit(self, key: str, now: float | None = None) -> RateLimitDecision:
        now = time.monotonic() if now is None else now
        with self._lock:
            if key not in self._hits and len(self._hits) >= self.max_keys:
                self._prune(now)
            count, window_start = self._hits.get(key, (0, now))
            if now - window_start >= self.window_seconds:
                count, window_start = 0, now
            count += 1
            self._hits[key] = (count, window_start)

        if count > self.max_requests:
            retry_after = max(1, math.ceil(window_start + self.window_seconds - now))
            return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)
        return RateLimitDecision(allowed=True, remaining=self.max_requests - count)

    def _prune(self, now: float) -> None:
        """Drop expired windows, then the oldest live ones until there is room for a new key."""
        expired = [key for key, (_, start) in self._hits.items() if now - start >= self.window_seconds]
        for key in expired:
            del self._hits[key]
        overflow = len(self._hits) - self.max_keys + 1
        if overflow > 0:
            oldest = sorted(self._hits, key=lambda k: self._hits[k][1])[:overflow]
            for key in oldest:
                del self._hits[key]

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


class RateLimitMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, limiter: RateLimiter, trust_forwarded: bool = False):
        super().__init__(app)
        self.limiter = limiter
        self.trust_forwarded = trust_forwarded

    def client_key(self, request: Request) -> str:
        if self.trust_forwarded:
            forwarded = request.headers.get("x-forwarded-for")
            if forwarded:
                # first hop of the proxy chain is the client
                client = forwarded.split(",")[0].strip()
                if client:
                    return client
        if request.client:
            return request.client.host
        return "unknown"

    async def dispatch(self, request: Request, call_next):
        client = self.client_key(request)
        decision = self.limiter.hit(client)
        if not decision.allowed:
            middleware_logger.warning(f"""
                Rate limit exceeded
                    client = {client}
                    resource_path = {request.url.path}
            """)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests, please try again later."},
                headers={
                    "Retry-After": str(decision.retry_after),
                    "X-RateLimit-Limit": str(self.limiter.max_requests),
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response
