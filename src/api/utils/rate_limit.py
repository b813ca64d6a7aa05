"""
Rate limit dependency

Keys each request by route class and client IP, asks the application's
RateLimiter, and reports the window in X-RateLimit-* headers.
"""

from typing import Dict

from fastapi import Request, Response, status

from src.api.error import ClientError
from src.app.services.rate_limiter import RateLimitResult
from src.domain.errors import ErrorCode
from src.libs.result import Error

# Checked in order; the first header present wins
CLIENT_IP_HEADERS = ("x-forwarded-for", "x-real-ip", "cf-connecting-ip", "x-client-ip")


def client_ip(request: Request) -> str:
    for header in CLIENT_IP_HEADERS:
        value = request.headers.get(header)
        if value:
            # X-Forwarded-For: client, proxy1, proxy2
            return value.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


def rate_limit_headers(result: RateLimitResult) -> Dict[str, str]:
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": result.reset_at.isoformat(),
    }


def rate_limit(preset: str):
    """
    Build a dependency enforcing the named rate limit preset.

    Raises:
        ClientError: 429 RATE_LIMITED once the window is exhausted
    """

    async def dependency(request: Request, response: Response) -> RateLimitResult:
        limiter = request.app.state.rate_limiter
        config = request.app.state.rate_limit_presets[preset]

        result = limiter.check(f"{preset}:{client_ip(request)}", config)
        headers = rate_limit_headers(result)

        if not result.allowed:
            raise ClientError(
                Error(ErrorCode.RATE_LIMITED, config.message),
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                headers=headers,
            )

        response.headers.update(headers)
        return result

    return dependency
