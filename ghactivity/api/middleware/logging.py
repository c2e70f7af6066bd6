"""
Request logging middleware.
Logs every API request together with how it used GitHub: cache hits,
upstream calls and the remaining rate limit.
"""

import time
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ghactivity.api.utils.client_manager import client_manager
from ghactivity.core.github_client import FetchStats, track_fetches
from ghactivity.core.logger import get_logger

logger = get_logger(__name__)


def _rate_limit_remaining() -> Optional[int]:
    if client_manager.client is None:
        return None
    return client_manager.client.rate_limit_status["remaining"]


def _github_usage(stats: FetchStats) -> dict:
    return {
        "github_cache_hits": stats.cache_hits,
        "github_calls": stats.upstream_calls,
        "rate_limit_remaining": _rate_limit_remaining(),
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One log line per request, with timing and GitHub usage.

    Usage is also reported back in the X-GitHub-Cache-Hits and
    X-GitHub-Calls response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        stats = track_fetches()
        context = {
            "request_id": getattr(request.state, "request_id", "unknown"),
            "method": request.method,
            "path": request.url.path,
        }

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **context,
                    **_github_usage(stats),
                    "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    "error_type": type(e).__name__,
                },
            )
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            "Request completed",
            extra={
                **context,
                **_github_usage(stats),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers["X-Process-Time"] = str(round(duration_ms / 1000, 3))
        response.headers["X-GitHub-Cache-Hits"] = str(stats.cache_hits)
        response.headers["X-GitHub-Calls"] = str(stats.upstream_calls)
        return response
