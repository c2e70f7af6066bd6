"""
GitHub REST API client.
Handles authentication, response caching, rate limit tracking and error handling.
"""

from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from ghactivity.core.cache import FetchCache
from ghactivity.core.config import settings
from ghactivity.core.exceptions import (
    ConnectionError as AppConnectionError,
    RateLimitError,
    UpstreamError,
)
from ghactivity.core.logger import get_logger
from ghactivity.utils.github_queries import (
    AUTHENTICATED_REPOS_ENDPOINT,
    REPO_COMMITS_ENDPOINT,
    REPO_ENDPOINT,
    REPO_EVENTS_ENDPOINT,
    SEARCH_ISSUES_ENDPOINT,
    USER_ENDPOINT,
    USER_EVENTS_ENDPOINT,
    USER_PUBLIC_EVENTS_ENDPOINT,
    USER_RECEIVED_EVENTS_ENDPOINT,
    USER_REPOS_ENDPOINT,
    USER_STARRED_ENDPOINT,
    build_endpoint,
    build_search_query,
)

logger = get_logger(__name__)


@dataclass
class FetchStats:
    """How one unit of work (an API request, an export run) used GitHub."""

    cache_hits: int = 0
    upstream_calls: int = 0


_current_stats: ContextVar[Optional[FetchStats]] = ContextVar("github_fetch_stats", default=None)


def track_fetches() -> FetchStats:
    """Start counting fetches made from the current context and its child tasks."""
    stats = FetchStats()
    _current_stats.set(stats)
    return stats


class GitHubClient:
    """
    Async GitHub REST API client with a per-instance response cache.

    Features:
    - Optional bearer authentication (unlocks private activity)
    - Every GET memoized by full URL for the cache TTL
    - Rate limit monitoring from response headers
    - Structured error handling, no retries
    """

    API_VERSION = "2022-11-28"

    def __init__(
        self,
        token: Optional[str] = None,
        cache: Optional[FetchCache] = None,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub Personal Access Token. None means anonymous access
            cache: Response cache. A new one using settings.GITHUB_CACHE_TTL if None
            base_url: API base URL (default: settings.GITHUB_API_URL)
            http_client: Shared AsyncClient. If None, one is opened per request
            timeout: Per-request timeout in seconds when no http_client is given
        """
        self.token = token
        self.cache = cache if cache is not None else FetchCache(ttl_ms=settings.GITHUB_CACHE_TTL)
        self.base_url = (base_url or settings.GITHUB_API_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT
        self._http_client = http_client

        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
            "User-Agent": "ghactivity",
        }
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

        self._rate_limit_remaining: Optional[int] = None
        self._rate_limit_reset_at: Optional[datetime] = None

        logger.info(
            "GitHub client initialized",
            extra={"base_url": self.base_url, "authenticated": self.is_authenticated},
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    async def fetch(self, endpoint: str) -> Any:
        """
        GET an endpoint, serving it from cache while fresh.

        Args:
            endpoint: Path plus query string, relative to the API base URL

        Returns:
            Decoded JSON body

        Raises:
            RateLimitError: If rate limit is exceeded
            UpstreamError: If API returns a non-2xx status
            AppConnectionError: If network request fails
        """
        url = f"{self.base_url}{endpoint}"
        stats = _current_stats.get()

        cached = self.cache.get(url)
        if cached is not None:
            if stats is not None:
                stats.cache_hits += 1
            return cached

        if stats is not None:
            stats.upstream_calls += 1

        logger.debug("Fetching from GitHub", extra={"url": url})

        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, headers=self.headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, headers=self.headers)
        except httpx.TimeoutException as e:
            logger.error(f"GitHub API request timeout: {e}")
            raise AppConnectionError(f"GitHub API timeout: {url}") from e
        except httpx.RequestError as e:
            logger.error(f"GitHub API request failed: {e}")
            raise AppConnectionError(f"GitHub API connection error: {e}") from e

        self._update_rate_limit_from_response(response)

        if not response.is_success:
            raise self._error_from_response(response)

        data = response.json()
        self.cache.put(url, data)
        return data

    def _error_from_response(self, response: httpx.Response) -> UpstreamError:
        """Build the exception for a non-2xx response."""
        try:
            body = response.json()
            message = body.get("message") if isinstance(body, dict) else None
        except ValueError:
            message = None
        message = message or f"GitHub API error: {response.status_code} {response.reason_phrase}"

        details = {"url": str(response.request.url)}

        if response.status_code in (403, 429) and (
            "rate limit" in message.lower() or self._rate_limit_remaining == 0
        ):
            logger.warning(
                "GitHub rate limit exceeded",
                extra={"reset_at": self._rate_limit_reset_at},
            )
            return RateLimitError(message, status_code=response.status_code, details=details)

        logger.warning(
            "GitHub API returned an error",
            extra={"status_code": response.status_code, "message": message, **details},
        )
        return UpstreamError(message, status_code=response.status_code, details=details)

    def _update_rate_limit_from_response(self, response: httpx.Response) -> None:
        """Update rate limit info from response headers."""
        if "X-RateLimit-Remaining" in response.headers:
            self._rate_limit_remaining = int(response.headers["X-RateLimit-Remaining"])

        if "X-RateLimit-Reset" in response.headers:
            reset_timestamp = int(response.headers["X-RateLimit-Reset"])
            self._rate_limit_reset_at = datetime.fromtimestamp(reset_timestamp, tz=timezone.utc)

    @property
    def rate_limit_status(self) -> dict[str, Any]:
        """Get current rate limit status."""
        return {
            "remaining": self._rate_limit_remaining,
            "reset_at": self._rate_limit_reset_at,
        }

    # Users

    async def get_user(self, username: str) -> dict[str, Any]:
        return await self.fetch(build_endpoint(USER_ENDPOINT, username=username))

    async def get_user_events(self, username: str, limit: int = 30) -> list[dict[str, Any]]:
        """
        Get a user's events, newest first.

        The authenticated endpoint also returns private repository activity,
        so result size and content depend on whether a token is configured.
        """
        template = USER_EVENTS_ENDPOINT if self.is_authenticated else USER_PUBLIC_EVENTS_ENDPOINT
        return await self.fetch(build_endpoint(template, {"per_page": limit}, username=username))

    async def get_user_received_events(self, username: str, limit: int = 30) -> list[dict[str, Any]]:
        """Get events others performed on repositories the user watches or owns."""
        return await self.fetch(
            build_endpoint(USER_RECEIVED_EVENTS_ENDPOINT, {"per_page": limit}, username=username)
        )

    async def get_user_starred(self, username: str, limit: int = 30) -> list[dict[str, Any]]:
        """Get starred repositories, most recently starred first."""
        return await self.fetch(
            build_endpoint(
                USER_STARRED_ENDPOINT,
                {"per_page": limit, "sort": "created"},
                username=username,
            )
        )

    async def get_user_repos(
        self, username: str, limit: int = 30, sort: str = "pushed"
    ) -> list[dict[str, Any]]:
        """
        Get a user's repositories.

        Authenticated: the token owner's own public and private repositories
        (org repositories excluded). Anonymous: the user's public repositories.
        The two result sets are not interchangeable.
        """
        params = {"per_page": limit, "sort": sort, "direction": "desc"}
        if self.is_authenticated:
            params["affiliation"] = "owner"
            return await self.fetch(build_endpoint(AUTHENTICATED_REPOS_ENDPOINT, params))

        return await self.fetch(build_endpoint(USER_REPOS_ENDPOINT, params, username=username))

    # Repositories

    async def get_repo(self, owner: str, repo: str) -> dict[str, Any]:
        return await self.fetch(build_endpoint(REPO_ENDPOINT, owner=owner, repo=repo))

    async def get_repo_commits(self, owner: str, repo: str, limit: int = 10) -> list[dict[str, Any]]:
        return await self.fetch(
            build_endpoint(REPO_COMMITS_ENDPOINT, {"per_page": limit}, owner=owner, repo=repo)
        )

    async def get_repo_events(self, owner: str, repo: str, limit: int = 30) -> list[dict[str, Any]]:
        return await self.fetch(
            build_endpoint(REPO_EVENTS_ENDPOINT, {"per_page": limit}, owner=owner, repo=repo)
        )

    # Search

    async def get_user_prs(self, username: str, limit: int = 30) -> dict[str, Any]:
        """Search pull requests authored by the user, newest first."""
        return await self._search_issues(username, "pr", limit)

    async def get_user_issues(self, username: str, limit: int = 30) -> dict[str, Any]:
        """Search issues authored by the user, newest first."""
        return await self._search_issues(username, "issue", limit)

    async def _search_issues(self, username: str, item_type: str, limit: int) -> dict[str, Any]:
        return await self.fetch(
            build_endpoint(
                SEARCH_ISSUES_ENDPOINT,
                {
                    "q": build_search_query(username, item_type),
                    "per_page": limit,
                    "sort": "created",
                },
            )
        )
