"""
GitHub client manager for FastAPI integration.
Owns the process-wide GitHub client, its response cache and HTTP pool.
"""

from typing import Optional

import httpx

from ghactivity.core.cache import FetchCache
from ghactivity.core.config import settings
from ghactivity.core.github_client import GitHubClient
from ghactivity.core.logger import get_logger

logger = get_logger(__name__)


class ClientManager:
    """
    Manages the lifecycle of the shared GitHubClient.

    The client (and therefore the response cache) outlives individual
    requests; it is created on startup and closed on shutdown.
    """

    def __init__(self):
        self.client: Optional[GitHubClient] = None
        self._http_client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> GitHubClient:
        """Create the shared HTTP pool and GitHub client."""
        if self.client is not None:
            return self.client

        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.HTTP_TIMEOUT, connect=5.0),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )
        self.client = GitHubClient(
            token=settings.GITHUB_TOKEN,
            cache=FetchCache(ttl_ms=settings.GITHUB_CACHE_TTL),
            http_client=self._http_client,
        )

        logger.info(
            "GitHub client ready",
            extra={
                "username": settings.GITHUB_USERNAME or None,
                "authenticated": self.client.is_authenticated,
                "cache_ttl_ms": settings.GITHUB_CACHE_TTL,
            },
        )
        return self.client

    async def shutdown(self) -> None:
        """Close the shared HTTP pool."""
        logger.info("Shutting down GitHub client...")
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
        self._http_client = None
        self.client = None
        logger.info("GitHub client shutdown complete")


# Global instance
client_manager = ClientManager()
