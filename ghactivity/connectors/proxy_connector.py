"""
Reader for a running ghactivity instance acting as a local proxy.
Fetches precomputed category payloads from its JSON API.
"""

import asyncio
from typing import Any, Optional

import httpx

from ghactivity.core.config import settings
from ghactivity.core.logger import get_logger

logger = get_logger(__name__)

PROXY_CATEGORIES = ("stars", "commits", "activity", "featured")


class ProxyConnector:
    """
    Reads `{mount}/api/{category}` from the proxy service.

    Every failure (unreachable service, non-2xx, malformed body) is logged
    and reported as None so callers fall through to direct GitHub access.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        mount_path: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize proxy connector.

        Args:
            base_url: Proxy origin, e.g. "https://example.net" (default: settings.PROXY_URL)
            mount_path: Path the proxy mounts its routes under (default: settings.GITHUB_MOUNT_PATH)
            http_client: Shared AsyncClient. If None, one is opened per request
            timeout: Per-request timeout in seconds
        """
        self.base_url = (base_url if base_url is not None else settings.PROXY_URL or "").rstrip("/")
        self.mount_path = mount_path if mount_path is not None else settings.GITHUB_MOUNT_PATH
        self.timeout = timeout or settings.PROXY_TIMEOUT
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    def category_url(self, category: str) -> str:
        return f"{self.base_url}{self.mount_path}/api/{category}"

    async def fetch_category(self, category: str) -> Optional[list[dict[str, Any]]]:
        """
        Fetch one category's records.

        Returns:
            The list under the category key, or None if unavailable
        """
        if not self.is_configured:
            return None

        url = self.category_url(category)
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.info(
                f"Proxy not available for {category}, falling back to GitHub API",
                extra={"url": url, "error": str(e)},
            )
            return None

        records = body.get(category) if isinstance(body, dict) else None
        if not isinstance(records, list):
            logger.warning(
                f"Proxy returned no '{category}' list",
                extra={"url": url},
            )
            return None
        return records

    async def fetch_all(self) -> dict[str, Optional[list[dict[str, Any]]]]:
        """Fetch every proxy category concurrently."""
        results = await asyncio.gather(*(self.fetch_category(c) for c in PROXY_CATEGORIES))
        return dict(zip(PROXY_CATEGORIES, results))
