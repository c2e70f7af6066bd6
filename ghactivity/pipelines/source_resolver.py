"""
Decides where the site's activity data comes from.

A local proxy (a running instance of this service) is preferred; if it has
nothing to offer, the data is built directly from GitHub. The result is
tagged with its source and never mixes the two.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from ghactivity.connectors.proxy_connector import ProxyConnector
from ghactivity.connectors.schemas import (
    Commit,
    Contribution,
    Repository,
    RepoActivity,
    Star,
)
from ghactivity.core.logger import get_logger
from ghactivity.pipelines.activity_aggregator import ActivityAggregator

logger = get_logger(__name__)


class ProxySourced(BaseModel):
    """Activity served by the local proxy."""

    source: Literal["proxy"] = "proxy"
    stars: list[Star] = Field(default_factory=list)
    commits: list[Commit] = Field(default_factory=list)
    activity: list[RepoActivity] = Field(default_factory=list)
    featured: list[Repository] = Field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return any((self.stars, self.commits, self.activity, self.featured))


class DirectSourced(BaseModel):
    """Activity built straight from the GitHub API."""

    source: Literal["direct"] = "direct"
    stars: list[Star] = Field(default_factory=list)
    commits: list[Commit] = Field(default_factory=list)
    contributions: list[Contribution] = Field(default_factory=list)
    activity: list[RepoActivity] = Field(default_factory=list)
    featured: list[Repository] = Field(default_factory=list)


async def read_proxy(proxy: ProxyConnector) -> Optional[ProxySourced]:
    """
    Read every category from the proxy.

    Returns:
        ProxySourced if at least one category is non-empty, else None
    """
    if not proxy.is_configured:
        return None

    payloads = await proxy.fetch_all()
    try:
        result = ProxySourced.model_validate(
            {category: records or [] for category, records in payloads.items()}
        )
    except ValidationError as e:
        logger.warning(
            "Proxy returned malformed records, ignoring it",
            extra={"errors": e.error_count()},
        )
        return None

    if not result.has_data:
        logger.info("Proxy returned no data")
        return None
    return result


async def resolve_activity_source(
    aggregator: ActivityAggregator,
    proxy: Optional[ProxyConnector] = None,
) -> Union[ProxySourced, DirectSourced]:
    """
    Proxy data if the proxy has any, otherwise direct GitHub data.

    Proxy failures are absorbed. Errors from the direct path (missing
    username, GitHub errors) propagate to the caller.
    """
    if proxy is not None:
        proxied = await read_proxy(proxy)
        if proxied is not None:
            logger.info(
                "Using proxy activity data",
                extra={"proxy": proxy.base_url},
            )
            return proxied

    logger.info("Fetching GitHub data directly from API")
    return DirectSourced.model_validate(await aggregator.get_direct_activity())
