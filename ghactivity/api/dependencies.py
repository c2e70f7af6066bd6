"""
FastAPI dependencies shared by the routers.
"""

from fastapi import Depends

from ghactivity.api.utils.client_manager import client_manager
from ghactivity.core.config import GitHubOptions, settings
from ghactivity.core.github_client import GitHubClient
from ghactivity.pipelines.activity_aggregator import ActivityAggregator


def get_github_options() -> GitHubOptions:
    """Account configuration for the current request."""
    return settings.github_options()


async def get_github_client() -> GitHubClient:
    """The shared client; created on first use if the lifespan has not run."""
    if client_manager.client is None:
        return await client_manager.initialize()
    return client_manager.client


def get_aggregator(
    client: GitHubClient = Depends(get_github_client),
    options: GitHubOptions = Depends(get_github_options),
) -> ActivityAggregator:
    return ActivityAggregator(client, options)
