"""
Health check endpoint.
Reports configuration, cache and GitHub rate limit status.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from ghactivity.api.dependencies import get_github_client, get_github_options
from ghactivity.api.models.responses import HealthResponse
from ghactivity.core.config import APP_VERSION, GitHubOptions
from ghactivity.core.github_client import GitHubClient
from ghactivity.core.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

startup_time: datetime = datetime.now(timezone.utc)


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns service status, cache size and GitHub rate limit",
    tags=["Health"],
)
async def health_check(
    client: GitHubClient = Depends(get_github_client),
    options: GitHubOptions = Depends(get_github_options),
) -> HealthResponse:
    """
    Health check endpoint.

    The service is "degraded" when no account is configured or the GitHub
    rate limit is exhausted.
    """
    rate_limit = client.rate_limit_status
    username_configured = bool(options.username)

    if username_configured and rate_limit["remaining"] != 0:
        overall_status = "healthy"
    else:
        overall_status = "degraded"

    logger.debug(
        "Health check performed",
        extra={"status": overall_status, "rate_limit_remaining": rate_limit["remaining"]},
    )

    return HealthResponse(
        status=overall_status,
        version=APP_VERSION,
        uptime_seconds=(datetime.now(timezone.utc) - startup_time).total_seconds(),
        username_configured=username_configured,
        authenticated=client.is_authenticated,
        cache_entries=len(client.cache),
        rate_limit_remaining=rate_limit["remaining"],
        rate_limit_reset_at=rate_limit["reset_at"],
    )
