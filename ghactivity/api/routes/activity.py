"""
Activity endpoints.
JSON API over the account's commits, stars, contributions and repositories.
"""

from fastapi import APIRouter, Depends, status

from ghactivity.api.dependencies import get_aggregator
from ghactivity.api.models.responses import (
    ActivityResponse,
    CommitsResponse,
    ContributionsResponse,
    ErrorResponse,
    FeaturedResponse,
    RepositoriesResponse,
    StarsResponse,
)
from ghactivity.connectors.schemas import Dashboard
from ghactivity.core.logger import get_logger
from ghactivity.pipelines.activity_aggregator import ActivityAggregator

logger = get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "No username configured"},
    status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse, "description": "GitHub unreachable"},
}


@router.get(
    "/commits",
    response_model=CommitsResponse,
    summary="Get recent commits",
    description="Commits from the account's recent push events",
    responses=ERROR_RESPONSES,
)
async def get_commits(aggregator: ActivityAggregator = Depends(get_aggregator)) -> CommitsResponse:
    commits = await aggregator.get_commits()
    logger.info("Commits served", extra={"count": len(commits)})
    return CommitsResponse(commits=commits)


@router.get(
    "/stars",
    response_model=StarsResponse,
    summary="Get starred repositories",
    responses=ERROR_RESPONSES,
)
async def get_stars(aggregator: ActivityAggregator = Depends(get_aggregator)) -> StarsResponse:
    stars = await aggregator.get_stars()
    logger.info("Stars served", extra={"count": len(stars)})
    return StarsResponse(stars=stars)


@router.get(
    "/activity",
    response_model=ActivityResponse,
    summary="Get activity on the account's repositories",
    description="What other users did on the account's repositories; the account's own events are excluded",
    responses=ERROR_RESPONSES,
)
async def get_activity(aggregator: ActivityAggregator = Depends(get_aggregator)) -> ActivityResponse:
    activity = await aggregator.get_activity()
    logger.info("Activity served", extra={"count": len(activity)})
    return ActivityResponse(activity=activity)


@router.get(
    "/contributions",
    response_model=ContributionsResponse,
    summary="Get opened pull requests and issues",
    responses=ERROR_RESPONSES,
)
async def get_contributions(
    aggregator: ActivityAggregator = Depends(get_aggregator),
) -> ContributionsResponse:
    contributions = await aggregator.get_contributions()
    return ContributionsResponse(contributions=contributions)


@router.get(
    "/repos",
    response_model=RepositoriesResponse,
    summary="Get the account's repositories",
    description="Includes private repositories when a token is configured",
    responses=ERROR_RESPONSES,
)
async def get_repositories(
    aggregator: ActivityAggregator = Depends(get_aggregator),
) -> RepositoriesResponse:
    repositories = await aggregator.get_repositories()
    return RepositoriesResponse(repositories=repositories)


@router.get(
    "/featured",
    response_model=FeaturedResponse,
    summary="Get featured repositories",
    description="Configured featured repositories with their latest commits. Repositories that fail to load are omitted",
)
async def get_featured(aggregator: ActivityAggregator = Depends(get_aggregator)) -> FeaturedResponse:
    featured = await aggregator.get_featured()
    return FeaturedResponse(featured=featured)


@router.get(
    "/dashboard",
    response_model=Dashboard,
    summary="Get every category",
    description="Profile, commits, contributions, stars, repositories, activity and featured repositories",
    responses=ERROR_RESPONSES,
)
async def get_dashboard(aggregator: ActivityAggregator = Depends(get_aggregator)) -> Dashboard:
    return await aggregator.get_dashboard()
