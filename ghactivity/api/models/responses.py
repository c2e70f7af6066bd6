"""
Response models for API endpoints.
All outgoing response schemas using Pydantic.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from ghactivity.connectors.schemas import (
    Commit,
    Contribution,
    Repository,
    RepoActivity,
    Star,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CommitsResponse(BaseModel):
    """Recent commits pushed by the account."""

    commits: List[Commit] = Field(..., description="Commits, newest push first")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "commits": [
                        {
                            "sha": "a1b2c3d",
                            "message": "Fix cache key for paginated requests",
                            "url": "https://github.com/octocat/hello-world/commit/a1b2c3d4e5f6",
                            "repo": "octocat/hello-world",
                            "repoUrl": "https://github.com/octocat/hello-world",
                            "date": "2026-01-15T10:30:00Z",
                        }
                    ]
                }
            ]
        }
    }


class StarsResponse(BaseModel):
    """Repositories the account starred most recently."""

    stars: List[Star] = Field(..., description="Starred repositories")


class ActivityResponse(BaseModel):
    """Other users' activity on the account's repositories."""

    activity: List[RepoActivity] = Field(..., description="Activity records")


class ContributionsResponse(BaseModel):
    """Pull requests and issues opened by the account."""

    contributions: List[Contribution] = Field(..., description="Opened PRs and issues")


class RepositoriesResponse(BaseModel):
    """The account's own repositories."""

    repositories: List[Repository] = Field(..., description="Repositories, last pushed first")


class FeaturedResponse(BaseModel):
    """Configured featured repositories that could be fetched."""

    featured: List[Repository] = Field(..., description="Featured repositories with recent commits")


class ErrorResponse(BaseModel):
    """Error envelope returned by every endpoint."""

    error: str = Field(..., description="Error message")
    request_id: Optional[str] = Field(None, description="Request tracking ID")
    timestamp: datetime = Field(default_factory=utcnow)


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., description="Overall status: healthy, degraded")
    timestamp: datetime = Field(default_factory=utcnow)
    version: str = Field(..., description="API version")
    uptime_seconds: Optional[float] = Field(None, description="Seconds since startup")
    username_configured: bool = Field(..., description="Whether an account is configured")
    authenticated: bool = Field(..., description="Whether a GitHub token is in use")
    cache_entries: int = Field(..., description="Responses held in the GitHub cache")
    rate_limit_remaining: Optional[int] = Field(None, description="GitHub requests left")
    rate_limit_reset_at: Optional[datetime] = Field(None, description="When the rate limit resets")
