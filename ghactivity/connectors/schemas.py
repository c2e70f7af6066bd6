"""
Normalized activity records.
Defines the UI-ready shapes produced from raw GitHub payloads.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Contribution kinds we surface
ContributionType = Literal["pr", "issue"]


class NormalizedRecord(BaseModel):
    """Base for records serialized with camelCase keys (repoUrl, actorAvatar...)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Commit(NormalizedRecord):
    """One commit from a PushEvent."""

    sha: str = Field(..., description="7-character SHA prefix")
    message: str = Field(..., description="First message line, truncated to 80 chars")
    url: str
    repo: str
    repo_url: str
    date: str = Field(..., description="Push timestamp (ISO 8601)")


class Contribution(NormalizedRecord):
    """A pull request or issue opened by the account."""

    type: ContributionType
    title: str
    url: Optional[str] = None
    repo: str
    repo_url: str
    number: Optional[int] = None
    date: str


class Star(NormalizedRecord):
    """A starred repository."""

    name: str = Field(..., description="Repository in 'owner/repo' format")
    description: str = ""
    url: str
    stars: int = 0
    language: Optional[str] = None
    topics: list[str] = Field(default_factory=list)


class FeaturedCommit(NormalizedRecord):
    """A commit from a featured repository's log."""

    sha: str
    message: str
    url: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None


class Repository(Star):
    """A repository owned by the account, optionally with recent commits."""

    owner: Optional[str] = None
    private: bool = False
    fork: bool = False
    forks: int = 0
    updated: Optional[str] = Field(default=None, description="Last push timestamp")
    commits: Optional[list[FeaturedCommit]] = None


class RepoActivity(NormalizedRecord):
    """Something another user did on one of the account's repositories."""

    type: str = Field(..., description="Event kind, e.g. 'watch', 'pullrequest'")
    actor: str
    actor_url: str
    actor_avatar: str = ""
    repo: str
    repo_url: str
    date: str
    detail: str


class UserProfile(NormalizedRecord):
    """Account profile summary."""

    login: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    url: Optional[str] = None
    bio: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0


class Dashboard(NormalizedRecord):
    """Every category for the account, each truncated to its limit."""

    user: Optional[UserProfile] = None
    commits: list[Commit] = Field(default_factory=list)
    contributions: list[Contribution] = Field(default_factory=list)
    stars: list[Star] = Field(default_factory=list)
    repositories: list[Repository] = Field(default_factory=list)
    activity: list[RepoActivity] = Field(default_factory=list)
    featured: list[Repository] = Field(default_factory=list)
