"""
Activity aggregation for one GitHub account.
Fans out GitHub API calls per category, normalizes and truncates the results.
"""

import asyncio
from itertools import chain
from typing import Any, Optional

from pydantic import ValidationError

from ghactivity.connectors.event_transformer import GitHubEventTransformer
from ghactivity.connectors.schemas import (
    Commit,
    Contribution,
    Dashboard,
    Repository,
    RepoActivity,
    Star,
)
from ghactivity.core.config import GitHubOptions
from ghactivity.core.exceptions import (
    BaseAppException,
    ConfigurationError,
    PartialFetchError,
)
from ghactivity.core.github_client import GitHubClient
from ghactivity.core.logger import get_logger
from ghactivity.utils.github_queries import parse_repository_url

logger = get_logger(__name__)

NO_USERNAME_MESSAGE = "No username configured"


class ActivityAggregator:
    """
    Builds normalized activity for the configured account.

    Independent GitHub calls are always issued together and joined with
    asyncio.gather. Each category is truncated to its configured limit
    before it is returned.
    """

    # How many raw items to request per source
    DASHBOARD_EVENTS = 30
    COMMIT_EVENTS = 50
    CONTRIBUTION_EVENTS = 100
    REPO_EVENTS_PER_REPO = 20
    FEATURED_COMMITS = 5

    def __init__(self, client: GitHubClient, options: GitHubOptions):
        """
        Args:
            client: Shared GitHub client (owns the response cache)
            options: Account configuration for this request
        """
        self.client = client
        self.options = options
        self.limits = options.limits
        self.transformer = GitHubEventTransformer()

    @property
    def username(self) -> str:
        """
        Configured account name.

        Raises:
            ConfigurationError: If no username is configured
        """
        if not self.options.username:
            raise ConfigurationError(NO_USERNAME_MESSAGE)
        return self.options.username

    async def get_commits(self) -> list[Commit]:
        events = await self.client.get_user_events(self.username, self.COMMIT_EVENTS)
        return self.transformer.extract_commits(events)[: self.limits.commits]

    async def get_contributions(self) -> list[Contribution]:
        events = await self.client.get_user_events(self.username, self.CONTRIBUTION_EVENTS)
        return self.transformer.extract_contributions(events)[: self.limits.contributions]

    async def get_stars(self) -> list[Star]:
        starred = await self.client.get_user_starred(self.username, self.limits.stars)
        return self.transformer.format_starred(starred)[: self.limits.stars]

    async def get_repositories(self) -> list[Repository]:
        repos = await self.client.get_user_repos(self.username, self.limits.repos)
        return self.transformer.format_repos(repos)[: self.limits.repos]

    async def get_activity(self) -> list[RepoActivity]:
        """Other users' activity on the account's repositories."""
        username = self.username
        events = await self._fetch_activity_events(username)
        return self.transformer.extract_repo_activity(events, username)[: self.limits.activity]

    async def get_featured(self) -> list[Repository]:
        """
        Featured repositories with their latest commits.

        A repository that cannot be fetched is logged and left out; this
        method does not raise for individual repository failures.
        """
        featured_repos = self.options.featured_repos
        if not featured_repos:
            return []

        logger.info("Fetching featured repos", extra={"repos": featured_repos})
        results = await asyncio.gather(
            *(self._fetch_featured_safely(repo_path) for repo_path in featured_repos)
        )
        featured = [repo for repo in results if repo is not None]

        logger.info(
            f"Featured repos loaded: {len(featured)}/{len(featured_repos)}",
            extra={"loaded": len(featured), "configured": len(featured_repos)},
        )
        return featured

    async def get_dashboard(self) -> Dashboard:
        """
        Every category at once.

        Raises:
            ConfigurationError: If no username is configured
            UpstreamError: If any required GitHub call fails; no partial
                dashboard is returned
        """
        username = self.username

        logger.info(
            "Fetching dashboard data",
            extra={"username": username, "authenticated": self.client.is_authenticated},
        )

        user, events, starred, repos, activity_events, featured = await asyncio.gather(
            self.client.get_user(username),
            self.client.get_user_events(username, self.DASHBOARD_EVENTS),
            self.client.get_user_starred(username, self.limits.stars),
            self.client.get_user_repos(username, self.limits.repos),
            self._fetch_activity_events(username),
            self.get_featured(),
        )

        logger.debug(
            "Dashboard data fetched",
            extra={
                "events": len(events),
                "starred": len(starred),
                "repos": len(repos),
                "activity_events": len(activity_events),
                "featured": len(featured),
            },
        )

        return Dashboard(
            user=self.transformer.format_user(user),
            commits=self.transformer.extract_commits(events)[: self.limits.commits],
            contributions=self.transformer.extract_contributions(events)[: self.limits.contributions],
            stars=self.transformer.format_starred(starred)[: self.limits.stars],
            repositories=self.transformer.format_repos(repos)[: self.limits.repos],
            activity=self.transformer.extract_repo_activity(activity_events, username)[
                : self.limits.activity
            ],
            featured=featured,
        )

    async def get_direct_activity(self) -> dict[str, list[Any]]:
        """
        The site payload built straight from GitHub.

        Returns:
            Records keyed by category: commits, contributions, stars,
            activity, featured
        """
        username = self.username

        events, starred, activity_events, featured = await asyncio.gather(
            self.client.get_user_events(username, self.COMMIT_EVENTS),
            self.client.get_user_starred(username, self.limits.stars),
            self._fetch_activity_events(username),
            self.get_featured(),
        )

        return {
            "commits": self.transformer.extract_commits(events)[: self.limits.commits],
            "contributions": self.transformer.extract_contributions(events)[: self.limits.contributions],
            "stars": self.transformer.format_starred(starred)[: self.limits.stars],
            "activity": self.transformer.extract_repo_activity(activity_events, username)[
                : self.limits.activity
            ],
            "featured": featured,
        }

    async def _fetch_activity_events(self, username: str) -> list[dict[str, Any]]:
        """
        Raw events for activity extraction.

        With a repository allow-list, events of every listed repository are
        fetched concurrently and a failing repository contributes nothing.
        Otherwise the account's received events are used.
        """
        if not self.options.repos:
            # Twice the limit leaves room for the owner's own events being filtered out
            return await self.client.get_user_received_events(username, self.limits.activity * 2)

        per_repo = await asyncio.gather(
            *(self._fetch_repo_events_safely(repo_path) for repo_path in self.options.repos)
        )
        return list(chain.from_iterable(per_repo))

    async def _fetch_repo_events_safely(self, repo_path: str) -> list[dict[str, Any]]:
        try:
            owner, repo = parse_repository_url(repo_path)
            return await self.client.get_repo_events(owner, repo, self.REPO_EVENTS_PER_REPO)
        except (BaseAppException, ValueError) as e:
            logger.warning(
                f"Failed to fetch events for {repo_path}",
                extra={"repo": repo_path, "error": str(e)},
            )
            return []

    async def _fetch_featured_safely(self, repo_path: str) -> Optional[Repository]:
        try:
            return await self._fetch_featured_repo(repo_path)
        except PartialFetchError as e:
            logger.warning(e.message, extra=e.details)
            return None

    async def _fetch_featured_repo(self, repo_path: str) -> Repository:
        """
        Repository detail plus its latest commits, fetched concurrently.

        Raises:
            PartialFetchError: If the path is invalid or either call fails
        """
        try:
            owner, repo = parse_repository_url(repo_path)
            repo_data, repo_commits = await asyncio.gather(
                self.client.get_repo(owner, repo),
                self.client.get_repo_commits(owner, repo, self.FEATURED_COMMITS),
            )
            repository = self.transformer.format_repos([repo_data])[0]
            repository.commits = self.transformer.format_repo_commits(repo_commits)[
                : self.FEATURED_COMMITS
            ]
        except (BaseAppException, ValueError, ValidationError, TypeError, AttributeError, KeyError) as e:
            raise PartialFetchError(
                f"Error fetching featured repo {repo_path}",
                details={"repo": repo_path, "error": str(e)},
            ) from e

        return repository
