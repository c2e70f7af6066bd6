"""
Transforms GitHub REST API responses into normalized activity records.
"""

from typing import Any, Optional

from ghactivity.connectors.event_types import (
    CreateEvent,
    DeleteEvent,
    ForkEvent,
    GitHubEvent,
    IssueCommentEvent,
    IssuesEvent,
    PullRequestEvent,
    PushEvent,
    WatchEvent,
    parse_events,
)
from ghactivity.connectors.schemas import (
    Commit,
    Contribution,
    FeaturedCommit,
    Repository,
    RepoActivity,
    Star,
    UserProfile,
)
from ghactivity.core.logger import get_logger
from ghactivity.utils.github_queries import html_url

logger = get_logger(__name__)

ELLIPSIS = "…"

TITLE_MAX_LENGTH = 80
DESCRIPTION_MAX_LENGTH = 120
FEATURED_COMMIT_MESSAGE_MAX_LENGTH = 60
MAX_TOPICS = 5
SHORT_SHA_LENGTH = 7


def truncate(text: Optional[str], max_length: int = TITLE_MAX_LENGTH) -> str:
    """
    Shorten text to at most max_length characters, ending with an ellipsis.

    Text already within the limit is returned unchanged, so truncating twice
    is the same as truncating once. None becomes "".
    """
    if not text or len(text) <= max_length:
        return text or ""
    return text[: max_length - 1] + ELLIPSIS


def first_line(message: Optional[str]) -> str:
    return (message or "").split("\n")[0]


def event_kind(event_type: str) -> str:
    """'PullRequestEvent' -> 'pullrequest'."""
    if event_type.endswith("Event"):
        event_type = event_type[: -len("Event")]
    return event_type.lower()


class GitHubEventTransformer:
    """
    Transforms raw GitHub payloads into normalized records.

    All methods are pure: no I/O, input order preserved, and missing optional
    fields normalize to empty values instead of raising.
    """

    @staticmethod
    def extract_commits(raw_events: list[dict[str, Any]]) -> list[Commit]:
        """
        One Commit per commit of every PushEvent, in event-then-commit order.

        Args:
            raw_events: Events as returned by the events endpoints

        Returns:
            Normalized commits
        """
        commits = []
        for event in parse_events(raw_events):
            if not isinstance(event, PushEvent):
                continue

            repo_name = event.repo.name
            for commit in event.payload.commits:
                commits.append(
                    Commit(
                        sha=commit.sha[:SHORT_SHA_LENGTH],
                        message=truncate(first_line(commit.message)),
                        url=html_url(f"{repo_name}/commit/{commit.sha}"),
                        repo=repo_name,
                        repo_url=html_url(repo_name),
                        date=event.created_at,
                    )
                )
        return commits

    @staticmethod
    def extract_contributions(raw_events: list[dict[str, Any]]) -> list[Contribution]:
        """Pull requests and issues the account opened; other actions are dropped."""
        contributions = []
        for event in parse_events(raw_events):
            if isinstance(event, PullRequestEvent):
                kind, item = "pr", event.payload.pull_request
                action = event.payload.action
            elif isinstance(event, IssuesEvent):
                kind, item = "issue", event.payload.issue
                action = event.payload.action
            else:
                continue

            if action != "opened":
                continue

            contributions.append(
                Contribution(
                    type=kind,
                    title=truncate(item.title if item else None),
                    url=item.html_url if item else None,
                    repo=event.repo.name,
                    repo_url=html_url(event.repo.name),
                    number=item.number if item else None,
                    date=event.created_at,
                )
            )
        return contributions

    @staticmethod
    def format_starred(repos: list[dict[str, Any]]) -> list[Star]:
        """Starred repository resources to Star records, 1:1."""
        return [
            Star(
                name=repo.get("full_name", ""),
                description=truncate(repo.get("description"), DESCRIPTION_MAX_LENGTH),
                url=repo.get("html_url", ""),
                stars=repo.get("stargazers_count") or 0,
                language=repo.get("language"),
                topics=(repo.get("topics") or [])[:MAX_TOPICS],
            )
            for repo in repos or []
        ]

    @staticmethod
    def format_repos(repos: list[dict[str, Any]]) -> list[Repository]:
        """Repository resources to Repository records, 1:1."""
        return [
            Repository(
                name=repo.get("full_name", ""),
                description=truncate(repo.get("description"), DESCRIPTION_MAX_LENGTH),
                url=repo.get("html_url", ""),
                stars=repo.get("stargazers_count") or 0,
                language=repo.get("language"),
                topics=(repo.get("topics") or [])[:MAX_TOPICS],
                owner=(repo.get("owner") or {}).get("login"),
                private=bool(repo.get("private")),
                fork=bool(repo.get("fork")),
                forks=repo.get("forks_count") or 0,
                updated=repo.get("pushed_at") or repo.get("updated_at"),
            )
            for repo in repos or []
        ]

    @staticmethod
    def format_repo_commits(commits: list[dict[str, Any]]) -> list[FeaturedCommit]:
        """Entries of a repository commit log to FeaturedCommit records."""
        formatted = []
        for item in commits or []:
            commit = item.get("commit") or {}
            author = commit.get("author") or {}
            formatted.append(
                FeaturedCommit(
                    sha=item.get("sha", "")[:SHORT_SHA_LENGTH],
                    message=truncate(
                        first_line(commit.get("message")), FEATURED_COMMIT_MESSAGE_MAX_LENGTH
                    ),
                    url=item.get("html_url"),
                    author=author.get("name"),
                    date=author.get("date"),
                )
            )
        return formatted

    @staticmethod
    def format_user(user: dict[str, Any]) -> UserProfile:
        return UserProfile(
            login=user.get("login", ""),
            name=user.get("name"),
            avatar_url=user.get("avatar_url"),
            url=user.get("html_url"),
            bio=user.get("bio"),
            public_repos=user.get("public_repos") or 0,
            followers=user.get("followers") or 0,
            following=user.get("following") or 0,
        )

    @classmethod
    def extract_repo_activity(
        cls, raw_events: list[dict[str, Any]], owner_username: str
    ) -> list[RepoActivity]:
        """
        Activity by other users, excluding everything the owner did.

        Args:
            raw_events: Repository or received events
            owner_username: Account whose own events are filtered out

        Returns:
            Normalized activity records with a human-readable detail
        """
        activity = [
            RepoActivity(
                type=event_kind(event.type),
                actor=event.actor.login,
                actor_url=html_url(event.actor.login),
                actor_avatar=event.actor.avatar_url,
                repo=event.repo.name,
                repo_url=html_url(event.repo.name),
                date=event.created_at,
                detail=cls.describe_event(event),
            )
            for event in parse_events(raw_events)
            if event.actor.login != owner_username
        ]

        logger.debug(
            f"Extracted {len(activity)} activity records",
            extra={"owner": owner_username, "activity_count": len(activity)},
        )
        return activity

    @staticmethod
    def describe_event(event: GitHubEvent) -> str:
        """Short human-readable summary of an event."""
        if isinstance(event, WatchEvent):
            return "starred"
        if isinstance(event, ForkEvent):
            return "forked"
        if isinstance(event, PullRequestEvent):
            payload = event.payload
            number = payload.number
            if number is None and payload.pull_request:
                number = payload.pull_request.number
            return f"{payload.action} PR #{number}"
        if isinstance(event, IssuesEvent):
            return f"{event.payload.action} issue #{event.payload.number}"
        if isinstance(event, IssueCommentEvent):
            return "commented"
        if isinstance(event, CreateEvent):
            return f"created {event.payload.ref_type}"
        if isinstance(event, DeleteEvent):
            return f"deleted {event.payload.ref_type}"
        if isinstance(event, PushEvent):
            payload = event.payload
            return f"pushed {payload.size or len(payload.commits)} commit(s)"

        return event_kind(event.type)
