"""Builders for raw GitHub API payloads used across the test suite."""

from __future__ import annotations

from typing import Any

CREATED_AT = "2026-01-15T10:30:00Z"


def _envelope(event_type: str, repo: str, actor: str, payload: dict, **overrides: Any) -> dict:
    base = {
        "id": "1",
        "type": event_type,
        "actor": {
            "login": actor,
            "avatar_url": f"https://avatars.githubusercontent.com/{actor}",
        },
        "repo": {"name": repo},
        "payload": payload,
        "created_at": CREATED_AT,
    }
    base.update(overrides)
    return base


def push_event(
    repo: str = "octocat/hello-world",
    shas: tuple[str, ...] = ("a" * 40,),
    actor: str = "octocat",
    message: str = "Update README",
    **overrides: Any,
) -> dict:
    commits = [{"sha": sha, "message": f"{message} {i}"} for i, sha in enumerate(shas)]
    return _envelope(
        "PushEvent",
        repo,
        actor,
        {"size": len(commits), "commits": commits},
        **overrides,
    )


def pull_request_event(
    action: str = "opened",
    number: int = 7,
    title: str = "Add caching",
    repo: str = "octocat/hello-world",
    actor: str = "octocat",
) -> dict:
    return _envelope(
        "PullRequestEvent",
        repo,
        actor,
        {
            "action": action,
            "number": number,
            "pull_request": {
                "number": number,
                "title": title,
                "html_url": f"https://github.com/{repo}/pull/{number}",
            },
        },
    )


def issues_event(
    action: str = "opened",
    number: int = 3,
    title: str = "Crash on startup",
    repo: str = "octocat/hello-world",
    actor: str = "octocat",
) -> dict:
    return _envelope(
        "IssuesEvent",
        repo,
        actor,
        {
            "action": action,
            "issue": {
                "number": number,
                "title": title,
                "html_url": f"https://github.com/{repo}/issues/{number}",
            },
        },
    )


def simple_event(
    event_type: str,
    actor: str = "hubot",
    repo: str = "octocat/hello-world",
    payload: dict | None = None,
) -> dict:
    return _envelope(event_type, repo, actor, payload or {})


def repo_json(full_name: str = "octocat/hello-world", **overrides: Any) -> dict:
    """Minimal GitHub repository payload."""
    owner = full_name.split("/")[0]
    base = {
        "full_name": full_name,
        "description": "My first repository",
        "html_url": f"https://github.com/{full_name}",
        "stargazers_count": 42,
        "forks_count": 5,
        "language": "Python",
        "topics": ["api", "cache"],
        "owner": {"login": owner},
        "private": False,
        "fork": False,
        "pushed_at": "2026-01-14T00:00:00Z",
    }
    base.update(overrides)
    return base


def commit_json(sha: str = "b" * 40, message: str = "Initial commit", author: str = "Mona") -> dict:
    """Entry of GET /repos/{owner}/{repo}/commits."""
    return {
        "sha": sha,
        "html_url": f"https://github.com/octocat/hello-world/commit/{sha}",
        "commit": {
            "message": message,
            "author": {"name": author, "date": CREATED_AT},
        },
    }


def user_json(login: str = "octocat") -> dict:
    return {
        "login": login,
        "name": "The Octocat",
        "avatar_url": f"https://avatars.githubusercontent.com/{login}",
        "html_url": f"https://github.com/{login}",
        "bio": None,
        "public_repos": 8,
        "followers": 100,
        "following": 9,
    }
