"""
GitHub REST endpoint templates and utilities.
Builds request paths and parses repository identifiers.
"""

GITHUB_WEB_URL = "https://github.com"

# REST endpoint templates, relative to the API base URL
USER_ENDPOINT = "/users/{username}"
USER_EVENTS_ENDPOINT = "/users/{username}/events"
USER_PUBLIC_EVENTS_ENDPOINT = "/users/{username}/events/public"
USER_RECEIVED_EVENTS_ENDPOINT = "/users/{username}/received_events"
USER_STARRED_ENDPOINT = "/users/{username}/starred"
USER_REPOS_ENDPOINT = "/users/{username}/repos"
AUTHENTICATED_REPOS_ENDPOINT = "/user/repos"
REPO_ENDPOINT = "/repos/{owner}/{repo}"
REPO_COMMITS_ENDPOINT = "/repos/{owner}/{repo}/commits"
REPO_EVENTS_ENDPOINT = "/repos/{owner}/{repo}/events"
SEARCH_ISSUES_ENDPOINT = "/search/issues"


def build_endpoint(template: str, params: dict | None = None, **path_args: str) -> str:
    """
    Fill an endpoint template and append its query string.

    Query values are inserted verbatim so that search qualifiers keep their
    literal form (``q=author:octocat+type:pr``) and the resulting string is
    stable enough to serve as a cache key.

    Examples:
        >>> build_endpoint(USER_STARRED_ENDPOINT, {"per_page": 20, "sort": "created"}, username="octocat")
        '/users/octocat/starred?per_page=20&sort=created'
    """
    path = template.format(**path_args)
    if not params:
        return path

    query = "&".join(f"{key}={value}" for key, value in params.items())
    return f"{path}?{query}"


def build_search_query(username: str, item_type: str) -> str:
    """Search qualifier for items authored by a user (item_type: 'pr' or 'issue')."""
    return f"author:{username}+type:{item_type}"


def parse_repository_url(repo_url: str) -> tuple[str, str]:
    """
    Parse GitHub repository URL to extract owner and name.

    Args:
        repo_url: GitHub repository URL (e.g., "https://github.com/owner/repo")

    Returns:
        Tuple of (owner, name)

    Raises:
        ValueError: If URL format is invalid

    Examples:
        >>> parse_repository_url("https://github.com/octocat/hello-world")
        ('octocat', 'hello-world')
        >>> parse_repository_url("octocat/hello-world")
        ('octocat', 'hello-world')
    """
    # Handle both full URLs and "owner/repo" format
    repo_url = repo_url.strip()
    repo_url = repo_url.rstrip("/")

    # If it's a full URL, extract the path
    if repo_url.startswith("http"):
        parts = repo_url.split("github.com/")
        if len(parts) != 2:
            raise ValueError(f"Invalid GitHub URL format: {repo_url}")
        path = parts[1]
    else:
        path = repo_url

    # Split into owner and name
    parts = path.split("/")
    if len(parts) != 2:
        raise ValueError(f"Invalid repository format: {repo_url}. Expected 'owner/repo'")

    owner, name = parts
    if not owner or not name:
        raise ValueError(f"Owner and repository name cannot be empty: {repo_url}")

    return owner, name


def html_url(path: str) -> str:
    """Public github.com URL for a user or repository path."""
    return f"{GITHUB_WEB_URL}/{path}"
