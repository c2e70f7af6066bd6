"""Root conftest: shared fixtures for all tests.

Provides:
- A clean settings environment (no real token or account leaks in)
- FakeGitHub: an httpx MockTransport that serves canned JSON by path
- Factories for GitHubClient instances wired to the fake
"""

from __future__ import annotations

import os

# Settings are read at import time; pin the values tests rely on.
os.environ["GITHUB_TOKEN"] = ""
os.environ["GITHUB_USERNAME"] = ""
os.environ["GITHUB_REPOS"] = ""
os.environ["GITHUB_FEATURED_REPOS"] = ""
os.environ["PROXY_URL"] = ""
os.environ["GITHUB_MOUNT_PATH"] = "/github"

from typing import Any, Callable  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402

from ghactivity.core.cache import FetchCache  # noqa: E402
from ghactivity.core.github_client import GitHubClient  # noqa: E402

API_BASE = "https://api.github.com"


class FakeGitHub:
    """Serves canned responses keyed by URL path and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, Any, dict[str, str]]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        path: str,
        json_data: Any,
        status_code: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.routes[path] = (status_code, json_data, headers or {})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body, headers = self.routes.get(
            request.url.path, (404, {"message": "Not Found"}, {})
        )
        return httpx.Response(status_code, json=body, headers=headers)

    def calls(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == path)


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client(fake_github: FakeGitHub, clock: FakeClock) -> Callable[..., GitHubClient]:
    """Build a GitHubClient whose HTTP traffic goes to fake_github."""

    def _make(token: str | None = None, ttl_ms: int = 900_000) -> GitHubClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_github.handler))
        return GitHubClient(
            token=token,
            cache=FetchCache(ttl_ms=ttl_ms, clock=clock),
            base_url=API_BASE,
            http_client=http_client,
        )

    return _make
