"""Tests for the proxy connector and proxy/direct source resolution."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from ghactivity.connectors.proxy_connector import PROXY_CATEGORIES, ProxyConnector
from ghactivity.core.config import GitHubOptions
from ghactivity.core.exceptions import ConfigurationError
from ghactivity.pipelines.activity_aggregator import ActivityAggregator
from ghactivity.pipelines.source_resolver import (
    DirectSourced,
    ProxySourced,
    read_proxy,
    resolve_activity_source,
)
from tests.helpers.factories import push_event, repo_json

PROXY_URL = "http://proxy.local"

STAR = {
    "name": "octocat/hello-world",
    "description": "Greetings",
    "url": "https://github.com/octocat/hello-world",
    "stars": 42,
    "language": "Python",
    "topics": ["api"],
}


def _proxy(bodies: dict[str, Any], status_code: int = 200) -> tuple[ProxyConnector, list[httpx.Request]]:
    """A ProxyConnector whose categories answer from `bodies` (missing means 404)."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        category = request.url.path.rsplit("/", 1)[-1]
        if category not in bodies:
            return httpx.Response(404, json={"error": "Not Found"})
        return httpx.Response(status_code, json=bodies[category])

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ProxyConnector(base_url=PROXY_URL, mount_path="/github", http_client=http_client), seen


def _unreachable_proxy() -> ProxyConnector:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ProxyConnector(base_url=PROXY_URL, mount_path="/github", http_client=http_client)


def _serve_direct(fake_github) -> None:
    fake_github.add("/users/octocat/events/public", [push_event()])
    fake_github.add("/users/octocat/starred", [repo_json()])
    fake_github.add("/users/octocat/received_events", [])


# ═══════════════════════════════════════════════════════════════════════════
# ProxyConnector
# ═══════════════════════════════════════════════════════════════════════════


class TestProxyConnector:
    def test_category_url(self):
        proxy = ProxyConnector(base_url="http://proxy.local/", mount_path="/github")
        assert proxy.category_url("stars") == "http://proxy.local/github/api/stars"

    def test_blank_base_url_is_not_configured(self):
        assert not ProxyConnector(base_url="").is_configured

    @pytest.mark.anyio
    async def test_fetch_category_returns_list(self):
        proxy, seen = _proxy({"stars": {"stars": [STAR]}})

        records = await proxy.fetch_category("stars")

        assert records == [STAR]
        assert seen[0].url.path == "/github/api/stars"

    @pytest.mark.anyio
    async def test_non_2xx_is_none(self):
        proxy, _ = _proxy({"stars": {"stars": [STAR]}}, status_code=503)
        assert await proxy.fetch_category("stars") is None

    @pytest.mark.anyio
    async def test_missing_list_is_none(self):
        proxy, _ = _proxy({"stars": {"error": "nope"}})
        assert await proxy.fetch_category("stars") is None

    @pytest.mark.anyio
    async def test_unreachable_is_none(self):
        assert await _unreachable_proxy().fetch_category("commits") is None

    @pytest.mark.anyio
    async def test_fetch_all_covers_every_category(self):
        proxy, seen = _proxy({"stars": {"stars": [STAR]}, "commits": {"commits": []}})

        payloads = await proxy.fetch_all()

        assert set(payloads) == set(PROXY_CATEGORIES)
        assert payloads["stars"] == [STAR]
        assert payloads["commits"] == []
        assert payloads["activity"] is None
        assert len(seen) == len(PROXY_CATEGORIES)


# ═══════════════════════════════════════════════════════════════════════════
# read_proxy
# ═══════════════════════════════════════════════════════════════════════════


class TestReadProxy:
    @pytest.mark.anyio
    async def test_unconfigured_proxy_makes_no_requests(self):
        assert await read_proxy(ProxyConnector(base_url="")) is None

    @pytest.mark.anyio
    async def test_all_empty_is_none(self):
        proxy, _ = _proxy({category: {category: []} for category in PROXY_CATEGORIES})
        assert await read_proxy(proxy) is None

    @pytest.mark.anyio
    async def test_malformed_records_are_none(self):
        proxy, _ = _proxy({"stars": {"stars": [{"stars": "many"}]}})
        assert await read_proxy(proxy) is None


# ═══════════════════════════════════════════════════════════════════════════
# resolve_activity_source
# ═══════════════════════════════════════════════════════════════════════════


class TestResolveActivitySource:
    @pytest.mark.anyio
    async def test_proxy_with_any_data_wins(self, make_client, fake_github):
        proxy, _ = _proxy({"stars": {"stars": [STAR]}, "commits": {"commits": []}})
        aggregator = ActivityAggregator(make_client(), GitHubOptions(username="octocat"))

        result = await resolve_activity_source(aggregator, proxy)

        assert isinstance(result, ProxySourced)
        assert result.source == "proxy"
        assert [s.name for s in result.stars] == ["octocat/hello-world"]
        assert result.commits == []
        assert fake_github.requests == []

    @pytest.mark.anyio
    async def test_empty_proxy_falls_back_to_direct(self, make_client, fake_github):
        _serve_direct(fake_github)
        proxy, _ = _proxy({category: {category: []} for category in PROXY_CATEGORIES})
        aggregator = ActivityAggregator(make_client(), GitHubOptions(username="octocat"))

        result = await resolve_activity_source(aggregator, proxy)

        assert isinstance(result, DirectSourced)
        assert result.source == "direct"
        assert len(result.commits) == 1
        assert len(result.stars) == 1

    @pytest.mark.anyio
    async def test_unreachable_proxy_falls_back_to_direct(self, make_client, fake_github):
        _serve_direct(fake_github)
        aggregator = ActivityAggregator(make_client(), GitHubOptions(username="octocat"))

        result = await resolve_activity_source(aggregator, _unreachable_proxy())

        assert isinstance(result, DirectSourced)

    @pytest.mark.anyio
    async def test_no_proxy_goes_direct(self, make_client, fake_github):
        _serve_direct(fake_github)
        aggregator = ActivityAggregator(make_client(), GitHubOptions(username="octocat"))

        result = await resolve_activity_source(aggregator)

        assert isinstance(result, DirectSourced)
        assert result.contributions == []
        assert result.featured == []

    @pytest.mark.anyio
    async def test_direct_path_errors_propagate(self, make_client):
        aggregator = ActivityAggregator(make_client(), GitHubOptions())

        with pytest.raises(ConfigurationError):
            await resolve_activity_source(aggregator, ProxyConnector(base_url=""))

    @pytest.mark.anyio
    async def test_serialized_result_is_tagged(self, make_client):
        proxy, _ = _proxy({"stars": {"stars": [STAR]}})
        aggregator = ActivityAggregator(make_client(), GitHubOptions(username="octocat"))

        result = await resolve_activity_source(aggregator, proxy)

        dumped = result.model_dump(by_alias=True)
        assert dumped["source"] == "proxy"
        assert "contributions" not in dumped
