"""Unit tests for the TTL fetch cache."""

from __future__ import annotations

import pytest

from ghactivity.core.cache import DEFAULT_TTL_MS, FetchCache


class TestFetchCache:
    def test_miss_when_empty(self, clock):
        cache = FetchCache(ttl_ms=1000, clock=clock)
        assert cache.get("https://api.github.com/users/octocat") is None

    def test_hit_within_ttl(self, clock):
        cache = FetchCache(ttl_ms=1000, clock=clock)
        cache.put("k", {"login": "octocat"})

        clock.advance(0.999)

        assert cache.get("k") == {"login": "octocat"}

    @pytest.mark.parametrize("elapsed", [1.0, 1.5, 3600.0])
    def test_miss_at_or_after_ttl(self, clock, elapsed):
        cache = FetchCache(ttl_ms=1000, clock=clock)
        cache.put("k", [1, 2, 3])

        clock.advance(elapsed)

        assert cache.get("k") is None

    def test_put_overwrites_and_restarts_age(self, clock):
        cache = FetchCache(ttl_ms=1000, clock=clock)
        cache.put("k", "old")
        clock.advance(0.9)
        cache.put("k", "new")
        clock.advance(0.9)

        assert cache.get("k") == "new"
        assert len(cache) == 1

    def test_empty_list_is_a_hit(self, clock):
        cache = FetchCache(ttl_ms=1000, clock=clock)
        cache.put("k", [])
        assert cache.get("k") == []

    def test_refetched_value_replaces_stale_one(self, clock):
        cache = FetchCache(ttl_ms=1000, clock=clock)
        cache.put("a", 1)
        clock.advance(10)
        assert cache.get("a") is None

        cache.put("a", 2)

        assert cache.get("a") == 2

    def test_keys_are_independent(self, clock):
        cache = FetchCache(ttl_ms=1000, clock=clock)
        cache.put("https://api.github.com/users/octocat/starred?per_page=10", ["a"])

        assert cache.get("https://api.github.com/users/octocat/starred?per_page=20") is None

    def test_default_ttl_is_fifteen_minutes(self):
        assert FetchCache().ttl_ms == DEFAULT_TTL_MS == 900_000
