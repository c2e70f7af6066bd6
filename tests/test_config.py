"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ghactivity.core.config import Settings, split_csv


def _settings(**env) -> Settings:
    return Settings(_env_file=None, **env)


class TestSettings:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("github", "/github"), ("/github/", "/github"), ("  /gh  ", "/gh"), ("/", "")],
    )
    def test_mount_path_normalized(self, raw, expected):
        assert _settings(GITHUB_MOUNT_PATH=raw).GITHUB_MOUNT_PATH == expected

    def test_empty_token_means_anonymous(self):
        assert _settings(GITHUB_TOKEN="").GITHUB_TOKEN is None

    def test_token_prefix_checked(self):
        with pytest.raises(ValidationError):
            _settings(GITHUB_TOKEN="not-a-token")

    def test_fine_grained_token_accepted(self):
        assert _settings(GITHUB_TOKEN="github_pat_abc").GITHUB_TOKEN == "github_pat_abc"

    def test_log_level_uppercased(self):
        assert _settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_github_options(self):
        options = _settings(
            GITHUB_USERNAME=" octocat ",
            GITHUB_LIMIT_STARS=5,
            GITHUB_REPOS="octocat/one, ,octocat/two",
            GITHUB_FEATURED_REPOS="octocat/hello-world",
        ).github_options()

        assert options.username == "octocat"
        assert options.limits.stars == 5
        assert options.limits.commits == 10
        assert options.repos == ["octocat/one", "octocat/two"]
        assert options.featured_repos == ["octocat/hello-world"]

    def test_default_cache_ttl_is_fifteen_minutes(self):
        assert _settings().GITHUB_CACHE_TTL == 900_000


def test_split_csv_drops_blanks():
    assert split_csv(" a, ,b,") == ["a", "b"]
    assert split_csv("") == []
