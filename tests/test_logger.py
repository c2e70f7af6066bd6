"""Tests for log record redaction."""

from __future__ import annotations

import pytest

from ghactivity.core import logger as logger_module
from ghactivity.core.config import settings

TOKEN = "ghp_secret_value_123"


@pytest.fixture
def token(monkeypatch):
    monkeypatch.setattr(settings, "GITHUB_TOKEN", TOKEN)
    return TOKEN


def _record(message: str, **extra) -> dict:
    return {"message": message, "extra": extra}


def test_token_removed_from_message(token):
    record = _record(f"Authorization: Bearer {token}")

    logger_module._redact_token(record)

    assert token not in record["message"]
    assert record["message"].endswith(logger_module.REDACTED)


def test_token_removed_from_nested_extra(token):
    record = _record("Fetching", extra={"headers": {"Authorization": f"Bearer {token}"}}, status=200)

    logger_module._redact_token(record)

    assert record["extra"]["extra"]["headers"]["Authorization"] == f"Bearer {logger_module.REDACTED}"
    assert record["extra"]["status"] == 200


def test_records_untouched_without_token(monkeypatch):
    monkeypatch.setattr(settings, "GITHUB_TOKEN", None)
    record = _record("ghp_looks_like_a_token")

    logger_module._redact_token(record)

    assert record["message"] == "ghp_looks_like_a_token"
