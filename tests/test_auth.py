"""Tests for the event token gate."""

import asyncio

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from app.core import auth
from app.core.config import settings


def make_request(headers: dict | None = None) -> Request:
    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
    ]
    return Request({
        "type": "http",
        "method": "GET",
        "path": "/media/photo.jpg",
        "query_string": b"",
        "headers": raw_headers,
    })


@pytest.fixture
def token(monkeypatch):
    monkeypatch.setattr(settings, "EVENT_TOKEN", "  s3cret  ")
    return "s3cret"


@pytest.fixture
def no_token(monkeypatch):
    monkeypatch.setattr(settings, "EVENT_TOKEN", "")


# ============================================================================
# Token Extraction
# ============================================================================

class TestTokenExtraction:

    def test_header(self):
        request = make_request({"X-Event-Token": " abc "})
        assert auth.get_event_token_from_request(request) == "abc"

    def test_bearer(self):
        request = make_request({"Authorization": "Bearer abc"})
        assert auth.get_event_token_from_request(request) == "abc"

    def test_bearer_is_case_insensitive(self):
        request = make_request({"Authorization": "bearer abc"})
        assert auth.get_event_token_from_request(request) == "abc"

    def test_cookie(self):
        request = make_request({"Cookie": "theme=dark; event_token=abc"})
        assert auth.get_event_token_from_request(request) == "abc"

    def test_header_wins_over_bearer_and_cookie(self):
        request = make_request({
            "X-Event-Token": "from-header",
            "Authorization": "Bearer from-bearer",
            "Cookie": "event_token=from-cookie",
        })
        assert auth.get_event_token_from_request(request) == "from-header"

    def test_blank_header_falls_through(self):
        request = make_request({"X-Event-Token": "  ", "Cookie": "event_token=abc"})
        assert auth.get_event_token_from_request(request) == "abc"

    def test_non_bearer_authorization_ignored(self):
        request = make_request({"Authorization": "Basic dXNlcjpwYXNz"})
        assert auth.get_event_token_from_request(request) is None

    def test_no_token(self):
        assert auth.get_event_token_from_request(make_request()) is None


# ============================================================================
# Validation
# ============================================================================

class TestValidation:

    def test_not_required_when_blank(self, no_token):
        assert not auth.is_token_required()
        assert auth.is_token_valid(make_request())

    def test_required_when_configured(self, token):
        assert auth.is_token_required()

    def test_configured_token_is_trimmed(self, token):
        assert auth.is_token_valid(make_request({"X-Event-Token": token}))

    def test_wrong_token(self, token):
        assert not auth.is_token_valid(make_request({"X-Event-Token": "nope"}))

    def test_missing_token(self, token):
        assert not auth.is_token_valid(make_request())

    def test_is_token_matching_rejects_empty(self, token):
        assert not auth.is_token_matching("")
        assert not auth.is_token_matching(None)


class TestRequireEventToken:

    def test_raises_401_without_token(self, token):
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(auth.require_event_token(make_request()))

        assert exc_info.value.status_code == 401

    def test_passes_with_token(self, token):
        asyncio.run(auth.require_event_token(make_request({"Authorization": f"Bearer {token}"})))
