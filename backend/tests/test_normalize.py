"""Tests for the attribution normalizer and the response class built on it."""

from __future__ import annotations

import json

from musicgate.responses import AttributedJSONResponse
from musicgate.services.normalize import normalize_author


class TestNormalizeAuthor:
    def test_replaces_creator(self) -> None:
        result = normalize_author({"creator": "X", "ok": True}, "@me")

        assert result == {"Author": "@me", "ok": True}
        assert list(result)[0] == "Author"

    def test_adds_author_when_absent(self) -> None:
        assert list(normalize_author({"status": "done", "jobId": "abc"}, "@me")) == [
            "Author",
            "status",
            "jobId",
        ]

    def test_existing_author_is_overwritten(self) -> None:
        assert normalize_author({"Author": "someone", "ok": False}, "@me") == {
            "Author": "@me",
            "ok": False,
        }

    def test_non_objects_pass_through(self) -> None:
        assert normalize_author(None, "@me") is None
        assert normalize_author([1, 2], "@me") == [1, 2]

    def test_nested_creator_untouched(self) -> None:
        result = normalize_author({"upstream": {"creator": "X"}}, "@me")
        assert result["upstream"] == {"creator": "X"}


class TestAttributedJSONResponse:
    def test_body_is_normalized(self) -> None:
        resp = AttributedJSONResponse({"creator": "paxsenix", "ok": False}, status_code=502)

        body = json.loads(resp.body)
        assert resp.status_code == 502
        assert "creator" not in body
        assert list(body)[0] == "Author"
