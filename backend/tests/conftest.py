"""Shared pytest fixtures for musicgate tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from fakes import FakeUpstream, make_settings, no_sleep
from musicgate.config import Settings, get_settings
from musicgate.dependencies import get_http_client
from musicgate.main import app
from musicgate.routers.generate import get_sleep


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(upstream: FakeUpstream, settings: Settings):
    """TestClient with settings, outbound HTTP and poll sleeps replaced."""

    async def _http() -> AsyncIterator[httpx.AsyncClient]:
        async with upstream.client() as http:
            yield http

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = _http
    app.dependency_overrides[get_sleep] = lambda: no_sleep
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def done_status() -> dict[str, Any]:
    return {
        "ok": True,
        "status": "done",
        "creator": "paxsenix",
        "records": [
            {
                "id": "rec-1",
                "audio_url": "https://cdn.paxsenix.org/abc-1.mp3",
                "image_url": "https://cdn.paxsenix.org/abc-1.jpg",
                "title": "Lofi Chill",
                "duration": 182.4,
            }
        ],
    }
