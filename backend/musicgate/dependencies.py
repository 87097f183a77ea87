from collections.abc import AsyncIterator
from typing import Any

import httpx
from fastapi import Depends, Request

from musicgate.config import Settings, get_settings, require_kie_key, require_paxsenix_key
from musicgate.errors import ValidationFailed
from musicgate.services.kie import KieClient
from musicgate.services.paxsenix import PaxsenixClient


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        yield client


class Providers:
    """Builds provider clients on demand so a missing key fails at first use."""

    def __init__(self, settings: Settings, http: httpx.AsyncClient) -> None:
        self.settings = settings
        self.http = http

    def paxsenix(self) -> PaxsenixClient:
        return PaxsenixClient(
            self.http,
            require_paxsenix_key(self.settings),
            self.settings.paxsenix_base_url,
        )

    def kie(self) -> KieClient:
        return KieClient(
            self.http,
            require_kie_key(self.settings),
            self.settings.kie_file_upload_url,
            self.settings.kie_cover_url,
        )


def get_providers(
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> Providers:
    return Providers(settings, http)


async def read_json_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return {}
    try:
        return await request.json()
    except ValueError:
        raise ValidationFailed(["Invalid JSON body"]) from None
