import asyncio
from typing import Any

from fastapi import APIRouter, Depends, Query

from musicgate.dependencies import Providers, get_providers, read_json_body
from musicgate.services import music
from musicgate.services.music import Sleep
from musicgate.services.polling import parse_poll_interval_ms, parse_timeout_ms
from musicgate.services.validation import validate_generation

router = APIRouter(prefix="/generate", tags=["generate"])


def polling_window(
    timeout_ms: str | None = Query(None, alias="timeoutMs"),
    timeout: str | None = None,
    poll_interval_ms: str | None = Query(None, alias="pollIntervalMs"),
    poll: str | None = None,
) -> tuple[int, int]:
    """Clamped (timeout, interval) in milliseconds from the query string."""
    return (
        parse_timeout_ms(timeout_ms if timeout_ms is not None else timeout),
        parse_poll_interval_ms(poll_interval_ms if poll_interval_ms is not None else poll),
    )


def get_sleep() -> Sleep:
    return asyncio.sleep


@router.post("")
async def generate(
    body: Any = Depends(read_json_body),
    providers: Providers = Depends(get_providers),
):
    """Start a generation job and return its id and status address."""
    params = validate_generation(body)
    return await music.generate(providers.paxsenix(), params)


@router.post("/wait")
async def generate_wait(
    body: Any = Depends(read_json_body),
    window: tuple[int, int] = Depends(polling_window),
    providers: Providers = Depends(get_providers),
    sleep: Sleep = Depends(get_sleep),
):
    """Start a job and hold the request open until it is done or the budget runs out."""
    params = validate_generation(body)
    timeout_ms, interval_ms = window
    _, status = await music.generate_and_wait(
        providers.paxsenix(), params, timeout_ms, interval_ms, sleep
    )
    return status.raw


@router.post("/wait-upload")
async def generate_wait_upload(
    body: Any = Depends(read_json_body),
    window: tuple[int, int] = Depends(polling_window),
    providers: Providers = Depends(get_providers),
    sleep: Sleep = Depends(get_sleep),
):
    """Start a job, wait for it, then re-host every generated track on KIE."""
    params = validate_generation(body, with_upload=True)
    paxsenix = providers.paxsenix()
    kie = providers.kie()
    timeout_ms, interval_ms = window
    return await music.generate_wait_upload(
        paxsenix,
        kie,
        params,
        providers.settings.default_upload_path,
        timeout_ms,
        interval_ms,
        sleep,
    )
