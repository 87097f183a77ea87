import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from musicgate.config import Settings, get_settings
from musicgate.dependencies import Providers, get_providers, read_json_body
from musicgate.services.callbacks import handle_cover_callback
from musicgate.services.validation import validate_callback, validate_cover

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cover", tags=["cover"])


def callback_url(request: Request, settings: Settings) -> str:
    if settings.public_base_url:
        base = settings.public_base_url.rstrip("/")
    else:
        proto = request.headers.get("x-forwarded-proto") or request.url.scheme
        host = request.headers.get("x-forwarded-host") or request.headers.get("host")
        base = f"{proto}://{host}"
    return f"{base}{router.prefix}/callback"


@router.post("")
async def start_cover(
    request: Request,
    body: Any = Depends(read_json_body),
    settings: Settings = Depends(get_settings),
    providers: Providers = Depends(get_providers),
):
    """Start a KIE cover job. Completion arrives later on ``/cover/callback``."""
    params = validate_cover(body)
    call_back_url = params.call_back_url or callback_url(request, settings)

    payload = params.model_dump(mode="json", by_alias=True, exclude_none=True)
    payload["callBackUrl"] = call_back_url

    data = await providers.kie().start_cover(payload)
    logger.info(f"Cover job started, callbacks go to {call_back_url}")
    return {"ok": True, "provider": "kie", "callBackUrl": call_back_url, **data}


@router.post("/callback")
async def cover_callback(
    body: Any = Depends(read_json_body),
    settings: Settings = Depends(get_settings),
    providers: Providers = Depends(get_providers),
):
    """Receive KIE's cover notifications. Always 200 unless the envelope is malformed."""
    envelope = validate_callback(body)
    return await handle_cover_callback(envelope, providers.kie, settings.cover_upload_path)
