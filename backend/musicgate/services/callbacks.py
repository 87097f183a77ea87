import logging
from collections.abc import Callable
from typing import Any

from musicgate.errors import ConfigurationError, UploadError
from musicgate.models.callback import CoverCallbackEnvelope
from musicgate.services.kie import KieClient

logger = logging.getLogger(__name__)

COMPLETE = "complete"


def should_rehost(envelope: CoverCallbackEnvelope) -> bool:
    return envelope.code == 200 and envelope.callback_type == COMPLETE and bool(envelope.items)


async def handle_cover_callback(
    envelope: CoverCallbackEnvelope,
    kie_factory: Callable[[], KieClient],
    upload_path: str,
) -> dict[str, Any]:
    """Acknowledge a cover notification, re-hosting the first track when complete.

    The provider expects a quick unconditional 200, so nothing here raises:
    a failed upload or a missing credential is reported in the body.
    """
    logger.info(
        f"Cover callback for task {envelope.task_id}: "
        f"type={envelope.callback_type} code={envelope.code} items={len(envelope.items)}"
    )

    uploaded: dict[str, Any] | None = None
    if should_rehost(envelope):
        first = envelope.items[0]
        if first.audio_url:
            file_name = f"{envelope.task_id or 'task'}-{first.id or 'track'}.mp3"
            try:
                result = await kie_factory().upload_from_url(first.audio_url, upload_path, file_name)
            except UploadError as e:
                uploaded = {"ok": False, "uploadError": e.to_body()}
            except ConfigurationError as e:
                logger.error(f"Cannot re-host cover track: {e.message}")
                uploaded = {"ok": False, "message": e.message}
            else:
                uploaded = result.to_body()

    return {
        "ok": True,
        "received": envelope.model_dump(by_alias=True, exclude_none=True),
        "kieUploadedFirstTrack": uploaded,
    }
