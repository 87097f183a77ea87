import asyncio
import logging
from pathlib import PurePosixPath
from typing import Any

from musicgate.errors import UploadError
from musicgate.models.job import ResultRecord
from musicgate.services.kie import KieClient

logger = logging.getLogger(__name__)


def record_file_name(job_id: str, index: int, total: int, requested: str = "") -> str:
    """File name for record ``index`` of a job.

    A caller-supplied name is used as-is for a single record and gets a
    ``-{n}`` suffix before the extension when the job produced several.
    """
    requested = requested.strip()
    if not requested:
        return f"{job_id}-{index + 1}.mp3"
    if total == 1:
        return requested
    name = PurePosixPath(requested)
    return f"{name.stem}-{index + 1}{name.suffix}"


async def upload_record(
    kie: KieClient,
    record: ResultRecord,
    index: int,
    upload_path: str,
    file_name: str,
) -> dict[str, Any]:
    if not record.audio_url:
        return {"ok": False, "message": "missing audio_url", "recordIndex": index}
    try:
        result = await kie.upload_from_url(record.audio_url, upload_path, file_name)
    except UploadError as e:
        return {"ok": False, "recordIndex": index, "uploadError": e.to_body()}
    return {"ok": True, "recordIndex": index, **result.to_body()}


async def upload_records(
    kie: KieClient,
    job_id: str,
    records: list[ResultRecord],
    upload_path: str,
    file_name: str = "",
) -> list[dict[str, Any]]:
    """Re-host every record concurrently. Output order follows ``records``."""
    uploads = await asyncio.gather(
        *(
            upload_record(
                kie,
                record,
                i,
                upload_path,
                record_file_name(job_id, i, len(records), file_name),
            )
            for i, record in enumerate(records)
        )
    )
    failed = sum(1 for u in uploads if not u["ok"])
    if failed:
        logger.warning(f"Job {job_id}: {failed} of {len(uploads)} uploads failed")
    return list(uploads)
