"""The three generation flows: start only, start and wait, start, wait and re-host."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from musicgate.models.generation import GenerationParams, WaitUploadParams
from musicgate.models.job import JobHandle, TaskStatus
from musicgate.services.kie import KieClient
from musicgate.services.paxsenix import PaxsenixClient
from musicgate.services.polling import poll_until_done
from musicgate.services.rehost import upload_records

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


async def generate(paxsenix: PaxsenixClient, params: GenerationParams) -> dict[str, Any]:
    """Launch a job without waiting. Echoes Paxsenix's acknowledgement plus the job handle."""
    job = await paxsenix.launch(params)
    return {
        **job.upstream,
        "jobId": job.job_id,
        "statusUrl": job.status_url,
        "task_url": job.status_url,
    }


async def generate_and_wait(
    paxsenix: PaxsenixClient,
    params: GenerationParams,
    timeout_ms: int,
    interval_ms: int,
    sleep: Sleep = asyncio.sleep,
) -> tuple[JobHandle, TaskStatus]:
    """Launch a job and block until it is done. Raises ``PollTimeoutError``."""
    job = await paxsenix.launch(params)
    status = await poll_until_done(
        paxsenix.fetch_status,
        job.status_url,
        job_id=job.job_id,
        timeout_ms=timeout_ms,
        interval_ms=interval_ms,
        sleep=sleep,
    )
    return job, status


async def generate_wait_upload(
    paxsenix: PaxsenixClient,
    kie: KieClient,
    params: WaitUploadParams,
    default_upload_path: str,
    timeout_ms: int,
    interval_ms: int,
    sleep: Sleep = asyncio.sleep,
) -> dict[str, Any]:
    upload_path = params.kie_upload_path or default_upload_path
    job, status = await generate_and_wait(paxsenix, params, timeout_ms, interval_ms, sleep)

    logger.info(
        f"Job {job.job_id}: re-hosting {len(status.records)} record(s) to {upload_path}"
    )
    uploads = await upload_records(
        kie,
        job.job_id,
        status.records,
        upload_path,
        params.kie_file_name,
    )
    return {
        **status.raw,
        "jobId": job.job_id,
        "task_url": job.status_url,
        "uploads": uploads,
    }
