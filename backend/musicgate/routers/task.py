from fastapi import APIRouter, Depends, Query

from musicgate.dependencies import Providers, get_providers
from musicgate.errors import ValidationFailed

router = APIRouter(prefix="/task", tags=["task"])


async def _read_task(job_id: str | None, providers: Providers):
    if not job_id or not job_id.strip():
        raise ValidationFailed(["jobId is required"], message="jobId is required")
    return await providers.paxsenix().get_task(job_id.strip())


@router.get("")
async def get_task_by_query(
    job_id: str | None = Query(None, alias="jobId"),
    providers: Providers = Depends(get_providers),
):
    return await _read_task(job_id, providers)


@router.get("/{job_id}")
async def get_task(job_id: str, providers: Providers = Depends(get_providers)):
    """Single status read against Paxsenix, for resuming after a timeout."""
    return await _read_task(job_id, providers)
