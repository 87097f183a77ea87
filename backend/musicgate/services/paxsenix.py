import logging
from typing import Any
from urllib.parse import quote

import httpx

from musicgate.errors import UpstreamError
from musicgate.models.generation import GenerationParams
from musicgate.models.job import JobHandle
from musicgate.services.http import bearer, decode_json, upstream_payload

logger = logging.getLogger(__name__)

GENERATION_FIELDS = {
    "custom_mode",
    "instrumental",
    "title",
    "style",
    "prompt",
    "model",
    "negative_tags",
}


def build_upstream_payload(params: GenerationParams) -> dict[str, Any]:
    """Body for the job-creation call.

    Prompt-only requests must reach Paxsenix with every other field blanked.
    """
    if params.custom_mode:
        return params.model_dump(mode="json", by_alias=True, include=GENERATION_FIELDS)
    return {
        "customMode": False,
        "prompt": params.prompt,
        "instrumental": False,
        "title": "",
        "style": "",
        "model": "",
        "negativeTags": "",
    }


class PaxsenixClient:
    """Music generation provider. Every call is a single request, no retries."""

    def __init__(self, http: httpx.AsyncClient, api_key: str, base_url: str) -> None:
        self._http = http
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")

    def task_url(self, job_id: str) -> str:
        return f"{self.base_url}/task/{quote(job_id, safe='')}"

    async def launch(self, params: GenerationParams) -> JobHandle:
        """Submit a job that will be polled. Requires a ``jobId`` in the reply."""
        resp, data = await self._submit(params)
        job_id = data.get("jobId") if isinstance(data, dict) else None
        if not resp.is_success or not isinstance(job_id, str) or not job_id:
            raise UpstreamError(
                "Upstream start job failed", resp.status_code, upstream_payload(resp, data)
            )

        task_url = data.get("task_url")
        status_url = task_url if isinstance(task_url, str) and task_url else self.task_url(job_id)
        logger.info(f"Paxsenix job {job_id} started, polling {status_url}")
        return JobHandle(job_id=job_id, status_url=status_url, upstream=data)

    async def get_task(self, job_id: str) -> dict[str, Any]:
        return await self.fetch_status(self.task_url(job_id))

    async def fetch_status(self, status_url: str) -> dict[str, Any]:
        """One status read. Non-2xx or a non-JSON body is an upstream error."""
        try:
            resp = await self._http.get(status_url, headers=bearer(self._api_key))
        except httpx.RequestError as e:
            raise _unreachable(status_url, e) from e
        data = decode_json(resp)
        if not resp.is_success:
            raise UpstreamError("Upstream error", resp.status_code, upstream_payload(resp, data))
        if not isinstance(data, dict):
            raise UpstreamError("Upstream returned a non-JSON status", resp.status_code, resp.text)
        return data

    async def _submit(self, params: GenerationParams) -> tuple[httpx.Response, Any]:
        try:
            resp = await self._http.post(
                f"{self.base_url}/ai-music/suno-music",
                headers=bearer(self._api_key),
                json=build_upstream_payload(params),
            )
        except httpx.RequestError as e:
            raise _unreachable(f"{self.base_url}/ai-music/suno-music", e) from e
        return resp, decode_json(resp)


def _unreachable(url: str, e: httpx.RequestError) -> UpstreamError:
    logger.warning(f"Paxsenix request to {url} failed: {e!r}")
    return UpstreamError("Upstream unreachable", None, str(e) or type(e).__name__)
