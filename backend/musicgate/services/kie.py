import logging
from typing import Any

import httpx

from musicgate.errors import UploadError, UpstreamError
from musicgate.models.upload import UploadResult
from musicgate.services.http import bearer, decode_json, upstream_payload

logger = logging.getLogger(__name__)


def bytes_to_mb(size: int) -> float:
    return round(size / 1024 / 1024 * 100) / 100


class KieClient:
    """File hosting (fetch-and-persist by URL) and audio cover jobs."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        upload_url: str,
        cover_url: str,
    ) -> None:
        self._http = http
        self._api_key = api_key
        self.upload_url = upload_url
        self.cover_url = cover_url

    async def upload_from_url(
        self, file_url: str, upload_path: str, file_name: str | None = None
    ) -> UploadResult:
        """Ask KIE to fetch ``file_url`` and keep a copy under ``upload_path``."""
        body = {"fileUrl": file_url, "uploadPath": upload_path}
        if file_name:
            body["fileName"] = file_name

        try:
            resp = await self._http.post(self.upload_url, headers=bearer(self._api_key), json=body)
        except httpx.RequestError as e:
            logger.warning(f"KIE upload of {file_url} failed: {e!r}")
            raise UploadError(None, str(e) or type(e).__name__) from e
        data = decode_json(resp)
        if not resp.is_success:
            logger.warning(f"KIE upload of {file_url} failed with status {resp.status_code}")
            raise UploadError(resp.status_code, upstream_payload(resp, data))

        info = data.get("data") if isinstance(data, dict) else None
        if not isinstance(info, dict):
            info = {}
        size = _int_or_zero(info.get("fileSize"))
        result = UploadResult(
            source_audio_url=file_url,
            download_url=_str_or_none(info.get("downloadUrl")),
            file_size_bytes=size,
            file_size_mb=bytes_to_mb(size) if size else 0,
            mime_type=_str_or_none(info.get("mimeType")),
            file_name=_str_or_none(info.get("fileName")),
            file_path=_str_or_none(info.get("filePath")),
            uploaded_at=_str_or_none(info.get("uploadedAt")),
        )
        logger.info(f"Re-hosted {file_url} as {result.download_url}")
        return result

    async def start_cover(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            resp = await self._http.post(self.cover_url, headers=bearer(self._api_key), json=payload)
        except httpx.RequestError as e:
            raise UpstreamError("Upstream unreachable", None, str(e) or type(e).__name__) from e
        data = decode_json(resp)
        if not resp.is_success:
            raise UpstreamError("Upstream error", resp.status_code, upstream_payload(resp, data))
        if not isinstance(data, dict):
            raise UpstreamError("Upstream returned a non-JSON body", resp.status_code, resp.text)
        return data


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int_or_zero(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except ValueError:
            return 0
    return 0
