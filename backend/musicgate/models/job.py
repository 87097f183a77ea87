from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class JobStatus(StrEnum):
    pending = "pending"
    processing = "processing"
    done = "done"
    error = "error"
    unknown = "unknown"


class ResultRecord(BaseModel):
    audio_url: str | None = None
    image_url: str | None = None
    title: str | None = None
    duration_seconds: float | None = None

    @classmethod
    def from_upstream(cls, item: Any) -> "ResultRecord":
        if not isinstance(item, dict):
            return cls()
        duration = item.get("duration")
        return cls(
            audio_url=_str_or_none(item.get("audio_url")),
            image_url=_str_or_none(item.get("image_url")),
            title=_str_or_none(item.get("title")),
            duration_seconds=(
                float(duration)
                if isinstance(duration, (int, float)) and not isinstance(duration, bool)
                else None
            ),
        )


class TaskStatus(BaseModel):
    """One decoded status read. ``raw`` is the upstream body as received."""

    status: JobStatus
    ok: bool
    records: list[ResultRecord]
    raw: dict[str, Any]

    @classmethod
    def from_upstream(cls, body: Any) -> "TaskStatus":
        if not isinstance(body, dict):
            return cls(status=JobStatus.unknown, ok=False, records=[], raw={})
        raw_status = body.get("status")
        try:
            status = JobStatus(raw_status)
        except ValueError:
            status = JobStatus.unknown
        raw_records = body.get("records")
        records = (
            [ResultRecord.from_upstream(r) for r in raw_records]
            if isinstance(raw_records, list)
            else []
        )
        return cls(status=status, ok=body.get("ok") is True, records=records, raw=body)

    @property
    def is_done(self) -> bool:
        return self.status == JobStatus.done and self.ok


class JobHandle(BaseModel):
    job_id: str
    status_url: str
    upstream: dict[str, Any]


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None
