from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UploadResult(BaseModel):
    """A re-hosted copy of one generated file, as reported by KIE."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    source_audio_url: str
    download_url: str | None = None
    file_size_bytes: int = 0
    file_size_mb: float = Field(default=0, alias="fileSizeMB")
    mime_type: str | None = None
    file_name: str | None = None
    file_path: str | None = None
    uploaded_at: str | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
