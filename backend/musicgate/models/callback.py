from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictStr, field_validator

from musicgate.models.common import check_http_url


class CallbackItem(BaseModel):
    id: StrictStr | None = None
    audio_url: StrictStr | None = None
    image_url: StrictStr | None = None
    title: StrictStr | None = None
    prompt: StrictStr | None = None
    duration: StrictFloat | None = None

    @field_validator("audio_url", "image_url")
    @classmethod
    def _must_be_url(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return check_http_url(value)


class CallbackData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    callback_type: StrictStr | None = Field(default=None, alias="callbackType")
    task_id: StrictStr | None = None
    data: list[CallbackItem] | None = None


class CoverCallbackEnvelope(BaseModel):
    code: int | None = None
    msg: StrictStr | None = None
    data: CallbackData | None = None

    @property
    def callback_type(self) -> str | None:
        return self.data.callback_type if self.data else None

    @property
    def items(self) -> list[CallbackItem]:
        if self.data is None or self.data.data is None:
            return []
        return self.data.data

    @property
    def task_id(self) -> str | None:
        return self.data.task_id if self.data else None
