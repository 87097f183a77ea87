from enum import StrEnum

from pydantic import BaseModel, ConfigDict, StrictBool, StrictFloat, StrictStr, field_validator
from pydantic.alias_generators import to_camel

from musicgate.models.common import check_http_url


class MusicModel(StrEnum):
    V3_5 = "V3_5"
    V4 = "V4"
    V4_5 = "V4_5"
    V4_5PLUS = "V4_5PLUS"
    V5 = "V5"


class CoverModel(StrEnum):
    V4 = "V4"
    V4_5 = "V4_5"
    V4_5PLUS = "V4_5PLUS"
    V4_5ALL = "V4_5ALL"
    V5 = "V5"


class VocalGender(StrEnum):
    m = "m"
    f = "f"


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerationParams(WireModel):
    custom_mode: StrictBool
    instrumental: StrictBool = False
    title: StrictStr = ""
    style: StrictStr = ""
    prompt: StrictStr = ""
    model: MusicModel = MusicModel.V5
    negative_tags: StrictStr = ""


class WaitUploadParams(GenerationParams):
    # None means the deployment default upload path
    kie_upload_path: StrictStr | None = None
    kie_file_name: StrictStr = ""


class CoverParams(WireModel):
    upload_url: StrictStr
    call_back_url: StrictStr | None = None
    prompt: StrictStr = ""
    custom_mode: StrictBool
    instrumental: StrictBool = True
    model: CoverModel = CoverModel.V5
    style: StrictStr = ""
    title: StrictStr = ""
    negative_tags: StrictStr = ""

    vocal_gender: VocalGender | None = None
    style_weight: StrictFloat | None = None
    weirdness_constraint: StrictFloat | None = None
    audio_weight: StrictFloat | None = None
    persona_id: StrictStr | None = None

    @field_validator("upload_url", "call_back_url")
    @classmethod
    def _must_be_url(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return check_http_url(value)


class TierLimits(BaseModel):
    prompt: int
    style: int


SMALL_TIER = TierLimits(prompt=3000, style=200)
LARGE_TIER = TierLimits(prompt=5000, style=1000)

SMALL_TIER_MODELS = {MusicModel.V3_5, MusicModel.V4}


def limits_for(model: MusicModel) -> TierLimits:
    """Return the prompt/style ceilings for a model tier."""
    return SMALL_TIER if model in SMALL_TIER_MODELS else LARGE_TIER
