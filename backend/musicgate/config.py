from functools import lru_cache

from pydantic_settings import BaseSettings

from musicgate.errors import ConfigurationError


class Settings(BaseSettings):
    paxsenix_api_key: str | None = None
    kie_api_key: str | None = None

    paxsenix_base_url: str = "https://api.paxsenix.org"
    kie_file_upload_url: str = "https://kieai.redpandaai.co/api/file-url-upload"
    kie_cover_url: str = "https://api.kie.ai/api/v1/generate/upload-cover"

    # Used for the default cover callback address; derived from the request when unset
    public_base_url: str | None = None

    author_tag: str = "@Dafidxcode"
    http_timeout_seconds: float = 30.0

    default_upload_path: str = "music/paxsenix"
    cover_upload_path: str = "music/cover-audio"

    model_config = {"env_file": "../.env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def require_paxsenix_key(settings: Settings) -> str:
    if not settings.paxsenix_api_key:
        raise ConfigurationError("Missing env PAXSENIX_API_KEY")
    return settings.paxsenix_api_key


def require_kie_key(settings: Settings) -> str:
    if not settings.kie_api_key:
        raise ConfigurationError("Missing env KIE_API_KEY")
    return settings.kie_api_key
