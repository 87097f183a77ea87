from pydantic import HttpUrl, TypeAdapter, ValidationError

_http_url = TypeAdapter(HttpUrl)


def check_http_url(value: str) -> str:
    """Validate ``value`` as an http(s) URL but keep the caller's spelling."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL") from None
    return value
