from typing import Any

CREATOR_KEY = "creator"
AUTHOR_KEY = "Author"


def normalize_author(payload: Any, author: str) -> Any:
    """Drop the provider's ``creator`` field and lead with our own attribution.

    Non-object payloads pass through untouched.
    """
    if not isinstance(payload, dict):
        return payload
    rest = {k: v for k, v in payload.items() if k not in (CREATOR_KEY, AUTHOR_KEY)}
    return {AUTHOR_KEY: author, **rest}
