from typing import Any

import httpx


def decode_json(resp: httpx.Response) -> Any:
    """Decoded JSON body, or None when the body is not JSON."""
    try:
        return resp.json()
    except ValueError:
        return None


def upstream_payload(resp: httpx.Response, data: Any) -> Any:
    """What to show the caller about a failed upstream response."""
    if data is not None:
        return data
    return resp.text or None


def bearer(api_key: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}
