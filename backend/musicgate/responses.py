from typing import Any

from fastapi.responses import JSONResponse

from musicgate.config import get_settings
from musicgate.services.normalize import normalize_author


class AttributedJSONResponse(JSONResponse):
    """JSON response that always carries our attribution and never the provider's."""

    def render(self, content: Any) -> bytes:
        return super().render(normalize_author(content, get_settings().author_tag))
