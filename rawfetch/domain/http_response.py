from typing import Mapping, NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Crawler-facing view of a fetch: status, decoded body text and Content-Type."""
    status_code: int
    text: str
    content_type: Optional[str] = None
    headers: Optional[Mapping[str, str]] = None
