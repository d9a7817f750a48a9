from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from requests.structures import CaseInsensitiveDict


@dataclass(frozen=True)
class Response:
    """Final result of one raw fetch.

    `headers` keeps names as the server sent them; lookups are
    case-insensitive and the last value for a repeated name wins.
    `rendered` marks a body produced by the renderer, which is always UTF-8.
    """

    url: str
    status_code: int
    headers: CaseInsensitiveDict
    body: bytes
    rendered: bool = False

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")

    def __repr__(self):
        return f"<Response url={self.url} status={self.status_code} body={len(self.body)}B>"
