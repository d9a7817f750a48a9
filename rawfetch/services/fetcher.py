from __future__ import annotations

import logging
from typing import Protocol

from requests.utils import get_encoding_from_headers

from rawfetch.domain.http_response import HttpResponse
from rawfetch.domain.response import Response
from rawfetch.services.raw_fetcher import RawHttpFetcher

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Fetch a URL and return a normalized HTTP-like response.

    This is the seam the crawling pipeline depends on.
    """

    def fetch(self, url: str, stop_event=None, modified_since=None) -> HttpResponse: ...


def decode_body(response: Response) -> str:
    if response.rendered:
        # Renderer output is UTF-8 whatever charset the origin declared.
        return response.body.decode("utf-8", errors="replace")
    encoding = get_encoding_from_headers(response.headers) or "utf-8"
    try:
        return response.body.decode(encoding, errors="replace")
    except LookupError:
        logger.debug("Unknown charset %r for %s; using utf-8", encoding, response.url)
        return response.body.decode("utf-8", errors="replace")


class RawSocketFetcher:
    def __init__(self, raw_fetcher: RawHttpFetcher):
        self._raw_fetcher = raw_fetcher

    def fetch(self, url: str, stop_event=None, modified_since=None) -> HttpResponse:
        if stop_event is not None and getattr(stop_event, "is_set", lambda: False)():
            raise RuntimeError("Fetch cancelled")
        response = self._raw_fetcher.fetch(url, modified_since=modified_since)
        return HttpResponse(
            status_code=response.status_code,
            text=decode_body(response),
            content_type=response.content_type,
            headers=response.headers,
        )
