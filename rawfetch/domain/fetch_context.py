import logging
from enum import Enum
from typing import Optional

from requests.structures import CaseInsensitiveDict

from rawfetch.domain.response import Response

logger = logging.getLogger(__name__)


class FetchState(Enum):
    INIT = "init"
    CONNECTED = "connected"
    REQUEST_SENT = "request_sent"
    STATUS_PARSED = "status_parsed"
    HEADERS_PARSED = "headers_parsed"
    BODY_ACQUIRED = "body_acquired"
    CLOSED = "closed"


class FetchContext:
    """Mutable state of a single fetch: the open connection and the parsed head.

    Owned by one fetch on one thread. Use as a context manager; leaving the
    block always closes the connection, whether the fetch succeeded or not.
    """

    def __init__(self, url: str):
        self.url = url
        self.connection = None
        self.status_code: Optional[int] = None
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self.state = FetchState.INIT

    def advance(self, state: FetchState) -> None:
        logger.debug("%s: %s -> %s", self.url, self.state.value, state.value)
        self.state = state

    def attach(self, connection) -> None:
        self.connection = connection
        self.advance(FetchState.CONNECTED)

    def set_head(self, status_code: int, headers: CaseInsensitiveDict) -> None:
        if self.status_code is not None:
            raise RuntimeError(f"status code already set for {self.url}")
        self.status_code = status_code
        self.headers = headers
        self.advance(FetchState.HEADERS_PARSED)

    def build_response(self, body: bytes, rendered: bool = False) -> Response:
        if self.status_code is None:
            raise RuntimeError(f"no status line parsed for {self.url}")
        self.advance(FetchState.BODY_ACQUIRED)
        return Response(url=self.url, status_code=self.status_code, headers=self.headers, body=bytes(body), rendered=rendered)

    def close(self) -> None:
        if self.connection is not None:
            try:
                self.connection.close()
            except OSError:
                logger.debug("Error closing connection for %s", self.url, exc_info=True)
            self.connection = None
        self.advance(FetchState.CLOSED)

    def __enter__(self) -> "FetchContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
