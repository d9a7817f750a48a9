import logging
import re
from typing import Mapping, Optional

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.exceptions import BadContentLengthError, RenderDelegationError
from rawfetch.services.protocols import Renderer
from rawfetch.services.pushback_reader import PushbackReader

logger = logging.getLogger(__name__)

_CONTENT_LENGTH = re.compile(r"[0-9]+")


class BodyReader:
    """Acquire the response body, either rendered or read raw from the socket."""

    def __init__(self, renderer: Renderer):
        self.renderer = renderer

    def should_render(self, headers: Mapping[str, str], config: FetchConfig) -> bool:
        content_type = headers.get("Content-Type")
        if not content_type:
            return False
        content_type = content_type.lower()
        return any(trigger.lower() in content_type for trigger in config.render_content_types)

    def read(self, url: str, headers: Mapping[str, str], reader: PushbackReader, config: FetchConfig) -> bytes:
        if self.should_render(headers, config):
            # Raw bytes already buffered from the socket are dropped.
            return self.render(url)
        return self.read_raw(headers, reader, config)

    def render(self, url: str) -> bytes:
        logger.debug("Delegating %s to renderer", url)
        try:
            html = self.renderer.render(url)
        except Exception as e:
            raise RenderDelegationError(url, e) from e
        if html is None:
            raise RenderDelegationError(url, ValueError("renderer returned no content"))
        return html.encode("utf-8")

    def content_limit(self, headers: Mapping[str, str], config: FetchConfig) -> Optional[int]:
        """Bytes to read, or None for "until end of stream"."""
        limit = None
        raw = headers.get("Content-Length")
        if raw is not None:
            raw = raw.strip()
            if raw:
                if not _CONTENT_LENGTH.fullmatch(raw):
                    raise BadContentLengthError(raw)
                limit = int(raw)
        if config.max_content > 0 and (limit is None or limit > config.max_content):
            limit = config.max_content
        return limit

    def read_raw(self, headers: Mapping[str, str], reader: PushbackReader, config: FetchConfig) -> bytes:
        limit = self.content_limit(headers, config)
        if limit == 0:
            return b""

        body = bytearray()
        while limit is None or len(body) < limit:
            want = config.buffer_size if limit is None else min(config.buffer_size, limit - len(body))
            chunk = reader.read(want)
            if not chunk:
                if limit is not None:
                    logger.debug("Stream ended after %d of %d body bytes", len(body), limit)
                break
            body.extend(chunk)
        return bytes(body)
