import logging
from datetime import datetime
from typing import Optional, Union

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.domain.fetch_context import FetchContext, FetchState
from rawfetch.domain.fetch_target import FetchTarget
from rawfetch.domain.response import Response
from rawfetch.services.body_reader import BodyReader
from rawfetch.services.connector import Connector
from rawfetch.services.protocols import Renderer
from rawfetch.services.pushback_reader import PushbackReader
from rawfetch.services.request_writer import RequestWriter
from rawfetch.services.response_parser import ResponseParser
from rawfetch.utils.http_date import to_epoch_seconds

logger = logging.getLogger(__name__)


class RawHttpFetcher:
    """Fetch one URL over a raw socket: connect, write, parse head, read body.

    Collaborators are injectable (DIP) and hold no per-fetch state, so one
    instance can be shared by concurrent workers. Every fetch owns its own
    connection and it is closed on every exit path. Failures propagate as
    `rawfetch.exceptions.FetchError` subclasses; nothing is retried here.
    """

    def __init__(
        self,
        config: FetchConfig,
        renderer: Renderer,
        *,
        connector: Optional[Connector] = None,
        request_writer: Optional[RequestWriter] = None,
        response_parser: Optional[ResponseParser] = None,
        body_reader: Optional[BodyReader] = None,
    ):
        self.config = config
        self.connector = connector or Connector()
        self.request_writer = request_writer or RequestWriter()
        self.response_parser = response_parser or ResponseParser()
        self.body_reader = body_reader or BodyReader(renderer)

    def fetch(
        self,
        url: str,
        modified_since: Union[int, float, str, datetime, None] = None,
        config: Optional[FetchConfig] = None,
    ) -> Response:
        """Fetch `url` and return the complete Response.

        `modified_since` is the previous fetch time; when positive the request
        becomes a conditional GET. `config` overrides the default for this
        fetch only.
        """
        cfg = config or self.config
        target = FetchTarget.from_url(url, cfg)
        since = to_epoch_seconds(modified_since)
        logger.debug("fetching %s via %s", url, target.connect_label)

        with FetchContext(url) as context:
            context.attach(self.connector.connect(target, cfg))

            self.request_writer.write(context.connection, target, cfg, since)
            context.advance(FetchState.REQUEST_SENT)

            reader = PushbackReader(context.connection, cfg.buffer_size, label=target.connect_label)
            head = self.response_parser.parse(
                reader, on_status=lambda code: context.advance(FetchState.STATUS_PARSED)
            )
            context.set_head(head.status_code, head.headers)

            body = self.body_reader.read(url, head.headers, reader, cfg)
            rendered = self.body_reader.should_render(head.headers, cfg)
            response = context.build_response(body, rendered=rendered)

        logger.debug("Fetched %s -> status %s, %d bytes", url, response.status_code, len(response.body))
        return response
