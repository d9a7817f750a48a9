import logging
import socket
from typing import Optional

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.domain.fetch_target import FetchTarget
from rawfetch.exceptions import ConnectError, FetchTimeoutError
from rawfetch.services.protocols import Connection
from rawfetch.utils.http_date import format_http_date

logger = logging.getLogger(__name__)

ACCEPT_ENCODING = "x-gzip, gzip, deflate"


class RequestWriter:
    """Serialize the minimal HTTP/1.0 GET request onto an open connection."""

    def build(self, target: FetchTarget, config: FetchConfig, modified_since: Optional[float] = None) -> bytes:
        lines = [
            f"GET {target.request_target} HTTP/1.0",
            f"Host: {target.host_header}",
            # Advertised only; bodies are never decoded here.
            f"Accept-Encoding: {ACCEPT_ENCODING}",
        ]
        if config.user_agent:
            lines.append(f"User-Agent: {config.user_agent}")
        else:
            logger.warning("User-agent is not set! Sending request to %s without one", target.url)
        lines.append(f"Accept-Language: {config.accept_language}")
        lines.append(f"Accept: {config.accept}")
        if modified_since is not None and modified_since > 0:
            lines.append(f"If-Modified-Since: {format_http_date(modified_since)}")
        return ("\r\n".join(lines) + "\r\n\r\n").encode("iso-8859-1", errors="replace")

    def write(self, connection: Connection, target: FetchTarget, config: FetchConfig, modified_since: Optional[float] = None) -> None:
        request = self.build(target, config, modified_since)
        try:
            connection.sendall(request)
        except socket.timeout as e:
            raise FetchTimeoutError(target.connect_label, e) from e
        except OSError as e:
            raise ConnectError(target.connect_label, e) from e
