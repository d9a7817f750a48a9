import logging
import socket
import ssl
from typing import Callable, Optional

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.domain.fetch_target import FetchTarget
from rawfetch.exceptions import ConnectError, FetchTimeoutError

logger = logging.getLogger(__name__)


def default_ssl_context(verify: bool) -> ssl.SSLContext:
    ctx = ssl.create_default_context()
    if not verify:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


class Connector:
    """Open a timeout-bounded connection to the target (or proxy) host.

    `socket_factory` follows `socket.create_connection` and `ssl_context_factory`
    takes the `tls_verify` flag; both are injectable for tests.
    """

    def __init__(
        self,
        socket_factory: Callable = socket.create_connection,
        ssl_context_factory: Optional[Callable[[bool], ssl.SSLContext]] = None,
    ):
        self._socket_factory = socket_factory
        self._ssl_context_factory = ssl_context_factory or default_ssl_context

    def connect(self, target: FetchTarget, config: FetchConfig):
        label = target.connect_label
        logger.debug("Connecting to %s for %s", label, target.url)
        try:
            sock = self._socket_factory((target.connect_host, target.connect_port), timeout=config.timeout)
        except socket.timeout as e:
            raise FetchTimeoutError(label, e) from e
        except OSError as e:
            raise ConnectError(label, e) from e

        if not target.is_tls:
            return sock

        try:
            ctx = self._ssl_context_factory(config.tls_verify)
            # Handshake runs inside wrap_socket under the socket timeout.
            return ctx.wrap_socket(sock, server_side=False, server_hostname=target.host)
        except socket.timeout as e:
            sock.close()
            raise FetchTimeoutError(label, e) from e
        except (ssl.SSLError, OSError) as e:
            sock.close()
            raise ConnectError(label, e) from e
        except BaseException:
            sock.close()
            raise
