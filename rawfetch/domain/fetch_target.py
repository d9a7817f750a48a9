from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from requests.utils import requote_uri

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.exceptions import InvalidUrlError, UnsupportedSchemeError

DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class FetchTarget:
    """Where a fetch connects and what its request line names.

    Resolved from the URL and config before any network activity.
    """

    url: str
    scheme: str
    host: str
    port: int
    path: str
    connect_host: str
    connect_port: int
    via_proxy: bool

    @classmethod
    def from_url(cls, url: str, config: FetchConfig) -> "FetchTarget":
        parts = urlsplit(url)
        if parts.scheme not in DEFAULT_PORTS:
            raise UnsupportedSchemeError(url)

        host = parts.hostname
        if not host:
            raise InvalidUrlError(url, "missing host")
        if not host.isascii():
            host = host.encode("idna").decode("ascii")

        try:
            port = parts.port
        except ValueError as e:
            raise InvalidUrlError(url, str(e)) from e

        if port is None:
            port = DEFAULT_PORTS[parts.scheme]

        path = requote_uri(parts.path or "/")
        if parts.query:
            path = f"{path}?{requote_uri(parts.query)}"

        via_proxy = config.proxies(host)
        if via_proxy:
            connect_host, connect_port = config.proxy_host, int(config.proxy_port)
        else:
            connect_host, connect_port = host, port

        return cls(
            url=url,
            scheme=parts.scheme,
            host=host,
            port=port,
            path=path,
            connect_host=connect_host,
            connect_port=connect_port,
            via_proxy=via_proxy,
        )

    @property
    def is_tls(self) -> bool:
        return self.scheme == "https"

    @property
    def host_header(self) -> str:
        # Some servers redirect "Host: name:80" to the port-less URL.
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.port == DEFAULT_PORTS[self.scheme]:
            return host
        return f"{host}:{self.port}"

    @property
    def request_target(self) -> str:
        if self.via_proxy:
            return f"{self.scheme}://{self.host_header}{self.path}"
        return self.path

    @property
    def connect_label(self) -> str:
        return f"{self.connect_host}:{self.connect_port}"
