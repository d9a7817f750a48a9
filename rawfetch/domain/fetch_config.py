from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_USER_AGENT = "rawfetch/0.1"
DEFAULT_ACCEPT_LANGUAGE = "en-us,en-gb,en;q=0.7,*;q=0.3"
DEFAULT_ACCEPT = "text/html,application/xml;q=0.9,application/xhtml+xml,text/xml;q=0.9,*/*;q=0.8"
DEFAULT_RENDER_CONTENT_TYPES = ("text/html", "application/xhtml")
DEFAULT_MAX_CONTENT = 65536
BUFFER_SIZE = 8 * 1024


@dataclass(frozen=True)
class FetchConfig:
    """Per-fetch settings for the raw socket fetcher.

    - `timeout` (seconds) bounds the connect attempt, the TLS handshake and
      every subsequent read or write.
    - `max_content` caps the raw body size; `<= 0` means unbounded.
    - `render_content_types` are matched as substrings of Content-Type.
    """

    timeout: float = 10.0
    max_content: int = DEFAULT_MAX_CONTENT
    use_proxy: bool = False
    proxy_host: Optional[str] = None
    proxy_port: int = 8080
    proxy_exceptions: frozenset[str] = field(default_factory=frozenset)
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    accept: str = DEFAULT_ACCEPT
    render_content_types: tuple[str, ...] = DEFAULT_RENDER_CONTENT_TYPES
    tls_verify: bool = True
    buffer_size: int = BUFFER_SIZE

    def __post_init__(self):
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.use_proxy and not self.proxy_host:
            raise ValueError("proxy_host is required when use_proxy is set")
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        # Normalize collections so configs stay hashable and comparable.
        object.__setattr__(
            self, "proxy_exceptions", frozenset(h.strip().lower() for h in self.proxy_exceptions if h.strip())
        )
        object.__setattr__(self, "render_content_types", tuple(self.render_content_types))

    def proxies(self, host: str) -> bool:
        """True when a request to `host` should go through the configured proxy."""
        if not self.use_proxy:
            return False
        return host.lower() not in self.proxy_exceptions
