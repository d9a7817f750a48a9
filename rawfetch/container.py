"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from rawfetch import config as env
from rawfetch.domain.fetch_config import (
    BUFFER_SIZE,
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_MAX_CONTENT,
    DEFAULT_RENDER_CONTENT_TYPES,
    DEFAULT_USER_AGENT,
    FetchConfig,
)
from rawfetch.services.body_reader import BodyReader
from rawfetch.services.config_file_store import FetchConfigFileStore
from rawfetch.services.connector import Connector
from rawfetch.services.fetcher import RawSocketFetcher
from rawfetch.services.raw_fetcher import RawHttpFetcher
from rawfetch.services.renderer_factory import RendererFactory
from rawfetch.services.request_writer import RequestWriter
from rawfetch.services.response_parser import ResponseParser


# Environment variables used by the container (read via `rawfetch.config` helpers).
#
# USER_AGENT (str, default: "rawfetch/0.1")
#   User-Agent request header and headless browser user agent. Empty string
#   sends no User-Agent header (a warning is logged per request).
#
# HTTP_TIMEOUT (float seconds, default: 10)
#   Connect, TLS handshake and per-read timeout. Also reused for rendering.
#
# RAWFETCH_MAX_CONTENT (int bytes, default: 65536)
#   Cap on raw body bytes; <= 0 means unbounded.
#
# RAWFETCH_USE_PROXY (bool, default: false), RAWFETCH_PROXY_HOST (str | optional),
# RAWFETCH_PROXY_PORT (int, default: 8080)
#   Route requests through an HTTP proxy. The request line then carries the
#   absolute URL.
#
# RAWFETCH_PROXY_EXCEPTIONS (comma separated hosts, default: none)
#   Hosts that are always fetched directly.
#
# RAWFETCH_ACCEPT_LANGUAGE, RAWFETCH_ACCEPT (str)
#   Values of the Accept-Language and Accept request headers.
#
# RAWFETCH_RENDER_CONTENT_TYPES (comma separated, default: "text/html,application/xhtml")
#   Content-Type fragments whose bodies are taken from the renderer.
#
# RAWFETCH_TLS_VERIFY (bool, default: true)
#   Verify server certificates and host names for https.
#
# RAWFETCH_RENDER_MODE (str, default: "playwright")
#   playwright | service | disabled
#
# RAWFETCH_RENDER_SERVICE_URL (str | optional)
#   Endpoint of the rendering service when RAWFETCH_RENDER_MODE=service.
#
# RAWFETCH_RENDER_WAIT_UNTIL (str, default: "networkidle")
#   Playwright navigation wait condition.
#
# RAWFETCH_CONFIGS_DIR (str, default: ".")
#   Directory searched for relative per-site YAML config paths.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", DEFAULT_USER_AGENT),
    "HTTP_TIMEOUT": env.get_float_env("HTTP_TIMEOUT", 10.0),
    "RAWFETCH_MAX_CONTENT": env.get_int_env("RAWFETCH_MAX_CONTENT", DEFAULT_MAX_CONTENT),
    "RAWFETCH_USE_PROXY": env.get_bool_env("RAWFETCH_USE_PROXY", False),
    "RAWFETCH_PROXY_HOST": env.get_optional_str_env("RAWFETCH_PROXY_HOST"),
    "RAWFETCH_PROXY_PORT": env.get_int_env("RAWFETCH_PROXY_PORT", 8080),
    "RAWFETCH_PROXY_EXCEPTIONS": env.get_csv_env("RAWFETCH_PROXY_EXCEPTIONS", ()),
    "RAWFETCH_ACCEPT_LANGUAGE": env.get_str_env("RAWFETCH_ACCEPT_LANGUAGE", DEFAULT_ACCEPT_LANGUAGE),
    "RAWFETCH_ACCEPT": env.get_str_env("RAWFETCH_ACCEPT", DEFAULT_ACCEPT),
    "RAWFETCH_RENDER_CONTENT_TYPES": env.get_csv_env("RAWFETCH_RENDER_CONTENT_TYPES", DEFAULT_RENDER_CONTENT_TYPES),
    "RAWFETCH_TLS_VERIFY": env.get_bool_env("RAWFETCH_TLS_VERIFY", True),
    "RAWFETCH_BUFFER_SIZE": env.get_int_env("RAWFETCH_BUFFER_SIZE", BUFFER_SIZE),
    "RAWFETCH_RENDER_MODE": env.get_str_env("RAWFETCH_RENDER_MODE", "playwright").strip().lower(),
    "RAWFETCH_RENDER_SERVICE_URL": env.get_optional_str_env("RAWFETCH_RENDER_SERVICE_URL"),
    "RAWFETCH_RENDER_WAIT_UNTIL": env.get_str_env("RAWFETCH_RENDER_WAIT_UNTIL", "networkidle"),
    "RAWFETCH_CONFIGS_DIR": env.get_str_env("RAWFETCH_CONFIGS_DIR", "."),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for rawfetch."""

    # Configuration
    config = providers.Configuration(default=ENV)

    fetch_config = providers.Singleton(
        FetchConfig,
        timeout=config.HTTP_TIMEOUT.as_(float),
        max_content=config.RAWFETCH_MAX_CONTENT.as_(int),
        use_proxy=config.RAWFETCH_USE_PROXY.as_(bool),
        proxy_host=config.RAWFETCH_PROXY_HOST,
        proxy_port=config.RAWFETCH_PROXY_PORT.as_(int),
        proxy_exceptions=config.RAWFETCH_PROXY_EXCEPTIONS.as_(frozenset),
        user_agent=config.USER_AGENT.as_(str),
        accept_language=config.RAWFETCH_ACCEPT_LANGUAGE.as_(str),
        accept=config.RAWFETCH_ACCEPT.as_(str),
        render_content_types=config.RAWFETCH_RENDER_CONTENT_TYPES.as_(tuple),
        tls_verify=config.RAWFETCH_TLS_VERIFY.as_(bool),
        buffer_size=config.RAWFETCH_BUFFER_SIZE.as_(int),
    )

    config_file_store = providers.Singleton(
        FetchConfigFileStore,
        configs_dir=config.RAWFETCH_CONFIGS_DIR.as_(str),
    )

    renderer_factory = providers.Singleton(
        RendererFactory,
        user_agent=config.USER_AGENT.as_(str),
        timeout_seconds=config.HTTP_TIMEOUT.as_(float),
        wait_until=config.RAWFETCH_RENDER_WAIT_UNTIL.as_(str),
        service_url=config.RAWFETCH_RENDER_SERVICE_URL,
    )

    renderer = providers.Singleton(
        lambda factory, mode: factory.get(mode),
        renderer_factory,
        config.RAWFETCH_RENDER_MODE.as_(str),
    )

    # Pipeline stages - stateless, shared by every fetch
    connector = providers.Singleton(Connector)
    request_writer = providers.Singleton(RequestWriter)
    response_parser = providers.Singleton(ResponseParser)
    body_reader = providers.Singleton(BodyReader, renderer=renderer)

    raw_fetcher = providers.Singleton(
        RawHttpFetcher,
        config=fetch_config,
        renderer=renderer,
        connector=connector,
        request_writer=request_writer,
        response_parser=response_parser,
        body_reader=body_reader,
    )

    page_fetcher = providers.Singleton(
        RawSocketFetcher,
        raw_fetcher=raw_fetcher,
    )
