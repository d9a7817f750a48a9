import socket
import ssl
from unittest.mock import Mock

import pytest

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.domain.fetch_target import FetchTarget
from rawfetch.exceptions import ConnectError, FetchTimeoutError
from rawfetch.services.connector import Connector, default_ssl_context


def _target(url, config):
    return FetchTarget.from_url(url, config)


def test_plain_http_connects_directly_with_timeout(make_socket):
    sock = make_socket()
    factory = Mock(return_value=sock)
    ssl_factory = Mock()
    config = FetchConfig(timeout=3.5)
    conn = Connector(socket_factory=factory, ssl_context_factory=ssl_factory).connect(
        _target("http://example.com/", config), config
    )
    assert conn is sock
    factory.assert_called_once_with(("example.com", 80), timeout=3.5)
    ssl_factory.assert_not_called()


def test_proxy_is_used_as_connect_target(make_socket):
    factory = Mock(return_value=make_socket())
    config = FetchConfig(use_proxy=True, proxy_host="proxy.local", proxy_port=3128)
    Connector(socket_factory=factory).connect(_target("http://example.com:8080/", config), config)
    factory.assert_called_once_with(("proxy.local", 3128), timeout=config.timeout)


def test_proxy_exception_hosts_connect_directly(make_socket):
    factory = Mock(return_value=make_socket())
    config = FetchConfig(use_proxy=True, proxy_host="proxy.local", proxy_exceptions=frozenset({"Intranet"}))
    Connector(socket_factory=factory).connect(_target("http://intranet/", config), config)
    factory.assert_called_once_with(("intranet", 80), timeout=config.timeout)


def test_https_wraps_socket_with_target_host(make_socket):
    raw = make_socket()
    ctx = Mock()
    ctx.wrap_socket.return_value = "tls-socket"
    ssl_factory = Mock(return_value=ctx)
    config = FetchConfig(tls_verify=False)
    conn = Connector(socket_factory=Mock(return_value=raw), ssl_context_factory=ssl_factory).connect(
        _target("https://secure.example.com/", config), config
    )
    assert conn == "tls-socket"
    ssl_factory.assert_called_once_with(False)
    ctx.wrap_socket.assert_called_once_with(raw, server_side=False, server_hostname="secure.example.com")


def test_connect_refused_raises_connect_error():
    factory = Mock(side_effect=ConnectionRefusedError("refused"))
    config = FetchConfig()
    with pytest.raises(ConnectError, match="example.com:80") as exc:
        Connector(socket_factory=factory).connect(_target("http://example.com/", config), config)
    assert not isinstance(exc.value, FetchTimeoutError)


def test_connect_timeout_raises_fetch_timeout():
    factory = Mock(side_effect=socket.timeout("timed out"))
    config = FetchConfig()
    with pytest.raises(FetchTimeoutError):
        Connector(socket_factory=factory).connect(_target("http://example.com/", config), config)


@pytest.mark.parametrize(
    "error, expected",
    [
        (ssl.SSLError("handshake failure"), ConnectError),
        (socket.timeout("handshake timed out"), FetchTimeoutError),
    ],
)
def test_handshake_failure_closes_raw_socket(make_socket, error, expected):
    raw = make_socket()
    ctx = Mock()
    ctx.wrap_socket.side_effect = error
    config = FetchConfig()
    connector = Connector(socket_factory=Mock(return_value=raw), ssl_context_factory=Mock(return_value=ctx))
    with pytest.raises(expected):
        connector.connect(_target("https://example.com/", config), config)
    assert raw.closed


def test_unexpected_handshake_error_still_closes_raw_socket(make_socket):
    raw = make_socket()
    ctx = Mock()
    ctx.wrap_socket.side_effect = ValueError("check_hostname requires server_hostname")
    config = FetchConfig()
    connector = Connector(socket_factory=Mock(return_value=raw), ssl_context_factory=Mock(return_value=ctx))
    with pytest.raises(ValueError, match="server_hostname"):
        connector.connect(_target("https://example.com/", config), config)
    assert raw.closed


def test_connect_timeout_is_builtin_timeout_error():
    factory = Mock(side_effect=socket.timeout("timed out"))
    config = FetchConfig()
    with pytest.raises(TimeoutError) as exc:
        Connector(socket_factory=factory).connect(_target("http://example.com/", config), config)
    assert isinstance(exc.value, FetchTimeoutError)
    assert isinstance(exc.value, ConnectError)
    assert str(exc.value).startswith("Connection to example.com:80 failed")


def test_default_ssl_context_verification_toggle():
    assert default_ssl_context(True).verify_mode == ssl.CERT_REQUIRED
    relaxed = default_ssl_context(False)
    assert relaxed.verify_mode == ssl.CERT_NONE
    assert relaxed.check_hostname is False
