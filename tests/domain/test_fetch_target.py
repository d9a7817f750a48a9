import pytest

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.domain.fetch_target import FetchTarget
from rawfetch.exceptions import InvalidUrlError, UnsupportedSchemeError


@pytest.mark.parametrize("url", ["ftp://example.com/", "file:///etc/passwd", "HTTPX://example.com", "example.com/path"])
def test_unsupported_scheme(url):
    with pytest.raises(UnsupportedSchemeError):
        FetchTarget.from_url(url, FetchConfig())


def test_missing_host_is_invalid():
    with pytest.raises(InvalidUrlError, match="missing host"):
        FetchTarget.from_url("http:///path", FetchConfig())


def test_bad_port_is_invalid():
    with pytest.raises(InvalidUrlError):
        FetchTarget.from_url("http://example.com:99999/", FetchConfig())


def test_default_ports_and_tls_flag():
    http = FetchTarget.from_url("http://example.com/", FetchConfig())
    https = FetchTarget.from_url("https://example.com/", FetchConfig())
    assert (http.connect_host, http.connect_port, http.is_tls) == ("example.com", 80, False)
    assert (https.connect_host, https.connect_port, https.is_tls) == ("example.com", 443, True)


def test_path_and_query():
    target = FetchTarget.from_url("http://example.com/a%20b/c?x=1&y=2#frag", FetchConfig())
    assert target.path == "/a%20b/c?x=1&y=2"
    assert FetchTarget.from_url("http://example.com?x=1", FetchConfig()).path == "/?x=1"


def test_non_ascii_path_is_percent_encoded():
    target = FetchTarget.from_url("http://example.com/café", FetchConfig())
    assert target.path == "/caf%C3%A9"


def test_idn_host_is_punycoded():
    target = FetchTarget.from_url("http://bücher.example/", FetchConfig())
    assert target.host == "xn--bcher-kva.example"


def test_ipv6_host_header_is_bracketed():
    target = FetchTarget.from_url("http://[::1]:8080/", FetchConfig())
    assert target.connect_host == "::1"
    assert target.host_header == "[::1]:8080"


def test_proxy_keeps_target_in_request():
    config = FetchConfig(use_proxy=True, proxy_host="proxy.local", proxy_port=3128)
    target = FetchTarget.from_url("https://example.com/x", config)
    assert target.via_proxy
    assert target.connect_label == "proxy.local:3128"
    assert target.request_target == "https://example.com/x"
    assert target.host_header == "example.com"
