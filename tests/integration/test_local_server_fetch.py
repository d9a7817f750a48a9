"""End-to-end fetches against a throwaway TCP server on localhost."""
import socketserver
import threading
from unittest.mock import Mock

import pytest

from rawfetch.domain.fetch_config import FetchConfig
from rawfetch.exceptions import FetchTimeoutError
from rawfetch.services.raw_fetcher import RawHttpFetcher


class _CannedHandler(socketserver.BaseRequestHandler):
    def handle(self):
        data = b""
        while b"\r\n\r\n" not in data:
            chunk = self.request.recv(1024)
            if not chunk:
                break
            data += chunk
        self.server.requests.append(data)
        if self.server.reply is not None:
            self.request.sendall(self.server.reply)
        else:
            self.server.release.wait(5)


@pytest.fixture
def server():
    srv = socketserver.ThreadingTCPServer(("127.0.0.1", 0), _CannedHandler)
    srv.daemon_threads = True
    srv.requests = []
    srv.reply = b""
    srv.release = threading.Event()
    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()
    yield srv
    srv.release.set()
    srv.shutdown()
    srv.server_close()


def _url(srv, path="/"):
    host, port = srv.server_address
    return f"http://{host}:{port}{path}"


def test_fetch_from_local_server(server):
    server.reply = b"HTTP/1.1 200 OK\r\nContent-Type: text/plain\r\nContent-Length: 11\r\n\r\nhello world"
    fetcher = RawHttpFetcher(FetchConfig(user_agent="IntegrationAgent", timeout=5), Mock())
    response = fetcher.fetch(_url(server, "/greet?x=1"))
    assert response.status_code == 200
    assert response.body == b"hello world"
    request = server.requests[0]
    assert request.startswith(b"GET /greet?x=1 HTTP/1.0\r\n")
    assert b"User-Agent: IntegrationAgent\r\n" in request


def test_fetch_until_server_closes(server):
    server.reply = b"HTTP/1.0 200 OK\r\n\r\n" + b"x" * 20000
    fetcher = RawHttpFetcher(FetchConfig(max_content=0, timeout=5), Mock())
    assert len(fetcher.fetch(_url(server)).body) == 20000


def test_read_timeout_raises(server):
    server.reply = None
    fetcher = RawHttpFetcher(FetchConfig(timeout=0.2), Mock())
    with pytest.raises(FetchTimeoutError):
        fetcher.fetch(_url(server))
