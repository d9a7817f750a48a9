import socket

import pytest


class FakeSocket:
    """In-memory stand-in for a connected socket.

    `chunks` are handed out by recv() one at a time (split when larger than
    the requested size); an exception instance in `chunks` is raised instead.
    """

    def __init__(self, chunks=(), send_error=None):
        self._chunks = list(chunks)
        self._send_error = send_error
        self.sent = bytearray()
        self.recv_calls = 0
        self.closed = False

    def sendall(self, data):
        if self._send_error is not None:
            raise self._send_error
        self.sent.extend(data)

    def recv(self, bufsize):
        self.recv_calls += 1
        if not self._chunks:
            return b""
        chunk = self._chunks.pop(0)
        if isinstance(chunk, BaseException):
            raise chunk
        if len(chunk) > bufsize:
            self._chunks.insert(0, chunk[bufsize:])
            chunk = chunk[:bufsize]
        return chunk

    def close(self):
        self.closed = True


@pytest.fixture
def make_socket():
    return FakeSocket


@pytest.fixture
def timeout_error():
    return socket.timeout("timed out")
