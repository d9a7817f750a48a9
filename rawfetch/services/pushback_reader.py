import socket
from typing import Optional

from rawfetch.domain.fetch_config import BUFFER_SIZE
from rawfetch.exceptions import ConnectError, FetchTimeoutError
from rawfetch.services.protocols import Connection

EOF = -1


class PushbackReader:
    """Buffered byte source over a socket with peek and unread.

    Single-byte reads drive the header line state machine; `read(n)` serves
    the body. Bytes handed back with `unread` are returned before anything
    else, so the header parser can return body bytes it consumed by mistake.
    """

    def __init__(self, connection: Connection, buffer_size: int = BUFFER_SIZE, label: Optional[str] = None):
        self._connection = connection
        self._buffer_size = buffer_size
        self._label = label or "connection"
        self._buffer = bytearray()
        self._pos = 0
        self._eof = False

    def _fill(self) -> bool:
        """Receive one chunk from the connection. False once the peer is done."""
        if self._eof:
            return False
        try:
            chunk = self._connection.recv(self._buffer_size)
        except socket.timeout as e:
            raise FetchTimeoutError(self._label, e) from e
        except OSError as e:
            raise ConnectError(self._label, e) from e
        if not chunk:
            self._eof = True
            return False
        if self._pos:
            del self._buffer[: self._pos]
            self._pos = 0
        self._buffer.extend(chunk)
        return True

    def read_byte(self) -> int:
        if self._pos >= len(self._buffer) and not self._fill():
            return EOF
        value = self._buffer[self._pos]
        self._pos += 1
        return value

    def peek_byte(self) -> int:
        if self._pos >= len(self._buffer) and not self._fill():
            return EOF
        return self._buffer[self._pos]

    def skip(self, *candidates: int) -> bool:
        """Consume the next byte if it is one of `candidates`."""
        if self.peek_byte() in candidates:
            self._pos += 1
            return True
        return False

    def unread(self, data: bytes) -> None:
        if not data:
            return
        self._buffer[: self._pos] = data
        self._pos = 0

    def read(self, size: int) -> bytes:
        """Return up to `size` bytes; buffered bytes first, else one receive.

        Returns b"" only at end of stream.
        """
        if size <= 0:
            return b""
        if self._pos >= len(self._buffer) and not self._fill():
            return b""
        end = min(self._pos + size, len(self._buffer))
        data = bytes(self._buffer[self._pos:end])
        self._pos = end
        return data
