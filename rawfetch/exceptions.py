"""Custom exceptions for rawfetch."""
from typing import Optional


class FetchError(Exception):
    """Base class for every failure that aborts a single fetch."""


class UnsupportedSchemeError(FetchError):
    """Raised before any network activity when the URL scheme is not http/https."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Unknown scheme (not http/https) for url: {url}")


class InvalidUrlError(FetchError):
    """Raised before any network activity when the URL has no usable host or port."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid url {url!r}: {reason}")


class ConnectError(FetchError):
    """Raised when the transport connection cannot be opened or used."""

    def __init__(self, target: str, original: Optional[BaseException] = None):
        self.target = target
        self.original = original
        super().__init__(f"Connection to {target} failed: {original}")


class FetchTimeoutError(ConnectError, TimeoutError):
    """Raised when connect, TLS handshake, write or read exceeds the timeout.

    Also a builtin `TimeoutError`, so either kind of handler catches it.
    """


class ProtocolError(FetchError):
    """Base class for malformed responses."""


class MalformedStatusLineError(ProtocolError):
    def __init__(self, line: str):
        self.line = line
        super().__init__(f"bad status line {line!r}")


class MalformedHeaderError(ProtocolError):
    def __init__(self, line: str):
        self.line = line
        super().__init__(f"No colon in header: {line!r}")


class BadContentLengthError(ProtocolError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"bad content length: {value!r}")


class UnexpectedEndOfStreamError(ProtocolError):
    """Raised when the connection closes before the header block is complete."""


class RenderDelegationError(FetchError):
    """Raised when the rendering collaborator fails for an HTML response."""

    def __init__(self, url: str, original: Optional[BaseException] = None):
        self.url = url
        self.original = original
        super().__init__(f"Render delegation failed for {url}: {original}")
