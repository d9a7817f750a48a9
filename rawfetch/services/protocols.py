"""Protocol (interface) definitions for services."""

from typing import Protocol


class Renderer(Protocol):
    """Headless rendering collaborator used for HTML responses.

    Returns the fully rendered HTML of `url`. Assumed synchronous; failure is
    signalled by raising.
    """
    def render(self, url: str) -> str:
        ...


class Connection(Protocol):
    """The subset of a socket the fetch pipeline uses."""
    def sendall(self, data: bytes) -> None:
        ...

    def recv(self, bufsize: int) -> bytes:
        ...

    def close(self) -> None:
        ...
