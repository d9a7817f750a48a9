import logging
import re
from typing import Callable, NamedTuple, Optional

from requests.structures import CaseInsensitiveDict

from rawfetch.exceptions import MalformedHeaderError, MalformedStatusLineError, UnexpectedEndOfStreamError
from rawfetch.services.pushback_reader import EOF, PushbackReader

logger = logging.getLogger(__name__)

CR = 0x0D
LF = 0x0A
SP = 0x20
HT = 0x09

STATUS_CONTINUE = 100

# Markers of an HTML document that started without the blank separator line.
BODY_MARKERS = ("<!DOCTYPE", "<HTML", "<html")

_STATUS_CODE = re.compile(r"[0-9]+")

# Lines are handled as ISO-8859-1 so any pushed-back slice maps to the exact
# bytes that came off the wire.
LINE_ENCODING = "iso-8859-1"


class ResponseHead(NamedTuple):
    status_code: int
    headers: CaseInsensitiveDict


def read_line(reader: PushbackReader, allow_continuation: bool) -> str:
    """Read one logical line without its terminator.

    CR, LF and CRLF all end a line. With `allow_continuation`, a following
    line that starts with SP or HT is folded into this one with a single
    space. End of stream before a terminator raises UnexpectedEndOfStreamError.
    """
    line = bytearray()
    while True:
        c = reader.read_byte()
        if c == EOF:
            raise UnexpectedEndOfStreamError(
                f"connection closed while reading response head (partial line {bytes(line)!r})"
            )
        if c == CR:
            reader.skip(LF)
            c = LF
        if c == LF:
            if line and allow_continuation and reader.skip(SP, HT):
                while reader.skip(SP, HT):
                    pass
                c = SP
            else:
                return line.decode(LINE_ENCODING)
        line.append(c)


def parse_status_code(line: str) -> int:
    """Status code is the token after the protocol; the reason phrase is optional."""
    code_start = line.find(" ")
    code_end = line.find(" ", code_start + 1)
    if code_end == -1:
        code_end = len(line)
    code = line[code_start + 1:code_end]
    if not _STATUS_CODE.fullmatch(code):
        raise MalformedStatusLineError(line)
    return int(code)


def process_header_line(line: str, headers: CaseInsensitiveDict) -> None:
    colon = line.find(":")
    if colon == -1:
        if line.strip() == "":
            return
        raise MalformedHeaderError(line)
    name = line[:colon]
    value = line[colon + 1:].lstrip(" \t")
    # Re-set so the stored name follows the last occurrence.
    headers.pop(name, None)
    headers[name] = value


def find_body_marker(line: str) -> int:
    positions = [pos for pos in (line.find(m) for m in BODY_MARKERS) if pos != -1]
    return min(positions) if positions else -1


class ResponseParser:
    """Read the status line and header block of a response.

    Interim 100 responses are skipped. On return the reader is positioned at
    the first body byte, which may be bytes pushed back by the missing
    separator recovery.
    """

    def parse(self, reader: PushbackReader, on_status: Optional[Callable[[int], None]] = None) -> ResponseHead:
        while True:
            status_code = parse_status_code(read_line(reader, allow_continuation=False))
            if on_status is not None:
                on_status(status_code)
            headers = CaseInsensitiveDict()
            self.parse_headers(reader, headers)
            if status_code != STATUS_CONTINUE:
                return ResponseHead(status_code, headers)
            logger.debug("Discarding interim 100 Continue response (%d headers)", len(headers))

    def parse_headers(self, reader: PushbackReader, headers: CaseInsensitiveDict) -> None:
        while True:
            line = read_line(reader, allow_continuation=True)
            if not line:
                return

            # Some servers omit the blank line after the headers.
            pos = find_body_marker(line)
            if pos != -1:
                reader.unread(line[pos:].encode(LINE_ENCODING))
                try:
                    process_header_line(line[:pos], headers)
                except MalformedHeaderError as e:
                    logger.warning("Ignoring header fragment before body start: %s", e)
                return

            process_header_line(line, headers)
