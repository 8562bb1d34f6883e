"""
=============================================================================
HTTP REQUEST PARSING
=============================================================================

Turns the bytes of one socket read into a structured HTTPRequest.

=============================================================================
WHAT ARRIVES ON THE WIRE
=============================================================================

    GET /about HTTP/1.1\r\n          ← Request line: METHOD PATH VERSION
    Host: localhost:8080\r\n         ← Header lines: Key: Value
    User-Agent: curl/8.5.0\r\n
    \r\n                             ← Blank line ends the headers
    name=value                       ← Body (whatever came in the same read)

=============================================================================
BEST-EFFORT PARSING
=============================================================================

This parser NEVER raises. A browser, curl, a port scanner and a telnet
session all end up here, and every one of them gets an HTTPRequest back:

    ┌─────────────────────────────┬────────────────────────────────────────┐
    │ Input                       │ Result                                 │
    ├─────────────────────────────┼────────────────────────────────────────┤
    │ b"GET / HTTP/1.1\r\n\r\n"   │ method="GET", path="/", version=...    │
    │ b"GET\r\n\r\n"              │ method="GET", path="", version=""      │
    │ b""                         │ everything empty                       │
    │ b"X-No-Colon-Here\r\n"      │ line skipped, headers unchanged        │
    │ b"\xff\xfe..."              │ decoded with U+FFFD replacements       │
    └─────────────────────────────┴────────────────────────────────────────┘

A request with an empty path simply never matches a route, so it ends up
as a 404 rather than a crash in the connection handler.

What this parser deliberately does NOT do:
- Split the query string off the path ("/search?q=x" is the whole path)
- Normalize header names ("Content-Type" and "content-type" stay distinct)
- Read a body that did not fit into the first read

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass
class HTTPRequest:
    """
    Represents a parsed HTTP request.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         First token of the request line ("GET", "POST", ...)
                        Empty string when the line was too short.

        path:           Second token, verbatim. Leading slash included,
                        query string included, no URL-decoding.

        version:        Third token ("HTTP/1.1"), or empty.

        headers:        Header name → value, names exactly as received.
                        Duplicate names: the last line wins.

        body:           Everything after the blank line, as text.

        client_address: (ip, port) of the peer, for logging only.

    =========================================================================
    """

    method: str = ""
    path: str = ""
    version: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""
    client_address: Tuple[str, int] = ("", 0)

    @property
    def content_length(self) -> int:
        """
        Content-Length header as an integer (0 if missing or invalid).

        Header names are not normalized, so both the canonical and the
        lowercase spelling are tried.
        """
        raw = self.headers.get("Content-Length", self.headers.get("content-length", "0"))
        try:
            return max(int(raw.strip()), 0)
        except ValueError:
            return 0

    def get_header(self, name: str, default: str = "") -> str:
        """Get a header value by its exact (case-sensitive) name."""
        return self.headers.get(name, default)


class RequestParser:
    """
    Parses raw HTTP request bytes into HTTPRequest objects.

    =========================================================================
    PARSING ALGORITHM
    =========================================================================

    1. Decode the bytes as UTF-8 (invalid sequences replaced, never fatal)
    2. Split the text on "\\n" (each line still carries its "\\r")
    3. First line → whitespace tokens → method, path, version
    4. Following lines, up to the blank line → "Key: Value" headers
    5. Everything after the blank line → body

    =========================================================================

    The parser holds no per-request state, so one instance is shared by
    every connection thread.
    """

    def parse(self, data: bytes, client_address: Tuple[str, int] = ("", 0)) -> HTTPRequest:
        """
        Parse raw HTTP request data into an HTTPRequest object.

        Args:
            data: Raw bytes from a single socket read.
            client_address: Client's (ip, port) tuple for logging.

        Returns:
            Parsed HTTPRequest. Fields the input did not provide are empty.
        """
        request = HTTPRequest(client_address=client_address)

        text = data.decode("utf-8", errors="replace")
        if not text:
            return request

        lines = text.split("\n")

        # ---------------------------------------------------------------------
        # REQUEST LINE
        # ---------------------------------------------------------------------
        # "GET /about HTTP/1.1\r" → ["GET", "/about", "HTTP/1.1"]
        # str.split() with no argument also swallows the trailing \r.
        request.method, request.path, request.version = self._parse_request_line(lines[0])

        # ---------------------------------------------------------------------
        # HEADERS
        # ---------------------------------------------------------------------
        index = 1
        while index < len(lines):
            line = lines[index]
            index += 1
            if line in ("\r", ""):
                break  # Blank line: end of headers
            self._parse_header_line(line, request.headers)

        # ---------------------------------------------------------------------
        # BODY
        # ---------------------------------------------------------------------
        # Only what arrived in this read. A body cut off by the read
        # buffer stays cut off.
        request.body = "\n".join(lines[index:])

        return request

    def _parse_request_line(self, line: str) -> Tuple[str, str, str]:
        """
        Split the request line into (method, path, version).

        Missing tokens become empty strings, extra tokens are ignored:

            "GET / HTTP/1.1"        → ("GET", "/", "HTTP/1.1")
            "GET /"                 → ("GET", "/", "")
            ""                      → ("", "", "")
        """
        tokens: List[str] = line.split()[:3]
        tokens += [""] * (3 - len(tokens))
        return tokens[0], tokens[1], tokens[2]

    def _parse_header_line(self, line: str, headers: Dict[str, str]) -> None:
        """
        Parse one "Key: Value" line into the headers dict.

        The split point is the FIRST colon, so values may contain colons
        ("Host: localhost:8080"). One space after the colon is dropped;
        any trailing \\r is stripped. Lines without a colon are ignored.
        """
        colon = line.find(":")
        if colon == -1:
            return

        key = line[:colon]
        value = line[colon + 1:]
        if value.startswith(" "):
            value = value[1:]
        if value.endswith("\r"):
            value = value[:-1]

        headers[key] = value


def parse_request(data: bytes, client_address: Tuple[str, int] = ("", 0)) -> HTTPRequest:
    """
    Convenience function to parse an HTTP request in one call.

    Args:
        data: Raw HTTP request bytes.
        client_address: Client's (ip, port) tuple.

    Returns:
        Parsed HTTPRequest object.
    """
    return RequestParser().parse(data, client_address)
