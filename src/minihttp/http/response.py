"""
=============================================================================
HTTP RESPONSE BUILDING
=============================================================================

Turns a status, a body and a content type into the exact bytes written to
the socket.

=============================================================================
RESPONSE FORMAT
=============================================================================

Every response this server writes has the same shape: a status line,
exactly three headers, a blank line and the body.

    HTTP/1.1 200 OK\r\n                 ← Status line
    Content-Type: text/html\r\n         ← What the body is
    Content-Length: 5\r\n               ← Body size in BYTES, not characters
    Connection: close\r\n               ← One request per connection, always
    \r\n                                ← End of headers
    hello                               ← Body, no trailing CRLF

=============================================================================
WHY BYTES FOR Content-Length?
=============================================================================

The client reads exactly Content-Length bytes after the blank line. For
non-ASCII text the character count and the byte count differ:

    "héllo"  → 5 characters
             → 6 bytes in UTF-8 (é is 0xC3 0xA9)

So the body is encoded FIRST and the header is computed from the encoded
length. A mismatch would truncate the body or leave the client waiting
for bytes that never come.

=============================================================================
"""

import html
from dataclasses import dataclass
from typing import Union

from .status_codes import HTTPStatus


DEFAULT_CONTENT_TYPE = "text/html"


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    =========================================================================
    RESPONSE LIFECYCLE
    =========================================================================

        Connection handler     to_bytes()              Socket sends
        builds HTTPResponse ─► serializes      ─────►  raw bytes
            │                      │                       │
        HTTPResponse(          b"HTTP/1.1 200 OK\\r\\n   conn.send_response(
          status=200,            Content-Type: ...\\r\\n    response_bytes
          message="OK",          ...                     )
          body=b"hello")         hello"

    =========================================================================
    """

    status: int = HTTPStatus.OK
    message: str = "OK"
    body: bytes = b""
    content_type: str = DEFAULT_CONTENT_TYPE
    version: str = "HTTP/1.1"

    @classmethod
    def from_status(
        cls,
        status: HTTPStatus,
        content: Union[str, bytes],
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> "HTTPResponse":
        """Create a response whose message is the status' reason phrase."""
        return cls(
            status=int(status),
            message=status.phrase,
            body=_encode(content),
            content_type=content_type,
        )

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 200 OK"
        """
        return f"{self.version} {int(self.status)} {self.message}"

    @property
    def content_length(self) -> int:
        return len(self.body)

    def to_bytes(self) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        Returns:
            Status line, Content-Type, Content-Length and Connection
            headers, blank line, then the body bytes.
        """
        lines = [
            self.status_line,
            f"Content-Type: {self.content_type}",
            f"Content-Length: {self.content_length}",
            "Connection: close",
            "",
        ]
        header_bytes = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return header_bytes + self.body


def build_response(
    status_code: int,
    status_message: str,
    content: Union[str, bytes],
    content_type: str = DEFAULT_CONTENT_TYPE,
) -> bytes:
    """
    Build the raw bytes of an HTTP response.

    Pure function: the same arguments always produce the same bytes.

    Args:
        status_code: Numeric status (200, 404, ...).
        status_message: Reason phrase ("OK", "Not Found", ...).
        content: Body as text (encoded as UTF-8) or raw bytes.
        content_type: Value of the Content-Type header.

    Returns:
        Complete HTTP response ready for socket.send().

    Example:
        >>> build_response(200, "OK", "hello")
        b'HTTP/1.1 200 OK\\r\\nContent-Type: text/html\\r\\nContent-Length: 5\\r\\nConnection: close\\r\\n\\r\\nhello'
    """
    response = HTTPResponse(
        status=status_code,
        message=status_message,
        body=_encode(content),
        content_type=content_type,
    )
    return response.to_bytes()


def _encode(content: Union[str, bytes]) -> bytes:
    if isinstance(content, str):
        return content.encode("utf-8")
    return content


# =============================================================================
# ERROR PAGES
# =============================================================================
#
# The only bodies the server writes on its own. Everything else comes from
# route handlers.
#
# =============================================================================

def not_found_page(path: str) -> str:
    """
    HTML body for a 404 response.

    The requested path is echoed back so the user sees what they asked
    for. It is HTML-escaped first: a path is attacker-controlled, and
    echoing "/<script>..." verbatim into a page a browser renders is a
    reflected XSS.

    Args:
        path: The request path as received.

    Returns:
        The 404 page as HTML text.
    """
    return (
        "<!DOCTYPE html><html><head><title>404 Not Found</title></head>"
        "<body><h1>404 Not Found</h1><p>The requested URL "
        f"{html.escape(path)} was not found on this server.</p></body></html>"
    )


def server_error_page() -> str:
    """HTML body for a 500 response. Never includes exception details."""
    return (
        "<!DOCTYPE html><html><head><title>500 Internal Server Error</title></head>"
        "<body><h1>500 Internal Server Error</h1><p>The server encountered an "
        "internal error and was unable to complete your request.</p></body></html>"
    )
