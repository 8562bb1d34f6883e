"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

Everything that knows what HTTP looks like, and nothing that knows about
sockets or threads:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   raw bytes ──► RequestParser ──► HTTPRequest                        │
    │                                        │                             │
    │                                        ▼                             │
    │                                  Router.lookup(path)                 │
    │                                        │                             │
    │                                        ▼                             │
    │   raw bytes ◄── HTTPResponse.to_bytes() ◄── handler(headers)         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Each piece is a pure function of its input, which is why the unit tests
for this package never open a socket.

=============================================================================
"""

from .request import HTTPRequest, RequestParser, parse_request
from .response import (
    DEFAULT_CONTENT_TYPE,
    HTTPResponse,
    build_response,
    not_found_page,     # 404 body
    server_error_page,  # 500 body
)
from .router import Handler, Route, Router
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "HTTPRequest",
    "RequestParser",
    "parse_request",

    # Response building
    "DEFAULT_CONTENT_TYPE",
    "HTTPResponse",
    "build_response",
    "not_found_page",
    "server_error_page",

    # Routing
    "Handler",
    "Route",
    "Router",

    # Status codes
    "HTTPStatus",
]
