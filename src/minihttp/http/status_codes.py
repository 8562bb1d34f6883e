"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The handful of status codes this server ever writes, with their reason
phrases.

    ┌────────────────────────────────────────────────────────────────────┐
    │                    STATUS CODES WE ACTUALLY SEND                   │
    ├────────┬───────────────────────────────────────────────────────────┤
    │  200   │ OK                    - A route matched, handler returned │
    │  404   │ Not Found             - No route for the exact path       │
    │  500   │ Internal Server Error - The route handler raised          │
    └────────┴───────────────────────────────────────────────────────────┘

The status line is built from the code and the phrase:

    HTTP/1.1 404 Not Found
             ─── ─────────
              │      │
              │      └── Reason phrase (HTTPStatus.phrase)
              └───────── Status code (int value of the enum)

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    IntEnum, so members compare equal to plain integers:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200                        # Route matched
    NOT_FOUND = 404                 # No route for this path
    INTERNAL_SERVER_ERROR = 500     # Handler raised an exception

    @property
    def phrase(self) -> str:
        """Reason phrase that follows the code in the status line."""
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_server_error(self) -> bool:
        """Check if this is a 5xx code (access log uses WARNING for these)."""
        return 500 <= self < 600


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
