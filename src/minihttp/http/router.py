"""
=============================================================================
ROUTE TABLE
=============================================================================

Maps request paths to handler functions. Exact string match only.

=============================================================================
MATCHING RULES
=============================================================================

    Registered: "/about"

    Request path        Match?
    ────────────        ──────
    /about              yes
    /about/             no   (trailing slash is a different path)
    /About              no   (case-sensitive)
    /about?x=1          no   (query string is part of the path)

There are no parameters, no wildcards, no prefix matching and no method
filtering. A lookup is a single dict access, O(1) regardless of how many
routes are registered.

=============================================================================
THREAD SAFETY
=============================================================================

Every connection thread reads the same Router concurrently. That is safe
because nothing writes to it once the server is running:

    ┌─────────────────────────────────────────────────────────────────────┐
    │   startup (one thread)           │   serving (many threads)         │
    │                                  │                                  │
    │   add_route("/", home)           │   lookup("/")      ──┐           │
    │   add_route("/about", about)     │   lookup("/about")   ├─ reads    │
    │   freeze()  ─────────────────────┼─► lookup("/x")     ──┘  only     │
    │                                  │   add_route(...) → RuntimeError  │
    └─────────────────────────────────────────────────────────────────────┘

freeze() is called by HTTPServer.start(), so a late registration fails
loudly instead of racing with readers.

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .response import DEFAULT_CONTENT_TYPE


logger = logging.getLogger(__name__)


# Handler: receives the request headers, returns the response body text
Handler = Callable[[Dict[str, str]], str]


@dataclass(frozen=True)
class Route:
    """
    A registered route.

        Route(
            path="/api/data",                 # Exact path to match
            handler=api_data,                 # headers → body text
            content_type="application/json",  # Sent as Content-Type on 200
        )
    """

    path: str
    handler: Handler
    content_type: str = DEFAULT_CONTENT_TYPE


class Router:
    """
    Exact-match route table.

    ==========================================================================
    USAGE
    ==========================================================================

        router = Router()

        @router.route("/")
        def home(headers):
            return "<h1>Hello</h1>"

        router.add_route("/api/data", api_data, content_type="application/json")

        route = router.lookup("/")
        body = route.handler(request.headers)

    ==========================================================================
    """

    def __init__(self):
        self._routes: Dict[str, Route] = {}
        self._frozen = False

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def add_route(
        self,
        path: str,
        handler: Handler,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> Route:
        """
        Register a handler for an exact path.

        Registering the same path twice replaces the first handler.

        Args:
            path: Exact request path, e.g. "/about".
            handler: Function taking the headers dict, returning body text.
            content_type: Content-Type sent with this route's responses.

        Returns:
            The registered Route.

        Raises:
            RuntimeError: If the router was frozen (server already started).
        """
        if self._frozen:
            raise RuntimeError(f"Cannot register {path!r}: routes are frozen once the server starts")

        if path in self._routes:
            logger.debug(f"Replacing handler for {path}")

        route = Route(path=path, handler=handler, content_type=content_type)
        self._routes[path] = route
        return route

    register = add_route

    def route(self, path: str, content_type: str = DEFAULT_CONTENT_TYPE) -> Callable[[Handler], Handler]:
        """
        Decorator for registering routes.

        Usage:
            @router.route("/about")
            def about(headers):
                return "<h1>About</h1>"
        """
        def decorator(handler: Handler) -> Handler:
            self.add_route(path, handler, content_type)
            return handler  # Unchanged, so decorators can stack
        return decorator

    def freeze(self) -> None:
        """Reject any further registration. Idempotent."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def lookup(self, path: str) -> Optional[Route]:
        """
        Find the route registered for exactly this path.

        Args:
            path: Request path as parsed, no normalization applied.

        Returns:
            The Route, or None if nothing is registered for the path.
        """
        return self._routes.get(path)

    def __contains__(self, path: str) -> bool:
        return path in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def routes(self) -> List[Route]:
        """All registered routes, in registration order."""
        return list(self._routes.values())

    def print_routes(self) -> None:
        """
        Print all registered routes (useful for debugging).

        Example output:
            Registered Routes:
            ------------------------------------------------------------
              /                              text/html
              /api/data                      application/json
            ------------------------------------------------------------
        """
        print("\nRegistered Routes:")
        print("-" * 60)
        for route in self.routes():
            print(f"  {route.path:30} {route.content_type}")
        print("-" * 60)
