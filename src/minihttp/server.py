"""
=============================================================================
MAIN HTTP SERVER
=============================================================================

The orchestrator: owns the route table, the request parser and the
listener, and implements what happens to each connection.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    1. CLIENT CONNECTS
       └── SocketServer accepts, starts a thread for the connection

    2. READ (connection thread)
       └── One recv(); nothing received → straight to 5, no response

    3. PARSE + ROUTE
       └── RequestParser → HTTPRequest
       └── Router.lookup(path)
             found     → 200, body = handler(request.headers)
             not found → 404, body = not-found page
             raised    → 500, body = error page

    4. WRITE
       └── HTTPResponse.to_bytes() → one send()

    5. CLOSE
       └── Always, whichever branch ran

=============================================================================
"""

import logging
import time
from typing import Callable, Optional, Tuple

from .config import ServerConfig
from .core import Connection, ListenerState, SocketServer
from .http import (
    DEFAULT_CONTENT_TYPE,
    Handler,
    HTTPRequest,
    HTTPResponse,
    HTTPStatus,
    RequestParser,
    Router,
    not_found_page,
    server_error_page,
)


logger = logging.getLogger(__name__)

# Separate logger for one-line-per-request output, so it can be routed or
# silenced on its own: logging.getLogger("minihttp.access").setLevel(...)
access_logger = logging.getLogger("minihttp.access")


class HTTPServer:
    """
    Minimal HTTP/1.1 server: one request per connection, exact-path routes.

    =========================================================================
    USAGE
    =========================================================================

        server = HTTPServer(ServerConfig(port=8080))

        @server.route("/")
        def index(headers):
            return "<h1>Hello World</h1>"

        server.register("/api/data", api_data, content_type="application/json")

        server.start()   # Blocks until stop() is called from elsewhere

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Initialize the HTTP server.

        Args:
            config: Server configuration. Uses defaults if not provided.

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser()
        self._router = Router()

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    @property
    def router(self) -> Router:
        return self._router

    def register(self, path: str, handler: Handler, content_type: str = DEFAULT_CONTENT_TYPE) -> "HTTPServer":
        """
        Register a handler for an exact path.

        Must happen before start(). Returns self for chaining:

            server.register("/", home).register("/about", about)
        """
        self._router.add_route(path, handler, content_type)
        return self

    def route(self, path: str, content_type: str = DEFAULT_CONTENT_TYPE) -> Callable[[Handler], Handler]:
        """Decorator form of register()."""
        return self._router.route(path, content_type)

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    @property
    def state(self) -> ListenerState:
        return self._socket_server.state

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    @property
    def address(self) -> Tuple[str, int]:
        """Bound (host, port); the real port once listening on port 0."""
        return self._socket_server.address

    def start(self) -> bool:
        """
        Start the server (blocking).

        Freezes the route table, then runs the accept loop until stop().

        Returns:
            False if the listening socket could not be set up (already
            logged), True after a normal stop.
        """
        self._setup_logging()
        self._router.freeze()

        logger.info(f"Starting {self.config.server_name} with {len(self._router)} routes")
        return self._socket_server.start(self._process_connection)

    def stop(self):
        """
        Stop accepting connections.

        Observed within config.accept_timeout seconds; connections already
        being handled run to completion on their own threads.
        """
        self._socket_server.stop()

    def wait_until_listening(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_listening(timeout)

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_for_shutdown(timeout)

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        # No-op if the application already configured the root logger
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        logging.getLogger("minihttp").setLevel(level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _process_connection(self, conn: Connection):
        """
        Handle one connection from read to close (runs on its own thread).

        Args:
            conn: The client connection.
        """
        with conn:  # Context manager ensures connection is closed
            raw_request = conn.read_request()
            if raw_request is None:
                logger.debug(f"[{conn.id}] Nothing received, dropping connection")
                return

            start_time = time.time()
            request = self._parser.parse(raw_request, conn.address)
            response = self._dispatch(request, conn)

            conn.send_response(response.to_bytes())

            self._log_access(request, response, (time.time() - start_time) * 1000)

    def _dispatch(self, request: HTTPRequest, conn: Connection) -> HTTPResponse:
        """
        Route a request and produce its response.

        Returns:
            200 with the handler's body, 404 for an unknown path, or 500
            if the handler raised.
        """
        route = self._router.lookup(request.path)

        if route is None:
            return HTTPResponse.from_status(HTTPStatus.NOT_FOUND, not_found_page(request.path))

        try:
            content = route.handler(request.headers)
            if not isinstance(content, (str, bytes)):
                raise TypeError(f"handler returned {type(content).__name__}, expected str")
        except Exception as e:
            # Handler threw an exception - return 500
            logger.exception(f"[{conn.id}] Handler for {request.path} failed: {e}")
            return HTTPResponse.from_status(HTTPStatus.INTERNAL_SERVER_ERROR, server_error_page())

        return HTTPResponse.from_status(HTTPStatus.OK, content, route.content_type)

    def _log_access(self, request: HTTPRequest, response: HTTPResponse, duration_ms: float):
        """
        One line per answered request:

            127.0.0.1 "GET /about" 200 412 0.31ms
        """
        level = logging.WARNING if HTTPStatus(response.status).is_server_error else logging.INFO
        access_logger.log(
            level,
            f'{request.client_address[0]} "{request.method} {request.path}" '
            f"{response.status} {response.content_length} {duration_ms:.2f}ms",
        )


def create_app(config: Optional[ServerConfig] = None) -> HTTPServer:
    """
    Create an HTTP server application.

    Example:
        app = create_app(ServerConfig(port=3000))
        app.register("/", lambda headers: "Hello!")
        app.start()
    """
    return HTTPServer(config)
