"""
=============================================================================
MINIHTTP - Minimal HTTP/1.1 Server on Raw Sockets
=============================================================================

One request per connection, one thread per connection, exact-path routes.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      MINIHTTP ARCHITECTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   SocketServer ──accept──► thread ──► HTTPServer._process_connection │
    │                                          │                           │
    │                         Connection.read_request()  (one recv)        │
    │                                          │                           │
    │                         RequestParser.parse()                        │
    │                                          │                           │
    │                         Router.lookup(path) → handler(headers)       │
    │                                          │                           │
    │                         HTTPResponse.to_bytes() → one send → close   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
QUICK START
=============================================================================

    from minihttp import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(port=8080))

    @server.route("/")
    def index(headers):
        return "<h1>Hello World</h1>"

    server.start()

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer, create_app
from .config import ServerConfig

__all__ = ["HTTPServer", "ServerConfig", "create_app", "__version__"]
