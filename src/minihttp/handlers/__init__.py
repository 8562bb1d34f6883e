"""
=============================================================================
ROUTE HANDLERS
=============================================================================

Ready-made handlers. A handler is any function of this shape:

    def handler(headers: Dict[str, str]) -> str:
        return "<h1>body text</h1>"

It receives the request headers exactly as parsed and returns the response
body. The server wraps the result in a 200 response with the route's
content type; if the handler raises, the client gets a 500 instead.

=============================================================================
"""

from .demo import about, api_data, home, register_demo_routes

__all__ = ["home", "about", "api_data", "register_demo_routes"]
