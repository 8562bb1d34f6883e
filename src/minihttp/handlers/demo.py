"""
Demo routes served by ``python -m minihttp``.

Three pages: an HTML landing page, an HTML about page and a small JSON
endpoint. Each handler takes the request headers and returns body text.
"""

import json
import time
from typing import TYPE_CHECKING, Dict, Union

from ..http import Router

if TYPE_CHECKING:
    from ..server import HTTPServer


HOME_PAGE = """<!DOCTYPE html>
<html>
<head><title>minihttp</title>
<style>
body { font-family: Arial, sans-serif; margin: 40px; background: #f0f0f0; }
.container { max-width: 800px; margin: 0 auto; background: white; padding: 20px; border-radius: 10px; }
h1 { color: #333; }
.nav a { margin-right: 15px; text-decoration: none; color: #0066cc; }
</style></head>
<body>
<div class="container">
<h1>Welcome to minihttp!</h1>
<p>A small HTTP/1.1 server built on raw sockets.</p>
<div class="nav">
<a href="/">Home</a>
<a href="/about">About</a>
<a href="/api/data">API Data</a>
</div>
</div>
</body></html>"""


ABOUT_PAGE = """<!DOCTYPE html>
<html>
<head><title>About</title></head>
<body>
<h1>About This Server</h1>
<p>A lightweight HTTP server written in Python.</p>
<p>Features:</p>
<ul>
<li>Thread-per-connection request handling</li>
<li>Exact-path routing</li>
<li>Standard library only</li>
</ul>
<a href="/">Back to Home</a>
</body></html>"""


def home(headers: Dict[str, str]) -> str:
    return HOME_PAGE


def about(headers: Dict[str, str]) -> str:
    return ABOUT_PAGE


def api_data(headers: Dict[str, str]) -> str:
    """JSON status payload; the timestamp is Unix seconds as a string."""
    return json.dumps({
        "status": "success",
        "data": {
            "message": "Hello from minihttp!",
            "timestamp": str(int(time.time())),
            "version": "1.0",
        },
    })


def register_demo_routes(target: Union[Router, "HTTPServer"]):
    """
    Register the three demo routes before the server starts.

    Accepts either an HTTPServer or its Router; both expose register().
    Returns the target.
    """
    target.register("/", home)
    target.register("/about", about)
    target.register("/api/data", api_data, content_type="application/json")
    return target
