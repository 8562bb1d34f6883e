"""
=============================================================================
CORE NETWORKING LAYER
=============================================================================

The transport side of the server: sockets and threads, no HTTP.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   SocketServer                       Connection                      │
    │   ────────────                       ──────────                      │
    │   socket/bind/listen                 one recv()                      │
    │   accept loop                        one send()                      │
    │   thread per connection   ───────►   close(), always                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .connection import Connection, ConnectionState
from .socket_server import ListenerState, SocketServer

__all__ = [
    "SocketServer",     # Accept loop - one thread per connection
    "ListenerState",    # CREATED / LISTENING / STOPPED
    "Connection",       # Wrapper for a client socket
    "ConnectionState",  # Enum for connection lifecycle states
]
