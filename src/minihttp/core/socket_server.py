"""
=============================================================================
LISTENER / ACCEPT LOOP
=============================================================================

Owns the listening socket, accepts connections and hands each one to its
own thread.

=============================================================================
SOCKET LIFECYCLE (Server Side)
=============================================================================

    1. socket()    Create a TCP socket
    2. bind()      Reserve 0.0.0.0:8080 for this process
    3. listen()    Kernel starts queueing connections (backlog = 10)
    4. accept()    Take one queued connection, get a NEW socket for it
    5. close()     Release the listening socket when the loop ends

                    ┌───────────────────────┐
                    │   Listening Socket    │ ◄── Created once in start()
                    └───────────┬───────────┘     Never sends/receives data
                                │
        ┌───────────────────────┼───────────────────────┐
        ▼                       ▼                       ▼
    Thread: conn 1          Thread: conn 2          Thread: conn 3

=============================================================================
LISTENER STATES
=============================================================================

    CREATED ──start()──► LISTENING ──stop()──► STOPPED
       │                                          ▲
       └──── socket/bind/listen failed ───────────┘

Setup failures are reported and end that start() call; nothing is
retried. Accept failures while LISTENING are reported and the loop keeps
going.

=============================================================================
THREAD PER CONNECTION
=============================================================================

Every accepted connection gets a fresh daemon thread. The loop never
waits for it and keeps no reference to it, so a slow client only ever
blocks its own thread.

There is no cap on the number of threads: a flood of connections (or of
clients that connect and never send) grows the thread count without
bound. Put a real deployment behind a proxy that limits connections.

=============================================================================
"""

import logging
import socket
import threading
from enum import Enum
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


class ListenerState(Enum):
    CREATED = "created"        # Socket not open yet
    LISTENING = "listening"    # Bound, listening, accept loop running
    STOPPED = "stopped"        # Loop ended (or never started), socket closed


class SocketServer:
    """
    TCP listener that spawns one thread per accepted connection.

    Usage:
        def handle_connection(conn: Connection):
            with conn:
                data = conn.read_request()
                ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until stop()
    """

    def __init__(self, config: ServerConfig):
        """
        Initialize the socket server.

        Args:
            config: Server configuration containing host, port, backlog, etc.

        The socket is created lazily in start().
        """
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._state = ListenerState.CREATED
        self._running = False
        self._bound_address: Optional[Tuple[str, int]] = None

        # Set once the socket is listening, and once the loop has ended
        self._listening_event = threading.Event()
        self._shutdown_event = threading.Event()

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def is_running(self) -> bool:
        """Check if the accept loop is active."""
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        The server's bound (host, port).

        Reflects the OS-assigned port when the config asked for port 0.
        Before binding, returns the configured address.
        """
        return self._bound_address or (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        """
        Create and configure the server socket.

        SO_REUSEADDR lets the server restart immediately instead of failing
        with "Address already in use" while old sockets sit in TIME_WAIT.

        The accept timeout turns the blocking accept() into a poll, so the
        loop notices stop() within accept_timeout seconds.
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.settimeout(self.config.accept_timeout)
        return sock

    def start(self, connection_handler: Callable[[Connection], None]) -> bool:
        """
        Bind, listen and run the accept loop.

        This method BLOCKS until stop() is called.

        Args:
            connection_handler: Called on a new thread for every accepted
                                connection. It owns the connection and
                                must close it.

        Returns:
            False if the socket could not be created, bound or put into
            listening mode (the failure is logged). True once the loop
            ran and has stopped.
        """
        if self._state != ListenerState.CREATED:
            raise RuntimeError(f"SocketServer cannot be started from state {self._state.value}")

        try:
            self._socket = self._create_socket()
            self._socket.bind((self.config.host, self.config.port))
            self._socket.listen(self.config.backlog)
        except OSError as e:
            logger.error(f"Failed to listen on {self.config.host}:{self.config.port}: {e}")
            self._cleanup()
            return False

        self._bound_address = self._socket.getsockname()[:2]
        self._state = ListenerState.LISTENING
        self._running = True
        self._shutdown_event.clear()

        port = self._bound_address[1]
        logger.info(f"Server listening on {self.config.host}:{port}")
        print(f"Server started on port {port}")
        print(f"Access at: http://localhost:{port}")

        self._listening_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

        return True

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        """
        Main loop for accepting connections.

        ┌─────────────────────────────────────────────────────────────────┐
        │   while self._running:                                           │
        │       accept()          blocks up to accept_timeout              │
        │       Connection(...)   wrap the client socket                   │
        │       Thread(...)       handle it, detached                      │
        └─────────────────────────────────────────────────────────────────┘
        """
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue  # Nobody connected; re-check the running flag
            except OSError as e:
                if self._running:
                    logger.error(f"Accept error: {e}")
                continue

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
                timeout=self.config.timeout,
                read_full_body=self.config.read_full_body,
                max_request_size=self.config.max_request_size,
            )
            self._dispatch(conn, connection_handler)

    def _dispatch(self, conn: Connection, connection_handler: Callable[[Connection], None]):
        """Run connection_handler(conn) on a fresh daemon thread, fire and forget."""
        try:
            threading.Thread(
                target=connection_handler,
                args=(conn,),
                name=f"conn-{conn.id}",
                daemon=True,
            ).start()
        except RuntimeError as e:
            # "can't start new thread": the OS is out of threads
            logger.error(f"[{conn.id}] Could not start handler thread: {e}")
            conn.close()

    def stop(self):
        """
        Ask the accept loop to stop.

        Takes effect on the loop's next iteration, at most accept_timeout
        seconds later. In-flight connection threads are not waited for.
        Safe to call more than once, and from any thread.
        """
        if self._running:
            logger.info("Stopping socket server...")
        self._running = False

    def _cleanup(self):
        """Close the listening socket and mark the listener stopped."""
        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._running = False
        self._state = ListenerState.STOPPED
        self._shutdown_event.set()
        logger.info("Socket server stopped")

    def wait_until_listening(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until the socket is bound and listening.

        Returns:
            True once listening, False on timeout.
        """
        return self._listening_event.wait(timeout)

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the accept loop to end and the socket to be closed.

        Returns:
            True if shutdown completed, False if timeout.
        """
        return self._shutdown_event.wait(timeout)
