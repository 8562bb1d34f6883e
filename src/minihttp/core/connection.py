"""
=============================================================================
CLIENT CONNECTION
=============================================================================

Wraps one accepted client socket for the lifetime of one request.

=============================================================================
ONE REQUEST, ONE READ, ONE WRITE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      Connection Lifecycle                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSED              │
    │              │                                      ▲                │
    │              └── nothing received ──────────────────┘                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

READ: a single recv() of up to buffer_size bytes. TCP is a byte stream,
so a large request may arrive in several segments; only the first one is
seen. That is the simple model this server implements. Setting
read_full_body keeps reading until the Content-Length body is complete.

WRITE: a single send(). If the kernel accepts fewer bytes than offered
(slow client, full send buffer) the rest is dropped, not retried.

CLOSE: always, whatever happened before. The context manager guarantees
it even if the processing code raises.

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """
    Connection lifecycle states.

    Used for debug logging and to make close() idempotent.
    """
    NEW = "new"                # Just accepted
    READING = "reading"        # Inside recv()
    PROCESSING = "processing"  # Parsing, routing, running the handler
    WRITING = "writing"        # Inside send()
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket returned by accept().
        address: Client's (ip, port) tuple.
        id: Short unique identifier for log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
    """

    socket: socket.socket
    address: Tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    # Configuration (passed from ServerConfig)
    buffer_size: int = 4096
    timeout: Optional[float] = None
    read_full_body: bool = False
    max_request_size: int = 1024 * 1024

    def __post_init__(self):
        # Accepted sockets may inherit the listener's accept timeout;
        # reset to the connection's own setting (None = blocking).
        self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> Optional[bytes]:
        """
        Read the request bytes from the socket.

        One recv() of up to buffer_size bytes. With read_full_body, keeps
        reading until the body announced by Content-Length is complete,
        the peer stops sending, or max_request_size is reached.

        Returns:
            The bytes received, or None if the peer sent nothing, closed,
            reset the connection or timed out.
        """
        self.state = ConnectionState.READING

        data = self._recv()
        if not data:
            return None

        if self.read_full_body:
            data = self._read_rest_of_body(data)

        self.state = ConnectionState.PROCESSING
        return data

    def _recv(self) -> bytes:
        """
        Receive data from the socket.

        Returns:
            Received bytes, or empty bytes on close, reset or timeout.
        """
        try:
            return self.socket.recv(self.buffer_size)
        except socket.timeout:
            logger.debug(f"[{self.id}] Read timed out")
            return b""
        except OSError as e:
            logger.debug(f"[{self.id}] Read failed: {e}")
            return b""

    def _read_rest_of_body(self, data: bytes) -> bytes:
        """
        Keep reading until Content-Length body bytes follow the headers.

            GET / HTTP/1.1\\r\\n
            Content-Length: 5\\r\\n
            \\r\\n                ← header_end points here
            Hello               ← body_start is 4 bytes later

        LF-only clients end the headers with a bare blank line instead.
        """
        header_end, terminator = self._find_header_end(data)
        while header_end == -1 and len(data) < self.max_request_size:
            chunk = self._recv()
            if not chunk:
                return data
            data += chunk
            header_end, terminator = self._find_header_end(data)

        if header_end == -1:
            return data

        body_start = header_end + len(terminator)
        content_length = self._parse_content_length(data[:header_end])
        wanted = min(body_start + content_length, self.max_request_size)

        while len(data) < wanted:
            chunk = self._recv()
            if not chunk:
                break  # Peer closed mid-body, keep what we have
            data += chunk

        return data[:max(wanted, body_start)]

    @staticmethod
    def _find_header_end(data: bytes) -> Tuple[int, bytes]:
        """Return (offset, terminator) of the earliest header terminator, or (-1, b"")."""
        found = [(data.find(t), t) for t in (b"\r\n\r\n", b"\n\n")]
        found = [(pos, t) for pos, t in found if pos != -1]
        return min(found) if found else (-1, b"")

    def _parse_content_length(self, headers: bytes) -> int:
        """
        Find Content-Length in raw header bytes (case-insensitive).

        Returns:
            Content-Length value, or 0 if absent or not a number.
        """
        try:
            header_str = headers.decode("utf-8", errors="replace").lower()
            for line in header_str.splitlines():
                if line.startswith("content-length:"):
                    return max(int(line.split(":", 1)[1].strip()), 0)
        except (ValueError, IndexError):
            pass
        return 0

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send response bytes with a single send() call.

        A short write is logged, not retried.

        Args:
            data: Response bytes to send.

        Returns:
            True if every byte was accepted by the kernel.
        """
        self.state = ConnectionState.WRITING

        try:
            sent = self.socket.send(data)
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

        if sent < len(data):
            logger.debug(f"[{self.id}] Short write: {sent} of {len(data)} bytes sent")
            return False
        return True

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        shutdown(SHUT_WR) sends FIN so the client sees the end of the
        response, then close() releases the file descriptor. Safe to call
        more than once.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Peer already gone

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age * 1000:.2f}ms")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - ensure connection is closed."""
        self.close()
        return False  # Don't suppress exceptions
