"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the HTTP server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m minihttp --port 3000                            │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=3000 python -m minihttp                         │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Defaults describe the plain behavior: listen on every interface, port
8080, a backlog of 10, one 4 KB read per connection, no socket timeouts.

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional


def _env_number(name: str, default, cast):
    """
    Read a numeric environment variable.

    Unset or empty gives the default. Anything cast() rejects raises
    ValueError naming the variable.
    """
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, accept_timeout

    CONNECTION SETTINGS
    - buffer_size, timeout, read_full_body, max_request_size

    LOGGING / IDENTITY
    - log_level, server_name

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "0.0.0.0"
    """
    The IP address to bind to.
    - "0.0.0.0" - All network interfaces
    - "127.0.0.1" - Localhost only (tests, development)
    """

    port: int = 8080
    """
    The port number to listen on. 0 lets the OS pick a free port; the
    actual port is available from HTTPServer.address once listening.
    """

    backlog: int = 10
    """
    Maximum number of connections queued by the kernel before accept().
    """

    accept_timeout: float = 1.0
    """
    How long accept() blocks before the loop re-checks the running flag.
    This bounds how long stop() takes to be observed.
    """

    # ─────────────────────────────────────────────────────────────────────
    # CONNECTION SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    buffer_size: int = 4096
    """
    Size of the single read on each connection, in bytes. Anything the
    client sends beyond this (or after the first TCP segment) is ignored
    unless read_full_body is set.
    """

    timeout: Optional[float] = None
    """
    Per-connection socket timeout in seconds.
    None = block forever on read/write (a silent client pins its thread).
    """

    read_full_body: bool = False
    """
    Keep reading after the first read until Content-Length body bytes
    have arrived (bounded by max_request_size). Off by default: one read.
    """

    max_request_size: int = 1024 * 1024  # 1 MB
    """
    Upper bound on request bytes collected when read_full_body is on.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING / IDENTITY
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """

    server_name: str = "minihttp/1.0"
    """
    Server software name, written in the INFO log line when the server starts.
    """

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST         Server host (default: 0.0.0.0)
        HTTP_PORT         Server port (default: 8080)
        HTTP_BACKLOG      Listen backlog (default: 10)
        HTTP_BUFFER_SIZE  Read size per connection (default: 4096)
        HTTP_TIMEOUT      Connection timeout in seconds (default: none)
        HTTP_LOG_LEVEL    Logging level (default: INFO)

        =====================================================================
        """
        timeout = _env_number("HTTP_TIMEOUT", None, float)
        return cls(
            host=os.getenv("HTTP_HOST", "0.0.0.0"),
            port=_env_number("HTTP_PORT", 8080, int),
            backlog=_env_number("HTTP_BACKLOG", 10, int),
            buffer_size=_env_number("HTTP_BUFFER_SIZE", 4096, int),
            timeout=timeout,
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once when the server is constructed, so a bad value fails
        at startup and not on the first request.

        Raises:
            ValueError: On the first invalid value found.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 64:
            raise ValueError("buffer_size must be >= 64")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.accept_timeout <= 0:
            raise ValueError("accept_timeout must be > 0")

        if self.max_request_size < self.buffer_size:
            raise ValueError("max_request_size must be >= buffer_size")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log_level: {self.log_level}")
