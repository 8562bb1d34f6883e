"""
=============================================================================
MINIHTTP CLI ENTRY POINT
=============================================================================

    # Run with defaults (0.0.0.0:8080, demo routes)
    python -m minihttp

    # Custom port, localhost only
    python -m minihttp --host 127.0.0.1 --port 3000

    # Read request bodies beyond the first segment
    python -m minihttp --read-full-body

Environment variables (HTTP_PORT, HTTP_HOST, ...) provide the defaults;
command-line options override them.

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import ServerConfig
from .handlers import register_demo_routes
from .server import HTTPServer


def main(argv=None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code: 0 after a normal stop, 1 if the server could
        not listen.
    """
    try:
        defaults = ServerConfig.from_env()
    except ValueError as e:
        argparse.ArgumentParser(prog="minihttp").error(str(e))

    parser = argparse.ArgumentParser(
        prog="minihttp",
        description="Minimal HTTP/1.1 server, one request per connection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m minihttp                        # Run with defaults
  python -m minihttp --port 3000            # Custom port
  python -m minihttp --host 127.0.0.1       # Localhost only
  python -m minihttp --no-demo              # Serve nothing but 404s
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})"
    )
    parser.add_argument(
        "--backlog",
        type=int,
        default=defaults.backlog,
        help=f"Listen backlog (default: {defaults.backlog})"
    )

    # ─────────────────────────────────────────────────────────────────────
    # CONNECTION ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--buffer-size",
        type=int,
        default=defaults.buffer_size,
        help=f"Bytes read per connection (default: {defaults.buffer_size})"
    )
    parser.add_argument(
        "--read-full-body",
        action="store_true",
        help="Keep reading until the Content-Length body has arrived"
    )

    # ─────────────────────────────────────────────────────────────────────
    # MISC ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────
    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=defaults.log_level.upper(),
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--no-demo",
        action="store_true",
        help="Do not register the demo routes"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"minihttp {__version__}"
    )

    args = parser.parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        backlog=args.backlog,
        buffer_size=args.buffer_size,
        timeout=defaults.timeout,
        read_full_body=args.read_full_body,
        log_level=args.log_level,
    )

    try:
        server = HTTPServer(config)
    except ValueError as e:
        parser.error(str(e))

    if not args.no_demo:
        register_demo_routes(server)
    server.router.print_routes()

    try:
        started = server.start()
    except KeyboardInterrupt:
        server.stop()
        started = True

    return 0 if started else 1


if __name__ == "__main__":
    sys.exit(main())
