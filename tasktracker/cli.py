"""
Task Tracker CLI — Command-Line Entry Point
============================================

Usage:
    # Serve on the default port (8080)
    python -m tasktracker start

    # Pick the interface, port and verbosity
    python -m tasktracker start --host 127.0.0.1 --port 9000 --log-level DEBUG

    # Also write logs to a file
    python -m tasktracker start --log-file logs/tracker.log
"""

from __future__ import annotations

import argparse

from tasktracker.logging_setup import setup_logging
from tasktracker.server import DEFAULT_PORT, ServerConfig, run_server


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_start(args):
    """Launch the HTTP server."""
    setup_logging(args.log_level, log_file=args.log_file)
    config = ServerConfig(host=args.host, port=args.port,
                          log_level=args.log_level)
    run_server(config)


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasktracker",
        description="In-memory task tracking service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  tasktracker start\n"
            "  tasktracker start --port 9000 --log-level DEBUG\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    p_start = subparsers.add_parser("start", help="Run the HTTP server")
    p_start.add_argument("--host", default="0.0.0.0",
                         help="Interface to bind (default: 0.0.0.0)")
    p_start.add_argument("--port", default=DEFAULT_PORT, type=int,
                         help=f"Port number (default: {DEFAULT_PORT})")
    p_start.add_argument("--log-level", default="INFO",
                         choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                         help="Log verbosity (default: INFO)")
    p_start.add_argument("--log-file", default=None,
                         help="Also append logs to this file")

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "start": cmd_start,
    }

    if args.command in commands:
        commands[args.command](args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
