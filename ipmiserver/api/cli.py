"""CLI entry point for the HTTP server — standalone-capable.

Every option falls back to an environment variable so the server can be
configured from a container definition alone.
"""

from __future__ import annotations

import argparse
import os

from loguru import logger

from ipmiserver.api.app import create_app
from ipmiserver.ipmi.command import DEFAULT_PROGRAM
from ipmiserver.ipmi.runner import DEFAULT_TIMEOUT

DEFAULT_LISTEN = "0.0.0.0"
DEFAULT_PORT = 9595


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for the HTTP server."""
    parser = argparse.ArgumentParser(
        prog="ipmi-server serve",
        description="Serve BMC power control, sensors and device info as JSON",
    )
    parser.add_argument(
        "--listen",
        default=os.getenv("IPMI_SERVER_LISTEN", DEFAULT_LISTEN),
        help=f"Address to bind (env IPMI_SERVER_LISTEN, default: {DEFAULT_LISTEN})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("IPMI_SERVER_PORT", str(DEFAULT_PORT))),
        help=f"Port to bind (env IPMI_SERVER_PORT, default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--ipmitool",
        default=os.getenv("IPMITOOL_PATH", DEFAULT_PROGRAM),
        help=f"ipmitool executable (env IPMITOOL_PATH, default: {DEFAULT_PROGRAM})",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=int(os.getenv("IPMI_TIMEOUT", str(DEFAULT_TIMEOUT))),
        help=f"Per-invocation timeout in seconds (env IPMI_TIMEOUT, default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable Flask debug mode",
    )
    return parser.parse_args(args)


def main(args: list[str] | None = None) -> None:
    """Main entry point for the HTTP server."""
    parsed = parse_args(args)

    app = create_app({"IPMITOOL_PATH": parsed.ipmitool, "IPMI_TIMEOUT": parsed.timeout})
    logger.info(f"Listening on {parsed.listen}:{parsed.port} (ipmitool: {parsed.ipmitool}, timeout: {parsed.timeout}s)")
    app.run(host=parsed.listen, port=parsed.port, debug=parsed.verbose, threaded=True)


if __name__ == "__main__":
    main()
