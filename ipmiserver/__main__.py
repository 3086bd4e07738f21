"""Orchestrator CLI — dispatches to sub-CLIs.

Sub-commands:
  serve  HTTP server exposing BMC info, sensors and power control as JSON
  query  One-off queries against a BMC, printed as JSON

Examples:
  ipmi-server serve --listen 0.0.0.0 --port 9595

  ipmi-server query --host 192.168.1.50 --user ADMIN --password <PW> sensors
"""

from __future__ import annotations

import os
import sys

from tabulate import tabulate

from ipmiserver import __version__, configure_logging
from ipmiserver import glogger

COMMANDS = {
    "serve": ("ipmiserver.api.cli", "HTTP server"),
    "query": ("ipmiserver.ipmi.cli", "One-off BMC query"),
}


def _print_usage() -> None:
    print("usage: ipmi-server <command> [options]\n")
    print("Available commands:")
    for cmd, (_, desc) in COMMANDS.items():
        print(f"  {cmd:14s}  {desc}")
    print("\nRun 'ipmi-server <command> --help' for command-specific options.")


def _print_startup_banner() -> None:
    startup_rows = [
        ["version", __version__],
        ["ipmitool", os.environ.get("IPMITOOL_PATH", "ipmitool")],
    ]

    for var in ("GITHUB_REF", "GITHUB_SHA", "BUILDTIME"):
        val = os.environ.get(var)
        if val and not val.endswith("_is_undefined"):
            startup_rows.append([var, val])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "ipmi-server starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    glogger.opt(raw=True).info(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def main() -> None:
    """Main entry point — dispatch to sub-CLI."""
    configure_logging()

    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        _print_usage()
        sys.exit(0 if len(sys.argv) >= 2 else 1)

    command = sys.argv[1]
    if command not in COMMANDS:
        print(f"ipmi-server: unknown command '{command}'\n", file=sys.stderr)
        _print_usage()
        sys.exit(1)

    if command == "serve":
        _print_startup_banner()

    module_path, _ = COMMANDS[command]

    # Import and call the sub-CLI's main(), passing remaining args
    from importlib import import_module

    module = import_module(module_path)
    module.main(sys.argv[2:])


if __name__ == "__main__":
    main()
