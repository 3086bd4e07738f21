"""CLI entry point for one-off IPMI queries — standalone-capable.

Examples:
  ipmi-server query --host 192.168.1.50 --user ADMIN --password <PW> info

  ipmi-server query --host 192.168.1.50 --user ADMIN --password <PW> sensors --table

  ipmi-server query --host 192.168.1.50 --user ADMIN --password <PW> \\
      --interface lanplus power soft

  ipmi-server query raw "-H 192.168.1.50 -U ADMIN -P <PW> -I lanplus sel list"
"""

from __future__ import annotations

import argparse
import json
import sys

from loguru import logger
from tabulate import tabulate

from ipmiserver.ipmi.client import IpmiClient
from ipmiserver.ipmi.command import DEFAULT_PROGRAM
from ipmiserver.ipmi.models import DEFAULT_IPMI_PORT, ConnectionParameters, IpmiResponse, PowerAction
from ipmiserver.ipmi.runner import DEFAULT_TIMEOUT


def build_parser() -> argparse.ArgumentParser:
    """Build argparse parser for IPMI queries."""
    parser = argparse.ArgumentParser(
        prog="ipmi-server query",
        description="Query a BMC through ipmitool and print the JSON result",
    )
    parser.add_argument("--host", default="", help="BMC IP address or hostname")
    parser.add_argument("--port", type=int, default=DEFAULT_IPMI_PORT, help=f"BMC port (default: {DEFAULT_IPMI_PORT})")
    parser.add_argument("--user", default="", help="IPMI user")
    parser.add_argument("--password", default="", help="IPMI password")
    parser.add_argument("--kg-key", default="", help="Session encryption (Kg) key")
    parser.add_argument("--privilege-level", default="", help="Session privilege level (e.g. ADMINISTRATOR)")
    parser.add_argument("--extra", default="", help='Additional ipmitool arguments, e.g. \'-N 5 -R 2\'')
    parser.add_argument("--interface", help="Pin the ipmitool interface instead of trying lanplus, lan, imb, open")
    parser.add_argument("--ipmitool", default=DEFAULT_PROGRAM, help=f"ipmitool executable (default: {DEFAULT_PROGRAM})")
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Per-invocation timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser("info", help="Device identity and power state")
    sensors = subparsers.add_parser("sensors", help="Sensor readings")
    sensors.add_argument("--table", action="store_true", help="Print a table instead of JSON")
    subparsers.add_parser("overview", help="Device info and sensors")

    power = subparsers.add_parser("power", help="Chassis power action")
    power.add_argument("action", choices=[a.value for a in PowerAction])

    raw = subparsers.add_parser("raw", help="Run ipmitool with literal arguments")
    raw.add_argument("params", help="Argument string passed to ipmitool")

    return parser


def _sensor_table(result: IpmiResponse) -> str:
    data = result.as_json()
    rows = []
    for category, sensors in data.get("sensors", {}).items():
        for sensor_id, description in sensors.items():
            rows.append([category, sensor_id, description, data["states"].get(sensor_id)])
    return tabulate(rows, headers=["category", "id", "description", "value"])


def main(args: list[str] | None = None) -> None:
    """Main entry point for IPMI query CLI."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        sys.exit(1)

    if not parsed.verbose:
        logger.remove()
        logger.add(sys.stderr, level="WARNING")

    params = ConnectionParameters(
        host=parsed.host,
        port=parsed.port,
        user=parsed.user,
        password=parsed.password,
        kg_key=parsed.kg_key,
        privilege_level=parsed.privilege_level,
        extra=parsed.extra,
        interface=parsed.interface,
    )
    client = IpmiClient(params, program=parsed.ipmitool, timeout=parsed.timeout)

    result: IpmiResponse
    if parsed.command == "info":
        result = client.get_device_info()
    elif parsed.command == "sensors":
        result = client.get_sensors()
    elif parsed.command == "overview":
        result = client.get_overview()
    elif parsed.command == "power":
        result = client.chassis_power(parsed.action)
    else:
        result = client.run_raw(parsed.params)

    if parsed.command == "sensors" and parsed.table and result.success:
        print(_sensor_table(result))
    else:
        print(json.dumps(result.as_json(), indent=2))

    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
