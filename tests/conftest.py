"""Shared fixtures for the ipmi-server test suite."""

from __future__ import annotations

from typing import Callable
from unittest.mock import MagicMock

import pytest

from ipmiserver.ipmi.context import RequestContext
from ipmiserver.ipmi.models import ConnectionParameters, ExecutionResult

# ── sample ipmitool output ────────────────────────────────────────────

BMC_INFO_OUTPUT = """\
Device ID                 : 32
Device Revision           : 1
Firmware Revision         : 1.2
IPMI Version              : 2.0
Manufacturer ID           : 10876
Manufacturer Name         : Supermicro
Additional Device Support :
    Sensor Device
    SDR Repository Device
Aux Firmware Rev Info     :
    0x00
"""

FRU_OUTPUT = """\
FRU Device Description : Builtin FRU Device (ID 0)
 Chassis Type          : Other
 Board Mfg Date        : Mon Jan  1 00:00:00 1996
 Board Mfg             : Supermicro
 Product Name          : TestServer
 Product Serial        : S123456
 Firmware Revision     : 1.2b
"""

SDR_OUTPUT = """\
CPU Temp         | 01h | ok  |  3.1 | 45 degrees C
System Temp      | 0Bh | ok  |  7.1 | 32 degrees C
FAN1             | 41h | ok  | 29.1 | 3400 RPM
FAN2             | 42h | ns  | 29.2 | No Reading
12V              | 30h | ok  |  7.17 | 12.19 Volts
PS1 Status       | C8h | ok  | 10.1 | Presence detected
PS1 Input Power  | C9h | ok  | 10.1 | 120 Watts
PS1 Current      | CAh | ok  | 10.1 | 0.60 Amps
"""

DCMI_POWER_OUTPUT = """\

    Instantaneous power reading:                   175 Watts
    Minimum during sampling period:                 90 Watts
    Maximum during sampling period:                260 Watts
    Average power reading over sample period:      160 Watts
    IPMI timestamp:                           Thu Jan  1 00:00:00 2026
    Sampling period:                          1000000 Seconds.
    Power reading state is:                   activated

"""


def ipmi_call(command: list[str]) -> tuple[str, tuple[str, ...]]:
    """Split an ipmitool argument vector into (interface, subcommand)."""
    index = command.index("-I")
    return command[index + 1], tuple(command[index + 2 :])


# ── fixtures ──────────────────────────────────────────────────────────


@pytest.fixture()
def connection_params():
    """Factory fixture returning ConnectionParameters with customizable fields."""

    def _make(**kwargs):
        defaults = {
            "host": "10.0.0.5",
            "user": "ADMIN",
            "password": "s3cr3t",
        }
        defaults.update(kwargs)
        return ConnectionParameters(**defaults)

    return _make


@pytest.fixture()
def request_context():
    """RequestContext masking the default test password."""
    return RequestContext(secrets=("s3cr3t",))


@pytest.fixture()
def scripted_runner():
    """Factory for a MagicMock ProcessRunner answering through a responder.

    The responder receives ``(interface, subcommand)`` and returns an
    :class:`ExecutionResult`.
    """

    def _make(responder: Callable[[str, tuple[str, ...]], ExecutionResult]):
        runner = MagicMock()
        runner.run.side_effect = lambda command, suppress_errors=False: responder(*ipmi_call(command))
        return runner

    return _make


def ok(output: str = "") -> ExecutionResult:
    return ExecutionResult(success=True, output=output)


def failed(message: str = "Command failed") -> ExecutionResult:
    return ExecutionResult(success=False, message=message)
