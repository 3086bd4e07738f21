"""IPMI query orchestration: device info, sensor snapshot, chassis power actions."""

from __future__ import annotations

from typing import Optional

from loguru import logger

from ipmiserver.ipmi._util import split_arguments
from ipmiserver.ipmi.command import DEFAULT_PROGRAM, build_base_command, with_interface
from ipmiserver.ipmi.context import RequestContext
from ipmiserver.ipmi.exceptions import MISSING_HOST_MESSAGE, NO_CONNECTION_MESSAGE
from ipmiserver.ipmi.models import (
    CommandResult,
    ConnectionParameters,
    DeviceInfoResult,
    ExecutionResult,
    PowerAction,
    PowerActionResult,
    SensorResult,
    SensorSnapshot,
)
from ipmiserver.ipmi.negotiation import negotiate
from ipmiserver.ipmi.parsers import SensorAccumulator, extract_values, parse_power_status
from ipmiserver.ipmi.runner import DEFAULT_TIMEOUT, ProcessRunner

# Flags of a raw command line whose value must be masked (password, hex and text Kg key).
_SECRET_FLAGS = ("-P", "-y", "-k")


def _raw_secrets(arguments: list[str]) -> list[str]:
    """Values given to a secret flag, either as the next token or attached (``-Ppw``)."""
    secrets = []
    for i, arg in enumerate(arguments):
        if arg in _SECRET_FLAGS:
            if i + 1 < len(arguments):
                secrets.append(arguments[i + 1])
        elif arg[:2] in _SECRET_FLAGS:
            secrets.append(arg[2:])
    return secrets


class IpmiClient:
    """Runs the public IPMI operations for one request.

    Every operation builds the shared base command, negotiates an interface
    and parses the output. Failures are reported through the returned
    result's ``success``/``message`` fields; the collected, redacted
    diagnostics are returned as ``debug``.
    """

    def __init__(
        self,
        params: ConnectionParameters,
        context: RequestContext | None = None,
        runner: ProcessRunner | None = None,
        program: str = DEFAULT_PROGRAM,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.params = params
        self.context = context or RequestContext(secrets=params.secrets)
        self.runner = runner or ProcessRunner(self.context, timeout=timeout)
        self.program = program
        self.log = logger.bind(classname=self.__class__.__name__)

    def _run(self, base: list[str], interface: str, *subcommand: str, suppress_errors: bool = False) -> ExecutionResult:
        return self.runner.run(with_interface(base, interface, *subcommand), suppress_errors=suppress_errors)

    def _failure_message(self, message: Optional[str]) -> str:
        return self.context.redact(message or NO_CONNECTION_MESSAGE)

    def get_device_info(self) -> DeviceInfoResult:
        """Query ``bmc info``, ``fru`` and ``chassis power status``."""
        base = build_base_command(self.params, self.context, self.program)
        if base is None:
            return DeviceInfoResult(success=False, message=MISSING_HOST_MESSAGE, debug=self.context.debug_text())

        def attempt(interface: str) -> tuple[tuple[dict[str, str], bool], bool]:
            info = self._run(base, interface, "bmc", "info")
            if not info.success:
                return ({}, False), False

            device = extract_values(info.output)
            fru = self._run(base, interface, "fru", suppress_errors=True)
            if fru.success:
                device.update(extract_values(fru.output))

            power_on = False
            status = self._run(base, interface, "chassis", "power", "status")
            if status.success:
                power_on = parse_power_status(status.output)

            return (device, power_on), True

        outcome = negotiate(attempt, pinned=self.params.interface)
        if not outcome.success:
            return DeviceInfoResult(
                success=False,
                message=self._failure_message(outcome.message),
                debug=self.context.debug_text(),
            )

        device, power_on = outcome.value
        self.log.debug(f"Device info for {self.params.host} read via {outcome.interface}")
        return DeviceInfoResult(success=True, device=device, power_on=power_on, debug=self.context.debug_text())

    def get_sensors(self) -> SensorResult:
        """Read ``sdr elist full`` and, where supported, ``dcmi power reading``."""
        base = build_base_command(self.params, self.context, self.program)
        if base is None:
            return SensorResult(success=False, message=MISSING_HOST_MESSAGE, debug=self.context.debug_text())

        def attempt(interface: str) -> tuple[Optional[SensorSnapshot], bool]:
            sdr = self._run(base, interface, "sdr", "elist", "full")
            if not sdr.success:
                return None, False

            accumulator = SensorAccumulator()
            accumulator.parse_sdr_list(sdr.output)

            # not every BMC implements DCMI
            reading = self._run(base, interface, "dcmi", "power", "reading", suppress_errors=True)
            if reading.success:
                accumulator.parse_power_reading(reading.output)

            return accumulator.snapshot, True

        outcome = negotiate(attempt, pinned=self.params.interface)
        if not outcome.success or outcome.value is None:
            return SensorResult(
                success=False,
                message=self._failure_message(outcome.message),
                debug=self.context.debug_text(),
            )

        snapshot = outcome.value
        return SensorResult(
            success=True,
            sensors={category.value: ids for category, ids in snapshot.sensors.items()},
            states=snapshot.states,
            debug=self.context.debug_text(),
        )

    def get_overview(self) -> DeviceInfoResult:
        """Device info merged with the sensor snapshot when both succeed."""
        info = self.get_device_info()
        if not info.success:
            return info

        sensors = self.get_sensors()
        if sensors.success:
            info = info.model_copy(update={"sensors": sensors.sensors, "states": sensors.states})
        return info.model_copy(update={"debug": self.context.debug_text()})

    def chassis_power(self, action: PowerAction | str) -> PowerActionResult:
        """Run ``chassis power <action>``; success is the tool's exit status alone."""
        action = PowerAction(action)
        base = build_base_command(self.params, self.context, self.program)
        if base is None:
            return PowerActionResult(success=False, message=MISSING_HOST_MESSAGE, debug=self.context.debug_text())

        def attempt(interface: str) -> tuple[ExecutionResult, bool]:
            result = self._run(base, interface, "chassis", "power", action.value)
            return result, result.success

        outcome = negotiate(attempt, pinned=self.params.interface)
        if outcome.success:
            self.log.info(f"Chassis power {action.value} sent to {self.params.host} via {outcome.interface}")
            return PowerActionResult(success=True, debug=self.context.debug_text())

        return PowerActionResult(
            success=False,
            message=self._failure_message(outcome.message),
            debug=self.context.debug_text(),
        )

    def run_raw(self, params_text: str) -> CommandResult:
        """Run ``ipmitool`` with literal, caller-supplied arguments.

        No interface negotiation takes place. Values given to ``-P``, ``-y``
        or ``-k`` are masked in every message.
        """
        arguments = split_arguments(params_text)
        if not arguments:
            message = self.context.add_debug("No command parameters provided!")
            return CommandResult(success=False, message=message, debug=self.context.debug_text())

        self.context.secrets = (*self.context.secrets, *_raw_secrets(arguments))

        result = self.runner.run([self.program, *arguments])
        if not result.success:
            return CommandResult(
                success=False,
                message=self.context.redact(result.message or ""),
                debug=self.context.debug_text(),
            )
        return CommandResult(success=True, output=result.output, debug=self.context.debug_text())
