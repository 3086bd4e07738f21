"""Exception hierarchy for ipmitool orchestration."""

from __future__ import annotations

# Fixed, client-visible messages for conditions that are reported as results.
MISSING_HOST_MESSAGE = "No host provided!"
NO_CONNECTION_MESSAGE = "Wrong connection data provided!"


class IpmiError(Exception):
    """Base exception for all IPMI orchestration errors."""


class InvocationError(IpmiError):
    """ipmitool could not be launched or exited with a nonzero status."""

    def __init__(self, message: str, command: str = "", returncode: int | None = None):
        self.command = command
        self.returncode = returncode
        super().__init__(message)


class MalformedOutputError(IpmiError):
    """A line of tool output does not have the expected number of fields."""

    def __init__(self, message: str, line: str = ""):
        self.line = line
        super().__init__(message)
