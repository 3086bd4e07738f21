"""Execution of ipmitool with a bounded timeout and redacted diagnostics."""

from __future__ import annotations

import subprocess

from loguru import logger

from ipmiserver.ipmi._util import format_command
from ipmiserver.ipmi.context import RequestContext
from ipmiserver.ipmi.exceptions import InvocationError
from ipmiserver.ipmi.models import ExecutionResult

DEFAULT_TIMEOUT = 50


class ProcessRunner:
    """Runs ipmitool invocations on behalf of one request.

    Failures never propagate: they are recorded in the request's diagnostic
    log (secrets masked) and returned as an unsuccessful
    :class:`ExecutionResult`.
    """

    def __init__(self, context: RequestContext, timeout: int = DEFAULT_TIMEOUT):
        self.context = context
        self.timeout = timeout
        self.log = logger.bind(classname=self.__class__.__name__)

    def run(self, command: list[str], suppress_errors: bool = False) -> ExecutionResult:
        """Execute ``command`` and capture its standard output.

        Args:
            command: Complete argument vector, program first.
            suppress_errors: Keep failures out of the process log (they are
                still recorded in the request's diagnostic log). Used for
                optional queries that not every BMC supports.

        Returns:
            The captured stdout on success, otherwise a failure with the
            redacted diagnostic message.
        """
        try:
            output = self._execute(command)
        except InvocationError as e:
            message = self.context.add_debug(str(e))
            if suppress_errors:
                self.log.bind(skiplog=True).debug(message)
            else:
                self.log.error(message)
            return ExecutionResult(success=False, message=message)

        return ExecutionResult(success=True, output=output)

    def _execute(self, command: list[str]) -> str:
        command_line = self.context.redact(format_command(command))
        try:
            # BMCs put arbitrary bytes into FRU fields
            result = subprocess.run(
                command,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise InvocationError(
                f"Command '{command_line}' failed: timed out after {self.timeout} seconds",
                command=command_line,
            ) from e
        except OSError as e:
            raise InvocationError(
                f"Command '{command_line}' failed: {self.context.redact(str(e))}",
                command=command_line,
            ) from e

        if result.returncode != 0:
            error_text = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise InvocationError(
                f"Command '{command_line}' failed: {self.context.redact(error_text)}",
                command=command_line,
                returncode=result.returncode,
            )

        return result.stdout
