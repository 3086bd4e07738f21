"""Assembly of ipmitool argument vectors from connection parameters."""

from __future__ import annotations

from loguru import logger

from ipmiserver.ipmi._util import split_arguments
from ipmiserver.ipmi.context import RequestContext
from ipmiserver.ipmi.exceptions import MISSING_HOST_MESSAGE
from ipmiserver.ipmi.models import ConnectionParameters

DEFAULT_PROGRAM = "ipmitool"


def build_base_command(
    params: ConnectionParameters,
    context: RequestContext,
    program: str = DEFAULT_PROGRAM,
) -> list[str] | None:
    """Build the shared part of every ipmitool invocation.

    Args:
        params: Connection data of the current request.
        context: Request context receiving the missing-host diagnostic.
        program: ipmitool executable name or path.

    Returns:
        ``[program, "-H", host, "-p", port, ...]`` with optional credential
        flags and the extra arguments appended, or ``None`` when no host
        was given.
    """
    host = (params.host or "").strip()
    if not host:
        context.add_debug(MISSING_HOST_MESSAGE)
        logger.debug("Refusing to build ipmitool command without a host")
        return None

    cmd = [program, "-H", host, "-p", str(params.port)]

    for flag, value in (
        ("-U", params.user),
        ("-P", params.password),
        ("-y", params.kg_key),
        ("-L", params.privilege_level),
    ):
        if value:
            cmd.extend([flag, value])

    cmd.extend(split_arguments(params.extra))
    return cmd


def with_interface(base: list[str], interface: str, *subcommand: str) -> list[str]:
    """Append ``-I <interface>`` and a subcommand to a copy of ``base``."""
    return [*base, "-I", interface, *subcommand]
