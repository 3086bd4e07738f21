"""ipmitool orchestration: command building, interface fallback and output parsing."""

from ipmiserver.ipmi.client import IpmiClient
from ipmiserver.ipmi.command import build_base_command
from ipmiserver.ipmi.context import RequestContext
from ipmiserver.ipmi.exceptions import (
    MISSING_HOST_MESSAGE,
    NO_CONNECTION_MESSAGE,
    InvocationError,
    IpmiError,
    MalformedOutputError,
)
from ipmiserver.ipmi.models import (
    IPMI_INTERFACES,
    ConnectionParameters,
    ExecutionResult,
    PowerAction,
    SensorCategory,
)
from ipmiserver.ipmi.negotiation import NegotiationOutcome, negotiate
from ipmiserver.ipmi.runner import ProcessRunner

__all__ = [
    "IpmiClient",
    "ProcessRunner",
    "RequestContext",
    "build_base_command",
    "negotiate",
    "NegotiationOutcome",
    "ConnectionParameters",
    "ExecutionResult",
    "PowerAction",
    "SensorCategory",
    "IPMI_INTERFACES",
    "IpmiError",
    "InvocationError",
    "MalformedOutputError",
    "MISSING_HOST_MESSAGE",
    "NO_CONNECTION_MESSAGE",
]
