"""Interface fallback: try IPMI interfaces in a fixed order until one works."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, TypeVar

from loguru import logger

from ipmiserver.ipmi.exceptions import NO_CONNECTION_MESSAGE
from ipmiserver.ipmi.models import IPMI_INTERFACES

T = TypeVar("T")


@dataclass(frozen=True)
class NegotiationOutcome(Generic[T]):
    """Result of the interface that answered (or of the last one tried)."""

    interface: str
    value: T
    success: bool
    message: Optional[str] = None


def negotiate(
    operation: Callable[[str], tuple[T, bool]],
    pinned: str | None = None,
    interfaces: Iterable[str] = IPMI_INTERFACES,
) -> NegotiationOutcome[T]:
    """Run ``operation`` once per interface until it reports success.

    Args:
        operation: Called with an interface name, returns ``(value, success)``.
        pinned: Interface chosen by the caller. When set, ``operation`` runs
            exactly once and its outcome is returned whatever it is.
        interfaces: Fallback order used when nothing is pinned.

    Returns:
        The first successful outcome; otherwise the last failing outcome with
        a generic no-connection message.
    """
    if pinned:
        value, success = operation(pinned)
        return NegotiationOutcome(interface=pinned, value=value, success=success)

    candidates = list(interfaces)
    if not candidates:
        raise ValueError("At least one interface is required")

    for interface in candidates:
        value, success = operation(interface)
        if success:
            logger.debug(f"Interface {interface} answered")
            return NegotiationOutcome(interface=interface, value=value, success=True)
        logger.debug(f"Interface {interface} did not answer, trying next")

    return NegotiationOutcome(interface=interface, value=value, success=False, message=NO_CONNECTION_MESSAGE)
