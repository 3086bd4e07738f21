"""ipmi-server: BMC power control, sensors and device identity over HTTP.

Every operation shells out to ``ipmitool``; the package itself never speaks
the IPMI wire protocol. Logging stays silent until :func:`configure_logging`
is called, which the ``ipmi-server`` entry point does on startup.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def _hide_skiplog(record: dict) -> bool:  # type: ignore[type-arg]
    # optional sub-queries (fru, dcmi) log their failures with skiplog=True
    return not record["extra"].get("skiplog", False)


def configure_logging(
    level: str | None = None,
    loguru_filter: Callable[[Dict[str, Any]], bool] = _hide_skiplog,
) -> None:
    """Route ipmiserver logs to stderr.

    Args:
        level: Minimum level; falls back to ``LOGURU_LEVEL``, then ``DEBUG``.
        loguru_filter: Record filter, by default hiding ``skiplog`` records.
    """
    level = level or os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    glogger.configure(extra={"classname": "-", "skiplog": False})
    glogger.add(sys.stderr, level=level, format=LOG_FORMAT, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.enable(__name__)


from ipmiserver.ipmi.client import IpmiClient  # noqa: E402
from ipmiserver.ipmi.context import RequestContext  # noqa: E402
from ipmiserver.ipmi.exceptions import InvocationError, IpmiError, MalformedOutputError  # noqa: E402
from ipmiserver.ipmi.models import ConnectionParameters, PowerAction, SensorCategory  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "IpmiClient",
    "RequestContext",
    "ConnectionParameters",
    "PowerAction",
    "SensorCategory",
    "IpmiError",
    "InvocationError",
    "MalformedOutputError",
]
