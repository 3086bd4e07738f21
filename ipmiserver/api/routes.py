"""IPMI HTTP endpoints.

Every endpoint reads the connection data from the query string and answers
with a JSON object carrying at least ``success`` and ``debug``.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable

from flask import Blueprint, current_app, g, jsonify, request
from loguru import logger
from pydantic import ValidationError

from ipmiserver.ipmi.client import IpmiClient
from ipmiserver.ipmi.context import RequestContext
from ipmiserver.ipmi.models import ConnectionParameters, IpmiResponse, PowerAction

ipmi_bp = Blueprint("ipmi", __name__)


def request_context() -> RequestContext:
    """The current request's context, masking the credentials found in the query string.

    Created on first use and kept on ``g`` so that every handler of the same
    request, the error handler included, appends to one diagnostic log.
    """
    if "ipmi_context" not in g:
        secrets = (request.args.get("password", ""), request.args.get("kg_key", ""))
        g.ipmi_context = RequestContext(secrets=tuple(s for s in secrets if s))
    return g.ipmi_context


def _client() -> IpmiClient:
    params = ConnectionParameters.from_query(request.args)
    return IpmiClient(
        params,
        context=request_context(),
        program=current_app.config["IPMITOOL_PATH"],
        timeout=current_app.config["IPMI_TIMEOUT"],
    )


def json_endpoint(func: Callable[..., IpmiResponse]) -> Callable[..., Any]:
    """Serialize the returned result; turn bad parameters into a failure response."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            result = func(*args, **kwargs)
        except ValidationError as e:
            context = request_context()
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
            message = context.add_debug(f"Invalid request parameters: {fields}")
            logger.warning(message)
            return jsonify({"success": False, "message": message, "debug": context.debug_text()})
        return jsonify(result.as_json())

    return wrapper


@ipmi_bp.route("/")
@json_endpoint
def index() -> IpmiResponse:
    """Device info merged with sensors."""
    return _client().get_overview()


@ipmi_bp.route("/device")
@json_endpoint
def device() -> IpmiResponse:
    return _client().get_device_info()


@ipmi_bp.route("/sensors")
@json_endpoint
def sensors() -> IpmiResponse:
    return _client().get_sensors()


@ipmi_bp.route("/power_on")
@json_endpoint
def power_on() -> IpmiResponse:
    return _client().chassis_power(PowerAction.ON)


@ipmi_bp.route("/power_off")
@json_endpoint
def power_off() -> IpmiResponse:
    return _client().chassis_power(PowerAction.OFF)


@ipmi_bp.route("/power_cycle")
@json_endpoint
def power_cycle() -> IpmiResponse:
    return _client().chassis_power(PowerAction.CYCLE)


@ipmi_bp.route("/power_reset")
@json_endpoint
def power_reset() -> IpmiResponse:
    return _client().chassis_power(PowerAction.RESET)


@ipmi_bp.route("/soft_shutdown")
@json_endpoint
def soft_shutdown() -> IpmiResponse:
    return _client().chassis_power(PowerAction.SOFT)


@ipmi_bp.route("/command")
@json_endpoint
def command() -> IpmiResponse:
    """Run ipmitool with the literal ``params`` string, for diagnostics."""
    return _client().run_raw(request.args.get("params", ""))
