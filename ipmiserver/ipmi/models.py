"""Pydantic models and enums for IPMI queries and their JSON results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IPMI_PORT = 623

# Interfaces tried in this order unless the caller pins one.
IPMI_INTERFACES: tuple[str, ...] = ("lanplus", "lan", "imb", "open")


class SensorCategory(str, Enum):
    TEMPERATURE = "temperature"
    VOLTAGE = "voltage"
    FAN = "fan"
    CURRENT = "current"
    POWER = "power"
    TIME = "time"


# Reading suffix -> category, checked in this order.
SENSOR_UNITS: dict[str, SensorCategory] = {
    "degrees C": SensorCategory.TEMPERATURE,
    "Volts": SensorCategory.VOLTAGE,
    "RPM": SensorCategory.FAN,
    "Amps": SensorCategory.CURRENT,
    "Watts": SensorCategory.POWER,
}


class PowerAction(str, Enum):
    ON = "on"
    OFF = "off"
    CYCLE = "cycle"
    RESET = "reset"
    SOFT = "soft"


class ConnectionParameters(BaseModel):
    """Connection data for one BMC, built once per request and never mutated."""

    model_config = ConfigDict(frozen=True)

    host: str = ""
    port: int = DEFAULT_IPMI_PORT
    user: str = ""
    password: str = ""
    kg_key: str = ""
    privilege_level: str = ""
    extra: str = ""
    interface: Optional[str] = None

    @field_validator("port", mode="before")
    @classmethod
    def _blank_port_is_default(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_IPMI_PORT
        return value

    @field_validator("interface", mode="before")
    @classmethod
    def _blank_interface_is_unpinned(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> ConnectionParameters:
        """Build parameters from request query arguments, ignoring unknown keys."""
        fields = {name: query[name] for name in cls.model_fields if query.get(name) is not None}
        return cls(**fields)

    @property
    def secrets(self) -> tuple[str, ...]:
        return tuple(s for s in (self.password, self.kg_key) if s)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a single ipmitool invocation."""

    success: bool
    output: str = ""
    message: Optional[str] = None


class IpmiResponse(BaseModel):
    """Base for JSON results; ``None`` fields are left out of the response."""

    success: bool = False
    message: Optional[str] = None
    debug: str = ""

    def as_json(self) -> dict[str, Any]:
        return {key: value for key, value in self.model_dump(mode="json").items() if value is not None}


class DeviceInfoResult(IpmiResponse):
    device: Optional[dict[str, str]] = None
    power_on: Optional[bool] = None
    sensors: Optional[dict[str, dict[str, str]]] = None
    states: Optional[dict[str, Optional[str]]] = None


class SensorResult(IpmiResponse):
    sensors: Optional[dict[str, dict[str, str]]] = None
    states: Optional[dict[str, Optional[str]]] = None


class PowerActionResult(IpmiResponse):
    pass


class CommandResult(IpmiResponse):
    output: Optional[str] = None


class SensorSnapshot(BaseModel):
    """Sensor descriptions grouped by category, plus the current reading per id."""

    sensors: dict[SensorCategory, dict[str, str]] = Field(
        default_factory=lambda: {category: {} for category in SensorCategory}
    )
    states: dict[str, Optional[str]] = Field(default_factory=dict)
