"""Parsers for ipmitool text output (bmc info, fru, sdr elist, dcmi power reading)."""

from __future__ import annotations

import re
from collections import defaultdict
from typing import Optional

from loguru import logger

from ipmiserver.ipmi._util import generate_id
from ipmiserver.ipmi.exceptions import MalformedOutputError
from ipmiserver.ipmi.models import SENSOR_UNITS, SensorCategory, SensorSnapshot

POWER_ON_STATUS = "Chassis Power is on"

# sdr elist full: name | id | status | entity | reading
SDR_FIELD_COUNT = 5
SDR_NAME_FIELD = 0
SDR_STATUS_FIELD = 2
SDR_READING_FIELD = 4
SDR_OK_STATUS = "ok"

SAMPLING_PERIOD_RE = re.compile(r"Sampling period:\s*(\d+)\s*Seconds")
SAMPLING_PERIOD_LABEL = "Sampling period"


def extract_values(output: str) -> dict[str, str]:
    """Parse ``Label : value`` lines into an id -> value mapping.

    Only the first colon separates label from value, so values such as MAC
    addresses or timestamps stay intact. Lines without a colon or with an
    empty value are skipped.
    """
    data: dict[str, str] = {}
    for line in output.splitlines():
        if ":" not in line:
            continue
        description, value = (part.strip() for part in line.split(":", 1))
        if not value:
            continue
        data[generate_id(description)] = value
    return data


def parse_power_status(output: str) -> bool:
    """True when ``chassis power status`` reports the chassis as powered on."""
    return output.strip() == POWER_ON_STATUS


def split_fields(line: str, separator: str, expected: int, maxsplit: int = -1) -> list[str]:
    """Split ``line`` on ``separator`` into trimmed fields.

    Raises:
        MalformedOutputError: If fewer than ``expected`` fields are present.
    """
    fields = [field.strip() for field in line.split(separator, maxsplit)]
    if len(fields) < expected:
        raise MalformedOutputError(f"Expected {expected} fields, got {len(fields)}", line=line)
    return fields


def match_unit(reading: str) -> tuple[Optional[SensorCategory], Optional[str]]:
    """Find the unit of a sensor reading.

    Returns:
        ``(category, value)`` with the unit removed from the value, or
        ``(None, None)`` for readings without a known unit.
    """
    for unit, category in SENSOR_UNITS.items():
        if unit in reading:
            value = reading.replace(unit, "").strip()
            return category, value or None
    return None, None


class SensorAccumulator:
    """Collects sensors from several commands, keeping ids unique per category.

    When a label maps to an id already present in its category, the label is
    suffixed with a running number (``"Fan"``, ``"Fan 2"``, ``"Fan 3"``) and
    the id derived again.
    """

    def __init__(self) -> None:
        self.snapshot = SensorSnapshot()
        self._seen: dict[SensorCategory, dict[str, int]] = defaultdict(dict)

    def add(self, category: SensorCategory, description: str, value: Optional[str]) -> str:
        """Record a sensor and return the id it was stored under."""
        existing = self.snapshot.sensors[category]
        base_id = generate_id(description)
        number = self._seen[category].get(base_id, 0) + 1
        self._seen[category][base_id] = number

        label, sensor_id = description, base_id
        while sensor_id in existing:
            number = max(number, 2)
            label = f"{description} {number}"
            sensor_id = generate_id(label)
            number += 1

        existing[sensor_id] = label
        self.snapshot.states[sensor_id] = value
        return sensor_id

    def parse_sdr_list(self, output: str) -> int:
        """Add every ``ok`` sensor with a known unit from ``sdr elist`` output.

        Returns:
            Number of sensors added.
        """
        added = 0
        for line in output.splitlines():
            if not line.strip():
                continue
            try:
                fields = split_fields(line, "|", SDR_FIELD_COUNT)
            except MalformedOutputError as e:
                logger.debug(f"Skipping sdr line {e.line!r}: {e}")
                continue

            if fields[SDR_STATUS_FIELD] != SDR_OK_STATUS:
                continue

            category, value = match_unit(fields[SDR_READING_FIELD])
            if category is None:
                continue

            self.add(category, fields[SDR_NAME_FIELD], value)
            added += 1
        return added

    def parse_power_reading(self, output: str) -> int:
        """Add the wattage and sampling period lines of ``dcmi power reading``.

        Returns:
            Number of readings added.
        """
        added = 0
        for line in output.splitlines():
            if "Watts" in line:
                try:
                    description, value = split_fields(line, ":", 2, maxsplit=1)
                except MalformedOutputError as e:
                    logger.debug(f"Skipping power line {e.line!r}: {e}")
                    continue
                self.add(SensorCategory.POWER, description, value.replace("Watts", "").strip() or None)
                added += 1
            elif "Seconds" in line:
                match = SAMPLING_PERIOD_RE.search(line)
                if not match:
                    continue
                self.add(SensorCategory.TIME, SAMPLING_PERIOD_LABEL, match.group(1))
                added += 1
        return added
