"""
Temperature sensors from the hwmon class, /sys/class/hwmon/hwmon*.

Each chip directory holds one file per attribute:

    hwmon0/name            k10temp
    hwmon0/temp1_input     45250   (millidegrees Celsius)
    hwmon0/temp1_label     Tctl
    hwmon0/temp1_crit      100000
    hwmon0/temp1_max       70000
    hwmon0/temp1_crit_alarm 0

Older drivers put the temp* files under hwmonN/device/ instead.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..constants import SYS_CLASS_HWMON
from ..fields import parse_int
from ..system import read_attribute

logger = logging.getLogger(__name__)

MILLIDEGREES = 1000.0

_TEMP_INPUT = re.compile(r'^temp(\d+)_input$')


@dataclass(frozen=True)
class ThermalInfo:
    """One temperature sensor; temperatures in degrees Celsius."""
    chip: str
    sensor: str
    current: float
    label: Optional[str] = None
    module_name: Optional[str] = None
    module_alias: Optional[str] = None
    critical: Optional[float] = None
    maximum: Optional[float] = None
    alarm: bool = False
    sensor_type: Optional[int] = None

    @property
    def display_name(self) -> str:
        return f"{self.module_name or self.chip} {self.label or self.sensor}"

    def to_dict(self) -> dict:
        return {
            'chip': self.chip,
            'sensor': self.sensor,
            'label': self.label,
            'module_name': self.module_name,
            'module_alias': self.module_alias,
            'current': self.current,
            'critical': self.critical,
            'maximum': self.maximum,
            'alarm': self.alarm,
            'type': self.sensor_type,
        }


def millidegrees_to_celsius(value: Optional[str]) -> Optional[float]:
    """Convert a hwmon temperature attribute, None if it is not an integer."""
    number = parse_int(value)
    if number is None:
        return None
    return number / MILLIDEGREES


def _sensor_files(directory: Path) -> list[tuple[int, Path]]:
    found = []
    for path in directory.glob('temp*_input'):
        match = _TEMP_INPUT.match(path.name)
        if match:
            found.append((int(match.group(1)), path))
    return sorted(found)


def read_chip_sensors(chip_dir: Path) -> list[ThermalInfo]:
    """Read the temperature sensors of one hwmon chip directory."""
    device_dir = chip_dir / 'device'
    base = chip_dir
    files = _sensor_files(chip_dir)
    if not files and device_dir.is_dir():
        base = device_dir
        files = _sensor_files(device_dir)

    module_name = read_attribute(chip_dir / 'name') or read_attribute(device_dir / 'name')
    module_alias = read_attribute(device_dir / 'modalias')

    sensors = []
    for index, input_path in files:
        sensor = f"temp{index}"
        current = millidegrees_to_celsius(read_attribute(input_path))
        if current is None:
            logger.debug(f"No reading from {input_path}")
            continue
        sensors.append(ThermalInfo(
            chip=chip_dir.name,
            sensor=sensor,
            current=current,
            label=read_attribute(base / f"{sensor}_label"),
            module_name=module_name,
            module_alias=module_alias,
            critical=millidegrees_to_celsius(read_attribute(base / f"{sensor}_crit")),
            maximum=millidegrees_to_celsius(read_attribute(base / f"{sensor}_max")),
            alarm=parse_int(read_attribute(base / f"{sensor}_crit_alarm")) == 1,
            sensor_type=parse_int(read_attribute(base / f"{sensor}_type")),
        ))
    return sensors


def read_thermal_sensors(root: str = SYS_CLASS_HWMON) -> list[ThermalInfo]:
    """
    Read every temperature sensor under the hwmon class directory.

    Chips are visited in name order, sensors in index order. A missing
    root gives an empty list.
    """
    sensors: list[ThermalInfo] = []
    for chip_dir in sorted(Path(root).glob('hwmon*')):
        if chip_dir.is_dir():
            sensors.extend(read_chip_sensors(chip_dir))
    return sensors
