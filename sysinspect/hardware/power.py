"""
Battery and AC adapter state from /sys/class/power_supply/*/uevent.

Example uevent:
POWER_SUPPLY_NAME=BAT0
POWER_SUPPLY_TYPE=Battery
POWER_SUPPLY_STATUS=Discharging
POWER_SUPPLY_TECHNOLOGY=Li-ion
POWER_SUPPLY_POWER_NOW=9180000
POWER_SUPPLY_ENERGY_FULL_DESIGN=57020000
POWER_SUPPLY_ENERGY_FULL=50280000
POWER_SUPPLY_ENERGY_NOW=38420000
POWER_SUPPLY_MODEL_NAME=5B10W13930
POWER_SUPPLY_MANUFACTURER=SMP
POWER_SUPPLY_SERIAL_NUMBER=1234

Drivers report either energy (uWh, uW) or charge (uAh, uA) counters.
The capacity fields hold whichever pair the driver exports, so ratios
between them are meaningful while the raw values are not comparable
across supplies.
"""

from __future__ import annotations

import glob
import logging
import os
from dataclasses import dataclass
from typing import Iterable, Optional

from ..constants import SYS_POWER_SUPPLY_UEVENT_GLOB
from ..fields import parse_int, split_label
from ..system import read_lines

logger = logging.getLogger(__name__)

UEVENT_PREFIX = 'POWER_SUPPLY_'
STATUS_CHARGING = 'charging'
SECONDS_PER_HOUR = 3600

# Keys tried in order; energy counters win over charge counters
CAPACITY_NOW_KEYS = ('ENERGY_NOW', 'CHARGE_NOW')
CAPACITY_FULL_KEYS = ('ENERGY_FULL', 'CHARGE_FULL')
DISCHARGE_RATE_KEYS = ('POWER_NOW', 'CURRENT_NOW')


@dataclass(frozen=True)
class PowerSupplyInfo:
    """
    One power supply as reported by its driver.

    Attributes:
        name: Kernel name, e.g. 'BAT0' or 'AC'.
        supply_type: 'Battery', 'Mains', 'USB' and so on.
        status: 'Charging', 'Discharging', 'Full' or 'Unknown'.
        capacity_full: Last full capacity, uWh or uAh.
        capacity_now: Remaining capacity in the same unit.
        discharge_rate: Present draw, uW or uA.
    """
    name: str
    supply_type: Optional[str] = None
    status: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    serial: Optional[str] = None
    technology: Optional[str] = None
    capacity_full: Optional[int] = None
    capacity_now: Optional[int] = None
    discharge_rate: Optional[int] = None

    @property
    def is_charging(self) -> bool:
        return (self.status or '').lower() == STATUS_CHARGING

    @property
    def percent_charged(self) -> Optional[float]:
        """Remaining capacity as a percentage of the last full charge."""
        if self.capacity_now is None or not self.capacity_full:
            return None
        return 100.0 * self.capacity_now / self.capacity_full

    @property
    def time_remaining(self) -> Optional[float]:
        """
        Seconds until empty at the present draw.

        None while charging, or when the driver reports no draw.
        """
        if self.is_charging or self.capacity_now is None or not self.discharge_rate:
            return None
        return SECONDS_PER_HOUR * self.capacity_now / self.discharge_rate

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'type': self.supply_type,
            'status': self.status,
            'manufacturer': self.manufacturer,
            'model': self.model,
            'serial': self.serial,
            'technology': self.technology,
            'capacity_full': self.capacity_full,
            'capacity_now': self.capacity_now,
            'discharge_rate': self.discharge_rate,
            'percent_charged': self.percent_charged,
            'time_remaining': self.time_remaining,
        }


def parse_uevent(lines: Iterable[str]) -> dict[str, str]:
    """
    Parse KEY=VALUE uevent lines, dropping the POWER_SUPPLY_ prefix.

    Keys are matched exactly later on, so ENERGY_FULL and
    ENERGY_FULL_DESIGN stay distinct. Lines without '=' are ignored.
    """
    values: dict[str, str] = {}
    for line in lines:
        key, value = split_label(line, '=')
        if not key or value is None:
            continue
        if key.startswith(UEVENT_PREFIX):
            key = key[len(UEVENT_PREFIX):]
        values[key] = value
    return values


def _first_int(values: dict[str, str], keys: tuple[str, ...]) -> Optional[int]:
    for key in keys:
        number = parse_int(values.get(key))
        if number is not None:
            return number
    return None


def parse_power_supply(lines: Iterable[str], name: str = '') -> PowerSupplyInfo:
    """
    Build a PowerSupplyInfo from uevent content.

    Args:
        lines: uevent lines.
        name: Fallback name, used when the uevent carries no NAME key.
    """
    values = parse_uevent(lines)
    return PowerSupplyInfo(
        name=values.get('NAME') or name,
        supply_type=values.get('TYPE'),
        status=values.get('STATUS'),
        manufacturer=values.get('MANUFACTURER'),
        model=values.get('MODEL_NAME'),
        serial=values.get('SERIAL_NUMBER'),
        technology=values.get('TECHNOLOGY'),
        capacity_full=_first_int(values, CAPACITY_FULL_KEYS),
        capacity_now=_first_int(values, CAPACITY_NOW_KEYS),
        discharge_rate=_first_int(values, DISCHARGE_RATE_KEYS),
    )


def read_power_supplies(pattern: str = SYS_POWER_SUPPLY_UEVENT_GLOB) -> list[PowerSupplyInfo]:
    """
    Read every power supply the kernel exports.

    A machine without batteries or adapters gives an empty list.

    Raises:
        IoError: If a matching uevent file cannot be read.
    """
    supplies = []
    for path in sorted(glob.glob(pattern)):
        name = os.path.basename(os.path.dirname(path))
        supply = parse_power_supply(read_lines(path), name)
        logger.debug(f"Power supply {supply.name}: {supply.status}")
        supplies.append(supply)
    return supplies
