"""
Memory statistics from /proc/meminfo.

Example /proc/meminfo:
MemTotal:       16318412 kB
MemFree:         1033460 kB
MemAvailable:    9504596 kB
...
SwapTotal:       2097148 kB
SwapFree:        2097148 kB
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ..constants import PROC_MEMINFO
from ..fields import digits_only, split_label
from ..system import read_lines

# Fields summed to estimate available memory on kernels without MemAvailable
AVAILABLE_FALLBACK_FIELDS = ('MemFree', 'Active(file)', 'Inactive(file)', 'SReclaimable')


@dataclass(frozen=True)
class MemoryInfo:
    """Memory sizes in kB."""
    total: Optional[int] = None
    available: Optional[int] = None
    swap_total: Optional[int] = None
    swap_available: Optional[int] = None

    @staticmethod
    def as_bytes(kilobytes: int) -> int:
        return kilobytes * 1024

    def to_dict(self) -> dict:
        return {
            'total': self.total,
            'available': self.available,
            'swap_total': self.swap_total,
            'swap_available': self.swap_available,
        }


def parse_meminfo(lines: Iterable[str]) -> MemoryInfo:
    """Parse /proc/meminfo content. Unparseable lines are ignored."""
    values: dict[str, int] = {}
    for line in lines:
        label, value = split_label(line, ':')
        amount = digits_only(value)
        if not label or amount is None:
            continue
        values[label] = amount

    available = values.get('MemAvailable')
    if available is None:
        fallback = [values[name] for name in AVAILABLE_FALLBACK_FIELDS if name in values]
        available = sum(fallback) if fallback else None

    return MemoryInfo(
        total=values.get('MemTotal'),
        available=available,
        swap_total=values.get('SwapTotal'),
        swap_available=values.get('SwapFree'),
    )


def read_memory_info(path: str = PROC_MEMINFO) -> MemoryInfo:
    """
    Read and parse /proc/meminfo.

    Raises:
        IoError: If the file cannot be read.
    """
    return parse_meminfo(read_lines(path))
