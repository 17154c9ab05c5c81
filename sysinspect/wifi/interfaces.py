"""
Wireless interface discovery from /proc/net/dev.

Example /proc/net/dev:
Inter-|   Receive                            |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes ...
    lo:  123456    1234    0    0    0     0          0         0   123456 ...
 wlan0: 9876543   65432    0    0    0     0          0         0  1234567 ...
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..constants import DEFAULT_WIRELESS_PREFIXES, PROC_NET_DEV
from ..settings import get_list_setting
from ..system import read_lines


def parse_net_dev(lines: Iterable[str]) -> list[str]:
    """
    Extract interface names from /proc/net/dev content.

    Header lines (they contain '|') and lines without a ':' are skipped.
    """
    names = []
    for line in lines:
        if '|' in line or ':' not in line:
            continue
        name = line.split(':', 1)[0].strip()
        if name:
            names.append(name)
    return names


def is_wireless(name: str, prefixes: Optional[Sequence[str]] = None) -> bool:
    """Check an interface name against the wireless name prefixes."""
    if prefixes is None:
        prefixes = get_list_setting('wireless_prefixes', DEFAULT_WIRELESS_PREFIXES)
    return name.startswith(tuple(prefixes))


def list_wireless_interfaces(path: str = PROC_NET_DEV) -> list[str]:
    """
    List wireless interfaces known to the kernel.

    Raises:
        IoError: If the interface table cannot be read.
    """
    prefixes = get_list_setting('wireless_prefixes', DEFAULT_WIRELESS_PREFIXES)
    return [name for name in parse_net_dev(read_lines(path)) if is_wireless(name, prefixes)]
