"""
Network interface counters and link state.

Counters come from /proc/net/dev:
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:  123456    1234    0    0    0     0          0         0   123456    1234    0    0    0     0       0          0
 wlan0: 9876543   65432    3    1    0     0          0       120  1234567   12345    0    2    0     4       1          0

Address, operstate, speed and duplex come from /sys/class/net/<name>/.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from ..constants import PROC_NET_DEV, SYS_CLASS_NET
from ..fields import parse_int, tokenize
from ..system import read_attribute, read_lines

logger = logging.getLogger(__name__)

# /proc/net/dev column positions after the 'name:' prefix
NET_DEV_COLUMNS = 16
RX_BYTES, RX_PACKETS, RX_ERRORS, RX_DROPPED = 0, 1, 2, 3
RX_MULTICAST = 7
TX_BYTES, TX_PACKETS, TX_ERRORS, TX_DROPPED = 8, 9, 10, 11
TX_COLLISIONS, TX_CARRIER = 13, 14


class LinkState(str, Enum):
    """RFC 2863 operational states, as written to operstate."""
    UP = 'up'
    DOWN = 'down'
    DORMANT = 'dormant'
    LOWER_LAYER_DOWN = 'lowerlayerdown'
    NOT_PRESENT = 'notpresent'
    TESTING = 'testing'
    UNKNOWN = 'unknown'

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[str]) -> LinkState:
        try:
            return cls((value or '').strip().lower())
        except ValueError:
            return cls.UNKNOWN


class Duplex(str, Enum):
    """Ethernet duplex mode."""
    FULL = 'full'
    HALF = 'half'
    UNKNOWN = 'unknown'

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Optional[str]) -> Duplex:
        try:
            return cls((value or '').strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class InterfaceCounters:
    """Cumulative traffic counters since the interface came up."""
    rx_bytes: int = 0
    rx_packets: int = 0
    rx_errors: int = 0
    rx_dropped: int = 0
    rx_multicast: int = 0
    tx_bytes: int = 0
    tx_packets: int = 0
    tx_errors: int = 0
    tx_dropped: int = 0
    tx_collisions: int = 0
    tx_carrier_errors: int = 0

    def to_dict(self) -> dict:
        return {
            'rx_bytes': self.rx_bytes,
            'rx_packets': self.rx_packets,
            'rx_errors': self.rx_errors,
            'rx_dropped': self.rx_dropped,
            'rx_multicast': self.rx_multicast,
            'tx_bytes': self.tx_bytes,
            'tx_packets': self.tx_packets,
            'tx_errors': self.tx_errors,
            'tx_dropped': self.tx_dropped,
            'tx_collisions': self.tx_collisions,
            'tx_carrier_errors': self.tx_carrier_errors,
        }


@dataclass
class NetworkInterfaceInfo:
    """
    One network interface.

    Attributes:
        name: Kernel interface name.
        counters: Traffic counters from /proc/net/dev.
        address: Hardware address, if the interface has one.
        state: Operational state.
        speed: Link speed in Mb/s, None when the driver does not know it.
        duplex: Duplex mode.
    """
    name: str
    counters: InterfaceCounters = field(default_factory=InterfaceCounters)
    address: Optional[str] = None
    state: LinkState = LinkState.UNKNOWN
    speed: Optional[int] = None
    duplex: Duplex = Duplex.UNKNOWN

    @property
    def is_up(self) -> bool:
        return self.state == LinkState.UP

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'address': self.address,
            'state': str(self.state),
            'speed': self.speed,
            'duplex': str(self.duplex),
            'counters': self.counters.to_dict(),
        }


def parse_counters(text: str) -> Optional[InterfaceCounters]:
    """Parse the numeric columns of one /proc/net/dev row."""
    values = [parse_int(t) for t in tokenize(text)]
    if len(values) < NET_DEV_COLUMNS or None in values:
        return None
    return InterfaceCounters(
        rx_bytes=values[RX_BYTES],
        rx_packets=values[RX_PACKETS],
        rx_errors=values[RX_ERRORS],
        rx_dropped=values[RX_DROPPED],
        rx_multicast=values[RX_MULTICAST],
        tx_bytes=values[TX_BYTES],
        tx_packets=values[TX_PACKETS],
        tx_errors=values[TX_ERRORS],
        tx_dropped=values[TX_DROPPED],
        tx_collisions=values[TX_COLLISIONS],
        tx_carrier_errors=values[TX_CARRIER],
    )


def parse_net_dev_stats(lines: Iterable[str]) -> list[NetworkInterfaceInfo]:
    """
    Parse /proc/net/dev into interfaces carrying only their counters.

    Header lines are skipped, as are rows whose counters do not parse.
    """
    interfaces = []
    for line in lines:
        if '|' in line or ':' not in line:
            continue
        name, rest = line.split(':', 1)
        name = name.strip()
        counters = parse_counters(rest)
        if not name or counters is None:
            logger.warning(f"Skipping unparseable /proc/net/dev row: {line.strip()}")
            continue
        interfaces.append(NetworkInterfaceInfo(name=name, counters=counters))
    return interfaces


def read_link_details(interface: NetworkInterfaceInfo, root: str = SYS_CLASS_NET) -> None:
    """Fill address, state, speed and duplex from the interface's sysfs directory."""
    base = os.path.join(root, interface.name)
    interface.address = read_attribute(os.path.join(base, 'address'))
    interface.state = LinkState.parse(read_attribute(os.path.join(base, 'operstate')))
    speed = parse_int(read_attribute(os.path.join(base, 'speed')))
    # -1 while the link is down
    interface.speed = speed if speed is not None and speed > 0 else None
    interface.duplex = Duplex.parse(read_attribute(os.path.join(base, 'duplex')))


def read_network_interfaces(
    path: str = PROC_NET_DEV,
    root: str = SYS_CLASS_NET,
) -> list[NetworkInterfaceInfo]:
    """
    List every interface with its counters and link details.

    Raises:
        IoError: If /proc/net/dev cannot be read.
    """
    interfaces = parse_net_dev_stats(read_lines(path))
    for interface in interfaces:
        read_link_details(interface, root)
    return interfaces
