"""
Data model for observed wireless networks.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Optional


@dataclass(eq=False)
class WirelessNetworkRecord:
    """
    One access point (cell) seen in a wireless scan.

    Equality and hashing use the BSSID only, so a set of records holds at
    most one entry per access point. Records sort by SSID.

    Attributes:
        interface: Interface that produced the scan, e.g. 'wlan0'.
        name: Cell label, e.g. 'Cell 01'.
        bssid: Hardware address of the access point.
        channel: Channel number.
        frequency: Centre frequency in MHz.
        quality: Link quality ratio, 0.0 to 1.0.
        signal_level: Signal level in dBm.
        encryption: Network requires a key.
        wep: Network uses WEP (provisional until an RSN/WPA element is seen).
        wpa: Network advertises WPA or WPA2.
        ssid: Network name, with escaped punctuation repaired.
        essid: Extended SSID; defaults to the SSID.
        bit_rates: Advertised bit rates in Mb/s, ascending, without duplicates.
        mode: Operating mode, e.g. 'Master'.
        tsf: Timing synchronization function counter.
        last_seen: Milliseconds since the last beacon.
    """
    interface: Optional[str] = None
    name: Optional[str] = None
    bssid: Optional[str] = None
    channel: Optional[int] = None
    frequency: Optional[float] = None
    quality: Optional[float] = None
    signal_level: Optional[float] = None
    encryption: bool = False
    wep: bool = False
    wpa: bool = False
    ssid: Optional[str] = None
    mode: Optional[str] = None
    tsf: Optional[int] = None
    last_seen: Optional[int] = None
    essid: Optional[str] = None
    bit_rates: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.essid is None:
            self.essid = self.ssid
        self.bit_rates = sorted({float(rate) for rate in self.bit_rates})

    def add_bit_rate(self, rate: float) -> None:
        rate = float(rate)
        if rate not in self.bit_rates:
            bisect.insort(self.bit_rates, rate)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WirelessNetworkRecord):
            return NotImplemented
        return self.bssid == other.bssid

    def __hash__(self) -> int:
        return hash(self.bssid)

    def __lt__(self, other: WirelessNetworkRecord) -> bool:
        if not isinstance(other, WirelessNetworkRecord):
            return NotImplemented
        return (self.ssid or '') < (other.ssid or '')

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'interface': self.interface,
            'name': self.name,
            'bssid': self.bssid,
            'channel': self.channel,
            'frequency': self.frequency,
            'quality': round(self.quality, 4) if self.quality is not None else None,
            'signal_level': self.signal_level,
            'encryption': self.encryption,
            'wep': self.wep,
            'wpa': self.wpa,
            'ssid': self.ssid,
            'essid': self.essid,
            'bit_rates': list(self.bit_rates),
            'mode': self.mode,
            'tsf': self.tsf,
            'last_seen': self.last_seen,
        }
