"""
WiFi scan output parsers.

Each parser is a grammar for the record scanner that turns tool-specific
output into WirelessNetworkRecord objects.
"""

from .iw import IW_SCAN_GRAMMAR, parse_iw_scan
from .iwlist import IWLIST_SCAN_GRAMMAR, parse_iwlist_scan

__all__ = [
    'IW_SCAN_GRAMMAR',
    'IWLIST_SCAN_GRAMMAR',
    'parse_iw_scan',
    'parse_iwlist_scan',
]
