"""
WiFi scanning package for sysinspect.

Decodes 'iw' and 'iwlist' scan output into WirelessNetworkRecord objects.
"""

from .models import WirelessNetworkRecord
from .interfaces import list_wireless_interfaces, parse_net_dev
from .parsers import (
    IW_SCAN_GRAMMAR,
    IWLIST_SCAN_GRAMMAR,
    parse_iw_scan,
    parse_iwlist_scan,
)
from .scanner import (
    GRAMMARS,
    get_grammar,
    parse_wireless_scan,
    scan_iw,
    scan_iwlist,
    sort_by_ssid,
)

__all__ = [
    # Models
    'WirelessNetworkRecord',

    # Grammars
    'IW_SCAN_GRAMMAR',
    'IWLIST_SCAN_GRAMMAR',
    'GRAMMARS',
    'get_grammar',

    # Parsing
    'parse_wireless_scan',
    'parse_iw_scan',
    'parse_iwlist_scan',
    'sort_by_ssid',

    # Live scans
    'scan_iw',
    'scan_iwlist',
    'list_wireless_interfaces',
    'parse_net_dev',
]
