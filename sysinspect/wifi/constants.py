"""
WiFi-specific constants for the scan grammars.
"""

from __future__ import annotations

import re

# =============================================================================
# IW ("scan") FORMAT
# =============================================================================

# BSS 00:11:22:33:44:55(on wlan0) -- associated
# BSS f8:e4:fb:a0:fe:91 (on wlan0)
IW_BSS_PREFIX = 'BSS '
IW_BSS_PATTERN = re.compile(
    r'^BSS\s+(?P<bssid>[0-9a-fA-F]{2}(?::[0-9a-fA-F]{2}){5})\s*(?P<rest>.*)$'
)
IW_INTERFACE_PATTERN = re.compile(r'\(on\s+(?P<interface>[^)\s]+)\)')

# =============================================================================
# IWLIST ("scanning") FORMAT
# =============================================================================

IWLIST_SCAN_COMPLETED = 'Scan completed'
IWLIST_CELL_PREFIX = 'Cell'

# Quality=57/70  Signal level=-53 dBm
IWLIST_QUALITY_PATTERN = re.compile(r'=\s*(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)')
IWLIST_SIGNAL_PATTERN = re.compile(r'(-?\d+(?:\.\d+)?)\s*dBm')

# 1 Mb/s; 2 Mb/s; 5.5 Mb/s  (optionally after 'Bit Rates:')
IWLIST_RATES_PATTERN = re.compile(
    r'^(?:Bit Rates:)?\s*\d+(?:\.\d+)?\s*Mb/s(?:\s*;\s*\d+(?:\.\d+)?\s*Mb/s)*\s*;?$'
)

IWLIST_WPA2_MARKER = 'IEEE 802.11i/WPA2'
IWLIST_WPA1_MARKER = 'WPA Version 1'
IWLIST_IE_PREFIX = 'IE:'

# =============================================================================
# UNITS
# =============================================================================

MHZ_PER_GHZ = 1000

# Labels given to cells in formats that do not number them
CELL_LABEL_FORMAT = 'Cell {:02d}'
