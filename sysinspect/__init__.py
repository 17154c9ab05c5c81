"""
sysinspect: Linux machine telemetry parsers.

Turns pseudo-file contents, system utility output and EDID blobs into
typed records:

- Wireless scans ('iw' and 'iwlist') -> WirelessNetworkRecord
- EDID base blocks -> DisplayDescriptor
- /proc/meminfo and /proc/cpuinfo -> MemoryInfo, CpuInfo
- sysfs power supplies, interfaces and hwmon sensors -> PowerSupplyInfo,
  NetworkInterfaceInfo, ThermalInfo
"""

from .display import DisplayDescriptor, decode_edid
from .encoding import correct_encoding
from .errors import (
    CommandError,
    FieldParseError,
    IoError,
    MalformedEdid,
    MalformedRecord,
    ParseError,
    SysInspectError,
)
from .hardware import (
    CpuInfo,
    MemoryInfo,
    NetworkInterfaceInfo,
    PowerSupplyInfo,
    ThermalInfo,
    parse_cpuinfo,
    parse_meminfo,
)
from .records import FieldRule, Grammar, RecordScanner, ScanResult, ScannerState
from .wifi import (
    IW_SCAN_GRAMMAR,
    IWLIST_SCAN_GRAMMAR,
    WirelessNetworkRecord,
    parse_wireless_scan,
)

__version__ = '2.0.0'

__all__ = [
    # Decoders
    'parse_wireless_scan',
    'decode_edid',
    'correct_encoding',
    'parse_meminfo',
    'parse_cpuinfo',

    # Records
    'WirelessNetworkRecord',
    'DisplayDescriptor',
    'MemoryInfo',
    'CpuInfo',
    'PowerSupplyInfo',
    'NetworkInterfaceInfo',
    'ThermalInfo',

    # Record scanner
    'RecordScanner',
    'Grammar',
    'FieldRule',
    'ScanResult',
    'ScannerState',
    'IW_SCAN_GRAMMAR',
    'IWLIST_SCAN_GRAMMAR',

    # Errors
    'SysInspectError',
    'ParseError',
    'FieldParseError',
    'MalformedRecord',
    'MalformedEdid',
    'CommandError',
    'IoError',
]
