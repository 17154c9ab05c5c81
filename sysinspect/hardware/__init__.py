"""
Hardware collectors backed by /proc key-value files and sysfs attributes.
"""

from .cpu import CpuInfo, ProcessorEntry, parse_cpuinfo, read_cpu_info
from .memory import MemoryInfo, parse_meminfo, read_memory_info
from .network import (
    Duplex,
    InterfaceCounters,
    LinkState,
    NetworkInterfaceInfo,
    parse_net_dev_stats,
    read_network_interfaces,
)
from .power import PowerSupplyInfo, parse_power_supply, parse_uevent, read_power_supplies
from .thermal import ThermalInfo, read_thermal_sensors

__all__ = [
    'CpuInfo',
    'ProcessorEntry',
    'parse_cpuinfo',
    'read_cpu_info',
    'MemoryInfo',
    'parse_meminfo',
    'read_memory_info',
    'Duplex',
    'InterfaceCounters',
    'LinkState',
    'NetworkInterfaceInfo',
    'parse_net_dev_stats',
    'read_network_interfaces',
    'PowerSupplyInfo',
    'parse_power_supply',
    'parse_uevent',
    'read_power_supplies',
    'ThermalInfo',
    'read_thermal_sensors',
]
