"""
Command line entry point.

Usage:
    python -m sysinspect wifi [--grammar iw|iwlist] [--interface IF] [--file PATH]
    python -m sysinspect displays [--file PATH] [--drm]
    python -m sysinspect memory
    python -m sysinspect cpu
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .display import list_displays, parse_xrandr_verbose, read_drm_displays
from .errors import SysInspectError
from .hardware import (
    read_cpu_info,
    read_memory_info,
    read_network_interfaces,
    read_power_supplies,
    read_thermal_sensors,
)
from .logging import configure_logging
from .system import read_lines
from .wifi import GRAMMARS, parse_wireless_scan, scan_iw, scan_iwlist, sort_by_ssid

logger = logging.getLogger(__name__)


def _wifi(args: argparse.Namespace) -> object:
    if args.file:
        networks = parse_wireless_scan(read_lines(args.file), args.grammar)
    elif args.grammar == 'iwlist':
        networks = scan_iwlist(args.interface)
    else:
        networks = scan_iw(args.interface)
    return [network.to_dict() for network in sort_by_ssid(networks)]


def _displays(args: argparse.Namespace) -> object:
    if args.file:
        displays = parse_xrandr_verbose(read_lines(args.file))
    elif args.drm:
        displays = read_drm_displays()
    else:
        displays = list_displays()
    return [display.to_dict() for display in displays]


def _memory(args: argparse.Namespace) -> object:
    return read_memory_info().to_dict()


def _cpu(args: argparse.Namespace) -> object:
    return read_cpu_info().to_dict()


def _power(args: argparse.Namespace) -> object:
    return [supply.to_dict() for supply in read_power_supplies()]


def _network(args: argparse.Namespace) -> object:
    return [interface.to_dict() for interface in read_network_interfaces()]


def _thermal(args: argparse.Namespace) -> object:
    return [sensor.to_dict() for sensor in read_thermal_sensors()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='sysinspect', description='Linux telemetry parsers')
    parser.add_argument('--log-level', default=None, help='Logging level (default: setting)')
    sub = parser.add_subparsers(dest='command', required=True)

    wifi = sub.add_parser('wifi', help='Scan wireless networks')
    wifi.add_argument('--grammar', choices=sorted(GRAMMARS), default='iw')
    wifi.add_argument('--interface', default=None)
    wifi.add_argument('--file', default=None, help='Parse saved scan output')
    wifi.set_defaults(handler=_wifi)

    displays = sub.add_parser('displays', help='Decode monitor EDIDs')
    displays.add_argument('--file', default=None, help="Parse saved 'xrandr --verbose' output")
    displays.add_argument('--drm', action='store_true', help='Read /sys/class/drm EDID files')
    displays.set_defaults(handler=_displays)

    memory = sub.add_parser('memory', help='Read /proc/meminfo')
    memory.set_defaults(handler=_memory)

    cpu = sub.add_parser('cpu', help='Read /proc/cpuinfo')
    cpu.set_defaults(handler=_cpu)

    power = sub.add_parser('power', help='Read batteries and AC adapters')
    power.set_defaults(handler=_power)

    network = sub.add_parser('network', help='Read interface counters and link state')
    network.set_defaults(handler=_network)

    thermal = sub.add_parser('thermal', help='Read hwmon temperature sensors')
    thermal.set_defaults(handler=_thermal)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        result = args.handler(args)
    except SysInspectError as e:
        logger.error(str(e))
        return 1

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write('\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
