"""
Wireless scan entry points.

parse_wireless_scan() decodes captured output with either grammar;
scan_iw() and scan_iwlist() run the tools on one or every wireless
interface and merge the results by BSSID.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from ..constants import CMD_IW, CMD_IWLIST
from ..records import Grammar, RecordScanner
from ..system import run_command
from .interfaces import list_wireless_interfaces
from .models import WirelessNetworkRecord
from .parsers import IW_SCAN_GRAMMAR, IWLIST_SCAN_GRAMMAR

logger = logging.getLogger(__name__)

GRAMMARS: dict[str, Grammar[WirelessNetworkRecord]] = {
    IW_SCAN_GRAMMAR.name: IW_SCAN_GRAMMAR,
    IWLIST_SCAN_GRAMMAR.name: IWLIST_SCAN_GRAMMAR,
}


def get_grammar(grammar: Union[str, Grammar[WirelessNetworkRecord]]) -> Grammar[WirelessNetworkRecord]:
    """Resolve a grammar name ('iw' or 'iwlist') to its Grammar."""
    if isinstance(grammar, Grammar):
        return grammar
    try:
        return GRAMMARS[grammar]
    except KeyError:
        raise ValueError(f"Unknown scan grammar: {grammar!r}") from None


def parse_wireless_scan(
    lines: Iterable[str],
    grammar: Union[str, Grammar[WirelessNetworkRecord]] = IW_SCAN_GRAMMAR,
) -> set[WirelessNetworkRecord]:
    """
    Parse wireless scan output into a set of networks.

    Args:
        lines: Output of 'iw ... scan' or 'iwlist ... scanning'.
        grammar: IW_SCAN_GRAMMAR / IWLIST_SCAN_GRAMMAR or their names.

    Returns:
        Records keyed by BSSID. When a BSSID repeats, the first record wins.
    """
    grammar = get_grammar(grammar)
    if isinstance(lines, str):
        lines = lines.splitlines()

    result = RecordScanner(grammar).scan(lines)
    for error in result.errors:
        logger.debug(f"{grammar.name}: {error}")

    networks: set[WirelessNetworkRecord] = set()
    for record in result.records:
        if record in networks:
            logger.debug(f"{grammar.name}: duplicate BSSID {record.bssid}")
            continue
        networks.add(record)
    return networks


def sort_by_ssid(networks: Iterable[WirelessNetworkRecord]) -> list[WirelessNetworkRecord]:
    """Display ordering: by SSID, hidden networks first."""
    return sorted(networks)


def _scan(
    grammar: Grammar[WirelessNetworkRecord],
    command: list[str],
    interface: Optional[str],
) -> set[WirelessNetworkRecord]:
    interfaces = [interface] if interface else list_wireless_interfaces()
    if not interfaces:
        logger.info("No wireless interfaces found")

    networks: set[WirelessNetworkRecord] = set()
    for name in interfaces:
        args = [part.format(interface=name) for part in command]
        found = parse_wireless_scan(run_command(args), grammar)
        logger.info(f"{grammar.name} scan on {name}: {len(found)} networks")
        networks.update(found)
    return networks


def scan_iw(interface: Optional[str] = None) -> set[WirelessNetworkRecord]:
    """
    Scan with 'iw dev <interface> scan'.

    Args:
        interface: Interface to scan; every wireless interface if None.

    Raises:
        CommandError: If iw is missing or fails (scanning usually needs root).
        IoError: If interfaces must be discovered and /proc/net/dev is unreadable.
    """
    return _scan(IW_SCAN_GRAMMAR, [CMD_IW, 'dev', '{interface}', 'scan'], interface)


def scan_iwlist(interface: Optional[str] = None) -> set[WirelessNetworkRecord]:
    """
    Scan with 'iwlist <interface> scanning'.

    Args:
        interface: Interface to scan; every wireless interface if None.

    Raises:
        CommandError: If iwlist is missing or fails.
        IoError: If interfaces must be discovered and /proc/net/dev is unreadable.
    """
    return _scan(IWLIST_SCAN_GRAMMAR, [CMD_IWLIST, '{interface}', 'scanning'], interface)
