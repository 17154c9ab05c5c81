"""
Parser for Linux iw scan output.

Example output from 'iw dev wlan0 scan':
BSS 00:11:22:33:44:55(on wlan0)
    TSF: 12345678901234 usec (0d, 03:25:45)
    freq: 2437
    beacon interval: 100 TUs
    capability: ESS Privacy ShortSlotTime (0x0411)
    signal: -65.00 dBm
    last seen: 100 ms ago
    SSID: MyWiFi
    Supported rates: 1.0* 2.0* 5.5* 11.0* 6.0 9.0 12.0 18.0
    DS Parameter set: channel 6
    RSN:     * Version: 1
             * Group cipher: CCMP
             * Pairwise ciphers: CCMP
             * Authentication suites: PSK
             * Capabilities: 16-PTKSA-RC 1-GTKSA-RC (0x000c)
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Union

from ...encoding import correct_encoding
from ...errors import FieldParseError, MalformedRecord
from ...fields import (
    digits_only,
    parse_int,
    parse_number,
    strip_letters,
    token,
    tokenize,
    value_of,
)
from ...records import FieldRule, Grammar, RecordScanner, ScanContext, contains, starts_with
from ..constants import CELL_LABEL_FORMAT, IW_BSS_PATTERN, IW_BSS_PREFIX, IW_INTERFACE_PATTERN
from ..models import WirelessNetworkRecord

logger = logging.getLogger(__name__)


def _is_bss_line(line: str) -> bool:
    # 'BSS Load:' elements are indented
    return line.startswith(IW_BSS_PREFIX)


def _start_bss(line: str, context: ScanContext) -> WirelessNetworkRecord:
    match = IW_BSS_PATTERN.match(line.strip())
    if not match:
        raise MalformedRecord(line, "BSS line without a BSSID")

    interface_match = IW_INTERFACE_PATTERN.search(match.group('rest'))
    if interface_match:
        interface = interface_match.group('interface')
    else:
        # Older iw: 'BSS f8:e4:fb:a0:fe:91 (on wlan0)'
        interface = re.sub(r'\W', '', token(line, 3) or '') or None

    context['cells'] = context.get('cells', 0) + 1
    return WirelessNetworkRecord(
        interface=interface,
        name=CELL_LABEL_FORMAT.format(context['cells']),
        bssid=match.group('bssid').upper(),
    )


def _value(line: str) -> str:
    value = value_of(line, ':')
    if value is None:
        raise FieldParseError(line, "missing ':' separator")
    return value


def _set_channel(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # DS Parameter set: channel 6
    channel = digits_only(_value(line))
    if channel is None:
        raise FieldParseError(line, "no channel number", 'channel')
    record.channel = channel


def _set_frequency(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # freq: 2437
    frequency = parse_number(_value(line))
    if frequency is None:
        raise FieldParseError(line, "frequency is not a number", 'frequency')
    record.frequency = frequency


def _set_signal(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # signal: -64.00 dBm
    level = parse_number(strip_letters(_value(line)))
    if level is None:
        raise FieldParseError(line, "signal level is not a number", 'signal_level')
    record.signal_level = level


def _set_privacy(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # capability: ESS Privacy ShortPreamble ShortSlotTime (0x0431)
    # WEP is assumed until an RSN/WPA element says otherwise.
    record.encryption = True
    record.wep = True


def _set_ssid(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # SSID: WIFINET
    ssid = correct_encoding(_value(line)) or None
    record.ssid = ssid
    record.essid = ssid


def _set_wpa(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # RSN:	 * Version: 1
    record.wpa = True
    record.wep = False


def _add_rates(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Supported rates: 1.0* 2.0* 5.5* 11.0* 6.0 9.0 12.0 18.0
    bad = []
    for rate_token in tokenize(_value(line)):
        rate = parse_number(rate_token.replace('*', ''))
        if rate is None:
            bad.append(rate_token)
        else:
            record.add_bit_rate(rate)
    if bad:
        raise FieldParseError(line, f"unparseable rates: {' '.join(bad)}", 'bit_rates')


def _set_tsf(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # TSF: 12345678901234 usec (0d, 03:25:45)
    tsf = parse_int(token(line, 1))
    if tsf is None:
        raise FieldParseError(line, "TSF is not an integer", 'tsf')
    record.tsf = tsf


def _set_last_seen(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # last seen: 100 ms ago
    last_seen = digits_only(_value(line))
    if last_seen is None:
        raise FieldParseError(line, "no last seen value", 'last_seen')
    record.last_seen = last_seen


IW_FIELD_RULES: tuple[FieldRule[WirelessNetworkRecord], ...] = (
    FieldRule('channel', starts_with('DS Parameter set'), _set_channel),
    FieldRule('frequency', starts_with('freq'), _set_frequency),
    FieldRule('signal_level', starts_with('signal'), _set_signal),
    FieldRule('encryption', contains('capability', 'ESS', 'Privacy'), _set_privacy),
    FieldRule('ssid', starts_with('SSID:'), _set_ssid),
    FieldRule('wpa', starts_with('RSN', 'WPA:'), _set_wpa),
    FieldRule('bit_rates', starts_with('Supported rates', 'Extended supported rates'), _add_rates),
    FieldRule('tsf', starts_with('TSF'), _set_tsf),
    FieldRule('last_seen', starts_with('last seen'), _set_last_seen),
)

IW_SCAN_GRAMMAR: Grammar[WirelessNetworkRecord] = Grammar(
    name='iw',
    is_record_start=_is_bss_line,
    start_record=_start_bss,
    rules=IW_FIELD_RULES,
)


def parse_iw_scan(output: Union[str, Iterable[str]]) -> list[WirelessNetworkRecord]:
    """
    Parse iw scan output.

    Args:
        output: Raw output from 'iw dev <interface> scan', as one string or
            as lines.

    Returns:
        One WirelessNetworkRecord per BSS block, in output order.
    """
    if isinstance(output, str):
        output = output.splitlines()
    result = RecordScanner(IW_SCAN_GRAMMAR).scan(output)
    for error in result.errors:
        logger.debug(f"iw scan: {error}")
    return result.records
