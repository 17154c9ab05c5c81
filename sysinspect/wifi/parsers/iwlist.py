"""
Parser for Linux iwlist scan output.

Example output from 'iwlist wlan0 scanning':
wlan0     Scan completed :
          Cell 01 - Address: 00:11:22:33:44:55
                    Channel:6
                    Frequency:2.437 GHz (Channel 6)
                    Quality=70/70  Signal level=-40 dBm
                    Encryption key:on
                    ESSID:"MyWiFi"
                    Bit Rates:1 Mb/s; 2 Mb/s; 5.5 Mb/s; 11 Mb/s; 9 Mb/s
                              18 Mb/s; 36 Mb/s; 54 Mb/s
                    Mode:Master
                    Extra:tsf=0000000000000000
                    Extra: Last beacon: 100ms ago
                    IE: Unknown: 000A4D79576946695F4E6574
                    IE: IEEE 802.11i/WPA2 Version 1
                        Group Cipher : CCMP
                        Pairwise Ciphers (1) : CCMP
                        Authentication Suites (1) : PSK
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Union

from ...encoding import correct_encoding
from ...errors import FieldParseError, MalformedRecord
from ...fields import (
    digits_only,
    extract_after,
    numeric_part,
    parse_int,
    parse_number,
    split_label,
    strip_quotes,
    token,
    tokenize,
    value_of,
)
from ...records import ContextRule, FieldRule, Grammar, RecordScanner, ScanContext, starts_with
from ..constants import (
    IWLIST_CELL_PREFIX,
    IWLIST_IE_PREFIX,
    IWLIST_QUALITY_PATTERN,
    IWLIST_RATES_PATTERN,
    IWLIST_SCAN_COMPLETED,
    IWLIST_SIGNAL_PATTERN,
    IWLIST_WPA1_MARKER,
    IWLIST_WPA2_MARKER,
    MHZ_PER_GHZ,
)
from ..models import WirelessNetworkRecord

logger = logging.getLogger(__name__)


def _is_scan_completed(line: str) -> bool:
    # The interface name comes first; an ESSID may quote the same words
    parts = line.split(None, 1)
    return len(parts) == 2 and parts[1].startswith(IWLIST_SCAN_COMPLETED)


def _set_interface(line: str, context: ScanContext) -> None:
    # wlan0     Scan completed :
    context['interface'] = token(line, 0)


def _is_cell_line(line: str) -> bool:
    return line.strip().startswith(IWLIST_CELL_PREFIX)


def _start_cell(line: str, context: ScanContext) -> WirelessNetworkRecord:
    # Cell 01 - Address: F8:E4:FB:A0:FE:91
    line = line.strip()
    label, address = split_label(line, ':')
    if not address:
        raise MalformedRecord(line, "cell line without an address")

    return WirelessNetworkRecord(
        interface=context.get('interface'),
        name=label.split('-')[0].strip(),
        bssid=address.upper(),
    )


def _value(line: str) -> str:
    value = value_of(line, ':')
    if value is None:
        raise FieldParseError(line, "missing ':' separator")
    return value


def _set_channel(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Channel:6
    channel = parse_int(_value(line))
    if channel is None:
        raise FieldParseError(line, "channel is not an integer", 'channel')
    record.channel = channel


def _set_frequency(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Frequency:2.437 GHz (Channel 6)
    tokens = tokenize(_value(line))
    frequency = parse_number(tokens[0]) if tokens else None
    if frequency is None:
        raise FieldParseError(line, "frequency is not a number", 'frequency')

    unit = tokens[1] if len(tokens) > 1 else ''
    if unit.startswith('GHz') or (not unit and frequency < MHZ_PER_GHZ):
        frequency = round(frequency * MHZ_PER_GHZ, 3)
    record.frequency = frequency

    if record.channel is None:
        channel_match = re.search(r'\(Channel (\d+)\)', line)
        if channel_match:
            record.channel = int(channel_match.group(1))


def _set_quality(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Quality=57/70  Signal level=-53 dBm
    quality_match = IWLIST_QUALITY_PATTERN.search(line)
    signal_match = IWLIST_SIGNAL_PATTERN.search(line)
    if not quality_match and not signal_match:
        raise FieldParseError(line, "no quality or signal level", 'quality')

    if signal_match:
        record.signal_level = float(signal_match.group(1))
    if quality_match:
        numerator, denominator = quality_match.groups()
        record.quality = float(numerator) / float(denominator)


def _set_encryption(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Encryption key:on
    value = _value(line).lower()
    if value not in ('on', 'off'):
        raise FieldParseError(line, f"unexpected encryption value {value!r}", 'encryption')
    record.encryption = value == 'on'


def _set_essid(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # ESSID:"WIFINET"
    ssid = correct_encoding(strip_quotes(_value(line))) or None
    record.ssid = ssid
    record.essid = ssid


def _set_mode(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Mode:Master
    record.mode = _value(line) or None


def _is_wpa_line(line: str) -> bool:
    if IWLIST_WPA2_MARKER in line:
        return True
    if line.startswith(IWLIST_IE_PREFIX):
        line = line[len(IWLIST_IE_PREFIX):].strip()
    return line.startswith(IWLIST_WPA1_MARKER)


def _set_wpa(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # IE: IEEE 802.11i/WPA2 Version 1
    # IE: WPA Version 1
    record.wpa = True
    record.wep = False


def _is_rates_line(line: str) -> bool:
    return 'Mb/s;' in line or IWLIST_RATES_PATTERN.match(line) is not None


def _add_rates(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Bit Rates:1 Mb/s; 2 Mb/s; 5.5 Mb/s; 11 Mb/s; 9 Mb/s
    #           18 Mb/s; 36 Mb/s; 54 Mb/s
    bad = []
    for segment in line.split(';'):
        if not segment.strip():
            continue
        rate = numeric_part(segment)
        if rate is None:
            bad.append(segment.strip())
        else:
            record.add_bit_rate(rate)
    if bad:
        raise FieldParseError(line, f"unparseable rates: {'; '.join(bad)}", 'bit_rates')


def _set_last_beacon(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Extra: Last beacon: 240ms ago
    last_seen = digits_only(extract_after(line, 'Last beacon:'))
    if last_seen is None:
        raise FieldParseError(line, "no last beacon value", 'last_seen')
    record.last_seen = last_seen


def _set_tsf(record: WirelessNetworkRecord, line: str, context: ScanContext) -> None:
    # Extra:tsf=00000003856835fe
    tsf = parse_int(extract_after(line, 'tsf='), 16)
    if tsf is None:
        raise FieldParseError(line, "TSF is not hexadecimal", 'tsf')
    record.tsf = tsf


IWLIST_CONTEXT_RULES: tuple[ContextRule, ...] = (
    ContextRule('interface', _is_scan_completed, _set_interface),
)

IWLIST_FIELD_RULES: tuple[FieldRule[WirelessNetworkRecord], ...] = (
    FieldRule('channel', starts_with('Channel:'), _set_channel),
    FieldRule('frequency', starts_with('Frequency:'), _set_frequency),
    FieldRule('quality', starts_with('Quality'), _set_quality),
    FieldRule('encryption', starts_with('Encryption key:'), _set_encryption),
    FieldRule('ssid', starts_with('ESSID:'), _set_essid),
    FieldRule('mode', starts_with('Mode:'), _set_mode),
    FieldRule('wpa', _is_wpa_line, _set_wpa),
    FieldRule('bit_rates', _is_rates_line, _add_rates),
    FieldRule(
        'last_seen',
        lambda line: line.startswith('Extra') and 'Last beacon' in line,
        _set_last_beacon,
    ),
    FieldRule('tsf', lambda line: line.startswith('Extra') and 'tsf=' in line, _set_tsf),
)

IWLIST_SCAN_GRAMMAR: Grammar[WirelessNetworkRecord] = Grammar(
    name='iwlist',
    is_record_start=_is_cell_line,
    start_record=_start_cell,
    rules=IWLIST_FIELD_RULES,
    context_rules=IWLIST_CONTEXT_RULES,
)


def parse_iwlist_scan(output: Union[str, Iterable[str]]) -> list[WirelessNetworkRecord]:
    """
    Parse iwlist scan output.

    Args:
        output: Raw output from 'iwlist <interface> scanning', as one string
            or as lines.

    Returns:
        One WirelessNetworkRecord per cell, in output order.
    """
    if isinstance(output, str):
        output = output.splitlines()
    result = RecordScanner(IWLIST_SCAN_GRAMMAR).scan(output)
    for error in result.errors:
        logger.debug(f"iwlist scan: {error}")
    return result.records
