"""Unit tests for the 'iw dev <if> scan' grammar."""

import pytest

from sysinspect.errors import FieldParseError, MalformedRecord
from sysinspect.records import RecordScanner
from sysinspect.wifi.parsers.iw import IW_SCAN_GRAMMAR, parse_iw_scan


# =============================================================================
# SAMPLE OUTPUT
# =============================================================================

IW_SCAN_OUTPUT = """\
BSS f8:e4:fb:a0:fe:91(on wlan0) -- associated
	TSF: 12345678901234 usec (0d, 03:25:45)
	freq: 2437
	beacon interval: 100 TUs
	capability: ESS Privacy ShortSlotTime (0x0411)
	signal: -64.00 dBm
	last seen: 100 ms ago
	SSID: Joe\\xe2\\x80\\x99s WiFi
	Supported rates: 1.0* 2.0* 5.5* 11.0* 6.0 9.0 12.0 18.0
	DS Parameter set: channel 6
	BSS Load:
		 * station count: 3
		 * channel utilisation: 20/255
	RSN:	 * Version: 1
		 * Group cipher: CCMP
		 * Pairwise ciphers: CCMP
		 * Authentication suites: PSK
	Extended supported rates: 24.0 36.0 48.0 54.0
BSS 00:11:22:33:44:55(on wlan0)
	TSF: 98765 usec (0d, 00:00:00)
	freq: 5180
	capability: ESS Privacy ShortSlotTime (0x0411)
	signal: -80.00 dBm
	last seen: 2000 ms ago
	SSID: OldRouter
	Supported rates: 1.0* 2.0* 5.5*
	DS Parameter set: channel 36
BSS 66:77:88:99:aa:bb(on wlan0)
	freq: 2412
	capability: ESS ShortSlotTime (0x0401)
	signal: -71.00 dBm
	SSID: 
	DS Parameter set: channel 1
"""


@pytest.fixture
def networks():
    """Records parsed from the sample scan, in output order."""
    return parse_iw_scan(IW_SCAN_OUTPUT)


class TestSegmentation:
    """Tests for splitting the scan into BSS records."""

    def test_one_record_per_bss_line(self, networks):
        assert len(networks) == 3

    def test_bss_load_does_not_open_record(self):
        result = RecordScanner(IW_SCAN_GRAMMAR).scan(IW_SCAN_OUTPUT.splitlines())
        assert result.markers == 3

    def test_bssid_and_interface(self, networks):
        first = networks[0]
        assert first.bssid == 'F8:E4:FB:A0:FE:91'
        assert first.interface == 'wlan0'
        assert first.name == 'Cell 01'
        assert networks[2].name == 'Cell 03'

    def test_older_bss_line_format(self):
        records = parse_iw_scan(['BSS f8:e4:fb:a0:fe:91 (on wlp3s0)', '\tfreq: 2412'])
        assert records[0].interface == 'wlp3s0'
        assert records[0].frequency == 2412.0

    def test_accepts_line_iterable(self):
        assert len(parse_iw_scan(IW_SCAN_OUTPUT.splitlines())) == 3


class TestFields:
    """Tests for individual field rules."""

    def test_radio_fields(self, networks):
        first = networks[0]
        assert first.channel == 6
        assert first.frequency == 2437.0
        assert first.signal_level == -64.0
        assert first.tsf == 12345678901234
        assert first.last_seen == 100

    def test_escaped_ssid_corrected(self, networks):
        assert networks[0].ssid == 'Joe’s WiFi'
        assert networks[0].essid == 'Joe’s WiFi'

    def test_hidden_ssid_is_none(self, networks):
        assert networks[2].ssid is None

    def test_rates_merge_supported_and_extended(self, networks):
        assert networks[0].bit_rates == [
            1.0, 2.0, 5.5, 6.0, 9.0, 11.0, 12.0, 18.0, 24.0, 36.0, 48.0, 54.0
        ]
        assert networks[1].bit_rates == [1.0, 2.0, 5.5]


class TestSecurity:
    """Tests for encryption classification."""

    def test_rsn_overrides_provisional_wep(self, networks):
        first = networks[0]
        assert first.encryption is True
        assert first.wpa is True
        assert first.wep is False

    def test_privacy_without_rsn_is_wep(self, networks):
        second = networks[1]
        assert second.encryption is True
        assert second.wep is True
        assert second.wpa is False

    def test_open_network(self, networks):
        third = networks[2]
        assert third.encryption is False
        assert third.wep is False
        assert third.wpa is False

    def test_wpa_element(self):
        records = parse_iw_scan([
            'BSS 00:11:22:33:44:55(on wlan0)',
            '\tcapability: ESS Privacy (0x0011)',
            '\tWPA:\t * Version: 1',
        ])
        assert records[0].wpa is True
        assert records[0].wep is False


class TestErrors:
    """Tests for field-level failures."""

    def test_bad_rate_keeps_good_ones(self):
        result = RecordScanner(IW_SCAN_GRAMMAR).scan([
            'BSS 00:11:22:33:44:55(on wlan0)',
            '\tSupported rates: 1.0* fast 2.0',
            '\tfreq: 2412',
        ])
        record = result.records[0]
        assert record.bit_rates == [1.0, 2.0]
        assert record.frequency == 2412.0
        assert len(result.errors) == 1
        assert isinstance(result.errors[0], FieldParseError)
        assert result.errors[0].field_name == 'bit_rates'

    def test_bad_signal_recorded(self):
        result = RecordScanner(IW_SCAN_GRAMMAR).scan([
            'BSS 00:11:22:33:44:55(on wlan0)',
            '\tsignal: strong',
        ])
        assert result.records[0].signal_level is None
        assert result.errors[0].field_name == 'signal_level'

    def test_malformed_bss_line_dropped(self):
        result = RecordScanner(IW_SCAN_GRAMMAR).scan([
            'BSS 00:11:22:33:44:55(on wlan0)',
            '\tSSID: First',
            '\tDS Parameter set: channel 6',
            'BSS 00:11:22:33:44(on wlan0)',
            '\tSSID: Second',
            '\tDS Parameter set: channel 11',
        ])
        assert [(r.bssid, r.ssid, r.channel) for r in result.records] == [
            ('00:11:22:33:44:55', 'First', 6)
        ]
        assert result.markers == 2
        assert isinstance(result.errors[0], MalformedRecord)

    def test_unindented_bss_lines_are_markers(self):
        lines = [
            'BSS 00:11:22:33:44:55(on wlan0)',
            'BSS garbage',
            'BSS 66:77:88:99:aa:bb(on wlan0)',
        ]
        result = RecordScanner(IW_SCAN_GRAMMAR).scan(lines)
        assert result.markers == 3
        assert len(result.records) == 2
