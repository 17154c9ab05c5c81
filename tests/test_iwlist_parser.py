"""Unit tests for the legacy 'iwlist <if> scanning' grammar."""

import pytest

from sysinspect.errors import FieldParseError
from sysinspect.records import RecordScanner
from sysinspect.wifi.parsers.iwlist import IWLIST_SCAN_GRAMMAR, parse_iwlist_scan


# =============================================================================
# SAMPLE OUTPUT
# =============================================================================

IWLIST_SCAN_OUTPUT = """\
wlan0     Scan completed :
          Cell 01 - Address: f8:e4:fb:a0:fe:91
                    Channel:6
                    Frequency:2.437 GHz (Channel 6)
                    Quality=57/70  Signal level=-53 dBm
                    Encryption key:on
                    ESSID:"WIFINET"
                    Bit Rates:1 Mb/s; 2 Mb/s; 5.5 Mb/s; 11 Mb/s; 9 Mb/s
                              18 Mb/s; 36 Mb/s; 54 Mb/s
                    Bit Rates:6 Mb/s; 12 Mb/s; 24 Mb/s; 48 Mb/s
                    Mode:Master
                    Extra:tsf=00000003856835fe
                    Extra: Last beacon: 240ms ago
                    IE: Unknown: 0007574946494E4554
                    IE: IEEE 802.11i/WPA2 Version 1
                        Group Cipher : CCMP
                        Pairwise Ciphers (1) : CCMP
                        Authentication Suites (1) : PSK
          Cell 02 - Address: 00:11:22:33:44:55
                    Channel:11
                    Frequency:2.462 GHz
                    Quality=70/70  Signal level=-40 dBm
                    Encryption key:off
                    ESSID:"Cafe \\xe2\\x80\\x93 Guest"
                    Bit Rates:54 Mb/s
                    Mode:Master
          Cell 03 - Address: 66:77:88:99:AA:BB
                    Frequency:2.412 GHz (Channel 1)
                    Encryption key:on
                    ESSID:""
                    IE: WPA Version 1
"""


@pytest.fixture
def cells():
    """Records parsed from the sample scan, in output order."""
    return parse_iwlist_scan(IWLIST_SCAN_OUTPUT)


class TestSegmentation:
    """Tests for splitting the scan into cells."""

    def test_one_record_per_cell(self, cells):
        assert [c.name for c in cells] == ['Cell 01', 'Cell 02', 'Cell 03']

    def test_bssid_uppercased(self, cells):
        assert cells[0].bssid == 'F8:E4:FB:A0:FE:91'
        assert cells[2].bssid == '66:77:88:99:AA:BB'

    def test_interface_from_scan_completed_line(self, cells):
        assert all(c.interface == 'wlan0' for c in cells)

    def test_interface_changes_between_scans(self):
        cells = parse_iwlist_scan([
            'wlan0     Scan completed :',
            '          Cell 01 - Address: 00:11:22:33:44:55',
            'wlan1     Scan completed :',
            '          Cell 01 - Address: 66:77:88:99:AA:BB',
        ])
        assert [c.interface for c in cells] == ['wlan0', 'wlan1']

    def test_essid_quoting_scan_completed(self):
        cells = parse_iwlist_scan([
            'wlan0     Scan completed :',
            '          Cell 01 - Address: 00:11:22:33:44:55',
            '                    ESSID:"Scan completed"',
        ])
        assert cells[0].interface == 'wlan0'
        assert cells[0].ssid == 'Scan completed'

    def test_cell_without_address_dropped(self):
        result = RecordScanner(IWLIST_SCAN_GRAMMAR).scan([
            'wlan0     Scan completed :',
            '          Cell 01 - Address',
            '                    Channel:6',
            '          Cell 02 - Address: 00:11:22:33:44:55',
        ])
        assert len(result.records) == 1
        assert result.records[0].channel is None
        assert result.markers == 2


class TestFields:
    """Tests for individual field rules."""

    def test_quality_and_signal(self, cells):
        assert cells[0].quality == pytest.approx(57 / 70)
        assert cells[0].signal_level == -53.0
        assert cells[1].quality == 1.0

    def test_frequency_normalised_to_mhz(self, cells):
        assert cells[0].frequency == pytest.approx(2437.0)
        assert cells[1].frequency == pytest.approx(2462.0)

    def test_channel(self, cells):
        assert cells[0].channel == 6
        assert cells[1].channel == 11

    def test_channel_from_frequency_line(self, cells):
        assert cells[2].channel == 1

    def test_essid_quotes_stripped(self, cells):
        assert cells[0].ssid == 'WIFINET'
        assert cells[0].essid == 'WIFINET'

    def test_essid_encoding_corrected(self, cells):
        assert cells[1].ssid == 'Cafe – Guest'

    def test_empty_essid_is_none(self, cells):
        assert cells[2].ssid is None

    def test_rates_across_lines(self, cells):
        assert cells[0].bit_rates == [
            1.0, 2.0, 5.5, 6.0, 9.0, 11.0, 12.0, 18.0, 24.0, 36.0, 48.0, 54.0
        ]

    def test_single_rate_line(self, cells):
        assert cells[1].bit_rates == [54.0]

    def test_mode(self, cells):
        assert cells[0].mode == 'Master'

    def test_extra_fields(self, cells):
        assert cells[0].tsf == 0x3856835FE
        assert cells[0].last_seen == 240


class TestSecurity:
    """Tests for encryption classification."""

    def test_wpa2(self, cells):
        assert cells[0].encryption is True
        assert cells[0].wpa is True
        assert cells[0].wep is False

    def test_open(self, cells):
        assert cells[1].encryption is False
        assert cells[1].wpa is False

    def test_wpa1_ie(self, cells):
        assert cells[2].wpa is True


class TestErrors:
    """Tests for field-level failures."""

    def test_bad_encryption_value(self):
        result = RecordScanner(IWLIST_SCAN_GRAMMAR).scan([
            '          Cell 01 - Address: 00:11:22:33:44:55',
            '                    Encryption key:maybe',
            '                    Channel:3',
        ])
        assert result.records[0].encryption is False
        assert result.records[0].channel == 3
        assert isinstance(result.errors[0], FieldParseError)
        assert result.errors[0].field_name == 'encryption'

    def test_quality_line_without_values(self):
        result = RecordScanner(IWLIST_SCAN_GRAMMAR).scan([
            '          Cell 01 - Address: 00:11:22:33:44:55',
            '                    Quality:unknown',
        ])
        assert result.records[0].quality is None
        assert result.errors[0].field_name == 'quality'
