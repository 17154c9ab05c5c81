"""Unit tests for the power supply collector."""

import pytest

from sysinspect.hardware import (
    PowerSupplyInfo,
    parse_power_supply,
    parse_uevent,
    read_power_supplies,
)


# =============================================================================
# SAMPLE UEVENT FILES
# =============================================================================

BATTERY_ENERGY = """\
POWER_SUPPLY_NAME=BAT0
POWER_SUPPLY_TYPE=Battery
POWER_SUPPLY_STATUS=Discharging
POWER_SUPPLY_PRESENT=1
POWER_SUPPLY_TECHNOLOGY=Li-poly
POWER_SUPPLY_POWER_NOW=9180000
POWER_SUPPLY_ENERGY_FULL_DESIGN=57020000
POWER_SUPPLY_ENERGY_FULL=50000000
POWER_SUPPLY_ENERGY_NOW=37500000
POWER_SUPPLY_MODEL_NAME=5B10W13930
POWER_SUPPLY_MANUFACTURER=SMP
POWER_SUPPLY_SERIAL_NUMBER=  965
"""

BATTERY_CHARGE = """\
POWER_SUPPLY_NAME=BAT1
POWER_SUPPLY_STATUS=Charging
POWER_SUPPLY_CURRENT_NOW=1500000
POWER_SUPPLY_CHARGE_FULL=4000000
POWER_SUPPLY_CHARGE_NOW=1000000
"""

AC_ADAPTER = """\
POWER_SUPPLY_NAME=AC
POWER_SUPPLY_TYPE=Mains
POWER_SUPPLY_ONLINE=1
"""


@pytest.fixture
def battery():
    """The energy-counting sample battery."""
    return parse_power_supply(BATTERY_ENERGY.splitlines())


class TestParseUevent:
    """Tests for parse_uevent()."""

    def test_prefix_dropped(self):
        values = parse_uevent(AC_ADAPTER.splitlines())
        assert values == {'NAME': 'AC', 'TYPE': 'Mains', 'ONLINE': '1'}

    def test_lines_without_equals_ignored(self):
        assert parse_uevent(['garbage', '', 'DEVTYPE=usb']) == {'DEVTYPE': 'usb'}


class TestParsePowerSupply:
    """Tests for parse_power_supply()."""

    def test_identity_fields(self, battery):
        assert battery.name == 'BAT0'
        assert battery.supply_type == 'Battery'
        assert battery.manufacturer == 'SMP'
        assert battery.model == '5B10W13930'
        assert battery.serial == '965'
        assert battery.technology == 'Li-poly'

    def test_full_capacity_ignores_design_capacity(self, battery):
        assert battery.capacity_full == 50000000
        assert battery.capacity_now == 37500000
        assert battery.discharge_rate == 9180000

    def test_charge_counters(self):
        supply = parse_power_supply(BATTERY_CHARGE.splitlines())
        assert supply.capacity_full == 4000000
        assert supply.capacity_now == 1000000
        assert supply.discharge_rate == 1500000

    def test_name_fallback(self):
        assert parse_power_supply(['POWER_SUPPLY_ONLINE=0'], 'ACAD').name == 'ACAD'

    def test_adapter_has_no_capacity(self):
        supply = parse_power_supply(AC_ADAPTER.splitlines())
        assert supply.capacity_full is None
        assert supply.percent_charged is None
        assert supply.time_remaining is None


class TestDerivedValues:
    """Tests for the charge state helpers."""

    def test_percent_charged(self, battery):
        assert battery.percent_charged == pytest.approx(75.0)

    def test_time_remaining(self, battery):
        assert battery.time_remaining == pytest.approx(3600 * 37500000 / 9180000)

    def test_no_time_remaining_while_charging(self):
        supply = parse_power_supply(BATTERY_CHARGE.splitlines())
        assert supply.is_charging
        assert supply.time_remaining is None
        assert supply.percent_charged == pytest.approx(25.0)

    def test_status_case_insensitive(self):
        assert PowerSupplyInfo(name='BAT0', status='CHARGING').is_charging

    def test_zero_draw(self):
        supply = PowerSupplyInfo(name='BAT0', capacity_now=10, discharge_rate=0)
        assert supply.time_remaining is None

    def test_to_dict(self, battery):
        data = battery.to_dict()
        assert data['type'] == 'Battery'
        assert data['percent_charged'] == pytest.approx(75.0)


class TestReadPowerSupplies:
    """Tests for read_power_supplies() over a fake sysfs tree."""

    def test_reads_each_supply(self, tmp_path):
        for name, text in (('BAT0', BATTERY_ENERGY), ('AC', AC_ADAPTER)):
            (tmp_path / name).mkdir()
            (tmp_path / name / 'uevent').write_text(text)
        supplies = read_power_supplies(str(tmp_path / '*' / 'uevent'))
        assert [s.name for s in supplies] == ['AC', 'BAT0']

    def test_directory_name_used_without_name_key(self, tmp_path):
        (tmp_path / 'ADP1').mkdir()
        (tmp_path / 'ADP1' / 'uevent').write_text('POWER_SUPPLY_ONLINE=1\n')
        supplies = read_power_supplies(str(tmp_path / '*' / 'uevent'))
        assert supplies[0].name == 'ADP1'

    def test_no_supplies(self, tmp_path):
        assert read_power_supplies(str(tmp_path / '*' / 'uevent')) == []
