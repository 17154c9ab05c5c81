"""Unit tests for the tokenizing helpers."""

import pytest

from sysinspect.fields import (
    digits_only,
    extract_after,
    numeric_part,
    parse_int,
    parse_number,
    split_label,
    strip_letters,
    strip_quotes,
    token,
    tokenize,
    value_of,
)


class TestTokens:
    """Tests for whitespace tokenizing."""

    def test_tokenize(self):
        assert tokenize('  TSF: 123  usec ') == ['TSF:', '123', 'usec']

    def test_tokenize_empty(self):
        assert tokenize(None) == []
        assert tokenize('') == []

    def test_token_in_range(self):
        assert token('BSS aa:bb (on wlan0)', 1) == 'aa:bb'

    def test_token_out_of_range(self):
        assert token('one two', 5) is None
        assert token(None, 0) is None


class TestLabels:
    """Tests for label/value splitting."""

    def test_colon(self):
        assert split_label('freq: 2437') == ('freq', '2437')

    def test_first_delimiter_wins(self):
        assert split_label('Quality=57/70  Signal level=-53 dBm') == (
            'Quality', '57/70  Signal level=-53 dBm'
        )
        assert split_label('Extra:tsf=00ff') == ('Extra', 'tsf=00ff')

    def test_restricted_delimiters(self):
        assert split_label('a=b: c', ':') == ('a=b', 'c')

    def test_no_delimiter(self):
        assert split_label('no value here') == ('no value here', None)
        assert value_of('no value here') is None

    def test_value_of_keeps_later_colons(self):
        assert value_of('Address: F8:E4:FB:A0:FE:91', ':') == 'F8:E4:FB:A0:FE:91'

    def test_extract_after(self):
        assert extract_after('Extra: Last beacon: 240ms ago', 'Last beacon:') == '240ms ago'
        assert extract_after('Extra: nothing', 'Last beacon:') is None


class TestConversions:
    """Tests for number extraction; none of these raise."""

    def test_strip_quotes(self):
        assert strip_quotes('"WIFINET"') == 'WIFINET'
        assert strip_quotes('""') == ''
        assert strip_quotes('"unbalanced') == '"unbalanced'

    def test_strip_letters(self):
        assert strip_letters('-64.00 dBm') == '-64.00'

    @pytest.mark.parametrize('text,expected', [
        ('2437', 2437.0),
        (' -53.5 ', -53.5),
        ('abc', None),
        (None, None),
    ])
    def test_parse_number(self, text, expected):
        assert parse_number(text) == expected

    def test_parse_int_hex(self):
        assert parse_int('00000003856835fe', 16) == 0x3856835FE
        assert parse_int('zz', 16) is None

    def test_numeric_part(self):
        assert numeric_part(' 5.5 Mb/s') == 5.5
        assert numeric_part('Bit Rates:1 Mb/s') == 1.0
        assert numeric_part('Mb/s') is None

    def test_digits_only(self):
        assert digits_only('channel 6') == 6
        assert digits_only('240ms ago') == 240
        assert digits_only('none') is None
