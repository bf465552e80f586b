from datetime import datetime
from decimal import Decimal

import pytest
from textini.ini.convert import (
    decode_binary, encode_binary, format_datetime, format_decimal,
    format_float, hex_digit, hex_value, parse_datetime, parse_decimal,
    parse_float, parse_int
)


@pytest.mark.parametrize('text, expected', [
    ('42', 42), ('-7', -7), ('+3', 3), (' 12 ', 12),
    ('$1F', 31), ('0x10', 16), ('-$ff', -255),
    ('', None), ('1.5', None), ('12a', None), ('1_000', None),
])
def test_parse_int(text, expected):
    assert parse_int(text) == expected


def test_float_text():
    assert parse_float(format_float(0.1)) == 0.1
    assert parse_float('1e3') == 1000.0
    assert parse_float('-.5') == -0.5
    assert parse_float('inf') == float('inf')
    assert parse_float('abc') is None
    assert parse_float('') is None


def test_decimal_text():
    assert format_decimal(Decimal('12.5')) == '12.5000'
    assert format_decimal(1.1) == '1.1000'
    assert format_decimal('0.00005') == '0.0000'
    assert format_decimal('0.00015') == '0.0002'
    assert parse_decimal('12.5000') == Decimal('12.5')
    assert parse_decimal('nan') is None
    assert parse_decimal('1,5') is None
    with pytest.raises(ValueError):
        format_decimal(Decimal('Infinity'))
    with pytest.raises(ValueError):
        format_decimal(Decimal('1e25'))
    with pytest.raises(ValueError):
        format_decimal('twelve')
    assert format_decimal(Decimal('1e20')) == '100000000000000000000.0000'


def test_datetime_text():
    dt = datetime(2024, 3, 9, 7, 5, 1)
    assert format_datetime(dt) == '2024/03/09 07:05:01'
    assert parse_datetime('2024/03/09 07:05:01') == dt
    assert format_datetime(datetime(987, 1, 2)) == '0987/01/02 00:00:00'
    # separators aren't checked, only the offsets.
    assert parse_datetime('2024-03-09T07:05:01') == dt
    # missing time means midnight.
    assert parse_datetime('2024/03/09') == datetime(2024, 3, 9)


@pytest.mark.parametrize('text', ['2024/13/01 00:00:00', '', 'garbage',
                                  '2023/02/29 00:00:00', '2024/01/01 25:00:00'])
def test_datetime_invalid(text):
    assert parse_datetime(text) is None


def test_hex_digits():
    assert [hex_digit(i) for i in (0, 9, 10, 15)] == ['0', '9', 'A', 'F']
    assert hex_value('a') == 10
    assert hex_value('F') == 15
    assert hex_value('7') == 7
    assert hex_value('g') is None
    assert hex_value(',') is None
    with pytest.raises(ValueError):
        hex_digit(16)


def test_binary_codec():
    assert encode_binary(b'\xaa\xbb\xcc') == 'AA,BB,CC'
    assert encode_binary(b'\x01') == '01'
    assert encode_binary(b'') == ''
    assert decode_binary('aa,bB,cc', 3) == bytearray(b'\xaa\xbb\xcc')
    assert decode_binary('AA,BB,CC', 2) == bytearray(b'\xaa\xbb')
    assert decode_binary('AA,BB,CC', 10) == bytearray(b'\xaa\xbb\xcc')
    assert decode_binary('AA,XB,CC', 3) is None
    # never looks past the bytes asked for.
    assert decode_binary('AA,XB', 1) == bytearray(b'\xaa')
