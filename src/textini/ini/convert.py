# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2024/10/11 23:10:27
# @Author : Kariko Lin

"""Text <-> value conversions used by the typed accessors.

All `parse_*` functions return `None` when the text can't be converted,
and never raise for bad input. Callers decide what "bad" falls back to.
"""

from datetime import datetime
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from re import IGNORECASE
from re import compile as regex

__all__ = [
    'parse_int', 'format_int',
    'parse_float', 'format_float',
    'parse_decimal', 'format_decimal',
    'parse_datetime', 'format_datetime',
    'hex_digit', 'hex_value', 'encode_binary', 'decode_binary',
    'binary_length'
]

# `$1F` is the Pascal flavoured hex literal, old files do have them.
_INTEGER = regex(r'\s*([+-]?)(?:(\d+)|(?:\$|0x)([0-9a-f]+))\s*', IGNORECASE)
_REAL = regex(
    r'\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf(?:inity)?|nan)\s*',
    IGNORECASE)
_CURRENCY_PLACES = Decimal('0.0001')


def parse_int(text: str) -> int | None:
    if (m := _INTEGER.fullmatch(text)) is None:
        return None
    sign, dec, hexa = m.groups()
    ret = int(dec) if dec is not None else int(hexa, 16)
    return -ret if sign == '-' else ret


def format_int(value: int) -> str:
    return str(int(value))


def parse_float(text: str) -> float | None:
    if _REAL.fullmatch(text) is None:
        return None
    return float(text)


def format_float(value: float) -> str:
    return repr(float(value))


def parse_decimal(text: str) -> Decimal | None:
    if _REAL.fullmatch(text) is None:
        return None
    ret = Decimal(text.strip())
    return ret if ret.is_finite() else None


def format_decimal(value: Decimal | int | float | str) -> str:
    """Currency has four fixed decimals, rounded half to even.

    Raises `ValueError` for text that is no number, for NaN and infinity,
    and for values too large to carry four decimals.
    """
    try:
        value = value if isinstance(value, Decimal) else Decimal(value)
    except InvalidOperation:
        raise ValueError(f'not a currency value: {value!r}') from None
    if not value.is_finite():
        raise ValueError(f'currency must be finite, got {value}')
    try:
        value = value.quantize(_CURRENCY_PLACES, ROUND_HALF_EVEN)
    except InvalidOperation:
        raise ValueError(f'currency out of range: {value}') from None
    return f'{value:f}'


def parse_datetime(text: str) -> datetime | None:
    """`YYYY/MM/DD HH:MM:SS`, by fixed offsets.

    Separators are never checked; a part that isn't a number counts as 0,
    which usually makes the date itself invalid.
    """
    parts = [
        parse_int(text[start:stop]) or 0
        for start, stop in ((0, 4), (5, 7), (8, 10),
                            (11, 13), (14, 16), (17, 19))
    ]
    try:
        return datetime(*parts)
    except ValueError:
        return None


def format_datetime(value: datetime) -> str:
    # not strftime, `%Y` doesn't zero-pad years below 1000 everywhere.
    return (f'{value.year:04d}/{value.month:02d}/{value.day:02d} '
            f'{value.hour:02d}:{value.minute:02d}:{value.second:02d}')


def hex_digit(nibble: int) -> str:
    if not 0 <= nibble < 16:
        raise ValueError(f'nibble out of range: {nibble}')
    return format(nibble, 'X')


def hex_value(char: str) -> int | None:
    if len(char) != 1:
        return None
    char = char.upper()
    if '0' <= char <= '9':
        return ord(char) - ord('0')
    if 'A' <= char <= 'F':
        return ord(char) - ord('A') + 10
    return None


def encode_binary(data: bytes | bytearray | memoryview) -> str:
    """`b'\\xaa\\xbb\\xcc'` -> `'AA,BB,CC'`."""
    return ','.join(hex_digit(i >> 4) + hex_digit(i & 15) for i in data)


def binary_length(text: str) -> int:
    """How many bytes `text` holds: 3 chars a byte, the last one has no comma.
    """
    return (len(text) + 1) // 3


def decode_binary(text: str, count: int) -> bytearray | None:
    """Decode the first `count` bytes of `text`.

    Separators are skipped without looking at them. Returns `None` as soon
    as a digit is not hex, nothing decoded so far is kept.
    """
    count = min(count, binary_length(text))
    ret = bytearray(count)
    for i in range(count):
        hi, lo = hex_value(text[3 * i]), hex_value(text[3 * i + 1])
        if hi is None or lo is None:
            return None
        ret[i] = hi << 4 | lo
    return ret
