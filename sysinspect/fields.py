"""
Tokenizing helpers shared by the text grammars.

Every helper is total: malformed input gives None (or an empty result),
never an exception, so a garbled field cannot abort a scan.
"""

from __future__ import annotations

import re
from typing import Optional

_NON_DIGITS = re.compile(r'\D')
_LETTERS = re.compile(r'[a-zA-Z]')
_NON_NUMERIC = re.compile(r'[^0-9.+-]')
_QUOTES = '"\''


def tokenize(text: Optional[str]) -> list[str]:
    """Split on runs of whitespace."""
    if not text:
        return []
    return text.split()


def token(text: Optional[str], index: int) -> Optional[str]:
    """Return the whitespace token at index, or None if there is none."""
    tokens = tokenize(text)
    if -len(tokens) <= index < len(tokens):
        return tokens[index]
    return None


def split_label(text: Optional[str], delimiters: str = ':=') -> tuple[str, Optional[str]]:
    """
    Split 'label: value' or 'label=value' on the first delimiter found.

    Returns:
        (label, value) with both stripped. value is None when the text
        contains none of the delimiters.
    """
    if text is None:
        return '', None

    positions = [text.find(d) for d in delimiters if d in text]
    if not positions:
        return text.strip(), None

    pos = min(positions)
    return text[:pos].strip(), text[pos + 1:].strip()


def value_of(text: Optional[str], delimiters: str = ':=') -> Optional[str]:
    """Return the value part of a 'label: value' line."""
    return split_label(text, delimiters)[1]


def extract_after(text: Optional[str], prefix: str) -> Optional[str]:
    """
    Return the stripped text following the first occurrence of prefix.

    >>> extract_after('Extra: Last beacon: 240ms ago', 'Last beacon:')
    '240ms ago'
    """
    if not text:
        return None
    pos = text.find(prefix)
    if pos < 0:
        return None
    return text[pos + len(prefix):].strip()


def strip_quotes(text: Optional[str]) -> Optional[str]:
    """Remove one pair of surrounding quotes, if present."""
    if text is None:
        return None
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTES:
        return text[1:-1]
    return text


def strip_letters(text: Optional[str]) -> str:
    """Remove ASCII letters, e.g. '-64.00 dBm' -> '-64.00'."""
    if not text:
        return ''
    return _LETTERS.sub('', text).strip()


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse a decimal number, returning None for anything unparseable."""
    if text is None:
        return None
    try:
        return float(text.strip())
    except ValueError:
        return None


def parse_int(text: Optional[str], base: int = 10) -> Optional[int]:
    """Parse an integer, returning None for anything unparseable."""
    if text is None:
        return None
    try:
        return int(text.strip(), base)
    except ValueError:
        return None


def numeric_part(text: Optional[str]) -> Optional[float]:
    """
    Keep only digits, sign and decimal point, then parse.

    >>> numeric_part(' 5.5 Mb/s')
    5.5
    """
    if not text:
        return None
    return parse_number(_NON_NUMERIC.sub('', text))


def digits_only(text: Optional[str]) -> Optional[int]:
    """
    Concatenate every digit in text and parse the result.

    >>> digits_only('channel 6')
    6
    """
    if not text:
        return None
    digits = _NON_DIGITS.sub('', text)
    if not digits:
        return None
    return int(digits)
