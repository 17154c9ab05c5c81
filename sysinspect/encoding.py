"""
Repair of double-encoded UTF-8 punctuation.

Some wireless drivers report SSIDs with multi-byte characters written out
as literal byte escapes, e.g. 'Joe\\xe2\\x80\\x99s WiFi' instead of
'Joe’s WiFi'. This module substitutes the escaped form for every
code point in the General Punctuation and Superscripts and Subscripts
blocks (U+2000 to U+207F).
"""

from __future__ import annotations

from typing import Optional

# First and last code point covered by the substitution table
FIRST_CODE_POINT = 0x2000
LAST_CODE_POINT = 0x207F


def escape_utf8(char: str) -> str:
    """Render a character as the literal '\\xNN' escapes of its UTF-8 bytes."""
    return ''.join(f"\\x{b:02x}" for b in char.encode('utf-8'))


# (escaped literal, correct character), in code point order
SUBSTITUTIONS: tuple[tuple[str, str], ...] = tuple(
    (escape_utf8(chr(cp)), chr(cp))
    for cp in range(FIRST_CODE_POINT, LAST_CODE_POINT + 1)
)


def correct_encoding(text: Optional[str]) -> Optional[str]:
    """
    Replace known escaped byte sequences with the characters they encode.

    Literal matching only; text without a backslash is returned as is.
    Applying the correction twice gives the same result as applying it once.

    Args:
        text: Text as reported by the driver, or None.

    Returns:
        The corrected text (None stays None).
    """
    if not text or '\\x' not in text:
        return text

    for escaped, char in SUBSTITUTIONS:
        if escaped in text:
            text = text.replace(escaped, char)
    return text
