"""
Extraction of numeric tokens from loosely formatted text.

`edit_number` keeps the characters that can form a number (digits, and
optionally sign, decimal separator and exponent marker), sets aside tolerated
cosmetic characters such as grouping separators, and rejects everything else.
The cosmetic characters are returned so validators can rebuild a display
format that looks like what the user typed.
"""

from __future__ import annotations

import unicodedata
from typing import NamedTuple

from ..errors import ValidationError
from . import symbols
from .buffer import TextBuffer, is_white

# Placeholder for the exponent marker while scanning (never a digit or sign).
_EXPONENT_MARK = "\uffff"


class NumberEdit(NamedTuple):
    """Result of `edit_number`."""
    number: TextBuffer  # numeral characters, original order
    extras: TextBuffer  # cosmetic characters encountered, original order


def edit_number(buffer: TextBuffer, extras: str, signed: bool, floating: bool) -> NumberEdit:
    """
    Split `buffer` into its numeric token and the cosmetic characters around it.

    Args:
        buffer:   the input; it is copied, never modified.
        extras:   tolerated cosmetic characters (a space stands for any whitespace).
        signed:   keep '+' and '-'.
        floating: keep the decimal separator and the exponent marker ('e'/'E').

    Returns:
        NumberEdit(number, extras).

    Raises:
        ValidationError: listing every offending character once.
    """
    work = buffer.copy().trim()
    if floating:
        work.replace(symbols.EXPONENT.lower(), _EXPONENT_MARK)
        work.replace(symbols.EXPONENT.upper(), _EXPONENT_MARK)

    found_extras = TextBuffer()
    errors = TextBuffer()
    i = 0
    while i != len(work):
        ch = work.char_at(i)
        if ch.isdecimal():
            # Digits from any script are stored as their ASCII equivalent.
            work.set_char_at(i, str(unicodedata.decimal(ch)))
            i += 1
            continue
        if (
            (floating and ch in (symbols.DECIMAL, _EXPONENT_MARK))
            or (signed and ch in (symbols.PLUS, symbols.MINUS))
        ):
            i += 1
            continue
        work.delete_char_at(i)
        if ch in extras:
            found_extras.append(ch)
        elif symbols.SPACE in extras and is_white(ch):
            found_extras.append(symbols.SPACE)
        elif not errors.contains(ch):
            errors.append(ch)

    if floating:
        work.replace(_EXPONENT_MARK, symbols.EXPONENT)
    if len(errors):
        raise ValidationError(f'Character(s) "{errors}" may not appear within "{buffer}"')
    return NumberEdit(work, found_extras)
