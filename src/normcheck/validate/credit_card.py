"""
Credit card number validation with the Luhn checksum.

Luhn ("mod 10") catches every single-digit error and most adjacent
transpositions.
"""

from __future__ import annotations

from typing import Optional

from ..errors import ValidationError
from ..result import ValidResult
from ..text import TextBuffer, edit_number
from ..text import symbols

CREDIT_CARD_MINIMUM_LENGTH = 7
CREDIT_CARD_MODULUS = 10
CREDIT_CARD_GROUP = 4


def luhn_ok(digits: str) -> bool:
    """
    Return True if the digit string passes the Luhn checksum.

    Digits are scanned from the right; every second one is doubled and, when
    the product exceeds 9, reduced by 9. The total must be divisible by 10.
    """
    total = 0
    for i, ch in enumerate(reversed(digits)):
        d = int(ch)
        if i % 2 == 1:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return total % CREDIT_CARD_MODULUS == 0


def validate_credit_card(text: Optional[str]) -> ValidResult[str]:
    """
    Validate a credit card number; dashes and spaces are ignored.

    Returns:
        machine, common -> the bare digits
        particular      -> digits grouped by four with the dash (preferred) or
                           space used in the input, else the bare digits
    """
    buffer = TextBuffer.ensure_content(text, "credit card number", remove_whitespace=False)
    edit = edit_number(buffer, symbols.DIGIT_GROUP_EXTRAS, signed=False, floating=False)

    digits = str(edit.number)
    if len(digits) < CREDIT_CARD_MINIMUM_LENGTH:
        raise ValidationError(f'Credit card number "{text}" has insufficient digits')
    if not luhn_ok(digits):
        raise ValidationError(f'Credit card number "{text}" is incorrect')

    particular = digits
    delimiter = edit.extras.contains_any(symbols.DASH, symbols.SPACE)
    if delimiter:
        places = range(CREDIT_CARD_GROUP, len(digits), CREDIT_CARD_GROUP)
        particular = str(edit.number.copy().decorate(delimiter, *places))
    return ValidResult(machine=digits, common=digits, particular=particular)
