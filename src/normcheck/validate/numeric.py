"""
Validators for integers, floating values, currency amounts and percentages.

All four share the same shape:

  1) copy the input into a `TextBuffer`, dropping whitespace
  2) `edit_number` -> numeric token + cosmetic characters (grouping, underscores)
  3) parse the token, range-check (and round) it
  4) rebuild `common` from scratch and `particular` from the cosmetics seen

Grouping is always the en-US comma; an input written with underscores gets
underscores back in its `particular` form.
"""

from __future__ import annotations

import math
import unicodedata
from decimal import Decimal, InvalidOperation
from typing import Optional

from ..errors import ValidationError
from ..result import ValidResult
from ..text import TextBuffer, edit_number
from ..text import symbols
from .bounds import INT_MAX, INT_MIN, verify_decimal, verify_double, verify_integer

# Percentages smaller than this (as a fraction) are taken as zero.
MINIMUM_PERCENTAGE_VALUE = 1.0e-6
PERCENTAGE_DEFAULT_DIGITS = 2
PERCENTAGE_MULTIPLIER = 100.0


def _grouping_style(grouped: str, extras: TextBuffer) -> str:
    """Swap comma grouping for underscores when the input used underscores."""
    if extras.contains(symbols.UNDERSCORE):
        return grouped.replace(symbols.GROUPING, symbols.UNDERSCORE)
    return grouped


def _was_grouped(extras: TextBuffer) -> bool:
    return extras.contains(symbols.GROUPING) or extras.contains(symbols.UNDERSCORE)


def validate_integer(
    text: Optional[str],
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> ValidResult[int]:
    """
    Validate a 32-bit signed integer.

    `common` is grouped by thousands ("1,234"); `particular` is the same but
    uses underscores when the input did ("1_234").
    """
    buffer = TextBuffer.ensure_content(text, "integer value", remove_whitespace=True)
    edit = edit_number(buffer, symbols.NUMBER_EXTRAS, signed=True, floating=False)
    try:
        value = int(str(edit.number))
    except ValueError as exc:
        raise ValidationError(f'Number "{text}" not understood') from exc
    if not INT_MIN <= value <= INT_MAX:
        raise ValidationError(f'Number "{text}" outside the 32-bit integer range')

    value = verify_integer(value, minimum, maximum)
    common = f"{value:,}"
    return ValidResult(machine=value, common=common, particular=_grouping_style(common, edit.extras))


def validate_double(
    text: Optional[str],
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    digits: int = 0,
) -> ValidResult[float]:
    """
    Validate a floating point value, optionally rounded to `digits` significant digits.

    `common` is the shortest string that round-trips (``repr``); `particular`
    restores thousands grouping if the input had any.
    """
    buffer = TextBuffer.ensure_content(text, "double value", remove_whitespace=True)
    edit = edit_number(buffer, symbols.NUMBER_EXTRAS, signed=True, floating=True)
    try:
        value = float(str(edit.number))
    except ValueError as exc:
        raise ValidationError(f'Number "{text}" not understood') from exc
    if not math.isfinite(value):
        raise ValidationError(f'Number "{text}" out of range')

    value = verify_double(value, minimum, maximum, digits)
    common = repr(value)
    particular = _grouping_style(format(value, ","), edit.extras) if _was_grouped(edit.extras) else common
    return ValidResult(machine=value, common=common, particular=particular)


def validate_currency(
    text: Optional[str],
    minimum: Optional[Decimal] = None,
    maximum: Optional[Decimal] = None,
    decimals: int = 0,
) -> ValidResult[Decimal]:
    """
    Validate a currency amount.

    The input may carry one currency symbol before the digits, grouping
    characters, a sign, or parentheses for a negative amount.

    Args:
        text:     raw input.
        minimum:  smallest acceptable amount, or None.
        maximum:  largest acceptable amount, or None.
        decimals: required decimal places; inputs with more are rejected and
                  shorter ones are padded. 0 leaves the scale unconstrained.

    Returns:
        machine    -> Decimal at the requested scale
        common     -> "$1,234.50", or "($1,234.50)" when negative
        particular -> same value keeping the input's symbol, grouping and
                      negative style
    """
    buffer = TextBuffer.ensure_content(text, "currency", remove_whitespace=True)

    # The last position is not searched: a symbol there would leave no digits.
    currency_symbol = symbols.CURRENCY_DEFAULT
    symbol_present = False
    for i in range(len(buffer) - 1):
        category = unicodedata.category(buffer.char_at(i))
        if category == "Sc":
            currency_symbol = buffer.char_at(i)
            symbol_present = True
            buffer.delete_char_at(i)
            break
        if category == "Nd":
            break

    negative_parens = (
        len(buffer) > 0
        and buffer.char_at(0) == symbols.PAREN_OPEN
        and buffer.char_at_end() == symbols.PAREN_CLOSE
    )
    if negative_parens:
        buffer.delete_char_at_end().set_char_at(0, symbols.MINUS)

    edit = edit_number(buffer, symbols.NUMBER_EXTRAS, signed=True, floating=True)
    try:
        amount = Decimal(str(edit.number))
    except InvalidOperation as exc:
        raise ValidationError(f'Amount "{text}" not understood') from exc

    amount = verify_decimal(amount, minimum, maximum, decimals)

    negative = amount < 0
    magnitude = abs(amount)
    grouped = format(magnitude, ",f")

    common = f"{currency_symbol}{grouped}"
    if negative:
        common = f"({common})"

    particular = _grouping_style(grouped, edit.extras) if _was_grouped(edit.extras) else format(magnitude, "f")
    if symbol_present:
        particular = currency_symbol + particular
    if negative:
        particular = f"({particular})" if negative_parens else symbols.MINUS + particular
    return ValidResult(machine=amount, common=common, particular=particular)


def validate_percentage(
    text: Optional[str],
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    digits: int = 0,
) -> ValidResult[float]:
    """
    Validate a percentage, returned as a fraction ("12%" -> 0.12).

    A trailing '%' divides the value by 100; without it the input is already
    a fraction. The value is rounded to `digits` significant digits (2 when
    `digits` is 0) and the limits apply to the fraction.

    `common` always carries a percent sign; `particular` equals `common` only
    when the input had one, otherwise it is the bare fraction.

    `common` is printed with ``%g`` at the rounding precision, so a percentage
    needing more integer digits than that switches to exponent form: with the
    default two digits "1200%" renders as "1.2e+03%". Such text validates back
    to the same fraction.
    """
    buffer = TextBuffer.ensure_content(text, "percentage value", remove_whitespace=True)
    percent_present = buffer.char_at_end() == symbols.PERCENT
    if percent_present:
        buffer.delete_char_at_end()

    edit = edit_number(buffer, symbols.NUMBER_EXTRAS, signed=True, floating=True)
    try:
        value = float(str(edit.number))
    except ValueError as exc:
        raise ValidationError(f'Percentage "{text}" not understood') from exc
    if not math.isfinite(value):
        raise ValidationError(f'Percentage "{text}" out of range')

    if percent_present:
        value /= PERCENTAGE_MULTIPLIER
    if abs(value) < MINIMUM_PERCENTAGE_VALUE:
        value = 0.0

    significant = digits or PERCENTAGE_DEFAULT_DIGITS
    value = verify_double(value, minimum, maximum, significant)

    common = "%.*g%s" % (significant, value * PERCENTAGE_MULTIPLIER, symbols.PERCENT)
    particular = common if percent_present else repr(value)
    return ValidResult(machine=value, common=common, particular=particular)
