"""
Range checks and value verification shared by the ordered validators.

One comparison policy serves integers, floats, decimals and dates:
negative if below the minimum, positive if above the maximum, zero otherwise.
A limit of None means "unbounded"; a maximum below the minimum is ignored.
"""

from __future__ import annotations

import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

from ..errors import ValidationError

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def compare_in_range(value: Any, minimum: Any = None, maximum: Any = None) -> int:
    if minimum is not None and value < minimum:
        return -1
    if maximum is not None and (minimum is None or maximum >= minimum) and value > maximum:
        return 1
    return 0


def round_significant(value: float, digits: int) -> float:
    """Round to `digits` significant digits (half-even at the computed scale)."""
    if digits == 0 or value == 0.0:
        return value
    magnitude = math.ceil(math.log10(abs(value)))
    power = 10.0 ** (digits - magnitude)
    return round(value * power) / power


def verify_integer(value: int, minimum: Optional[int] = None, maximum: Optional[int] = None) -> int:
    comparison = compare_in_range(value, minimum, maximum)
    if comparison > 0:
        raise ValidationError(f'Value "{value}" higher than {maximum}')
    if comparison < 0:
        raise ValidationError(f'Value "{value}" lower than {minimum}')
    return value


def verify_double(
    value: float,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    digits: int = 0,
) -> float:
    """Round `value` to `digits` significant digits (0 = leave as is), then range-check."""
    value = round_significant(value, digits)
    comparison = compare_in_range(value, minimum, maximum)
    if comparison > 0:
        raise ValidationError(f'Value "{value!r}" higher than {maximum}')
    if comparison < 0:
        raise ValidationError(f'Value "{value!r}" lower than {minimum}')
    return value


def decimal_places(value: Decimal) -> int:
    """Number of digits after the decimal point (negative for e.g. ``1E+3``)."""
    exponent = value.as_tuple().exponent
    return -exponent if isinstance(exponent, int) else 0


def verify_decimal(
    value: Decimal,
    minimum: Optional[Decimal] = None,
    maximum: Optional[Decimal] = None,
    decimals: int = 0,
) -> Decimal:
    """
    Check the scale and range of a decimal amount.

    With `decimals` non-zero, values with more decimal places are rejected and
    the rest are padded to exactly `decimals` places (rounding half-up).
    """
    if decimals != 0:
        scale = decimal_places(value)
        if scale > decimals:
            raise ValidationError(f"Decimal digits ({scale}) more than {decimals}")
        try:
            value = value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise ValidationError(f'Value "{value}" has too many digits') from exc
    comparison = compare_in_range(value, minimum, maximum)
    if comparison > 0:
        raise ValidationError(f'Value "{value}" more than {maximum}')
    if comparison < 0:
        raise ValidationError(f'Value "{value}" less than {minimum}')
    return value


def verify_date(value: date, minimum: Optional[date] = None, maximum: Optional[date] = None) -> date:
    comparison = compare_in_range(value, minimum, maximum)
    if comparison == 0:
        return value
    if comparison > 0:
        relation, limit = "after", maximum
    else:
        relation, limit = "before", minimum
    raise ValidationError(f'Date "{value.isoformat()}" {relation} {limit.isoformat()}')
