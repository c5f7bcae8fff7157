from datetime import date
from decimal import Decimal

import pytest

from normcheck.errors import ValidationError
from normcheck.validate.bounds import (
    compare_in_range,
    decimal_places,
    round_significant,
    verify_date,
    verify_decimal,
)


@pytest.mark.parametrize(
    "value, minimum, maximum, expected",
    [
        (5, None, None, 0),
        (5, 6, None, -1),
        (5, None, 4, 1),
        (5, 1, 10, 0),
        (50, 10, 5, 0),  # maximum below minimum is ignored
    ],
)
def test_compare_in_range(value, minimum, maximum, expected):
    assert compare_in_range(value, minimum, maximum) == expected


def test_round_significant():
    assert round_significant(0.0, 3) == 0.0
    assert round_significant(123.456, 0) == 123.456
    assert round_significant(123.456, 2) == pytest.approx(120.0)
    assert round_significant(0.012345, 2) == pytest.approx(0.012)


def test_decimal_places():
    assert decimal_places(Decimal("1.250")) == 3
    assert decimal_places(Decimal("12")) == 0


def test_verify_decimal_rounds_to_scale():
    assert str(verify_decimal(Decimal("1.5"), decimals=2)) == "1.50"


def test_verify_date_messages():
    with pytest.raises(ValidationError, match='Date "2024-03-01" after 2024-02-01'):
        verify_date(date(2024, 3, 1), maximum=date(2024, 2, 1))
    with pytest.raises(ValidationError, match='Date "2024-01-01" before 2024-02-01'):
        verify_date(date(2024, 1, 1), minimum=date(2024, 2, 1))
    assert verify_date(date(2024, 2, 1), date(2024, 2, 1), date(2024, 2, 1)) == date(2024, 2, 1)
