"""Feeding `common` or `particular` back into a validator yields the same machine value."""

import pytest

from normcheck.validate import (
    validate_credit_card,
    validate_currency,
    validate_date,
    validate_double,
    validate_email,
    validate_integer,
    validate_isbn,
    validate_name,
    validate_percentage,
    validate_phone,
    validate_ssn,
)


def _phone(text):
    return validate_phone(text, locale="US")


CASES = [
    (validate_integer, "1_234"),
    (validate_integer, "-1,234,567"),
    (validate_double, "1,234.5"),
    (validate_double, "6.02e23"),
    (validate_currency, "(€1,234.50)"),
    (validate_currency, "-5"),
    (validate_percentage, "12.5%"),
    (validate_percentage, "0.5"),
    (validate_date, "Jan 5, 2024"),
    (validate_date, "5.1.24"),
    (validate_name, "j r r"),
    (validate_name, "mary-jane o'neil"),
    (validate_email, "John <john.doe@example.com>"),
    (validate_email, '"john doe"@example.com'),
    (_phone, "(212) 555-0100"),
    (_phone, "+1 212.555.0100"),
    (validate_ssn, "123 45 6789"),
    (validate_credit_card, "4111 1111 1111 1111"),
    (validate_isbn, "080442957X"),
    (validate_isbn, "978-0-306-40615-7"),
]


@pytest.mark.parametrize("validate, raw", CASES)
def test_common_and_particular_revalidate(validate, raw):
    first = validate(raw)
    assert validate(first.common).machine == first.machine
    assert validate(first.particular).machine == first.machine


def test_str_shows_all_three_forms():
    assert str(validate_ssn("123456789")) == "m=123456789, c=123-45-6789, p=123456789"
