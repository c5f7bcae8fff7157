"""Validators: each takes raw text and returns a `ValidResult` or raises `ValidationError`."""

from .bounds import compare_in_range, verify_date, verify_decimal, verify_double, verify_integer
from .credit_card import luhn_ok, validate_credit_card
from .dates import validate_date
from .email import validate_email
from .isbn import validate_isbn
from .name import validate_name
from .numeric import validate_currency, validate_double, validate_integer, validate_percentage
from .phone import validate_phone
from .ssn import validate_ssn

__all__ = [
    "compare_in_range",
    "verify_date",
    "verify_decimal",
    "verify_double",
    "verify_integer",
    "luhn_ok",
    "validate_credit_card",
    "validate_currency",
    "validate_date",
    "validate_double",
    "validate_email",
    "validate_integer",
    "validate_isbn",
    "validate_name",
    "validate_percentage",
    "validate_phone",
    "validate_ssn",
]
