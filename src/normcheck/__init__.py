"""normcheck: validate loosely typed values and normalize them into machine, common and particular forms."""

from .errors import RangeAuthorityError, ValidationError
from .result import ValidResult
from .validate import (
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

__version__ = "0.1.0"

__all__ = [
    "RangeAuthorityError",
    "ValidationError",
    "ValidResult",
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
    "__version__",
]
