from __future__ import annotations

from typing import Optional

from ..errors import ValidationError
from ..result import ValidResult
from ..text import TextBuffer, edit_number
from ..text import symbols

SSN_FIRST_FIELD = 3
SSN_SECOND_FIELD = 5
SSN_TOTAL_LENGTH = 9


def validate_ssn(text: Optional[str]) -> ValidResult[str]:
    """
    Validate a US Social Security Number: nine digits, dashes/spaces ignored.

    `machine` is the bare digits and `common` the dashed "123-45-6789" form;
    `particular` is the dashed form only if the input contained a dash.
    """
    buffer = TextBuffer.ensure_content(text, "Social Security number", remove_whitespace=True)
    edit = edit_number(buffer, symbols.DIGIT_GROUP_EXTRAS, signed=False, floating=False)

    digits = str(edit.number)
    if len(digits) > SSN_TOTAL_LENGTH:
        raise ValidationError(f'SSN "{text}" contains too many digits')
    if len(digits) < SSN_TOTAL_LENGTH:
        raise ValidationError(f'SSN "{text}" contains too few digits')

    common = str(edit.number.copy().decorate(symbols.DASH, SSN_FIRST_FIELD, SSN_SECOND_FIELD))
    particular = common if edit.extras.contains(symbols.DASH) else digits
    return ValidResult(machine=digits, common=common, particular=particular)
