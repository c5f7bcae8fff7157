"""
ISBN-10 / ISBN-13 validation and conversion.

Steps:
  1) strip dashes and spaces, set the final check character aside
  2) the remaining body must be 9 (ISBN-10) or 12 (ISBN-13) digits
  3) look the 13-digit form up in the registration-group ranges
     (unassigned prefixes are rejected; the matching rule tells where the
     hyphens go)
  4) verify the check character, then convert to the requested kind

Looking up the ranges may download the agency document on first use; see
`normcheck.isbn_ranges`. Failures there raise `RangeAuthorityError`, which is
distinct from the `ValidationError`s raised for a malformed ISBN.
"""

from __future__ import annotations

from typing import Optional

from ..errors import ValidationError
from ..isbn_ranges import RangeAuthority, default_authority
from ..result import ValidResult
from ..text import TextBuffer, edit_number
from ..text import symbols

ISBN10 = 10
ISBN13 = 13
BOOKLAND = "978"
ISBN10_CHECK_CHARACTERS = "0123456789X"


def isbn10_check(body: str) -> str:
    """Check character for the first nine digits of an ISBN-10."""
    total = sum(int(d) * weight for weight, d in enumerate(body[: ISBN10 - 1], start=1))
    return ISBN10_CHECK_CHARACTERS[total % 11]


def isbn13_check(body: str) -> str:
    """Check digit for the first twelve digits of an ISBN-13 (weights 1, 3, 1, 3...)."""
    total = sum(int(d) * (3 if i % 2 else 1) for i, d in enumerate(body[: ISBN13 - 1]))
    return str((10 - total % 10) % 10)


def validate_isbn(
    text: Optional[str],
    kind: int = 0,
    authority: Optional[RangeAuthority] = None,
) -> ValidResult[str]:
    """
    Validate an ISBN and optionally convert it between the 10 and 13 forms.

    Args:
        text:      raw input, e.g. "0-306-40615-2" or "9780306406157".
        kind:      10 or 13 for the output form, 0 to keep the input's form.
        authority: range source; defaults to the process-wide authority.

    Returns:
        machine    -> digits and check character ("9780306406157")
        common     -> hyphenated at the group/registrant boundaries and before
                      the check character ("978-0-306-40615-7")
        particular -> `common` if the input was hyphenated, else `machine`

    Raises:
        ValidationError: malformed, unassigned or wrong check character.
        RangeAuthorityError: the range document could not be obtained.
    """
    buffer = TextBuffer.ensure_content(text, "ISBN", remove_whitespace=True)
    if kind not in (0, ISBN10, ISBN13):
        raise ValidationError(f"ISBN kind must be {ISBN13} or {ISBN10}")

    check = buffer.char_at_end().upper()
    buffer.delete_char_at_end()
    edit = edit_number(buffer, symbols.DIGIT_GROUP_EXTRAS, signed=False, floating=False)
    body = str(edit.number)
    if len(body) not in (ISBN10 - 1, ISBN13 - 1):
        raise ValidationError(f'Given ISBN "{text}" not of permissible length')
    kind = kind or len(body) + 1
    ean_body = BOOKLAND + body if len(body) == ISBN10 - 1 else body

    found = (authority or default_authority()).match(ean_body)
    if found is None:
        raise ValidationError(f'ISBN "{text}" contains invalid sequence')

    expected = isbn10_check(body) if len(body) == ISBN10 - 1 else isbn13_check(body)
    if check != expected:
        raise ValidationError(f'ISBN "{text}" incorrect sum check')

    if kind == ISBN13 and len(body) == ISBN10 - 1:
        body = ean_body
        check = isbn13_check(body)
    elif kind == ISBN10 and len(body) == ISBN13 - 1:
        if not body.startswith(BOOKLAND):
            raise ValidationError(f'ISBN "{text}" has no ISBN-10 form')
        body = body[len(BOOKLAND):]
        check = isbn10_check(body)

    machine = body + check
    group, rule = found.group, found.rule
    registrant = len(group.leader) + rule.length
    if kind == ISBN13:
        places = (len(group.ean), len(group.ean) + len(group.leader), len(group.ean) + registrant, len(machine) - 1)
    else:
        places = (len(group.leader), registrant, len(machine) - 1)
    common = str(TextBuffer(machine).decorate(symbols.DASH, *places))

    particular = common if len(edit.extras) else machine
    return ValidResult(machine=machine, common=common, particular=particular)
