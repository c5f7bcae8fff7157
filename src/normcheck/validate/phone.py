"""
Telephone number validation by numbering plan.

The region is taken from a locale name ("US", "en_US", "en-CA") or, when
none is given, from the process locale. Each region belongs to one
`NumberingPlan`; only the North American Numbering Plan is implemented.

Results:
  machine    -> E.164 ("+12125550100")
  common     -> "+1(212)555-0100"
  particular -> the input's own punctuation style, regularized
                ("(212) 555-0100", "212.555.0100", "+1 212 555 0100")
"""

from __future__ import annotations

import locale as _locale
import logging
from typing import FrozenSet, Optional, Protocol, Tuple

from ..errors import ValidationError
from ..result import ValidResult
from ..text import TextBuffer, edit_number
from ..text import symbols

logger = logging.getLogger(__name__)

# UN M.49 code for Northern America; used when the process locale names no region.
DEFAULT_REGION = "021"


class NumberingPlan(Protocol):
    """A national numbering plan: which regions use it and how to standardize its numbers."""

    regions: FrozenSet[str]

    def standardize(self, buffer: TextBuffer, country_flag: bool, country_code_required: bool) -> ValidResult[str]:
        """
        Standardize `buffer` (trimmed, without the leading '+').

        `country_flag` is True when the input began with '+', in which case
        the country code must follow.
        """
        ...


class NorthAmericanPlan:
    """NANP: country code 1, a 3-digit area code, 3-digit office code and 4-digit line."""

    country_code = "1"
    digits = 10
    regions: FrozenSet[str] = frozenset({
        "AS", "AI", "AG", "BS", "BB", "BM", "VG", "CA", "KY", "DM", "DO", "GD",
        "GU", "JM", "MS", "MP", "PR", "KN", "WL", "VC", "WV", "SX", "MF", "TT",
        "TC", "US", "VI", DEFAULT_REGION,
    })
    number_extras = symbols.PAREN_OPEN + symbols.PAREN_CLOSE + symbols.DASH + symbols.VIRGULE + symbols.DOT + symbols.SPACE

    def standardize(self, buffer: TextBuffer, country_flag: bool, country_code_required: bool) -> ValidResult[str]:
        if country_flag:
            if not len(buffer) or buffer.char_at(0) != self.country_code:
                raise ValidationError("Country code not found")
            buffer.delete_char_at(0)
            country_code_required = True

        edit = edit_number(buffer, self.number_extras, signed=False, floating=False)
        number, extras = edit.number, edit.extras
        if len(number) != self.digits:
            raise ValidationError(f"{len(number)} digit(s) given but {self.digits} needed")

        area = str(number.sub_buffer(0, 3))
        if extras.contains_any(symbols.PAREN_OPEN, symbols.PAREN_CLOSE):
            area = f"{symbols.PAREN_OPEN}{area}{symbols.PAREN_CLOSE}"
            area_term = extras.contains_any(symbols.SPACE)
        else:
            area_term = extras.contains_any(symbols.VIRGULE, symbols.DASH, symbols.DOT, symbols.SPACE)
        office = str(number.sub_buffer(3, 6))
        office_term = extras.contains_any(symbols.DASH, symbols.DOT, symbols.SPACE)
        line = str(number.sub_buffer(6, self.digits))

        machine = f"{symbols.PLUS}{self.country_code}{number}"
        country = ""
        if country_code_required:
            country = symbols.PLUS + self.country_code + extras.contains_any(symbols.SPACE)
        particular = f"{country}{area}{area_term}{office}{office_term}{line}"

        common_places = (2, 5, 8)
        common = str(TextBuffer(machine).decorate(
            symbols.PAREN_OPEN + symbols.PAREN_CLOSE + symbols.DASH, *common_places,
        ))
        return ValidResult(machine=machine, common=common, particular=particular)


PLANS: Tuple[NumberingPlan, ...] = (NorthAmericanPlan(),)


def region_of(locale_name: str) -> str:
    """
    Region part of a locale name: "en_US.UTF-8" -> "US", "en-CA" -> "CA", "US" -> "US".

    A bare language ("en") or the "C" locale has no region and gives "".
    """
    name = locale_name.split(".")[0].split("@")[0].replace("-", "_")
    parts = name.split("_")
    if len(parts) > 1:
        return parts[1].upper()
    token = parts[0]
    if (len(token) == 2 and token.isalpha() and token.isupper()) or (len(token) == 3 and token.isdigit()):
        return token
    return ""


def _default_region() -> str:
    name = _locale.getlocale()[0]
    region = region_of(name) if name else ""
    if not region:
        logger.debug("No region in process locale %r; using %s", name, DEFAULT_REGION)
        return DEFAULT_REGION
    return region


def plan_for(region: str) -> Optional[NumberingPlan]:
    for plan in PLANS:
        if region in plan.regions:
            return plan
    return None


def validate_phone(
    text: Optional[str],
    country_code_required: bool = False,
    locale: Optional[str] = None,
) -> ValidResult[str]:
    """
    Validate a telephone number in the numbering plan of `locale`.

    Args:
        text:                  raw input, e.g. "(212) 555-0100" or "+1 212 555 0100".
        country_code_required: include "+1" in `particular` even when the
                               input had no country code.
        locale:                locale or region name; None uses the process locale.

    Raises:
        ValidationError: wrong digit count, a '+' not followed by the plan's
            country code, or a locale whose region has no numbering plan.
    """
    buffer = TextBuffer.ensure_content(text, "telephone number", remove_whitespace=False).trim()

    country_flag = buffer.char_at(0) == symbols.PLUS
    if country_flag:
        buffer.delete_char_at(0)

    region = _default_region() if locale is None else region_of(locale)
    plan = plan_for(region)
    if plan is None:
        raise ValidationError(f"Locale {locale if locale is not None else region} not implemented")
    return plan.standardize(buffer, country_flag, country_code_required)
