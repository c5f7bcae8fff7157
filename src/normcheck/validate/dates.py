"""
Date validation against a fixed list of layouts.

Layouts are tried in order and the first that parses wins, so "1/5/24" is
January 5 (US order) and "5.1.24" is January 5 (European order). Month names
are English and matched case-insensitively.

Parsing is lenient in the same way for every layout: a two-digit year means
2000-2099, and a day past the end of its month is clamped to the last day
("2/31/2024" -> 2024-02-29).
"""

from __future__ import annotations

import calendar
import re
from datetime import date
from typing import List, Optional

from ..errors import ValidationError
from ..result import ValidResult
from ..text import TextBuffer
from .bounds import verify_date

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTHS)

CENTURY = 2000

_TOKEN = re.compile(r"yyyy|yy|MMMM|MMM|MM|M|dd|d")
_FIELD = {
    "yyyy": r"([0-9]{4})",
    "yy": r"([0-9]{2})",
    "MMMM": r"([A-Za-z]+)",
    "MMM": r"([A-Za-z]+)",
    "MM": r"([0-9]{2})",
    "M": r"([0-9]{1,2})",
    "dd": r"([0-9]{2})",
    "d": r"([0-9]{1,2})",
}
_WHITESPACE_RUN = re.compile(r"\s+")


def _month_number(name: str, names: tuple) -> int:
    for number, candidate in enumerate(names, start=1):
        if candidate.lower() == name.lower():
            return number
    raise ValueError(f"unknown month {name!r}")


class DateFormat:
    """
    A date layout written with the tokens yyyy, yy, MMMM, MMM, MM, M, dd, d.

    Everything else in the pattern is literal text.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._tokens: List[str] = []
        regex = []
        position = 0
        for match in _TOKEN.finditer(pattern):
            regex.append(re.escape(pattern[position:match.start()]))
            regex.append(_FIELD[match.group()])
            self._tokens.append(match.group())
            position = match.end()
        regex.append(re.escape(pattern[position:]))
        self._regex = re.compile("".join(regex), re.IGNORECASE)

    def __repr__(self) -> str:
        return f"DateFormat({self.pattern!r})"

    def parse(self, text: str) -> date:
        """Parse `text` in this layout; raises ValueError when it does not fit."""
        match = self._regex.fullmatch(text)
        if match is None:
            raise ValueError(f"{text!r} does not match {self.pattern!r}")

        year = month = day = 0
        for token, value in zip(self._tokens, match.groups()):
            if token == "yyyy":
                year = int(value)
            elif token == "yy":
                year = CENTURY + int(value)
            elif token == "MMMM":
                month = _month_number(value, MONTHS)
            elif token == "MMM":
                month = _month_number(value, MONTH_ABBREVIATIONS)
            elif token in ("MM", "M"):
                month = int(value)
            else:
                day = int(value)

        if not 1 <= month <= 12 or not 1 <= day <= 31:
            raise ValueError(f"{text!r} is not a calendar date")
        day = min(day, calendar.monthrange(year, month)[1])
        return date(year, month, day)

    def format(self, value: date) -> str:
        def render(match: "re.Match[str]") -> str:
            token = match.group()
            if token == "yyyy":
                return f"{value.year:04d}"
            if token == "yy":
                return f"{value.year % 100:02d}"
            if token == "MMMM":
                return MONTHS[value.month - 1]
            if token == "MMM":
                return MONTH_ABBREVIATIONS[value.month - 1]
            if token == "MM":
                return f"{value.month:02d}"
            if token == "M":
                return str(value.month)
            if token == "dd":
                return f"{value.day:02d}"
            return str(value.day)

        return _TOKEN.sub(render, self.pattern)


ISO_FORMAT = DateFormat("yyyy-MM-dd")

FORMATS = (
    DateFormat("M/d/yy"),
    DateFormat("M/d/yyyy"),
    DateFormat("d.M.yy"),
    DateFormat("d.M.yyyy"),
    ISO_FORMAT,
    DateFormat("yyyy-M-d"),
    DateFormat("yy-M-d"),
    DateFormat("MMM d yy"),
    DateFormat("MMM d yyyy"),
    DateFormat("MMM d, yy"),
    DateFormat("MMM d, yyyy"),
    DateFormat("d MMM yy"),
    DateFormat("d MMM yyyy"),
    DateFormat("d MMM, yy"),
    DateFormat("d MMM, yyyy"),
    DateFormat("MMMM d yy"),
    DateFormat("MMMM d yyyy"),
    DateFormat("MMMM d, yy"),
    DateFormat("MMMM d, yyyy"),
    DateFormat("d MMMM yy"),
    DateFormat("d MMMM yyyy"),
    DateFormat("d MMMM, yy"),
    DateFormat("d MMMM, yyyy"),
)


def validate_date(
    text: Optional[str],
    minimum: Optional[date] = None,
    maximum: Optional[date] = None,
) -> ValidResult[date]:
    """
    Validate a date written in any of the supported layouts.

    Returns:
        machine    -> `datetime.date`
        common     -> ISO 8601 ("2024-01-05")
        particular -> the date rendered in the layout the input matched

    Raises:
        ValidationError: no layout fits, or the date is outside the limits.
    """
    buffer = TextBuffer.ensure_content(text, "date value", remove_whitespace=False)
    candidate = _WHITESPACE_RUN.sub(" ", str(buffer.trim()))

    for layout in FORMATS:
        try:
            value = layout.parse(candidate)
        except ValueError:
            continue
        value = verify_date(value, minimum, maximum)
        return ValidResult(machine=value, common=ISO_FORMAT.format(value), particular=layout.format(value))

    raise ValidationError(f'Given date "{text}" not understood')
