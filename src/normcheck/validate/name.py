from __future__ import annotations

import re
from typing import Optional

from ..errors import ValidationError
from ..result import ValidResult
from ..text import TextBuffer
from ..text import symbols

# Single letters separated by spaces and/or dots: "J R R", "j.r.r.", "J. R."
_ABBREVIATION = re.compile(r"[^\W\d_](?:[ .]+[^\W\d_])*[ .]*")


def validate_name(text: Optional[str], abbreviation: bool = True) -> ValidResult[str]:
    """
    Validate a personal or organization name.

    Whitespace is collapsed and each word title-cased ("  mary-jane  o'neil"
    -> "Mary-Jane O'Neil"). With `abbreviation`, a run of single letters
    becomes dotted initials ("j r r" -> "J.R.R.").
    """
    buffer = TextBuffer.ensure_content(text, "name", remove_whitespace=False).trim()
    if not buffer.char_at(0).isalpha():
        raise ValidationError(f'"{buffer}" does not start like a name')

    buffer.edit_whitespace(title=True)
    name = str(buffer)
    if abbreviation and _ABBREVIATION.fullmatch(name):
        name = symbols.DOT.join(ch for ch in name if ch not in (symbols.SPACE, symbols.DOT)) + symbols.DOT
    return ValidResult(machine=name, common=name, particular=name)
