"""
Email address validation and reduction to a bare ``local-part@domain``.

This follows a simplified reading of RFC 5322 (3.2.3, 3.4.1), RFC 5321 and
RFC 3696. Everything optional is removed (display names, comments and all
whitespace), so "John <john.doe(work)@example.com>" becomes
"john.doe@example.com". Domains are not resolved.

Escaped text (``\\x`` or a ``"quoted string"``) is hidden behind private-use
markers while the rest is parsed, then put back verbatim. Escaped characters
therefore bypass the local-part character check.
"""

from __future__ import annotations

import string
from typing import Dict, Optional

from ..errors import ValidationError
from ..result import ValidResult
from ..text import TextBuffer
from ..text import symbols

ESCAPE = "\\"
DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"

PRIVATE_USE_START = "\ue000"
PRIVATE_USE_END = "\uf8ff"
# Markers are handed out downwards from about two thirds up the private-use area.
PRIVATE_USE_TERTIARY = chr((2 * ord(PRIVATE_USE_END) + ord(PRIVATE_USE_START)) // 3)

LOCAL_PART_PUNCTUATION = "#-_~$&'()*+,;=:."

LENGTH_LOCAL_PART = 64
LENGTH_DOMAIN = 253
LENGTH_TOTAL = 254

_KEPT_REGIONS = (("<", ">"), ("[", "]"))


def _is_marker(ch: str) -> bool:
    return PRIVATE_USE_START <= ch <= PRIVATE_USE_END


def _resolve_hex_escapes(buffer: TextBuffer) -> None:
    """Replace ``%XX`` with the character it encodes; ``\\%`` and ``\\\\`` are left alone."""
    i = 0
    while i < len(buffer):
        ch = buffer.char_at(i)
        if ch == ESCAPE and i + 1 < len(buffer) and buffer.char_at(i + 1) in (symbols.PERCENT, ESCAPE):
            i += 2
            continue
        if (
            ch == symbols.PERCENT
            and i + 2 < len(buffer)
            and buffer.char_at(i + 1) in string.hexdigits
            and buffer.char_at(i + 2) in string.hexdigits
        ):
            code = int(buffer.char_at(i + 1) + buffer.char_at(i + 2), 16)
            buffer.set_char_at(i, chr(code)).delete(i + 1, i + 3)
        i += 1


def _closing_quote(buffer: TextBuffer, opening: int) -> int:
    """Index of the quote ending a quoted string: at the end, or before '.' or '@'."""
    for j in range(opening + 1, len(buffer)):
        if buffer.char_at(j) == DOUBLE_QUOTE and (
            j + 1 == len(buffer) or buffer.char_at(j + 1) in (symbols.DOT, symbols.AT)
        ):
            return j
    return -1


def _protect_escapes(buffer: TextBuffer) -> Dict[str, str]:
    """
    Swap each escaped character and quoted string for a private-use marker.

    Returns the marker -> original text map used to restore them.
    """
    restore: Dict[str, str] = {}
    marker = PRIVATE_USE_TERTIARY
    i = 0
    while i < len(buffer):
        ch = buffer.char_at(i)
        if ch == ESCAPE and i + 1 < len(buffer):
            restore[marker] = ESCAPE + buffer.char_at(i + 1)
            buffer.set_char_at(i, marker).delete_char_at(i + 1)
            marker = chr(ord(marker) - 1)
        elif ch == DOUBLE_QUOTE and (i == 0 or buffer.char_at(i - 1) == symbols.DOT) and i + 1 < len(buffer):
            closing = _closing_quote(buffer, i)
            if closing < 0:
                raise ValidationError("Unterminated quoted escape")
            restore[marker] = str(buffer.sub_buffer(i, closing + 1))
            buffer.set_char_at(i, marker).delete(i + 1, closing + 1)
            marker = chr(ord(marker) - 1)
        i += 1
    return restore


def _strip_comments(buffer: TextBuffer) -> None:
    # <...> and [...] enclose the address itself; whatever is outside goes.
    for opening, closing in _KEPT_REGIONS:
        first = buffer.index_of(opening)
        last = buffer.index_of(closing)
        if first < 0 and last < 0:
            continue
        if first < 0 or last < first:
            raise ValidationError(f"{opening} or {closing} present but not matched")
        buffer.delete(last, len(buffer)).delete(0, first + 1)

    # (...) encloses a comment, wherever it appears.
    while True:
        first = buffer.index_of(symbols.PAREN_OPEN)
        last = buffer.index_of(symbols.PAREN_CLOSE)
        if first < 0 and last < 0:
            break
        if first < 0 or last < first:
            raise ValidationError(f"{symbols.PAREN_OPEN} or {symbols.PAREN_CLOSE} present but not matched")
        buffer.delete(first, last + 1)


def _check_local_part(local: TextBuffer) -> None:
    rejected = TextBuffer()
    for ch in local:
        allowed = ch.isalpha() or ch.isdigit() or ch in LOCAL_PART_PUNCTUATION or _is_marker(ch)
        if not allowed and not rejected.contains(ch):
            rejected.append(ch)
    if len(rejected):
        raise ValidationError(f'Character(s) "{rejected}" not permitted in local-part')


def _check_domain(domain: TextBuffer) -> None:
    rejected = TextBuffer()
    last = len(domain) - 1
    for i, ch in enumerate(domain):
        allowed = ch.isalpha() or ch.isdigit() or (0 < i < last and ch in (symbols.DASH, symbols.DOT))
        if not allowed and not rejected.contains(ch):
            rejected.append(ch)
    if len(rejected):
        raise ValidationError(f'Character(s) "{rejected}" not permitted in domain name')


def _check_dots(part: TextBuffer) -> None:
    text = str(part)
    if text.startswith(symbols.DOT):
        raise ValidationError(f"Leading '.' not permitted in \"{text}\"")
    doubled = text.find(symbols.DOT * 2)
    if doubled >= 0:
        raise ValidationError(f"Doubled '.' not permitted in \"{text}\" at character {doubled + 2}")
    if text.endswith(symbols.DOT):
        raise ValidationError(f"Trailing '.' not permitted in \"{text}\"")


def validate_email(text: Optional[str]) -> ValidResult[str]:
    """
    Validate an email address and reduce it to its minimal form.

    Returns:
        A result whose machine, common and particular values are all the bare
        address.

    Raises:
        ValidationError: unmatched brackets or quotes, a missing or repeated
            '@', an empty local-part or domain, disallowed characters, badly
            placed dots, or a part longer than RFC limits.
    """
    buffer = TextBuffer.ensure_content(text, "email address", remove_whitespace=False)

    _resolve_hex_escapes(buffer)
    buffer.replace("\u201c", DOUBLE_QUOTE).replace("\u201d", DOUBLE_QUOTE)
    restore = _protect_escapes(buffer)
    _strip_comments(buffer)
    buffer.edit_whitespace(False)

    # A trailing '@' would otherwise vanish in the split.
    if len(buffer) and buffer.char_at_end() == symbols.AT:
        buffer.append(symbols.SPACE)
    parts = buffer.split(symbols.AT)
    if len(parts) != 2:
        raise ValidationError(f"Missing, or too many, {symbols.AT} symbols")
    local, domain = parts

    if (
        len(local)
        and local.char_at(0) == SINGLE_QUOTE
        and len(domain)
        and domain.char_at_end() == SINGLE_QUOTE
    ):
        local.delete_char_at(0)
        domain.delete_char_at_end()

    if local.is_blank():
        raise ValidationError("No local-part of address present")
    if domain.is_blank():
        raise ValidationError("No domain for address present")

    _check_local_part(local)

    for marker, original in restore.items():
        local.replace(marker, original)
        domain.replace(marker, original)

    _check_domain(domain)
    _check_dots(local)
    _check_dots(domain)
    if not domain.contains(symbols.DOT):
        raise ValidationError(f"Domain must contain at least one {symbols.DOT}")

    if len(local) > LENGTH_LOCAL_PART:
        raise ValidationError(f"Local-part length {len(local)} longer than {LENGTH_LOCAL_PART}")
    if len(domain) > LENGTH_DOMAIN:
        raise ValidationError(f"Domain length {len(domain)} longer than {LENGTH_DOMAIN}")

    address = f"{local}{symbols.AT}{domain}"
    if len(address) > LENGTH_TOTAL:
        raise ValidationError(f"Email address length {len(address)} longer than {LENGTH_TOTAL}")
    return ValidResult(machine=address, common=address, particular=address)
