"""
A growable, mutable character buffer.

Validators never edit Python strings directly: they copy the raw input into a
`TextBuffer`, cut it down with the bounds-checked primitives below and only
turn it back into a `str` once the value is standardized.

Storage
-------
- A private list of single characters, created with spare room.
- A logical length kept separately from the list's capacity.
- When an edit would overflow, capacity doubles until it fits.

Indices outside ``0..len(buffer)`` raise `IndexError`. That is a programming
error in the caller, never a validation failure.
"""

from __future__ import annotations

import unicodedata
from typing import Iterator, List, Optional, Union

from ..errors import ValidationError

# Spare capacity allocated on construction.
_SPARE = 16

# Control, space-separator and format characters count as whitespace.
_WHITE_CATEGORIES = frozenset({"Cc", "Zs", "Cf"})

Text = Union[str, "TextBuffer"]


def is_white(ch: str) -> bool:
    """True for whitespace, control and (invisible) format characters."""
    return ch.isspace() or unicodedata.category(ch) in _WHITE_CATEGORIES


def _title_char(ch: str) -> str:
    # Multi-character case mappings (e.g. 'ß' -> 'Ss') would change the length.
    mapped = ch.title()
    return mapped if len(mapped) == 1 else ch


def _lower_char(ch: str) -> str:
    mapped = ch.lower()
    return mapped if len(mapped) == 1 else ch


class TextBuffer:
    """Mutable sequence of characters with index-checked editing operations."""

    __slots__ = ("_array", "_length")

    def __init__(self, text: Text = "", start: int = 0, end: Optional[int] = None) -> None:
        source = str(text)
        end = len(source) if end is None else min(end, len(source))
        if start < 0 or start > end:
            raise IndexError(f"start={start}, end={end}")
        self._length = end - start
        self._array: List[str] = list(source[start:end]) + [""] * _SPARE

    # -- Construction helpers -------------------------------------------------------------

    @classmethod
    def ensure_content(cls, text: Optional[Text], what: str, remove_whitespace: bool) -> "TextBuffer":
        """
        Copy `text` into a new buffer, rejecting absent or blank input.

        Args:
            text:              raw input (None is treated as absent).
            what:              description used in the error message.
            remove_whitespace: strip every whitespace character first.

        Raises:
            ValidationError: "No <what> present".
        """
        if text is not None:
            buffer = cls(text)
            if remove_whitespace:
                buffer.edit_whitespace(False)
            if not buffer.is_blank():
                return buffer
        raise ValidationError(f"No {what} present")

    def copy(self) -> "TextBuffer":
        return TextBuffer(self)

    # -- Sequence protocol ----------------------------------------------------------------

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return "".join(self._array[: self._length])

    def __repr__(self) -> str:
        return f"TextBuffer({str(self)!r})"

    def __iter__(self) -> Iterator[str]:
        return iter(self._array[: self._length])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, TextBuffer)):
            return str(self) == str(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    # -- Reading --------------------------------------------------------------------------

    def char_at(self, index: int) -> str:
        if index < 0 or index >= self._length:
            raise IndexError(f"index={index}")
        return self._array[index]

    def char_at_end(self) -> str:
        if self._length == 0:
            raise IndexError("buffer is empty")
        return self._array[self._length - 1]

    def index_of(self, target: str, start: int = 0) -> int:
        """Index of the first occurrence of `target` at or after `start`, else -1."""
        if not target:
            return -1
        return str(self).find(target, start)

    def contains(self, target: str) -> bool:
        return self.index_of(target) >= 0

    def contains_any(self, *chars: str) -> str:
        """Return the first of `chars` present in the buffer, or "" if none is."""
        for ch in chars:
            if self.contains(ch):
                return ch
        return ""

    def sub_buffer(self, start: int, end: int) -> "TextBuffer":
        return TextBuffer(self, start, end)

    def is_blank(self) -> bool:
        return all(is_white(ch) for ch in self)

    # -- Editing --------------------------------------------------------------------------

    def _ensure_capacity(self, needed: int) -> None:
        capacity = len(self._array)
        if self._length + needed <= capacity:
            return
        while self._length + needed > capacity:
            capacity *= 2
        self._array.extend([""] * (capacity - len(self._array)))

    def set_char_at(self, index: int, ch: str) -> "TextBuffer":
        if index < 0 or index >= self._length:
            raise IndexError(f"index={index}")
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        self._array[index] = ch
        return self

    def insert(self, index: int, text: Text) -> "TextBuffer":
        """Insert `text` before position `index` (0..len inclusive)."""
        if index < 0 or index > self._length:
            raise IndexError(f"index={index}")
        chars = list(str(text))
        count = len(chars)
        if count:
            self._ensure_capacity(count)
            self._array[index + count : self._length + count] = self._array[index : self._length]
            self._array[index : index + count] = chars
            self._length += count
        return self

    def append(self, text: Text) -> "TextBuffer":
        return self.insert(self._length, text)

    def delete(self, start: int, end: int) -> "TextBuffer":
        """Remove characters ``start..end-1``; `end` past the length is clipped."""
        end = min(end, self._length)
        if start < 0 or start > end:
            raise IndexError(f"start={start}, end={end}")
        removed = end - start
        self._array[start : self._length - removed] = self._array[end : self._length]
        self._length -= removed
        return self

    def delete_char_at(self, index: int) -> "TextBuffer":
        if index < 0 or index >= self._length:
            raise IndexError(f"index={index}")
        return self.delete(index, index + 1)

    def delete_char_at_end(self) -> "TextBuffer":
        if self._length == 0:
            raise IndexError("buffer is empty")
        self._length -= 1
        return self

    def replace(self, target: str, replacement: str = "") -> "TextBuffer":
        """
        Replace every occurrence of `target`, scanning left to right.

        Replacement text is not rescanned. An empty `replacement` deletes the
        matches; an empty `target` leaves the buffer unchanged.
        """
        if not target:
            return self
        i = self.index_of(target)
        while i >= 0:
            self.delete(i, i + len(target))
            self.insert(i, replacement)
            i = self.index_of(target, i + len(replacement))
        return self

    def trim(self) -> "TextBuffer":
        """Delete whitespace at the start and end of the buffer."""
        while self._length and is_white(self._array[0]):
            self.delete_char_at(0)
        while self._length and is_white(self._array[self._length - 1]):
            self.delete_char_at_end()
        return self

    def edit_whitespace(self, title: bool = False) -> "TextBuffer":
        """
        Remove whitespace, or with `title` collapse it and title-case words.

        In title mode every run of whitespace becomes one space (none at either
        end), letters are lowercased, and the first letter of the buffer plus
        any letter following whitespace, a dash or other punctuation is
        title-cased.
        """
        current_white = title
        make_title = False
        i = 0
        while i != self._length:
            previous_white = current_white
            make_title = make_title or previous_white
            ch = self._array[i]
            current_white = is_white(ch)
            if current_white:
                self.delete_char_at(i)
                continue
            if title:
                if previous_white and i != 0:
                    self.insert(i, " ")
                    i += 1
                self._array[i] = _title_char(ch) if make_title else _lower_char(ch)
                make_title = unicodedata.category(ch) in ("Pd", "Po")
            i += 1
        return self

    def split(self, separator: str) -> List["TextBuffer"]:
        """
        Split around `separator`, consuming it.

        A piece following the last separator is kept only if non-empty, so
        ``"boo:and:"`` gives ``["boo", "and"]``.
        """
        if not separator:
            return [self.copy()]
        pieces: List[TextBuffer] = []
        position = 0
        found = self.index_of(separator)
        while found >= 0:
            pieces.append(self.sub_buffer(position, found))
            position = found + len(separator)
            found = self.index_of(separator, position)
        if position < self._length:
            pieces.append(self.sub_buffer(position, self._length))
        return pieces

    def decorate(self, insertions: str, *places: int) -> "TextBuffer":
        """
        Insert punctuation at positions of the undecorated text.

        Characters of `insertions` are used in turn (cycling when exhausted);
        each goes before the character originally at the matching entry of
        `places`. `places` must be ascending. Insertion stops at the first
        place at or beyond the end of the buffer.

            TextBuffer("123456789").decorate("-", 3, 5)  ->  "123-45-6789"
        """
        if not insertions:
            return self
        following = 0
        for count, place in enumerate(places):
            position = place + count
            if position >= self._length:
                break
            self.insert(position, insertions[following])
            following = (following + 1) % len(insertions)
        return self
