"""
Error types raised by the validators.

Every rejection of user input is a `ValidationError` with a message that can be
shown to the person who typed the value. When a lower-level failure caused the
rejection (a numeric parse, a network download) it is chained with
``raise ... from exc`` so callers can still inspect `__cause__`.

Programmer errors (out-of-range buffer indices and the like) are *not*
validation errors; they surface as the builtin `IndexError` / `TypeError`.
"""

from __future__ import annotations


class ValidationError(Exception):
    """Input text could not be validated or standardized."""

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""


class RangeAuthorityError(ValidationError):
    """ISBN range reference data could not be downloaded or understood."""
