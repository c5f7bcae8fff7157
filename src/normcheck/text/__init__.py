"""Character-level building blocks shared by all validators."""

from .buffer import TextBuffer, is_white
from .numbers import NumberEdit, edit_number

__all__ = ["TextBuffer", "is_white", "NumberEdit", "edit_number"]
