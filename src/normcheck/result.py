from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ValidResult(Generic[T]):
    """
    The three renderings of a successfully validated value.

    Attributes:
        machine:    canonical typed value (Decimal, date, int, minimal string...).
        common:     the most conventional human-readable rendering.
        particular: rendering closest to the original input, but regularized.

    Feeding `common` or `particular` back into the same validator yields the
    same `machine` value.
    """
    machine: T
    common: str
    particular: str

    def __str__(self) -> str:
        return f"m={self.machine}, c={self.common}, p={self.particular}"
