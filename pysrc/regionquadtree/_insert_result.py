"""InsertResult dataclass for bulk insertion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class InsertResult:
    """
    Result from bulk insertion operations.

    Attributes:
        count: Number of entries inserted.
        rejected: Entries that fell outside the tree bounds, in input order.
    """

    count: int
    rejected: list[Any] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return True if every entry was inserted."""
        return not self.rejected
