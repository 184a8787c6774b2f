"""Identifier allocation for warranty records."""

from __future__ import annotations


class IdentifierAllocator:
    """Hands out 1, 2, 3, ... with no gaps and no reuse."""

    def __init__(self) -> None:
        self._highest = 0

    @property
    def highest(self) -> int:
        """Highest id allocated so far (0 before the first allocation)."""
        return self._highest

    def peek(self) -> int:
        """The id the next ``allocate()`` call will return."""
        return self._highest + 1

    def allocate(self) -> int:
        self._highest += 1
        return self._highest
