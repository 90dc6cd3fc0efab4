"""Sequential fallback identifiers for unnamed message placeholders.

Sub-expressions without a natural name (`${user.name}`, `<b>...</b>`) are
keyed by a counter. The counter is scoped to one top-level recognition
attempt so a message's generated ids never depend on surrounding code.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["Checkpoint", "IdentifierAllocator"]


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Opaque allocator position captured before a speculative attempt."""

    value: int


@dataclass(slots=True)
class IdentifierAllocator:
    """Monotonic decimal-string id generator with rollback.

    Example:
        >>> ids = IdentifierAllocator()
        >>> ids.next(), ids.next()
        ('0', '1')
        >>> ids.back()
        >>> ids.next()
        '1'
    """

    current: int = field(default=0, init=False)

    def next(self) -> str:
        """Return the current counter as a string, then increment it."""
        value = self.current
        self.current += 1
        return str(value)

    def back(self) -> None:
        """Undo one next() call. Saturates at zero."""
        if self.current > 0:
            self.current -= 1

    def reset(self) -> None:
        """Zero the counter (start of a top-level recognition attempt)."""
        self.current = 0

    def checkpoint(self) -> Checkpoint:
        """Capture the counter before a speculative nested attempt."""
        return Checkpoint(self.current)

    def restore(self, checkpoint: Checkpoint) -> None:
        """Roll the counter back to a checkpoint after a failed attempt."""
        self.current = checkpoint.value
