"""Source unit lookups for host positions.

The external parser hands over the source text, its file name and the
comments it attached to node start positions. The recognizer only ever asks
two questions of them: which comments lead a byte position, and which line
that position is on.

Positions are UTF-8 byte offsets, matching the spans parsers report.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .ast import Comment

__all__ = ["SourceUnit", "line_offset"]


def line_offset(data: bytes, pos: int) -> int:
    """Get 0-based line number from byte offset.

    Args:
        data: Complete UTF-8 encoded source
        pos: Byte offset in source

    Returns:
        0-based line number

    Example:
        >>> line_offset(b"line1\\nline2\\nline3", 6)
        1

    Note:
        Counts LF characters before the position, so LF and CRLF endings
        both work.
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(data))
    return data.count(b"\n", 0, pos)


@dataclass(frozen=True, slots=True)
class SourceUnit:
    """One host source file as seen by the recognizer.

    Attributes:
        name: File name used in source references (e.g. "src/app.tsx")
        text: Complete source text
        comments: Leading comments keyed by the byte position of the node
            they are attached to
    """

    name: str
    text: str = ""
    comments: Mapping[int, tuple[Comment, ...]] = field(default_factory=dict)
    _data: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Freeze the comment map and cache the encoded source."""
        object.__setattr__(self, "comments", MappingProxyType(dict(self.comments)))
        object.__setattr__(self, "_data", self.text.encode("utf-8"))

    def leading_comments(self, pos: int) -> tuple[Comment, ...]:
        """Comments attached immediately before the node starting at pos."""
        return self.comments.get(pos, ())

    def line(self, pos: int) -> int:
        """1-based line of a byte position."""
        return line_offset(self._data, pos) + 1

    def reference(self, pos: int) -> str:
        """Human-readable "file:line" reference for a byte position."""
        return f"{self.name}:{self.line(pos)}"
