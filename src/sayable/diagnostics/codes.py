"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Recognition diagnostics (local, per-branch failures)
        2000-2999: Serialization and generation errors
        3000-3999: Catalogue diagnostics
        4000-4999: Validation diagnostics (CLDR-aware choice checks)
    """

    # Recognition (1000-1999)
    UNSUPPORTED_BRANCH_VALUE = 1001
    DUPLICATE_BRANCH_KEY = 1002
    UNSUPPORTED_HOST_NODE = 1003

    # Serialization / generation (2000-2999)
    UNKNOWN_MESSAGE_NODE = 2001
    UNSUPPORTED_ACCESSOR = 2002
    MAX_DEPTH_EXCEEDED = 2003

    # Catalogue (3000-3999)
    MESSAGE_ID_COLLISION = 3001

    # Validation (4000-4999)
    UNKNOWN_PLURAL_CATEGORY = 4001
    MISSING_OTHER_BRANCH = 4002
    UNKNOWN_LOCALE = 4003
    EMPTY_CHOICE = 4004


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        reference: Source location as "file:line" (None when unknown)
        hint: Suggestion for fixing the problem
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    reference: str | None = None
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            warning[UNSUPPORTED_BRANCH_VALUE]: Branch 'one' has no value
              --> src/app.tsx:12
              = help: Give the attribute a string or an expression value

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.reference is not None:
            lines.append(f"  --> {_escape(self.reference)}")
        if self.hint is not None:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    """Escape control characters so diagnostics stay on their own lines."""
    return text.replace("\r", "\\r").replace("\n", "\\n").replace("\x1f", "\\x1f")
