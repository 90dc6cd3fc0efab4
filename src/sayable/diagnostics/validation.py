"""Unified validation result for extracted message validation.

Consolidates feedback from the choice validator:
- Errors: Messages translators cannot localize correctly (unknown plural categories)
- Warnings: Suspicious but renderable messages (missing `other` branch)

Python 3.13+.
"""

from dataclasses import dataclass

from .codes import Diagnostic

__all__ = ["ValidationResult"]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one or more messages.

    Attributes:
        errors: Diagnostics with severity "error"
        warnings: Diagnostics with severity "warning"
    """

    errors: tuple[Diagnostic, ...]
    warnings: tuple[Diagnostic, ...]

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no errors).

        Warnings do not affect validity.

        Returns:
            True if no errors were reported
        """
        return not self.errors

    @property
    def error_count(self) -> int:
        """Get number of errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Get number of warnings."""
        return len(self.warnings)

    @staticmethod
    def valid() -> "ValidationResult":
        """Create a valid result with no errors or warnings."""
        return ValidationResult(errors=(), warnings=())

    @staticmethod
    def from_diagnostics(diagnostics: tuple[Diagnostic, ...]) -> "ValidationResult":
        """Split diagnostics into errors and warnings by severity.

        Args:
            diagnostics: Diagnostics in discovery order

        Returns:
            ValidationResult preserving discovery order within each group
        """
        if not diagnostics:
            return ValidationResult.valid()
        return ValidationResult(
            errors=tuple(d for d in diagnostics if d.severity == "error"),
            warnings=tuple(d for d in diagnostics if d.severity == "warning"),
        )

    def format(self, *, include_warnings: bool = True) -> str:
        """Format validation result as human-readable string.

        Args:
            include_warnings: If True (default), include warnings in output.

        Returns:
            Formatted string with errors and optionally warnings.
        """
        lines: list[str] = []

        if self.errors:
            lines.append(f"Errors ({len(self.errors)}):")
            for error in self.errors:
                lines.append(f"  [{error.code.name}]: {error.message}")

        if include_warnings and self.warnings:
            lines.append(f"Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                lines.append(f"  [{warning.code.name}]: {warning.message}")

        if not lines:
            return "Validation passed: no errors or warnings"

        return "\n".join(lines)
