"""Diagnostic system for sayable errors.

Provides structured error diagnostics with codes, source references and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    GenerationError,
    RecognitionError,
    SayableError,
    SerializationError,
)
from .validation import ValidationResult

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "GenerationError",
    "RecognitionError",
    "SayableError",
    "SerializationError",
    "ValidationResult",
]
