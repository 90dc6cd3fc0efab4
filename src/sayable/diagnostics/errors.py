"""sayable exception hierarchy with structured diagnostics.

All exceptions optionally carry a Diagnostic object for rich error
information. Recognition failure is NOT an exception: recognizer entry
points return None for "leave this node alone".

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class SayableError(Exception):
    """Base exception for all sayable errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize SayableError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class RecognitionError(SayableError):
    """Recognizer handed a value it cannot inspect.

    Raised only for programming errors, such as a value that is not a host
    tree node reaching Recognizer.match(). Ordinary non-matching source is
    reported by returning None.
    """


class SerializationError(SayableError):
    """Message IR cannot be rendered as ICU MessageFormat.

    Example:
    - A node that is not one of the five message variants
    """


class GenerationError(SayableError):
    """Replacement host node cannot be generated for a message.

    Example:
    - JSX output requested for a member-expression accessor (intl.say)
    """
