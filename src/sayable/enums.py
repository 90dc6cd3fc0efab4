"""Enumerations for sayable type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ChoiceKind(StrEnum):
    """Kind of a choice message.

    StrEnum provides automatic string conversion: str(ChoiceKind.PLURAL) == "plural"
    """

    SELECT = "select"
    """Keyword selection: say.select(gender, { male: "He", other: "They" })"""

    PLURAL = "plural"
    """Cardinal plural selection: say.plural(count, { one: "item", other: "items" })"""

    ORDINAL = "ordinal"
    """Ordinal plural selection: say.ordinal(place, { 1: "first", other: "nth" })"""

    @property
    def icu_format(self) -> str:
        """ICU MessageFormat argument type for this kind."""
        if self is ChoiceKind.ORDINAL:
            return "selectordinal"
        return self.value


class CommentKind(StrEnum):
    """Kind of host source comment.

    StrEnum provides automatic string conversion: str(CommentKind.LINE) == "line"
    """

    LINE = "line"
    """Single-line comment: // translators: greeting"""

    BLOCK = "block"
    """Block comment: /* translators: greeting */"""


class OutputForm(StrEnum):
    """Replacement form emitted by the code generator.

    StrEnum provides automatic string conversion: str(OutputForm.CALL) == "call"
    """

    AUTO = "auto"
    """JSX matches become <Say id=... />, script matches become say.call({...})"""

    CALL = "call"
    """Every match becomes accessor.call({...})"""


__all__ = [
    "ChoiceKind",
    "CommentKind",
    "OutputForm",
]
