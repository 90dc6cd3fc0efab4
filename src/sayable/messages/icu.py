"""Serialize Message IR to ICU MessageFormat.

The ICU string is both the translator-facing source text and the hash
input for message ids, so serialization must be deterministic: children
are emitted strictly in stored order, never sorted by key.

Python 3.13+.
"""

import re

from sayable.constants import MAX_DEPTH
from sayable.core.depth_guard import DepthGuard
from sayable.diagnostics import Diagnostic, DiagnosticCode, SerializationError

from .types import (
    ArgumentMessage,
    ChoiceMessage,
    CompositeMessage,
    ElementMessage,
    LiteralMessage,
    Message,
)

__all__ = ["IcuSerializer", "format_branch_key", "serialize_icu"]

_INTEGER_KEY = re.compile(r"[+-]?[0-9]+")

# Each branch sits on its own line, indented two spaces.
_BRANCH_INDENT: str = "  "


def format_branch_key(key: str) -> str:
    """Render a choice branch key.

    Integer keys become exact-match selectors (`=N`); everything else
    (plural categories, select keywords) is emitted verbatim.

    Example:
        >>> format_branch_key("1")
        '=1'
        >>> format_branch_key("other")
        'other'
    """
    if _INTEGER_KEY.fullmatch(key):
        return f"={int(key)}"
    return key


class IcuSerializer:
    """Converts Message IR to an ICU MessageFormat string.

    Reusable: all serialization state is local to the serialize() call,
    apart from the depth guard, which always returns to zero.

    Usage:
        >>> serializer = IcuSerializer()
        >>> serializer.serialize(LiteralMessage("Hello"))
        'Hello'
    """

    __slots__ = ("_depth_guard",)

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        self._depth_guard = DepthGuard(max_depth=max_depth)

    def serialize(self, message: Message) -> str:
        """Serialize a message tree, trimming surrounding whitespace.

        Raises:
            SerializationError: If the tree contains a non-message node
            DepthLimitExceededError: If nesting exceeds max_depth
        """
        output: list[str] = []
        self._serialize(message, output)
        return "".join(output).strip()

    def _serialize(self, message: Message, output: list[str]) -> None:
        with self._depth_guard:
            match message:
                case LiteralMessage(text=text):
                    output.append(text)
                case ArgumentMessage(identifier=identifier):
                    output.append(f"{{{identifier}}}")
                case ElementMessage():
                    self._serialize_element(message, output)
                case ChoiceMessage():
                    self._serialize_choice(message, output)
                case CompositeMessage(children=children):
                    for child in children:
                        self._serialize(child, output)
                case _:
                    raise SerializationError(
                        Diagnostic(
                            code=DiagnosticCode.UNKNOWN_MESSAGE_NODE,
                            message=f"Cannot serialize {type(message).__name__} as ICU",
                        )
                    )

    def _serialize_element(self, message: ElementMessage, output: list[str]) -> None:
        inner: list[str] = []
        for child in message.children:
            self._serialize(child, inner)
        identifier = message.identifier
        if not "".join(inner):
            output.append(f"<{identifier}/>")
            return
        output.append(f"<{identifier}>")
        output.extend(inner)
        output.append(f"</{identifier}>")

    def _serialize_choice(self, message: ChoiceMessage, output: list[str]) -> None:
        output.append(f"{{{message.identifier}, {message.kind.icu_format},\n")
        for branch in message.branches:
            output.append(f"{_BRANCH_INDENT}{format_branch_key(branch.key)} {{")
            self._serialize(branch.value, output)
            output.append("}\n")
        output.append("}")


def serialize_icu(message: Message, *, max_depth: int = MAX_DEPTH) -> str:
    """Serialize Message IR to a trimmed ICU MessageFormat string.

    Args:
        message: Any message node (Composite for whole messages)
        max_depth: Maximum nesting depth

    Returns:
        ICU MessageFormat text

    Example:
        >>> serialize_icu(CompositeMessage(
        ...     children=(LiteralMessage("Hello, "), ArgumentMessage("name", name), LiteralMessage("!")),
        ...     accessor=say,
        ... ))
        'Hello, {name}!'
    """
    return IcuSerializer(max_depth=max_depth).serialize(message)
