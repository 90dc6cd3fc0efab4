"""Message IR node definitions.

Canonical five-variant tree for one extracted localizable message. Nodes
are pure data plus an opaque handle to the host expression that produces
the runtime value (Argument, Element, Choice) or the accessor whose
message-invocation gets regenerated (Composite).

Child order is semantic: it is the order of the ICU text and of the
flattened value list, and nothing in the pipeline reorders it.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeIs

from sayable.enums import ChoiceKind
from sayable.syntax.ast import ASTNode

__all__ = [
    "ArgumentMessage",
    "ChoiceBranch",
    "ChoiceMessage",
    "CompositeMessage",
    "ElementMessage",
    "LiteralMessage",
    "Message",
]


@dataclass(frozen=True, slots=True)
class LiteralMessage:
    """Static text.

    ICU: the text verbatim.
    """

    text: str

    @staticmethod
    def guard(message: object) -> TypeIs[LiteralMessage]:
        """Type guard for LiteralMessage."""
        return isinstance(message, LiteralMessage)


@dataclass(frozen=True, slots=True)
class ArgumentMessage:
    """Dynamic placeholder.

    ICU: {identifier}

    Example:
        say`Hello, ${name}!` -> ArgumentMessage("name", <Identifier name>)
    """

    identifier: str
    expression: ASTNode = field(compare=False)

    @staticmethod
    def guard(message: object) -> TypeIs[ArgumentMessage]:
        """Type guard for ArgumentMessage."""
        return isinstance(message, ArgumentMessage)


@dataclass(frozen=True, slots=True)
class ElementMessage:
    """Part of a message wrapped in a markup tag.

    ICU: <identifier>children</identifier> or <identifier/>

    Example:
        <Say>Read <a href="/tos">the terms</a></Say>
        -> ElementMessage("0", (Composite("the terms"),), <JSXElement a>)
    """

    identifier: str
    children: tuple[Message, ...]
    expression: ASTNode = field(compare=False)

    @staticmethod
    def guard(message: object) -> TypeIs[ElementMessage]:
        """Type guard for ElementMessage."""
        return isinstance(message, ElementMessage)


@dataclass(frozen=True, slots=True)
class ChoiceBranch:
    """One (key, message) pair of a choice."""

    key: str
    value: Message


@dataclass(frozen=True, slots=True)
class ChoiceMessage:
    """Selection among branches by a runtime discriminant.

    ICU: {identifier, plural|select|selectordinal, key {value} ...}

    Invariant: branch keys are unique within one choice.
    """

    kind: ChoiceKind
    identifier: str
    branches: tuple[ChoiceBranch, ...]
    expression: ASTNode = field(compare=False)

    def __post_init__(self) -> None:
        """Normalize kind and validate branch key uniqueness."""
        object.__setattr__(self, "kind", ChoiceKind(self.kind))
        seen: set[str] = set()
        for branch in self.branches:
            if branch.key in seen:
                msg = f"Duplicate branch key '{branch.key}' in choice '{self.identifier}'"
                raise ValueError(msg)
            seen.add(branch.key)

    def branch(self, key: str) -> ChoiceBranch | None:
        """Look up a branch by key."""
        for branch in self.branches:
            if branch.key == key:
                return branch
        return None

    @staticmethod
    def guard(message: object) -> TypeIs[ChoiceMessage]:
        """Type guard for ChoiceMessage."""
        return isinstance(message, ChoiceMessage)


@dataclass(frozen=True, slots=True)
class CompositeMessage:
    """Root node of one recognized message occurrence.

    ICU: concatenation of the serialized children.

    Attributes:
        children: Ordered parts of the message
        accessor: Host expression whose .call() the generator emits (say, intl.say)
        context: Disambiguating context from the descriptor (hash input)
        comments: Translator notes from leading "translators:" comments
        references: "file:line" source references
        id: Explicit id override from the descriptor (skips hashing)
    """

    children: tuple[Message, ...]
    accessor: ASTNode = field(compare=False)
    context: str | None = None
    comments: tuple[str, ...] = ()
    references: tuple[str, ...] = ()
    id: str | None = None

    @staticmethod
    def guard(message: object) -> TypeIs[CompositeMessage]:
        """Type guard for CompositeMessage."""
        return isinstance(message, CompositeMessage)


type Message = (
    LiteralMessage | ArgumentMessage | ElementMessage | ChoiceMessage | CompositeMessage
)
