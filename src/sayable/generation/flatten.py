"""Flatten a message into the ordered values its replacement passes at runtime.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import replace

from sayable.constants import MAX_DEPTH
from sayable.core.depth_guard import DepthGuard
from sayable.diagnostics import Diagnostic, DiagnosticCode, GenerationError
from sayable.messages.types import (
    ArgumentMessage,
    ChoiceMessage,
    CompositeMessage,
    ElementMessage,
    LiteralMessage,
    Message,
)
from sayable.syntax.ast import ASTNode, JSXElement, JSXFragment

__all__ = ["flatten_values", "strip_children"]


def strip_children(value: ASTNode) -> ASTNode:
    """Drop the children of an element-shaped value.

    Its children are already part of the message, so embedding them again
    would render them twice.
    """
    match value:
        case JSXElement(opening=opening):
            return JSXElement(
                opening=replace(opening, self_closing=True),
                children=(),
                closing=None,
                span=value.span,
            )
        case JSXFragment():
            return replace(value, children=())
        case _:
            return value


def flatten_values(
    message: Message, *, max_depth: int = MAX_DEPTH
) -> tuple[tuple[str, ASTNode], ...]:
    """Collect (key, expression) pairs in pre-order.

    Arguments contribute their value; Elements and Choices contribute their
    handle and then their children or branch values; Composites and Literals
    contribute nothing themselves. Element handles are passed without their
    children. A key seen twice keeps its first value, so `${name} and
    ${name}` passes `name` once.

    Example:
        >>> flatten_values(message)  # say`Hi ${name}, ${user.age}`
        (('name', <Identifier name>), ('0', <MemberExpression user.age>))
    """
    values: dict[str, ASTNode] = {}
    _collect(message, values, DepthGuard(max_depth=max_depth))
    return tuple(values.items())


def _collect(message: Message, values: dict[str, ASTNode], guard: DepthGuard) -> None:
    with guard:
        match message:
            case LiteralMessage():
                pass
            case ArgumentMessage(identifier=identifier, expression=expression):
                values.setdefault(identifier, expression)
            case ElementMessage(identifier=identifier, expression=expression, children=children):
                values.setdefault(identifier, strip_children(expression))
                for child in children:
                    _collect(child, values, guard)
            case ChoiceMessage(identifier=identifier, expression=expression, branches=branches):
                values.setdefault(identifier, expression)
                for branch in branches:
                    _collect(branch.value, values, guard)
            case CompositeMessage(children=children):
                for child in children:
                    _collect(child, values, guard)
            case _:
                raise GenerationError(
                    Diagnostic(
                        code=DiagnosticCode.UNKNOWN_MESSAGE_NODE,
                        message=f"Cannot flatten {type(message).__name__}",
                    )
                )
