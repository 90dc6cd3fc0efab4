"""Replacement generation: Message IR back to host nodes.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sayable.constants import MAX_DEPTH
from sayable.enums import OutputForm
from sayable.messages.hash import resolve_message_id
from sayable.messages.types import CompositeMessage
from sayable.syntax.ast import ASTNode, CallExpression, JSXElement

from .flatten import flatten_values, strip_children
from .jsx import attribute_name, build_element
from .script import build_call, object_key

__all__ = [
    "attribute_name",
    "build_call",
    "build_element",
    "flatten_values",
    "generate_replacement",
    "object_key",
    "strip_children",
]

logger = logging.getLogger(__name__)


def generate_replacement(
    message: CompositeMessage,
    *,
    jsx: bool = False,
    output: OutputForm = OutputForm.AUTO,
    max_depth: int = MAX_DEPTH,
    rewrite: Callable[[ASTNode], ASTNode] | None = None,
) -> CallExpression | JSXElement:
    """Build the node that replaces a recognized message.

    Args:
        message: Top-level message
        jsx: Whether the message was recognized from a JSX element
        output: AUTO keeps the front end's form, CALL forces the call form
        max_depth: Nesting limit for id derivation and flattening
        rewrite: Applied to every flattened value before it is embedded

    Returns:
        `accessor.call({...})` or `<Accessor id=... />`

    Raises:
        GenerationError: If the JSX form is needed for a non-identifier accessor
    """
    message_id = resolve_message_id(message, max_depth=max_depth)
    values = flatten_values(message, max_depth=max_depth)
    if rewrite is not None:
        values = tuple((key, rewrite(value)) for key, value in values)
    if jsx and output is OutputForm.AUTO:
        node: CallExpression | JSXElement = build_element(message.accessor, message_id, values)
    else:
        node = build_call(message.accessor, message_id, values)
    logger.debug("Generated %s for message %s (%d values)", type(node).__name__, message_id, len(values))
    return node
