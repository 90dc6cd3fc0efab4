"""Traversal driver: find messages in a host tree and replace them.

Walks the tree pre-order. At every candidate node the recognizer gets one
try; a match is recorded and replaced by its generated node, and the walk
does not descend into the replacement. Anything else is walked into.

The values a replacement passes at runtime are opaque host expressions
that may hold messages of their own (say`a ${f(say`b`)}`). They are walked
before they are embedded, so one pass leaves no macro behind.

Transform and extract modes share the same walk, so the ids embedded in
transformed code are exactly the ids extraction reports.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from sayable.config import TransformConfig
from sayable.generation import generate_replacement
from sayable.messages.types import CompositeMessage
from sayable.recognition import Recognizer
from sayable.syntax.ast import (
    ASTNode,
    CallExpression,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    Program,
    TaggedTemplateExpression,
)
from sayable.syntax.source import SourceUnit
from sayable.syntax.visitor import ASTTransformer, TransformerResult

__all__ = ["MessageTransformer", "extract", "transform", "transform_with_messages"]

logger = logging.getLogger(__name__)


class MessageTransformer(ASTTransformer):
    """Replaces every message in a host tree and collects them in order.

    Usage:
        >>> transformer = MessageTransformer(TransformConfig(), source)
        >>> new_program = transformer.transform(program)
        >>> transformer.messages
        [CompositeMessage(...), ...]
    """

    __slots__ = ("_config", "_recognizer", "messages")

    def __init__(
        self,
        config: TransformConfig | None = None,
        source: SourceUnit | None = None,
    ) -> None:
        self._config = config or TransformConfig()
        super().__init__(max_depth=self._config.max_depth)
        self._recognizer = Recognizer(self._config, source)
        self.messages: list[CompositeMessage] = []

    def visit_TaggedTemplateExpression(self, node: TaggedTemplateExpression) -> TransformerResult:
        """Replace say`...` templates."""
        return self._replace_or_descend(node, jsx=False)

    def visit_CallExpression(self, node: CallExpression) -> TransformerResult:
        """Replace say.plural(...)-style choice calls."""
        return self._replace_or_descend(node, jsx=False)

    def visit_JSXElement(self, node: JSXElement) -> TransformerResult:
        """Replace <Say> and <Say.Plural /> elements."""
        return _contain_children(self._replace_or_descend(node, jsx=True))

    def visit_JSXFragment(self, node: JSXFragment) -> TransformerResult:
        return _contain_children(self.generic_visit(node))

    def visit_JSXAttribute(self, node: JSXAttribute) -> TransformerResult:
        result = self.generic_visit(node)
        match result:
            case JSXAttribute(value=CallExpression() as value):
                return replace(result, value=JSXExpressionContainer(value))
            case _:
                return result

    def _replace_or_descend(self, node: ASTNode, *, jsx: bool) -> TransformerResult:
        message = self._recognizer.match(node)
        if message is None:
            return self.generic_visit(node)

        for diagnostic in self._recognizer.diagnostics:
            logger.warning("%s", diagnostic.format_error())

        # Recorded before the values are walked so nested messages follow it.
        self.messages.append(message)
        return generate_replacement(
            message,
            jsx=jsx,
            output=self._config.output,
            max_depth=self._config.max_depth,
            rewrite=self._rewrite_value,
        )

    def _rewrite_value(self, value: ASTNode) -> ASTNode:
        """Replace messages nested inside an embedded value."""
        result = self.visit(value)
        if result is None or isinstance(result, list):
            msg = f"Rewrite of {type(value).__name__} produced {type(result).__name__}"
            raise TypeError(msg)
        return result


def _contain_children(node: TransformerResult) -> TransformerResult:
    """Put call-form replacements sitting in JSX child slots inside `{...}`."""
    match node:
        case JSXElement(children=children) | JSXFragment(children=children) if any(
            isinstance(child, CallExpression) for child in children
        ):
            return replace(
                node,
                children=tuple(
                    JSXExpressionContainer(child) if isinstance(child, CallExpression) else child
                    for child in children
                ),
            )
        case _:
            return node


def transform_with_messages(
    program: Program,
    source: SourceUnit | None = None,
    config: TransformConfig | None = None,
) -> tuple[Program, list[CompositeMessage]]:
    """Rewrite every message in program and return the messages found.

    Args:
        program: Host tree from the external parser
        source: Source unit for translator comments and references
        config: Pipeline configuration (default: TransformConfig())

    Returns:
        (new program, messages in pre-order). Unchanged subtrees are shared
        with the input program.

    Raises:
        DepthLimitExceededError: If the tree or a message nests too deeply
        GenerationError: If a replacement cannot be built
    """
    transformer = MessageTransformer(config, source)
    result = transformer.transform(program)
    if not isinstance(result, Program):
        msg = f"Transform of Program produced {type(result).__name__}"
        raise TypeError(msg)
    logger.info(
        "Processed %s: %d messages",
        source.name if source is not None else "<program>",
        len(transformer.messages),
    )
    return result, transformer.messages


def transform(
    program: Program,
    source: SourceUnit | None = None,
    config: TransformConfig | None = None,
) -> Program:
    """Rewrite every message in program into its runtime form.

    Example:
        >>> transform(parse('say`Hello, ${name}!`'))
        # -> say.call({ id: "...", name: name })
    """
    return transform_with_messages(program, source, config)[0]


def extract(
    program: Program,
    source: SourceUnit | None = None,
    config: TransformConfig | None = None,
) -> list[CompositeMessage]:
    """Collect every message in program, in source order, without keeping the rewrite."""
    return transform_with_messages(program, source, config)[1]
