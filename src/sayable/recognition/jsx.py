"""JSX front end: <Say> containers and self-closing choice elements.

Recognizes
    <Say>Hello, {name}!</Say>
    <Say context="menu">Open <b>recent</b> files</Say>
    <Say.Plural _={count} one="item" other="items" />
and turns them into the same Message IR the script front end builds, so
`<Say>Hello, {name}!</Say>` and say`Hello, ${name}!` serialize and hash
identically.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re

from sayable.constants import (
    DESCRIPTOR_CONTEXT_KEY,
    DESCRIPTOR_ID_KEY,
    DISCRIMINANT_ATTRIBUTE,
)
from sayable.diagnostics import DiagnosticCode
from sayable.enums import ChoiceKind
from sayable.messages.types import (
    ChoiceBranch,
    ChoiceMessage,
    CompositeMessage,
    ElementMessage,
    LiteralMessage,
    Message,
)
from sayable.syntax.ast import (
    ASTNode,
    BooleanLiteral,
    Identifier,
    JSXAttribute,
    JSXClosingElement,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXIdentifier,
    JSXMemberExpression,
    JSXNamespacedName,
    JSXOpeningElement,
    JSXText,
    StringLiteral,
)

from .context import RecognitionContext
from .script import recognize_expression, resolve_branch_value

__all__ = [
    "attribute_key",
    "collapse_whitespace",
    "find_attribute",
    "recognize_choice_element",
    "recognize_container_element",
    "recognize_jsx_child",
]

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_ESCAPED_NUMERIC = re.compile(r"_([0-9]+)")

# Choice-element attributes that never become branches; `id` is an ordinary branch.
_RESERVED_ATTRIBUTES = frozenset({DISCRIMINANT_ATTRIBUTE, DESCRIPTOR_CONTEXT_KEY})

_CHOICE_KINDS = frozenset(kind.value for kind in ChoiceKind)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines included) to a single space."""
    return _WHITESPACE.sub(" ", text)


def attribute_key(name: JSXIdentifier | JSXNamespacedName) -> str:
    """Branch key for an attribute name; `_12` unescapes to `12`."""
    if isinstance(name, JSXNamespacedName):
        return f"{name.namespace.name}:{name.name.name}"
    escaped = _ESCAPED_NUMERIC.fullmatch(name.name)
    if escaped is not None:
        return escaped.group(1)
    return name.name


def find_attribute(opening: JSXOpeningElement, name: str) -> JSXAttribute | None:
    """First plain attribute with the given name."""
    for attribute in opening.attributes:
        if (
            isinstance(attribute, JSXAttribute)
            and isinstance(attribute.name, JSXIdentifier)
            and attribute.name.name == name
        ):
            return attribute
    return None


def _string_attribute(opening: JSXOpeningElement, name: str) -> str | None:
    attribute = find_attribute(opening, name)
    if attribute is None:
        return None
    match attribute.value:
        case StringLiteral(value=value):
            return value
        case JSXExpressionContainer(expression=StringLiteral(value=value)):
            return value
        case _:
            return None


def _component_kind(name: ASTNode, component_name: str) -> str | None:
    """Choice kind of a `Say.Plural`-style element name, else None."""
    match name:
        case JSXMemberExpression(
            object=JSXIdentifier(name=obj), property=JSXIdentifier(name=prop)
        ) if obj == component_name:
            return prop.lower()
        case _:
            return None


def _is_component(name: ASTNode, component_name: str) -> bool:
    return isinstance(name, JSXIdentifier) and name.name == component_name


def recognize_container_element(
    ctx: RecognitionContext, node: JSXElement
) -> CompositeMessage | None:
    """<Say>text {value} <b>markup</b></Say> -> Composite."""
    opening = node.opening
    if node.self_closing or not _is_component(opening.name, ctx.config.component_name):
        return None

    children: list[Message] = []
    for child in node.children:
        message = recognize_jsx_child(ctx, child)
        if message is not None:
            children.append(message)

    return CompositeMessage(
        children=tuple(children),
        accessor=Identifier(ctx.config.component_name, span=opening.name.span),
        context=_string_attribute(opening, DESCRIPTOR_CONTEXT_KEY),
        id=_string_attribute(opening, DESCRIPTOR_ID_KEY),
    )


def recognize_jsx_child(ctx: RecognitionContext, child: ASTNode) -> Message | None:
    """Message for one child of a <Say> container.

    Returns None for children that contribute nothing (empty text, empty
    expression containers such as `{/* note */}`).
    """
    match child:
        case JSXText(value=value):
            text = collapse_whitespace(value)
            return LiteralMessage(text) if text else None

        case JSXExpressionContainer(expression=JSXEmptyExpression()):
            return None

        case JSXExpressionContainer(expression=expression):
            return recognize_expression(ctx, expression, fallback=True)

        case JSXElement():
            message = ctx.attempt(_recognize_component, child)
            if message is not None:
                return message
            return _recognize_markup(ctx, child)

        case JSXFragment():
            return ElementMessage(ctx.identifiers.next(), (), child)

        case _:
            logger.debug("Ignoring unexpected JSX child %s", type(child).__name__)
            return None


def _recognize_component(ctx: RecognitionContext, node: JSXElement) -> CompositeMessage | None:
    return recognize_container_element(ctx, node) or recognize_choice_element(ctx, node)


def _recognize_markup(ctx: RecognitionContext, node: JSXElement) -> ElementMessage:
    """Wrap a non-message element (<b>, <a href>) as an Element placeholder.

    The element's children are reparented under a synthetic <Say> and
    recognized as a message of their own. The element id is taken before
    its children's ids.
    """
    if node.self_closing:
        return ElementMessage(ctx.identifiers.next(), (), node)

    checkpoint = ctx.identifiers.checkpoint()
    identifier = ctx.identifiers.next()
    name = JSXIdentifier(ctx.config.component_name)
    wrapper = JSXElement(
        opening=JSXOpeningElement(name),
        children=node.children,
        closing=JSXClosingElement(name),
    )
    inner = ctx.attempt(recognize_container_element, wrapper)
    if inner is not None:
        return ElementMessage(identifier, (inner,), node)

    ctx.identifiers.restore(checkpoint)
    return ElementMessage(ctx.identifiers.next(), (), node)


def _attribute_branch_value(ctx: RecognitionContext, value: ASTNode) -> Message | None:
    match value:
        case JSXExpressionContainer(expression=JSXEmptyExpression()):
            return None
        case JSXExpressionContainer(expression=JSXElement() as element) | (
            JSXElement() as element
        ):
            message = ctx.attempt(_recognize_component, element)
            return message if message is not None else _recognize_markup(ctx, element)
        case JSXExpressionContainer(expression=expression):
            return resolve_branch_value(ctx, expression)
        case JSXFragment():
            return ElementMessage(ctx.identifiers.next(), (), value)
        case _:
            return resolve_branch_value(ctx, value)


def _discriminant(attribute: JSXAttribute) -> ASTNode | None:
    match attribute.value:
        case None:
            return BooleanLiteral(True, span=attribute.span)
        case JSXExpressionContainer(expression=JSXEmptyExpression()):
            return None
        case JSXExpressionContainer(expression=expression):
            return expression
        case value:
            return value


def recognize_choice_element(ctx: RecognitionContext, node: JSXElement) -> CompositeMessage | None:
    """<Say.Plural _={count} one="item" other="items" /> -> Composite(Choice)."""
    opening = node.opening
    if not node.self_closing:
        return None
    kind = _component_kind(opening.name, ctx.config.component_name)
    if kind not in _CHOICE_KINDS:
        return None

    attribute = find_attribute(opening, DISCRIMINANT_ATTRIBUTE)
    discriminant = _discriminant(attribute) if attribute is not None else None
    if discriminant is None:
        logger.debug("<%s.%s> has no usable `_` attribute", ctx.config.component_name, kind)
        return None

    branches: dict[str, Message] = {}
    for attr in opening.attributes:
        if not isinstance(attr, JSXAttribute):
            ctx.report(
                DiagnosticCode.UNSUPPORTED_BRANCH_VALUE,
                f"Skipped spread attribute in <{ctx.config.component_name}.{kind}>",
                attr,
            )
            continue
        key = attribute_key(attr.name)
        if key in _RESERVED_ATTRIBUTES:
            continue
        if attr.value is None:
            ctx.report(
                DiagnosticCode.UNSUPPORTED_BRANCH_VALUE,
                f"Branch '{key}' has no value",
                attr,
                hint=f'Give it a value, e.g. {key}="..."',
            )
            continue
        value = _attribute_branch_value(ctx, attr.value)
        if value is None:
            ctx.report(
                DiagnosticCode.UNSUPPORTED_BRANCH_VALUE,
                f"Branch '{key}' is an empty expression",
                attr,
            )
            continue
        if key in branches:
            ctx.report(
                DiagnosticCode.DUPLICATE_BRANCH_KEY,
                f"Branch '{key}' is defined more than once; the last value wins",
                attr,
            )
        branches[key] = value

    choice = ChoiceMessage(
        kind=ChoiceKind(kind),
        identifier=ctx.expression_key(discriminant),
        branches=tuple(ChoiceBranch(key, value) for key, value in branches.items()),
        expression=discriminant,
    )

    return CompositeMessage(
        children=(choice,),
        accessor=Identifier(ctx.config.component_name, span=opening.name.span),
        context=_string_attribute(opening, DESCRIPTOR_CONTEXT_KEY),
    )
