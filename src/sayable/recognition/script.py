"""Script front end: tagged templates and choice calls.

Recognizes
    say`Hello, ${name}!`
    say({ context: "greeting" })`Hello`
    intl.say`Hello`
    say.plural(count, { one: "item", other: "items" })
and turns them into Message IR. Every entry point returns None when the
node is not a message; nothing here walks the wider tree.

Python 3.13+.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal

from sayable.constants import DESCRIPTOR_CONTEXT_KEY, DESCRIPTOR_ID_KEY
from sayable.diagnostics import DiagnosticCode
from sayable.enums import ChoiceKind
from sayable.messages.types import (
    ArgumentMessage,
    ChoiceBranch,
    ChoiceMessage,
    CompositeMessage,
    LiteralMessage,
    Message,
)
from sayable.syntax.ast import (
    ASTNode,
    CallExpression,
    Expression,
    Identifier,
    MemberExpression,
    NumberLiteral,
    ObjectExpression,
    ObjectProperty,
    SpreadElement,
    StringLiteral,
    TaggedTemplateExpression,
)

from .context import RecognitionContext

__all__ = [
    "AccessorChain",
    "find_string_property",
    "number_text",
    "recognize_choice_call",
    "recognize_expression",
    "recognize_tagged_template",
    "resolve_accessor",
    "resolve_branch_value",
]

logger = logging.getLogger(__name__)

_CHOICE_KINDS = frozenset(kind.value for kind in ChoiceKind)

# Number.prototype.toString switches to exponent notation outside these
# decimal point positions.
_JS_MAX_PLAIN_POINT = 21
_JS_MIN_PLAIN_POINT = -6


@dataclass(frozen=True, slots=True)
class AccessorChain:
    """Result of unwrapping a member/call chain down to the accessor.

    Attributes:
        accessor: Expression whose .call() gets generated (say, intl.say)
        descriptor: Object literal passed as say({...}), if any
        kind: Trailing property name after the accessor (plural, select, ...)
    """

    accessor: Expression
    descriptor: ObjectExpression | None = None
    kind: str | None = None


def resolve_accessor(node: ASTNode, accessor_name: str) -> AccessorChain | None:
    """Unwrap member/call chains to the accessor.

    Accepted shapes (with accessor_name == "say"):
        say                      -> accessor say
        intl.say                 -> accessor intl.say
        say({ ... })             -> accessor say, descriptor {...}
        say.plural               -> accessor say, kind "plural"
        say({ ... }).select      -> accessor say, descriptor {...}, kind "select"

    A call in the chain must take exactly one object-literal descriptor.
    """
    match node:
        case Identifier(name=name) if name == accessor_name:
            return AccessorChain(accessor=node)

        case CallExpression(callee=callee, arguments=arguments):
            inner = resolve_accessor(callee, accessor_name)
            if inner is None:
                return None
            if len(arguments) == 1 and isinstance(arguments[0], ObjectExpression):
                return AccessorChain(accessor=inner.accessor, descriptor=arguments[0])
            return None

        case MemberExpression(object=obj, property=prop, computed=computed):
            inner = resolve_accessor(obj, accessor_name)
            if inner is not None:
                kind = prop.name if isinstance(prop, Identifier) and not computed else None
                return AccessorChain(inner.accessor, inner.descriptor, kind)
            if not computed and isinstance(prop, Identifier) and prop.name == accessor_name:
                return AccessorChain(accessor=node)
            return None

        case _:
            return None


def find_string_property(obj: ObjectExpression | None, key: str) -> str | None:
    """Value of a string-literal property `key: "value"` in a descriptor."""
    if obj is None:
        return None
    for prop in obj.properties:
        if not isinstance(prop, ObjectProperty) or prop.computed:
            continue
        match prop.key:
            case Identifier(name=name) | StringLiteral(value=name) if name == key:
                if isinstance(prop.value, StringLiteral):
                    return prop.value.value
    return None


def number_text(value: int | float) -> str:
    """Render a number the way JavaScript's String(n) does.

    Plain digits for magnitudes in [1e-6, 1e21), exponent notation outside
    it: 1e21 -> "1e+21", 1.5e-7 -> "1.5e-7". Digits are the shortest that
    round-trip, as in both languages.
    """
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "0"

    sign = "-" if number < 0 else ""
    decimal = Decimal(repr(abs(number))).normalize()
    digits = "".join(str(digit) for digit in decimal.as_tuple().digits)
    # Decimal point position relative to the first digit
    point = decimal.adjusted() + 1

    if len(digits) <= point <= _JS_MAX_PLAIN_POINT:
        return f"{sign}{digits}{'0' * (point - len(digits))}"
    if 0 < point <= _JS_MAX_PLAIN_POINT:
        return f"{sign}{digits[:point]}.{digits[point:]}"
    if _JS_MIN_PLAIN_POINT < point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"

    exponent = point - 1
    mantissa = digits if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"



def recognize_expression(
    ctx: RecognitionContext,
    node: ASTNode,
    *,
    fallback: bool = False,
) -> CompositeMessage | ArgumentMessage | None:
    """Recognize a nested tagged template or choice call.

    Args:
        ctx: Recognition context
        node: Candidate expression
        fallback: When True a non-match becomes an ArgumentMessage keyed by
            the expression's bare name or a fallback id

    Returns:
        Nested composite, fallback argument, or None
    """
    message: CompositeMessage | None = None
    if isinstance(node, TaggedTemplateExpression):
        message = ctx.attempt(recognize_tagged_template, node)
    elif isinstance(node, CallExpression):
        message = ctx.attempt(recognize_choice_call, node)

    if message is not None:
        return message
    if fallback:
        return ArgumentMessage(ctx.expression_key(node), node)
    return None


def resolve_branch_value(ctx: RecognitionContext, node: ASTNode) -> Message:
    """Message for one choice branch value.

    Priority: string/number literal -> Literal; recognizable nested
    message -> Composite; anything else -> Argument.
    """
    match node:
        case StringLiteral(value=value):
            return LiteralMessage(value)
        case NumberLiteral(value=value):
            return LiteralMessage(number_text(value))
        case _:
            message = recognize_expression(ctx, node, fallback=True)
            assert message is not None  # fallback=True always yields a message
            return message


def recognize_tagged_template(
    ctx: RecognitionContext, node: TaggedTemplateExpression
) -> CompositeMessage | None:
    """say`text ${value} text` -> Composite of Literals and nested messages."""
    chain = resolve_accessor(node.tag, ctx.config.accessor_name)
    if chain is None:
        return None

    children: list[Message] = []
    expressions = node.quasi.expressions
    for index, quasi in enumerate(node.quasi.quasis):
        text = quasi.text
        if text:
            children.append(LiteralMessage(text))
        if index < len(expressions):
            child = recognize_expression(ctx, expressions[index], fallback=True)
            assert child is not None  # fallback=True always yields a message
            children.append(child)

    return CompositeMessage(
        children=tuple(children),
        accessor=chain.accessor,
        context=find_string_property(chain.descriptor, DESCRIPTOR_CONTEXT_KEY),
        comments=ctx.comments_at(node.tag),
        references=ctx.references_at(node.tag),
        id=find_string_property(chain.descriptor, DESCRIPTOR_ID_KEY),
    )


def _property_key(ctx: RecognitionContext, prop: ObjectProperty) -> str:
    if not prop.computed:
        match prop.key:
            case Identifier(name=name):
                return name
            case StringLiteral(value=value):
                return value
            case NumberLiteral(value=value):
                return number_text(value)
    return ctx.identifiers.next()


def recognize_choice_call(
    ctx: RecognitionContext, node: CallExpression
) -> CompositeMessage | None:
    """say.plural(count, { one: "item", other: "items" }) -> Composite(Choice)."""
    chain = resolve_accessor(node.callee, ctx.config.accessor_name)
    if chain is None or chain.kind not in _CHOICE_KINDS:
        return None
    if len(node.arguments) != 2:
        return None

    discriminant, branch_map = node.arguments
    if isinstance(discriminant, SpreadElement):
        logger.debug("Choice discriminant cannot be a spread; leaving call untouched")
        return None
    if not isinstance(branch_map, ObjectExpression):
        return None

    branches: dict[str, Message] = {}
    for prop in branch_map.properties:
        if not isinstance(prop, ObjectProperty):
            ctx.report(
                DiagnosticCode.UNSUPPORTED_BRANCH_VALUE,
                f"Skipped {type(prop).__name__} in {chain.kind} branches",
                prop,
                hint="Use plain `key: value` properties for branches",
            )
            continue
        key = _property_key(ctx, prop)
        value = resolve_branch_value(ctx, prop.value)
        if key in branches:
            ctx.report(
                DiagnosticCode.DUPLICATE_BRANCH_KEY,
                f"Branch '{key}' is defined more than once; the last value wins",
                prop,
            )
        branches[key] = value

    choice = ChoiceMessage(
        kind=ChoiceKind(chain.kind),
        identifier=ctx.expression_key(discriminant),
        branches=tuple(ChoiceBranch(key, value) for key, value in branches.items()),
        expression=discriminant,
    )

    return CompositeMessage(
        children=(choice,),
        accessor=chain.accessor,
        context=find_string_property(chain.descriptor, DESCRIPTOR_CONTEXT_KEY),
        comments=ctx.comments_at(node.callee),
        references=ctx.references_at(node.callee),
        id=find_string_property(chain.descriptor, DESCRIPTOR_ID_KEY),
    )
