"""Tests for generation/: flattening, call form and JSX form.

Covers:
- Pre-order flattening with first-visit de-duplication
- accessor.call({ id, ...values }) construction
- <Say id=... /> construction and key escaping
- Child stripping of Element handles
- Output form selection and accessor restrictions

Python 3.13+.
"""

from __future__ import annotations

import pytest

from sayable.diagnostics import DiagnosticCode, GenerationError
from sayable.enums import ChoiceKind, OutputForm
from sayable.generation import (
    attribute_name,
    build_call,
    build_element,
    flatten_values,
    generate_replacement,
    strip_children,
)
from sayable.messages import (
    ArgumentMessage,
    ChoiceBranch,
    ChoiceMessage,
    CompositeMessage,
    ElementMessage,
    LiteralMessage,
    generate_hash,
)
from sayable.recognition import Recognizer
from sayable.syntax.ast import (
    CallExpression,
    Identifier,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    JSXIdentifier,
    JSXText,
    MemberExpression,
    ObjectExpression,
    ObjectProperty,
    StringLiteral,
)
from tests.helpers.nodes import SAY, expr, ident, jsx, member, tagged


def _composite(*children: object, accessor: object = SAY) -> CompositeMessage:
    return CompositeMessage(tuple(children), accessor=accessor)  # type: ignore[arg-type]


class TestFlattenValues:
    """Ordered (key, handle) collection."""

    def test_arguments_in_order(self) -> None:
        a, b = ident("a"), ident("b")
        message = _composite(ArgumentMessage("a", a), LiteralMessage(" "), ArgumentMessage("b", b))
        assert flatten_values(message) == (("a", a), ("b", b))

    def test_literals_contribute_nothing(self) -> None:
        assert flatten_values(_composite(LiteralMessage("text"))) == ()

    def test_element_before_its_children(self) -> None:
        link, url = ident("link"), ident("url")
        element = ElementMessage("0", (_composite(ArgumentMessage("url", url)),), link)
        assert flatten_values(_composite(element)) == (("0", link), ("url", url))

    def test_choice_discriminant_then_branches(self) -> None:
        count, x = ident("count"), ident("x")
        choice = ChoiceMessage(
            kind=ChoiceKind.PLURAL,
            identifier="count",
            branches=(
                ChoiceBranch("one", _composite(ArgumentMessage("x", x), LiteralMessage(" item"))),
                ChoiceBranch("other", LiteralMessage("items")),
            ),
            expression=count,
        )
        assert flatten_values(_composite(choice)) == (("count", count), ("x", x))

    def test_repeated_key_keeps_first(self) -> None:
        first, second = ident("name"), ident("name")
        message = _composite(ArgumentMessage("name", first), ArgumentMessage("name", second))
        values = flatten_values(message)
        assert len(values) == 1
        assert values[0][1] is first

    def test_element_handles_stripped(self) -> None:
        """<a href="/tos">the terms</a> is passed as <a href="/tos" />."""
        link = jsx("a", {"href": "/tos"}, "the terms")
        element = ElementMessage("0", (_composite(LiteralMessage("the terms")),), link)
        ((key, embedded),) = flatten_values(_composite(element))
        assert key == "0"
        assert isinstance(embedded, JSXElement)
        assert embedded.self_closing
        assert embedded.children == ()
        assert embedded.closing is None
        assert embedded.opening.attributes == link.opening.attributes

    def test_argument_elements_kept_whole(self) -> None:
        """An opaque JSX argument is not an Element handle and keeps its children."""
        bold = jsx("b", {}, "hi")
        assert flatten_values(_composite(ArgumentMessage("0", bold))) == (("0", bold),)

    def test_strip_children_leaves_expressions(self) -> None:
        value = ident("v")
        assert strip_children(value) is value

    def test_strip_children_empties_fragments(self) -> None:
        fragment = JSXFragment((JSXText("x"),))
        assert strip_children(fragment) == JSXFragment(())

    def test_unknown_node(self) -> None:
        with pytest.raises(GenerationError):
            flatten_values(_composite(Identifier("x")))


class TestBuildCall:
    """Call-form replacement."""

    def test_shape(self) -> None:
        name = ident("name")
        node = build_call(SAY, "abc123", (("name", name),))
        assert node == CallExpression(
            MemberExpression(SAY, Identifier("call")),
            (
                ObjectExpression(
                    (
                        ObjectProperty(Identifier("id"), StringLiteral("abc123")),
                        ObjectProperty(Identifier("name"), name),
                    )
                ),
            ),
        )

    def test_numeric_keys_are_string_keys(self) -> None:
        node = build_call(SAY, "x", (("0", ident("v")),))
        argument = node.arguments[0]
        assert isinstance(argument, ObjectExpression)
        assert argument.properties[1].key == StringLiteral("0")  # type: ignore[union-attr]

    def test_member_accessor_kept(self) -> None:
        accessor = member(ident("intl"), "say")
        node = build_call(accessor, "x", ())
        assert isinstance(node.callee, MemberExpression)
        assert node.callee.object is accessor


class TestBuildElement:
    """JSX-form replacement."""

    def test_shape(self) -> None:
        node = build_element(Identifier("Say"), "abc123", (("name", ident("name")),))
        assert node.self_closing
        assert node.children == ()
        assert node.closing is None
        assert node.opening.name == JSXIdentifier("Say")
        assert node.opening.attributes == (
            JSXAttribute(JSXIdentifier("id"), StringLiteral("abc123")),
            JSXAttribute(JSXIdentifier("name"), JSXExpressionContainer(ident("name"))),
        )

    @pytest.mark.parametrize(("key", "name"), [("0", "_0"), ("12", "_12"), ("count", "count")])
    def test_attribute_name_escaping(self, key: str, name: str) -> None:
        assert attribute_name(key) == name

    def test_element_value_passed_as_given(self) -> None:
        link = jsx("a", {"href": "/tos"}, "the terms")
        node = build_element(Identifier("Say"), "x", (("0", link),))
        assert node.opening.attributes[1].value == JSXExpressionContainer(link)

    def test_member_accessor_rejected(self) -> None:
        with pytest.raises(GenerationError) as exc_info:
            build_element(member(ident("intl"), "say"), "x", ())
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.UNSUPPORTED_ACCESSOR


class TestGenerateReplacement:
    """End-to-end generation from recognized messages."""

    def test_tagged_template_to_call(self) -> None:
        name = ident("name")
        message = Recognizer().match(tagged(SAY, "Hello, ", name, "!"))
        assert message is not None
        node = generate_replacement(message)
        assert node == build_call(SAY, generate_hash("Hello, {name}!"), (("name", name),))

    def test_jsx_to_element(self) -> None:
        message = Recognizer().match(jsx("Say", {}, "Hello, ", expr(ident("name")), "!"))
        assert message is not None
        node = generate_replacement(message, jsx=True)
        assert isinstance(node, JSXElement)
        assert node.opening.attributes[0].value == StringLiteral(generate_hash("Hello, {name}!"))  # type: ignore[union-attr]

    def test_call_form_forced(self) -> None:
        message = Recognizer().match(jsx("Say", {}, "Hello"))
        assert message is not None
        node = generate_replacement(message, jsx=True, output=OutputForm.CALL)
        assert isinstance(node, CallExpression)

    def test_rewrite_applied_to_values(self) -> None:
        name, renamed = ident("name"), ident("renamed")
        message = Recognizer().match(tagged(SAY, "Hi ", name))
        assert message is not None
        node = generate_replacement(message, rewrite=lambda value: renamed)
        assert node == build_call(SAY, generate_hash("Hi {name}"), (("name", renamed),))

    def test_override_id_used(self) -> None:
        message = CompositeMessage((LiteralMessage("x"),), accessor=SAY, id="custom")
        node = generate_replacement(message)
        argument = node.arguments[0]  # type: ignore[union-attr]
        assert argument.properties[0].value == StringLiteral("custom")  # type: ignore[union-attr]

    def test_nested_values_flattened_into_parent(self) -> None:
        """say`a ${say`b ${x}`} c` passes x to the outer call."""
        x = ident("x")
        message = Recognizer().match(tagged(SAY, "a ", tagged(SAY, "b ", x), " c"))
        assert message is not None
        assert flatten_values(message) == (("x", x),)
