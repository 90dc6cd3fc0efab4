"""Tests for recognition/script.py: tagged templates and choice calls.

Covers:
- Accessor resolution through member/call chains and descriptors
- Tagged template children, fallback ids and nested messages
- Choice calls: kinds, branch keys, branch value priority
- Identifier allocation order and rollback
- Translator comments and source references
- Local diagnostics for skipped and duplicate branches
- JavaScript number text for numeric keys and literals

Python 3.13+.
"""

from __future__ import annotations

import pytest

from sayable.config import TransformConfig
from sayable.diagnostics import DiagnosticCode, RecognitionError
from sayable.enums import ChoiceKind, CommentKind
from sayable.messages import (
    ArgumentMessage,
    ChoiceBranch,
    ChoiceMessage,
    CompositeMessage,
    LiteralMessage,
    serialize_icu,
)
from sayable.recognition import RecognitionContext, Recognizer, resolve_accessor
from sayable.recognition.script import number_text
from sayable.syntax.ast import (
    BinaryExpression,
    BlockStatement,
    Comment,
    Identifier,
    MemberExpression,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    Span,
    SpreadElement,
)
from sayable.syntax.source import SourceUnit
from tests.helpers.nodes import SAY, call, ident, member, num, obj, string, tagged

COUNT = ident("count")


def _match(node: object, config: TransformConfig | None = None) -> CompositeMessage | None:
    return Recognizer(config).match(node)  # type: ignore[arg-type]


class TestResolveAccessor:
    """Unwrapping member/call chains."""

    def test_bare_identifier(self) -> None:
        chain = resolve_accessor(SAY, "say")
        assert chain is not None
        assert chain.accessor is SAY
        assert chain.descriptor is None
        assert chain.kind is None

    def test_member_say_is_accessor(self) -> None:
        """intl.say resolves with the whole member expression as accessor."""
        node = member(ident("intl"), "say")
        chain = resolve_accessor(node, "say")
        assert chain is not None
        assert chain.accessor is node

    def test_descriptor_call(self) -> None:
        descriptor = obj(("context", string("menu")))
        chain = resolve_accessor(call(SAY, descriptor), "say")
        assert chain is not None
        assert chain.descriptor is descriptor

    def test_trailing_property_is_kind(self) -> None:
        chain = resolve_accessor(member(call(SAY, obj()), "plural"), "say")
        assert chain is not None
        assert chain.kind == "plural"
        assert chain.accessor is SAY

    @pytest.mark.parametrize(
        "node",
        [
            ident("t"),
            member(ident("intl"), "t"),
            call(SAY),
            call(SAY, obj(), obj()),
            call(SAY, string("x")),
        ],
    )
    def test_unresolvable(self, node: object) -> None:
        assert resolve_accessor(node, "say") is None  # type: ignore[arg-type]

    def test_computed_member_is_not_accessor(self) -> None:
        node = MemberExpression(ident("intl"), string("say"), computed=True)
        assert resolve_accessor(node, "say") is None

    def test_custom_accessor_name(self) -> None:
        assert resolve_accessor(ident("t"), "t") is not None
        assert resolve_accessor(SAY, "t") is None


class TestTaggedTemplate:
    """say`...` recognition."""

    def test_literal_and_named_argument(self) -> None:
        """say`Hello, ${name}!`"""
        name = ident("name")
        message = _match(tagged(SAY, "Hello, ", name, "!"))
        assert message is not None
        assert message.children == (
            LiteralMessage("Hello, "),
            ArgumentMessage("name", name),
            LiteralMessage("!"),
        )
        assert message.children[1].expression is name  # type: ignore[union-attr]
        assert message.accessor is SAY
        assert serialize_icu(message) == "Hello, {name}!"

    def test_unnamed_expressions_get_sequential_ids(self) -> None:
        """say`${user.name} has ${count} of ${a + b}`"""
        node = tagged(
            SAY,
            member(ident("user"), "name"),
            " has ",
            COUNT,
            " of ",
            BinaryExpression("+", ident("a"), ident("b")),
        )
        message = _match(node)
        assert message is not None
        assert serialize_icu(message) == "{0} has {count} of {1}"

    def test_empty_quasis_produce_no_literal(self) -> None:
        """say`${a}${b}` has only arguments."""
        message = _match(tagged(SAY, ident("a"), ident("b")))
        assert message is not None
        assert all(isinstance(child, ArgumentMessage) for child in message.children)
        assert len(message.children) == 2

    def test_descriptor_context_and_id(self) -> None:
        """say({ context: "menu", id: "file.open" })`Open`"""
        descriptor = obj(("context", string("menu")), ("id", string("file.open")))
        message = _match(tagged(call(SAY, descriptor), "Open"))
        assert message is not None
        assert message.context == "menu"
        assert message.id == "file.open"

    def test_descriptor_string_keys(self) -> None:
        """{ "context": "menu" } is honored like { context: "menu" }."""
        descriptor = ObjectExpression((ObjectProperty(string("context"), string("menu")),))
        message = _match(tagged(call(SAY, descriptor), "Open"))
        assert message is not None
        assert message.context == "menu"

    def test_descriptor_non_string_context_ignored(self) -> None:
        message = _match(tagged(call(SAY, obj(("context", ident("ctx")))), "Open"))
        assert message is not None
        assert message.context is None

    def test_member_accessor(self) -> None:
        """intl.say`Hello` keeps intl.say as the accessor."""
        accessor = member(ident("intl"), "say")
        message = _match(tagged(accessor, "Hello"))
        assert message is not None
        assert message.accessor is accessor

    def test_other_tags_ignored(self) -> None:
        assert _match(tagged(ident("css"), "color: red")) is None
        assert _match(tagged(member(SAY, "plural"), "x")) is not None

    def test_nested_choice_call(self) -> None:
        """say`You have ${say.plural(count, {...})}`"""
        inner = call(member(SAY, "plural"), COUNT, obj(("one", string("one item")), ("other", string("many"))))
        message = _match(tagged(SAY, "You have ", inner))
        assert message is not None
        nested = message.children[1]
        assert isinstance(nested, CompositeMessage)
        assert serialize_icu(message) == (
            "You have {count, plural,\n  one {one item}\n  other {many}\n}"
        )

    def test_nested_tagged_template(self) -> None:
        message = _match(tagged(SAY, "a ", tagged(SAY, "b ", ident("x")), " c"))
        assert message is not None
        assert isinstance(message.children[1], CompositeMessage)
        assert serialize_icu(message) == "a b {x} c"

    def test_custom_accessor(self) -> None:
        config = TransformConfig(accessor_name="t")
        assert _match(tagged(ident("t"), "Hi"), config) is not None
        assert _match(tagged(SAY, "Hi"), config) is None


class TestNumberText:
    """Numbers render as JavaScript String(n) renders them."""

    @pytest.mark.parametrize(
        ("value", "text"),
        [
            (0, "0"),
            (-0.0, "0"),
            (2.0, "2"),
            (-3, "-3"),
            (0.5, "0.5"),
            (123.456, "123.456"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (10**21, "1e+21"),
            (1.5e22, "1.5e+22"),
            (1e-6, "0.000001"),
            (1e-7, "1e-7"),
            (-2.5e-8, "-2.5e-8"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            (float("nan"), "NaN"),
        ],
    )
    def test_matches_javascript(self, value: float, text: str) -> None:
        assert number_text(value) == text

    def test_exponent_literal_key_serializes_as_text(self) -> None:
        """{ 1e21: ... } names its property "1e+21" in JavaScript."""
        node = call(member(SAY, "select"), COUNT, obj((num(1e21), string("huge")), ("other", string("x"))))
        message = Recognizer().match(node)
        assert message is not None
        choice = message.children[0]
        assert isinstance(choice, ChoiceMessage)
        assert [branch.key for branch in choice.branches] == ["1e+21", "other"]


class TestChoiceCall:
    """say.plural / say.select / say.ordinal recognition."""

    def test_plural_fixture(self) -> None:
        node = call(member(SAY, "plural"), COUNT, obj(("one", string("item")), ("other", string("items"))))
        message = _match(node)
        assert message is not None
        assert message.children == (
            ChoiceMessage(
                kind=ChoiceKind.PLURAL,
                identifier="count",
                branches=(
                    ChoiceBranch("one", LiteralMessage("item")),
                    ChoiceBranch("other", LiteralMessage("items")),
                ),
                expression=COUNT,
            ),
        )
        assert serialize_icu(message) == "{count, plural,\n  one {item}\n  other {items}\n}"

    @pytest.mark.parametrize(
        ("method", "kind"),
        [("select", ChoiceKind.SELECT), ("plural", ChoiceKind.PLURAL), ("ordinal", ChoiceKind.ORDINAL)],
    )
    def test_kinds(self, method: str, kind: ChoiceKind) -> None:
        message = _match(call(member(SAY, method), COUNT, obj(("other", string("x")))))
        assert message is not None
        choice = message.children[0]
        assert isinstance(choice, ChoiceMessage)
        assert choice.kind is kind

    @pytest.mark.parametrize("method", ["call", "format", "plurals"])
    def test_other_methods_ignored(self, method: str) -> None:
        assert _match(call(member(SAY, method), COUNT, obj(("other", string("x"))))) is None

    def test_wrong_argument_count(self) -> None:
        plural = member(SAY, "plural")
        assert _match(call(plural, COUNT)) is None
        assert _match(call(plural, COUNT, obj(), obj())) is None

    def test_branches_must_be_object_literal(self) -> None:
        assert _match(call(member(SAY, "plural"), COUNT, ident("branches"))) is None

    def test_spread_discriminant_fails(self) -> None:
        node = call(member(SAY, "plural"), SpreadElement(ident("args")), obj(("other", string("x"))))  # type: ignore[arg-type]
        assert _match(node) is None

    def test_descriptor_on_choice(self) -> None:
        """say({ context: "cart" }).plural(count, {...})"""
        callee = member(call(SAY, obj(("context", string("cart")))), "plural")
        message = _match(call(callee, COUNT, obj(("other", string("items")))))
        assert message is not None
        assert message.context == "cart"

    def test_numeric_keys_and_values(self) -> None:
        """{ 0: "none", 1: 1, 2.0: 2.0, other: "many" }"""
        node = call(
            member(SAY, "plural"),
            COUNT,
            obj((num(0), string("none")), (num(1), num(1)), (num(2.0), num(2.0)), ("other", string("many"))),
        )
        message = _match(node)
        assert message is not None
        assert serialize_icu(message) == (
            "{count, plural,\n  =0 {none}\n  =1 {1}\n  =2 {2}\n  other {many}\n}"
        )

    def test_string_keys(self) -> None:
        message = _match(call(member(SAY, "select"), ident("g"), obj(("not an identifier", string("x")))))
        assert message is not None
        choice = message.children[0]
        assert isinstance(choice, ChoiceMessage)
        assert choice.branches[0].key == "not an identifier"

    def test_computed_key_gets_fallback_id(self) -> None:
        prop = ObjectProperty(ident("key"), string("x"), computed=True)
        message = _match(call(member(SAY, "select"), ident("g"), ObjectExpression((prop,))))
        assert message is not None
        choice = message.children[0]
        assert isinstance(choice, ChoiceMessage)
        assert choice.branches[0].key == "0"

    def test_allocation_order_branches_before_discriminant(self) -> None:
        """Branch values take ids before the discriminant does."""
        node = call(
            member(SAY, "plural"),
            member(ident("user"), "count"),
            obj(
                ("one", tagged(SAY, member(ident("user"), "name"), " item")),
                ("other", member(ident("user"), "label")),
            ),
        )
        message = _match(node)
        assert message is not None
        assert serialize_icu(message) == (
            "{2, plural,\n  one {{0} item}\n  other {{1}}\n}"
        )

    def test_branch_value_priority(self) -> None:
        """Literal, nested message, then argument fallback."""
        node = call(
            member(SAY, "select"),
            ident("g"),
            obj(
                ("a", string("text")),
                ("b", tagged(SAY, "nested")),
                ("c", ident("value")),
            ),
        )
        message = _match(node)
        assert message is not None
        choice = message.children[0]
        assert isinstance(choice, ChoiceMessage)
        values = [branch.value for branch in choice.branches]
        assert isinstance(values[0], LiteralMessage)
        assert isinstance(values[1], CompositeMessage)
        assert values[2] == ArgumentMessage("value", ident("value"))

    def test_duplicate_keys_last_value_first_position(self) -> None:
        """{ one: "a", other: "b", one: "c" } behaves like JavaScript."""
        node = call(
            member(SAY, "plural"),
            COUNT,
            obj(("one", string("a")), ("other", string("b")), ("one", string("c"))),
        )
        recognizer = Recognizer()
        message = recognizer.match(node)
        assert message is not None
        choice = message.children[0]
        assert isinstance(choice, ChoiceMessage)
        assert [(b.key, b.value) for b in choice.branches] == [
            ("one", LiteralMessage("c")),
            ("other", LiteralMessage("b")),
        ]
        assert [d.code for d in recognizer.diagnostics] == [DiagnosticCode.DUPLICATE_BRANCH_KEY]

    def test_unsupported_members_skipped_with_diagnostic(self) -> None:
        branches = ObjectExpression(
            (
                SpreadElement(ident("rest")),
                ObjectMethod(ident("one"), BlockStatement(())),
                ObjectProperty(ident("other"), string("items")),
            )
        )
        recognizer = Recognizer()
        message = recognizer.match(call(member(SAY, "plural"), COUNT, branches))
        assert message is not None
        assert serialize_icu(message) == "{count, plural,\n  other {items}\n}"
        assert [d.code for d in recognizer.diagnostics] == [
            DiagnosticCode.UNSUPPORTED_BRANCH_VALUE,
            DiagnosticCode.UNSUPPORTED_BRANCH_VALUE,
        ]
        assert all(d.severity == "warning" for d in recognizer.diagnostics)

    def test_diagnostics_reset_between_matches(self) -> None:
        recognizer = Recognizer()
        branches = ObjectExpression((SpreadElement(ident("rest")),))
        recognizer.match(call(member(SAY, "plural"), COUNT, branches))
        assert recognizer.diagnostics
        recognizer.match(tagged(SAY, "clean"))
        assert recognizer.diagnostics == ()


class TestRecognitionContext:
    """Speculative attempts and source lookups."""

    def test_failed_attempt_rolls_back_ids_and_diagnostics(self) -> None:
        ctx = RecognitionContext()
        ctx.identifiers.next()

        def failing(context: RecognitionContext, node: object) -> None:
            context.identifiers.next()
            context.report(DiagnosticCode.UNSUPPORTED_BRANCH_VALUE, "x", SAY)
            return None

        assert ctx.attempt(failing, SAY) is None
        assert ctx.identifiers.next() == "1"
        assert ctx.diagnostics == []

    def test_successful_attempt_keeps_ids(self) -> None:
        ctx = RecognitionContext()

        def succeeding(context: RecognitionContext, node: object) -> str:
            return context.identifiers.next()

        assert ctx.attempt(succeeding, SAY) == "0"
        assert ctx.identifiers.next() == "1"

    def test_allocator_reset_per_match(self) -> None:
        """Every top-level message numbers its placeholders from 0."""
        recognizer = Recognizer()
        first = recognizer.match(tagged(SAY, member(ident("a"), "b")))
        second = recognizer.match(tagged(SAY, member(ident("c"), "d")))
        assert first is not None and second is not None
        assert serialize_icu(first) == serialize_icu(second) == "{0}"

    def test_translator_comments_and_reference(self) -> None:
        text = "const a = 1;\n// translators: shown on the home page\nsay`Hello`"
        pos = text.encode().index(b"say`")
        source = SourceUnit(
            "src/app.js",
            text,
            {pos: (Comment(" translators: shown on the home page"), Comment(" eslint-disable-line"))},
        )
        message = Recognizer(source=source).match(tagged(ident("say", start=pos), "Hello"))
        assert message is not None
        assert message.comments == ("shown on the home page",)
        assert message.references == ("src/app.js:3",)

    def test_marker_case_insensitive(self) -> None:
        source = SourceUnit("a.js", "say`x`", {0: (Comment("Translators: Title case"),)})
        message = Recognizer(source=source).match(tagged(ident("say", start=0), "x"))
        assert message is not None
        assert message.comments == ("Title case",)

    def test_choice_comments_at_callee(self) -> None:
        text = "/* translators: cart */ say.plural(n, {other: 'x'})"
        pos = text.index("say")
        callee = MemberExpression(ident("say"), ident("plural"), span=Span(pos, pos + 10))
        source = SourceUnit("cart.js", text, {pos: (Comment(" translators: cart ", kind=CommentKind.BLOCK),)})
        message = Recognizer(source=source).match(call(callee, ident("n"), obj(("other", string("x")))))
        assert message is not None
        assert message.comments == ("cart",)
        assert message.references == ("cart.js:1",)

    def test_no_source_no_metadata(self) -> None:
        message = _match(tagged(ident("say", start=0), "x"))
        assert message is not None
        assert message.comments == ()
        assert message.references == ()


class TestRecognizerInput:
    """Values that are not host tree nodes."""

    @pytest.mark.parametrize("value", ["say`x`", {"type": "TaggedTemplateExpression"}, None, Identifier])
    def test_non_node_rejected(self, value: object) -> None:
        with pytest.raises(RecognitionError) as exc_info:
            Recognizer().match(value)  # type: ignore[arg-type]
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.UNSUPPORTED_HOST_NODE

    def test_unrelated_node_is_not_an_error(self) -> None:
        assert Recognizer().match(string("say`x`")) is None
