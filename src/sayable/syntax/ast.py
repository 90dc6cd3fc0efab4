"""Host AST node definitions.

The subset of the JavaScript/TypeScript/JSX tree the message pipeline
consumes and produces. Node names and field names follow the ESTree/Babel
shapes so an external parser can build them with a mechanical mapping.
Everything the recognizer does not inspect still round-trips through the
traversal driver untouched, as long as it is expressed with these nodes.

Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from sayable.enums import CommentKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    "Comment",
    # Program structure
    "Program",
    "ExpressionStatement",
    "VariableDeclaration",
    "VariableDeclarator",
    "ReturnStatement",
    "BlockStatement",
    # Expressions
    "Identifier",
    "StringLiteral",
    "NumberLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "TemplateElement",
    "TemplateLiteral",
    "TaggedTemplateExpression",
    "MemberExpression",
    "CallExpression",
    "ObjectExpression",
    "ObjectProperty",
    "ObjectMethod",
    "SpreadElement",
    "ArrayExpression",
    "BinaryExpression",
    "ArrowFunctionExpression",
    # JSX
    "JSXIdentifier",
    "JSXMemberExpression",
    "JSXNamespacedName",
    "JSXAttribute",
    "JSXSpreadAttribute",
    "JSXOpeningElement",
    "JSXClosingElement",
    "JSXElement",
    "JSXFragment",
    "JSXText",
    "JSXExpressionContainer",
    "JSXEmptyExpression",
    # Type aliases
    "Expression",
    "Literal",
    "Statement",
    "JSXElementName",
    "JSXAttributeValue",
    "JSXChild",
    "ASTNode",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Tracks UTF-8 byte offsets in the host source for comment lookup and
    source references.

    Attributes:
        start: Starting byte offset (inclusive)
        end: Ending byte offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Comment:
    """Host source comment (// line or /* block */).

    The value excludes the comment delimiters.
    """

    value: str
    kind: CommentKind = CommentKind.LINE
    span: Span | None = None


# ============================================================================
# PROGRAM STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Program:
    """Root node of one source unit."""

    body: tuple["Statement", ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """Expression used as a statement: say`Hi`;"""

    expression: "Expression"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class VariableDeclaration:
    """const a = 1, b = 2;"""

    kind: str
    declarations: tuple["VariableDeclarator", ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class VariableDeclarator:
    """Single binding inside a VariableDeclaration."""

    id: "Identifier"
    init: "Expression | None" = None
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class ReturnStatement:
    """return <expression>;"""

    argument: "Expression | None" = None
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class BlockStatement:
    """{ ...statements }"""

    body: tuple["Statement", ...]
    span: Span | None = None


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Identifier:
    """Identifier reference or binding: name"""

    name: str
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["Identifier"]:
        """Type guard for Identifier (bare names become placeholder keys)."""
        return isinstance(node, Identifier)


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """String literal: "text" (value holds the decoded text)."""

    value: str
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["StringLiteral"]:
        """Type guard for StringLiteral."""
        return isinstance(node, StringLiteral)


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Number literal: 42, 3.14, 0x1F

    The raw field preserves original source for printing.
    """

    value: int | float
    raw: str
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["NumberLiteral"]:
        """Type guard for NumberLiteral."""
        return isinstance(node, NumberLiteral)


@dataclass(frozen=True, slots=True)
class BooleanLiteral:
    """true / false"""

    value: bool
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class NullLiteral:
    """null"""

    span: Span | None = None


@dataclass(frozen=True, slots=True)
class TemplateElement:
    """Static text segment of a template literal.

    Attributes:
        raw: Source text between delimiters, escapes untouched
        cooked: Text with escapes processed; None for invalid escapes,
            which tagged templates permit
    """

    raw: str
    cooked: str | None = None
    span: Span | None = None

    @property
    def text(self) -> str:
        """Cooked text, falling back to raw when cooking failed."""
        return self.cooked if self.cooked is not None else self.raw


@dataclass(frozen=True, slots=True)
class TemplateLiteral:
    """`text ${expression} text`

    Invariant: len(quasis) == len(expressions) + 1.
    """

    quasis: tuple[TemplateElement, ...]
    expressions: tuple["Expression", ...]
    span: Span | None = None

    def __post_init__(self) -> None:
        """Validate quasi/expression interleaving."""
        if len(self.quasis) != len(self.expressions) + 1:
            msg = (
                f"TemplateLiteral needs len(expressions) + 1 quasis, got "
                f"{len(self.quasis)} quasis for {len(self.expressions)} expressions"
            )
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class TaggedTemplateExpression:
    """tag`text ${expression}`"""

    tag: "Expression"
    quasi: TemplateLiteral
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["TaggedTemplateExpression"]:
        """Type guard for TaggedTemplateExpression."""
        return isinstance(node, TaggedTemplateExpression)


@dataclass(frozen=True, slots=True)
class MemberExpression:
    """object.property or object[property] (computed)."""

    object: "Expression"
    property: "Expression"
    computed: bool = False
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["MemberExpression"]:
        """Type guard for MemberExpression."""
        return isinstance(node, MemberExpression)


@dataclass(frozen=True, slots=True)
class CallExpression:
    """callee(arg, ...spread)"""

    callee: "Expression"
    arguments: tuple["Expression | SpreadElement", ...]
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["CallExpression"]:
        """Type guard for CallExpression."""
        return isinstance(node, CallExpression)


@dataclass(frozen=True, slots=True)
class ObjectProperty:
    """key: value (computed for [key]: value)."""

    key: "Expression"
    value: "Expression"
    computed: bool = False
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class ObjectMethod:
    """Method or accessor member: key() { ... }, get key() { ... }"""

    key: "Expression"
    body: BlockStatement
    kind: str = "method"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class SpreadElement:
    """...argument"""

    argument: "Expression"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class ObjectExpression:
    """{ key: value, ...spread }"""

    properties: tuple[ObjectProperty | ObjectMethod | SpreadElement, ...]
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["ObjectExpression"]:
        """Type guard for ObjectExpression (descriptors and branch maps)."""
        return isinstance(node, ObjectExpression)


@dataclass(frozen=True, slots=True)
class ArrayExpression:
    """[a, b, ...c]"""

    elements: tuple["Expression | SpreadElement", ...]
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class BinaryExpression:
    """left <operator> right"""

    operator: str
    left: "Expression"
    right: "Expression"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class ArrowFunctionExpression:
    """(params) => body"""

    params: tuple[Identifier, ...]
    body: "Expression | BlockStatement"
    span: Span | None = None


# ============================================================================
# JSX
# ============================================================================


@dataclass(frozen=True, slots=True)
class JSXIdentifier:
    """JSX tag or attribute name: Say, div, className"""

    name: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXMemberExpression:
    """Dotted JSX tag name: Say.Plural"""

    object: "JSXIdentifier | JSXMemberExpression"
    property: JSXIdentifier
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXNamespacedName:
    """Namespaced JSX name: xlink:href"""

    namespace: JSXIdentifier
    name: JSXIdentifier
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXExpressionContainer:
    """{ expression } inside JSX."""

    expression: "Expression | JSXEmptyExpression"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXEmptyExpression:
    """The hole in {} or {/* comment */}."""

    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXAttribute:
    """name="value", name={expression}, or bare name (value None)."""

    name: JSXIdentifier | JSXNamespacedName
    value: "JSXAttributeValue | None" = None
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXSpreadAttribute:
    """{...argument} in attribute position."""

    argument: "Expression"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXOpeningElement:
    """<name attributes> or <name attributes />"""

    name: "JSXElementName"
    attributes: tuple[JSXAttribute | JSXSpreadAttribute, ...] = ()
    self_closing: bool = False
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXClosingElement:
    """</name>"""

    name: "JSXElementName"
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXElement:
    """<name ...>children</name> or <name ... />"""

    opening: JSXOpeningElement
    children: tuple["JSXChild", ...] = ()
    closing: JSXClosingElement | None = None
    span: Span | None = None

    @property
    def self_closing(self) -> bool:
        """Whether the element is written as <name ... />."""
        return self.opening.self_closing

    @staticmethod
    def guard(node: object) -> TypeIs["JSXElement"]:
        """Type guard for JSXElement."""
        return isinstance(node, JSXElement)


@dataclass(frozen=True, slots=True)
class JSXFragment:
    """<>children</>"""

    children: tuple["JSXChild", ...] = ()
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class JSXText:
    """Literal text between JSX tags (value is unprocessed source text)."""

    value: str
    span: Span | None = None


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Literal = StringLiteral | NumberLiteral | BooleanLiteral | NullLiteral
type Expression = (
    Identifier
    | Literal
    | TemplateLiteral
    | TaggedTemplateExpression
    | MemberExpression
    | CallExpression
    | ObjectExpression
    | ArrayExpression
    | BinaryExpression
    | ArrowFunctionExpression
    | JSXElement
    | JSXFragment
)
type Statement = (
    ExpressionStatement
    | VariableDeclaration
    | ReturnStatement
    | BlockStatement
)
type JSXElementName = JSXIdentifier | JSXMemberExpression | JSXNamespacedName
type JSXAttributeValue = StringLiteral | JSXExpressionContainer | JSXElement | JSXFragment
type JSXChild = JSXText | JSXExpressionContainer | JSXElement | JSXFragment

# Complete ASTNode type - union of all host node types
type ASTNode = (
    Program
    | Statement
    | VariableDeclarator
    | Expression
    | TemplateElement
    | ObjectProperty
    | ObjectMethod
    | SpreadElement
    | JSXIdentifier
    | JSXMemberExpression
    | JSXNamespacedName
    | JSXAttribute
    | JSXSpreadAttribute
    | JSXOpeningElement
    | JSXClosingElement
    | JSXText
    | JSXExpressionContainer
    | JSXEmptyExpression
    | Comment
    | Span
)
