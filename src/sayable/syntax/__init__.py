"""Host syntax package.

Provides the host AST node algebra, source-unit lookups and the visitor
pattern. Parsing and printing of JS/TS/JSX text belong to an external
parser; this package only models the trees it exchanges with us.

Python 3.13+.
"""

from .ast import (
    ArrayExpression,
    ArrowFunctionExpression,
    ASTNode,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Comment,
    Expression,
    ExpressionStatement,
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
    JSXSpreadAttribute,
    JSXText,
    MemberExpression,
    NullLiteral,
    NumberLiteral,
    ObjectExpression,
    ObjectMethod,
    ObjectProperty,
    Program,
    ReturnStatement,
    Span,
    SpreadElement,
    StringLiteral,
    TaggedTemplateExpression,
    TemplateElement,
    TemplateLiteral,
    VariableDeclaration,
    VariableDeclarator,
)
from .source import SourceUnit
from .visitor import ASTTransformer, ASTVisitor

__all__ = [
    "ASTNode",
    "ASTTransformer",
    "ASTVisitor",
    "ArrayExpression",
    "ArrowFunctionExpression",
    "BinaryExpression",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Comment",
    "Expression",
    "ExpressionStatement",
    "Identifier",
    "JSXAttribute",
    "JSXClosingElement",
    "JSXElement",
    "JSXEmptyExpression",
    "JSXExpressionContainer",
    "JSXFragment",
    "JSXIdentifier",
    "JSXMemberExpression",
    "JSXNamespacedName",
    "JSXOpeningElement",
    "JSXSpreadAttribute",
    "JSXText",
    "MemberExpression",
    "NullLiteral",
    "NumberLiteral",
    "ObjectExpression",
    "ObjectMethod",
    "ObjectProperty",
    "Program",
    "ReturnStatement",
    "SourceUnit",
    "Span",
    "SpreadElement",
    "StringLiteral",
    "TaggedTemplateExpression",
    "TemplateElement",
    "TemplateLiteral",
    "VariableDeclaration",
    "VariableDeclarator",
]
