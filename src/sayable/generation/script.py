"""Call-form replacement: accessor.call({ id: "...", name: value, ... }).

Python 3.13+.
"""

from __future__ import annotations

from sayable.constants import CALL_METHOD_NAME, DESCRIPTOR_ID_KEY
from sayable.syntax.ast import (
    ASTNode,
    CallExpression,
    Identifier,
    MemberExpression,
    ObjectExpression,
    ObjectProperty,
    StringLiteral,
)

__all__ = ["build_call", "object_key"]


def object_key(key: str) -> Identifier | StringLiteral:
    """Property key node: bare identifier where JS allows one, else a string."""
    if key.isidentifier():
        return Identifier(key)
    return StringLiteral(key)


def build_call(
    accessor: ASTNode,
    message_id: str,
    values: tuple[tuple[str, ASTNode], ...],
) -> CallExpression:
    """Build `accessor.call({ id, ...values })`.

    The id property comes first; values keep their flattened order.
    """
    properties = [ObjectProperty(key=Identifier(DESCRIPTOR_ID_KEY), value=StringLiteral(message_id))]
    properties.extend(
        ObjectProperty(key=object_key(key), value=value)  # type: ignore[arg-type]
        for key, value in values
    )
    return CallExpression(
        callee=MemberExpression(object=accessor, property=Identifier(CALL_METHOD_NAME)),  # type: ignore[arg-type]
        arguments=(ObjectExpression(properties=tuple(properties)),),
    )
