"""JSX-form replacement: <Say id="..." name={value} _0={<b/>} />.

Python 3.13+.
"""

from __future__ import annotations

from sayable.constants import DESCRIPTOR_ID_KEY
from sayable.diagnostics import Diagnostic, DiagnosticCode, GenerationError
from sayable.syntax.ast import (
    ASTNode,
    Identifier,
    JSXAttribute,
    JSXElement,
    JSXExpressionContainer,
    JSXIdentifier,
    JSXOpeningElement,
    StringLiteral,
)

__all__ = ["attribute_name", "build_element"]


def attribute_name(key: str) -> str:
    """JSX attribute names cannot start with a digit: `0` is written `_0`."""
    if key[:1].isdigit():
        return f"_{key}"
    return key


def build_element(
    accessor: ASTNode,
    message_id: str,
    values: tuple[tuple[str, ASTNode], ...],
) -> JSXElement:
    """Build `<Accessor id="..." key={value} ... />`.

    Raises:
        GenerationError: If the accessor is not a plain identifier
    """
    if not isinstance(accessor, Identifier):
        raise GenerationError(
            Diagnostic(
                code=DiagnosticCode.UNSUPPORTED_ACCESSOR,
                message=f"JSX output needs an identifier accessor, got {type(accessor).__name__}",
                hint="Use OutputForm.CALL for member-expression accessors",
            )
        )

    attributes = [JSXAttribute(name=JSXIdentifier(DESCRIPTOR_ID_KEY), value=StringLiteral(message_id))]
    attributes.extend(
        JSXAttribute(
            name=JSXIdentifier(attribute_name(key)),
            value=JSXExpressionContainer(value),  # type: ignore[arg-type]
        )
        for key, value in values
    )
    return JSXElement(
        opening=JSXOpeningElement(
            name=JSXIdentifier(accessor.name),
            attributes=tuple(attributes),
            self_closing=True,
        ),
    )
