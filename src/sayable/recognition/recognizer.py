"""Top-level message recognition.

The Recognizer answers one question for the traversal driver: is this
node a message? It tries each form in priority order and never walks
into an unmatched node; recursion over the wider tree is the driver's job.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import is_dataclass

from sayable.config import TransformConfig
from sayable.diagnostics import Diagnostic, DiagnosticCode, RecognitionError
from sayable.messages.types import CompositeMessage
from sayable.syntax.ast import ASTNode, CallExpression, JSXElement, TaggedTemplateExpression
from sayable.syntax.source import SourceUnit

from .context import RecognitionContext
from .jsx import recognize_choice_element, recognize_container_element
from .script import recognize_choice_call, recognize_tagged_template

__all__ = ["Recognizer"]

logger = logging.getLogger(__name__)

type _Form = Callable[[RecognitionContext, ASTNode], CompositeMessage | None]


class Recognizer:
    """Matches host nodes against the message forms.

    Forms, in priority order:
        1. Tagged template rooted at the accessor (say`...`)
        2. Choice call (say.plural(n, {...}))
        3. <Say> container element
        4. Self-closing <Say.Select|Plural|Ordinal /> element

    Usage:
        >>> recognizer = Recognizer(TransformConfig())
        >>> message = recognizer.match(node)
        >>> if message is not None:
        ...     recognizer.diagnostics  # problems found inside that message
    """

    __slots__ = ("_context", "diagnostics")

    _forms: tuple[tuple[type, _Form], ...] = (
        (TaggedTemplateExpression, recognize_tagged_template),  # type: ignore[arg-type]
        (CallExpression, recognize_choice_call),  # type: ignore[arg-type]
        (JSXElement, recognize_container_element),  # type: ignore[arg-type]
        (JSXElement, recognize_choice_element),  # type: ignore[arg-type]
    )

    def __init__(
        self,
        config: TransformConfig | None = None,
        source: SourceUnit | None = None,
    ) -> None:
        self._context = RecognitionContext(config=config or TransformConfig(), source=source)
        self.diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def config(self) -> TransformConfig:
        """Configuration this recognizer matches against."""
        return self._context.config

    def match(self, node: ASTNode) -> CompositeMessage | None:
        """Recognize a top-level message rooted at node.

        Starts a fresh message scope: fallback ids restart at "0" and the
        diagnostics of the previous match are discarded.

        Returns:
            Composite for the first matching form, else None

        Raises:
            RecognitionError: If node is not a host tree node
        """
        if not is_dataclass(node) or isinstance(node, type):
            raise RecognitionError(
                Diagnostic(
                    code=DiagnosticCode.UNSUPPORTED_HOST_NODE,
                    message=f"Cannot recognize {type(node).__name__}: not a host tree node",
                    hint="Build the tree from sayable.syntax.ast nodes",
                )
            )

        ctx = self._context
        ctx.identifiers.reset()
        ctx.diagnostics.clear()
        self.diagnostics = ()

        for node_type, form in self._forms:
            if not isinstance(node, node_type):
                continue
            message = ctx.attempt(form, node)
            if message is not None:
                self.diagnostics = tuple(ctx.diagnostics)
                logger.debug(
                    "Recognized %s via %s (%d diagnostics)",
                    type(node).__name__,
                    form.__name__,
                    len(self.diagnostics),
                )
                return message
        return None
