"""Mutable state shared by one recognizer across one source unit.

Holds the per-message identifier allocator, the source lookups, and the
diagnostics collected while building messages. Speculative attempts go
through attempt(), which snapshots the allocator and the diagnostics list
and restores both when the attempt does not produce a message.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from sayable.config import TransformConfig
from sayable.constants import TRANSLATORS_MARKER
from sayable.core.depth_guard import DepthGuard
from sayable.core.identifiers import IdentifierAllocator
from sayable.diagnostics import Diagnostic, DiagnosticCode
from sayable.syntax.ast import ASTNode, Identifier, JSXIdentifier
from sayable.syntax.source import SourceUnit

__all__ = ["RecognitionContext"]

logger = logging.getLogger(__name__)


def _start(node: ASTNode) -> int | None:
    span = getattr(node, "span", None)
    return span.start if span is not None else None


@dataclass(slots=True)
class RecognitionContext:
    """Per-traversal recognizer state.

    Attributes:
        config: Pipeline configuration
        source: Source unit for comment and reference lookups (optional)
        identifiers: Fallback-id allocator, reset per top-level attempt
        diagnostics: Local recognition problems, in discovery order
    """

    config: TransformConfig = field(default_factory=TransformConfig)
    source: SourceUnit | None = None
    identifiers: IdentifierAllocator = field(default_factory=IdentifierAllocator)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    depth_guard: DepthGuard = field(init=False)

    def __post_init__(self) -> None:
        self.depth_guard = DepthGuard(max_depth=self.config.max_depth)

    def attempt[N, R](self, form: Callable[[RecognitionContext, N], R | None], node: N) -> R | None:
        """Run one recognition form speculatively.

        On a None result the allocator and the diagnostics list are rolled
        back, so a failed nested attempt leaves no id gaps among siblings.
        """
        checkpoint = self.identifiers.checkpoint()
        reported = len(self.diagnostics)
        with self.depth_guard:
            result = form(self, node)
        if result is None:
            self.identifiers.restore(checkpoint)
            del self.diagnostics[reported:]
        return result

    def expression_key(self, node: ASTNode) -> str:
        """Placeholder key for a value: its bare name, else a fallback id."""
        if isinstance(node, (Identifier, JSXIdentifier)):
            return node.name
        return self.identifiers.next()

    def comments_at(self, node: ASTNode) -> tuple[str, ...]:
        """Translator notes from comments leading the node's start position.

        Only comments whose text starts with "translators:" (any case) are
        kept, with the marker stripped.
        """
        pos = _start(node)
        if self.source is None or pos is None:
            return ()
        notes: list[str] = []
        for comment in self.source.leading_comments(pos):
            text = comment.value.strip()
            if text.lower().startswith(TRANSLATORS_MARKER):
                notes.append(text[len(TRANSLATORS_MARKER) :].strip())
        return tuple(notes)

    def references_at(self, node: ASTNode) -> tuple[str, ...]:
        """Source reference ("file:line") for the node's start position, if known."""
        pos = _start(node)
        if self.source is None or pos is None:
            return ()
        return (self.source.reference(pos),)

    def report(
        self,
        code: DiagnosticCode,
        message: str,
        node: ASTNode,
        *,
        hint: str | None = None,
    ) -> None:
        """Record a local recognition problem and keep going."""
        references = self.references_at(node)
        diagnostic = Diagnostic(
            code=code,
            message=message,
            reference=references[0] if references else None,
            hint=hint,
            severity="warning",
        )
        self.diagnostics.append(diagnostic)
        logger.debug("Recognition diagnostic: %s", diagnostic.format_error())
