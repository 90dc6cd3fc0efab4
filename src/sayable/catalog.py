"""Id-keyed catalogue of extracted messages.

Collects the messages extraction reports across one or more source units
into one entry per message id, the shape translation tooling consumes.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from sayable.constants import MAX_DEPTH
from sayable.diagnostics import Diagnostic, DiagnosticCode
from sayable.messages.hash import generate_hash
from sayable.messages.icu import serialize_icu
from sayable.messages.types import CompositeMessage

__all__ = ["CatalogEntry", "MessageCatalog", "build_catalog"]

logger = logging.getLogger(__name__)


def _merge_unique(first: tuple[str, ...], second: tuple[str, ...]) -> tuple[str, ...]:
    return first + tuple(item for item in second if item not in first)


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One catalogue row.

    Attributes:
        id: Message id (explicit override or content hash)
        message: ICU MessageFormat source text
        context: Disambiguating context, if any
        comments: Translator notes from every occurrence
        references: "file:line" of every occurrence
    """

    id: str
    message: str
    context: str | None = None
    comments: tuple[str, ...] = ()
    references: tuple[str, ...] = ()


class MessageCatalog:
    """Ordered mapping of message id to CatalogEntry.

    A message seen again with the same ICU text and context is merged:
    its comments and references are appended. A different message under
    an id already taken replaces the old entry (last write wins) and is
    recorded as a MESSAGE_ID_COLLISION diagnostic.

    Usage:
        >>> catalog = MessageCatalog()
        >>> catalog.add(message)
        'vQhkQx'
        >>> [entry.message for entry in catalog.entries()]
        ['my message']
    """

    __slots__ = ("_entries", "_max_depth", "diagnostics")

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        self._entries: dict[str, CatalogEntry] = {}
        self._max_depth = max_depth
        self.diagnostics: list[Diagnostic] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def get(self, message_id: str) -> CatalogEntry | None:
        """Entry for an id, if present."""
        return self._entries.get(message_id)

    def add(self, message: CompositeMessage) -> str:
        """Add one extracted message.

        Returns:
            The id the message is stored under
        """
        icu = serialize_icu(message, max_depth=self._max_depth)
        message_id = message.id if message.id is not None else generate_hash(icu, message.context)
        entry = CatalogEntry(
            id=message_id,
            message=icu,
            context=message.context,
            comments=message.comments,
            references=message.references,
        )

        existing = self._entries.get(message_id)
        if existing is None:
            self._entries[message_id] = entry
        elif (existing.message, existing.context) == (entry.message, entry.context):
            self._entries[message_id] = CatalogEntry(
                id=message_id,
                message=icu,
                context=message.context,
                comments=_merge_unique(existing.comments, entry.comments),
                references=_merge_unique(existing.references, entry.references),
            )
        else:
            diagnostic = Diagnostic(
                code=DiagnosticCode.MESSAGE_ID_COLLISION,
                message=f"Id '{message_id}' reassigned from {existing.message!r} to {icu!r}",
                reference=entry.references[0] if entry.references else None,
                hint="Give one of the messages an explicit id or a context",
                severity="warning",
            )
            self.diagnostics.append(diagnostic)
            logger.warning("%s", diagnostic.format_error())
            self._entries[message_id] = entry
        return message_id

    def update(self, messages: Iterable[CompositeMessage]) -> None:
        """Add messages in order."""
        for message in messages:
            self.add(message)

    def entries(self) -> tuple[CatalogEntry, ...]:
        """Entries in first-insertion order of their ids."""
        return tuple(self._entries.values())


def build_catalog(
    messages: Iterable[CompositeMessage], *, max_depth: int = MAX_DEPTH
) -> MessageCatalog:
    """Build a catalogue from extracted messages.

    Example:
        >>> catalog = build_catalog(extract(program, source))
        >>> len(catalog)
        3
    """
    catalog = MessageCatalog(max_depth=max_depth)
    catalog.update(messages)
    logger.info("Catalogue built: %d entries", len(catalog))
    return catalog
