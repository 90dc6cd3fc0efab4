"""Message IR, ICU serialization and id derivation.

Pure data and pure functions: nothing here inspects host trees beyond
holding opaque expression handles.

Python 3.13+.
"""

from .hash import generate_hash, resolve_message_id
from .icu import IcuSerializer, format_branch_key, serialize_icu
from .types import (
    ArgumentMessage,
    ChoiceBranch,
    ChoiceMessage,
    CompositeMessage,
    ElementMessage,
    LiteralMessage,
    Message,
)

__all__ = [
    "ArgumentMessage",
    "ChoiceBranch",
    "ChoiceMessage",
    "CompositeMessage",
    "ElementMessage",
    "IcuSerializer",
    "LiteralMessage",
    "Message",
    "format_branch_key",
    "generate_hash",
    "resolve_message_id",
    "serialize_icu",
]
