"""Content-derived message identifiers.

An id is a pure function of the ICU text and the optional context, so
extraction tooling and the transform agree on ids without sharing state.

Python 3.13+. Zero external dependencies.
"""

import base64
import hashlib

from sayable.constants import CONTEXT_SEPARATOR, HASH_LENGTH, MAX_DEPTH

from .icu import serialize_icu
from .types import CompositeMessage

__all__ = ["generate_hash", "resolve_message_id"]


def generate_hash(icu: str, context: str | None = None) -> str:
    """Derive the short identifier for a message.

    SHA-256 over UTF-8(icu) + 0x1F + UTF-8(context or ""), base64-encoded,
    first six characters. The separator keeps ("ab", "c") and ("a", "bc")
    apart; a missing context and an empty context hash identically.

    Args:
        icu: Serialized ICU MessageFormat text
        context: Disambiguating context, if any

    Returns:
        Six-character identifier

    Example:
        >>> generate_hash("my message")
        'vQhkQx'
        >>> generate_hash("my message", "some context")
        'NHsKx2'
    """
    payload = f"{icu}{CONTEXT_SEPARATOR}{context or ''}".encode()
    digest = hashlib.sha256(payload).digest()
    return base64.b64encode(digest).decode("ascii")[:HASH_LENGTH]


def resolve_message_id(message: CompositeMessage, *, max_depth: int = MAX_DEPTH) -> str:
    """Id embedded for a message: the explicit override, else the hash.

    The hash uses the message's own context, so the same text under two
    contexts gets two ids.
    """
    if message.id is not None:
        return message.id
    return generate_hash(serialize_icu(message, max_depth=max_depth), message.context)
