"""Shared constants for sayable.

Centralized configuration constants used across the syntax, recognition and
generation packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for recognition/serialization/traversal
- Message surface: Names the recognizer looks for in host source
- Identifier derivation: Hash input layout and output length

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Message surface
    "DEFAULT_ACCESSOR_NAME",
    "DEFAULT_COMPONENT_NAME",
    "CALL_METHOD_NAME",
    "DESCRIPTOR_CONTEXT_KEY",
    "DESCRIPTOR_ID_KEY",
    "DISCRIMINANT_ATTRIBUTE",
    "TRANSLATORS_MARKER",
    # Identifier derivation
    "CONTEXT_SEPARATOR",
    "HASH_LENGTH",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: recognizer (nested messages), ICU serializer, flattening, traversal.
# Real-world messages nest a handful of levels; 100 is malformed input.
MAX_DEPTH: int = 100

# ============================================================================
# MESSAGE SURFACE
# ============================================================================

# Identifier the script front end resolves member/call chains to.
DEFAULT_ACCESSOR_NAME: str = "say"

# JSX element name the JSX front end matches (<Say>, <Say.Plural />).
DEFAULT_COMPONENT_NAME: str = "Say"

# Method invoked on the accessor by generated call expressions.
CALL_METHOD_NAME: str = "call"

# Descriptor keys (object-literal properties or JSX attributes).
DESCRIPTOR_CONTEXT_KEY: str = "context"
DESCRIPTOR_ID_KEY: str = "id"

# JSX attribute carrying the choice discriminant: <Say.Plural _={count} ... />
DISCRIMINANT_ATTRIBUTE: str = "_"

# Leading comments starting with this marker (case-insensitive) are
# extracted as translator notes.
TRANSLATORS_MARKER: str = "translators:"

# ============================================================================
# IDENTIFIER DERIVATION
# ============================================================================

# Unit separator between ICU text and context in the hash input.
CONTEXT_SEPARATOR: str = "\x1f"

# Number of base64 characters kept from the digest.
HASH_LENGTH: int = 6
