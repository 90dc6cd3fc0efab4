"""sayable - recognize and compile `say` messages in JS/JSX host trees.

Finds tagged templates, choice calls and <Say> elements rooted at the `say`
accessor, turns each into a Message IR, derives a stable content id from its
ICU MessageFormat text, and rewrites it into `say.call({ id, ...values })` or
`<Say id="..." ... />`.

Public API:
    transform - Rewrite every message in a host Program
    extract - Collect every message in a host Program
    transform_with_messages - Both at once
    TransformConfig - Accessor/component names, depth limit, output form
    Recognizer - Single-node message recognition
    serialize_icu - Message IR to ICU MessageFormat
    generate_hash - Content-derived message id
    build_catalog - Id-keyed catalogue of extracted messages
    validate_message - CLDR-aware choice validation

Exceptions:
    SayableError - Base exception class
    RecognitionError - Recognizer handed a value that is not a host node
    SerializationError - IR cannot be rendered as ICU
    GenerationError - Replacement node cannot be built

Submodules:
    sayable.syntax - Host node algebra, source units, visitor/transformer
    sayable.messages - Message IR, ICU serializer, hash deriver
    sayable.recognition - Script and JSX front ends
    sayable.generation - Call and JSX back ends
    sayable.diagnostics - Error types, diagnostic codes, validation results
"""

# Essential Public API - Minimal exports for clean namespace
from .catalog import CatalogEntry, MessageCatalog, build_catalog
from .config import TransformConfig
from .diagnostics import (
    GenerationError,
    RecognitionError,
    SayableError,
    SerializationError,
)
from .enums import ChoiceKind, OutputForm
from .messages import generate_hash, resolve_message_id, serialize_icu
from .recognition import Recognizer
from .transform import extract, transform, transform_with_messages
from .validation import validate_message

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("sayable")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CatalogEntry",
    "ChoiceKind",
    "GenerationError",
    "MessageCatalog",
    "OutputForm",
    "RecognitionError",
    "Recognizer",
    "SayableError",
    "SerializationError",
    "TransformConfig",
    "__version__",
    "build_catalog",
    "extract",
    "generate_hash",
    "resolve_message_id",
    "serialize_icu",
    "transform",
    "transform_with_messages",
    "validate_message",
]
