"""Transform configuration.

Provides a single frozen dataclass that encapsulates the knobs of the
recognition and generation pipeline, shared by transform and extract mode
so both compute identical ids.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from sayable.constants import DEFAULT_ACCESSOR_NAME, DEFAULT_COMPONENT_NAME, MAX_DEPTH
from sayable.enums import OutputForm

__all__ = ["TransformConfig"]


@dataclass(frozen=True, slots=True)
class TransformConfig:
    """Immutable configuration for the message pipeline.

    All fields have sensible defaults; ``TransformConfig()`` matches the
    stock `say` / `<Say>` surface.

    Attributes:
        accessor_name: Identifier the script front end resolves to (default: "say").
        component_name: JSX element name the JSX front end matches (default: "Say").
        max_depth: Nesting limit for recognition, serialization and traversal
            (default: 100).
        output: Replacement form (default: OutputForm.AUTO, JSX in, JSX out).

    Example:
        >>> config = TransformConfig(accessor_name="t", component_name="T")
        >>> transform(program, config=config)
    """

    accessor_name: str = DEFAULT_ACCESSOR_NAME
    component_name: str = DEFAULT_COMPONENT_NAME
    max_depth: int = MAX_DEPTH
    output: OutputForm = OutputForm.AUTO

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If a name is not an identifier, max_depth is not
                positive, or output is not a known form.
        """
        if not self.accessor_name.isidentifier():
            msg = f"accessor_name must be an identifier, got {self.accessor_name!r}"
            raise ValueError(msg)
        if not self.component_name.isidentifier():
            msg = f"component_name must be an identifier, got {self.component_name!r}"
            raise ValueError(msg)
        if self.max_depth <= 0:
            msg = "max_depth must be positive"
            raise ValueError(msg)
        object.__setattr__(self, "output", OutputForm(self.output))
