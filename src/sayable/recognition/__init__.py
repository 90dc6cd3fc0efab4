"""Message recognition over host trees.

Two front ends (script and JSX) produce one Message IR. Recognizer is the
entry point the traversal driver uses; the form functions are exported for
callers that embed recognition in their own walk.

Python 3.13+.
"""

from .context import RecognitionContext
from .jsx import recognize_choice_element, recognize_container_element, recognize_jsx_child
from .recognizer import Recognizer
from .script import (
    AccessorChain,
    recognize_choice_call,
    recognize_expression,
    recognize_tagged_template,
    resolve_accessor,
)

__all__ = [
    "AccessorChain",
    "RecognitionContext",
    "Recognizer",
    "recognize_choice_call",
    "recognize_choice_element",
    "recognize_container_element",
    "recognize_expression",
    "recognize_jsx_child",
    "recognize_tagged_template",
    "resolve_accessor",
]
