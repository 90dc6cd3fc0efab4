"""Message validation against CLDR plural data.

Python 3.13+.
"""

from .choices import plural_categories, validate_message

__all__ = ["plural_categories", "validate_message"]
