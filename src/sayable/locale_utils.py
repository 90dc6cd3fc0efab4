"""Locale parsing for CLDR-backed message validation.

Accepts both BCP-47 ("pt-BR") and POSIX ("pt_BR") codes and caches the
parsed Babel locale, since validation looks the same locale up once per
choice.

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "FALLBACK_LOCALE",
    "get_babel_locale",
    "normalize_locale",
]

# Locale whose plural categories are used when the requested one is unknown.
FALLBACK_LOCALE: str = "en"


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to the POSIX form Babel parses.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> get_babel_locale("pl-PL").plural_form.tags
        frozenset({'one', 'few', 'many'})
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))
