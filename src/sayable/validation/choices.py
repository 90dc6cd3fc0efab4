"""CLDR-aware validation of choice messages.

Checks what translators will trip over before a catalogue ships:
- plural/ordinal branch keys that the target locale never selects
- choices without an `other` branch
- choices with no branches at all

Architecture:
    - validate_message(): Main entry point, walks the message tree
    - _categories(): CLDR categories of a locale for one choice kind
    - _check_choice(): Per-choice checks

Runtime plural selection is not done here; only the category sets are
consulted.

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from babel.core import UnknownLocaleError

from sayable.diagnostics import Diagnostic, DiagnosticCode, ValidationResult
from sayable.enums import ChoiceKind
from sayable.locale_utils import FALLBACK_LOCALE, get_babel_locale
from sayable.messages.types import (
    ChoiceMessage,
    CompositeMessage,
    ElementMessage,
    Message,
)

__all__ = ["plural_categories", "validate_message"]

logger = logging.getLogger(__name__)

_OTHER = "other"
_EXACT_MATCH = re.compile(r"=?[+-]?[0-9]+")


def plural_categories(locale: str, kind: ChoiceKind) -> frozenset[str]:
    """CLDR categories a locale selects for plural or ordinal choices.

    Babel leaves the implicit `other` category out of a rule's tags; it is
    added back here.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If kind is SELECT or the locale format is invalid

    Example:
        >>> sorted(plural_categories("en", ChoiceKind.ORDINAL))
        ['few', 'one', 'other', 'two']
    """
    babel_locale = get_babel_locale(locale)
    match kind:
        case ChoiceKind.PLURAL:
            rule = babel_locale.plural_form
        case ChoiceKind.ORDINAL:
            rule = babel_locale.ordinal_form
        case _:
            msg = f"{kind} choices have no CLDR categories"
            raise ValueError(msg)
    return frozenset(rule.tags) | {_OTHER}


def _iter_choices(message: Message) -> Iterator[ChoiceMessage]:
    match message:
        case ChoiceMessage(branches=branches):
            yield message
            for branch in branches:
                yield from _iter_choices(branch.value)
        case CompositeMessage(children=children) | ElementMessage(children=children):
            for child in children:
                yield from _iter_choices(child)
        case _:
            return


def _check_choice(
    choice: ChoiceMessage,
    categories: dict[ChoiceKind, frozenset[str]],
    reference: str | None,
) -> Iterator[Diagnostic]:
    if not choice.branches:
        yield Diagnostic(
            code=DiagnosticCode.EMPTY_CHOICE,
            message=f"Choice '{choice.identifier}' has no branches",
            reference=reference,
        )
        return

    allowed = categories.get(choice.kind)
    if allowed is not None:
        for branch in choice.branches:
            if _EXACT_MATCH.fullmatch(branch.key) or branch.key in allowed:
                continue
            yield Diagnostic(
                code=DiagnosticCode.UNKNOWN_PLURAL_CATEGORY,
                message=(
                    f"Branch '{branch.key}' of {choice.kind} '{choice.identifier}' "
                    "is never selected in this locale"
                ),
                reference=reference,
                hint=f"Use one of: {', '.join(sorted(allowed))}, or an exact number",
            )

    if choice.branch(_OTHER) is None:
        yield Diagnostic(
            code=DiagnosticCode.MISSING_OTHER_BRANCH,
            message=f"{choice.kind.capitalize()} '{choice.identifier}' has no 'other' branch",
            reference=reference,
            hint="Add an 'other' branch as the fallback",
            severity="warning",
        )


def validate_message(message: Message, locale: str = FALLBACK_LOCALE) -> ValidationResult:
    """Validate every choice in a message against a locale's CLDR rules.

    Args:
        message: Message to validate (usually a top-level Composite)
        locale: Target locale code (BCP-47 or POSIX). Unknown locales fall
            back to English categories with an UNKNOWN_LOCALE warning.

    Returns:
        ValidationResult; unknown categories and empty choices are errors,
        a missing `other` branch is a warning

    Example:
        >>> result = validate_message(message, "ru")  # say.plural(n, { one, other })
        >>> result.is_valid
        True
        >>> [w.code.name for w in result.warnings]
        []
    """
    diagnostics: list[Diagnostic] = []
    reference: str | None = None
    if isinstance(message, CompositeMessage) and message.references:
        reference = message.references[0]

    try:
        get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        logger.warning("Unknown locale %r; validating against %r", locale, FALLBACK_LOCALE)
        diagnostics.append(
            Diagnostic(
                code=DiagnosticCode.UNKNOWN_LOCALE,
                message=f"Unknown locale '{locale}'; using '{FALLBACK_LOCALE}' plural rules",
                reference=reference,
                severity="warning",
            )
        )
        locale = FALLBACK_LOCALE

    categories = {
        ChoiceKind.PLURAL: plural_categories(locale, ChoiceKind.PLURAL),
        ChoiceKind.ORDINAL: plural_categories(locale, ChoiceKind.ORDINAL),
    }
    for choice in _iter_choices(message):
        diagnostics.extend(_check_choice(choice, categories, reference))

    return ValidationResult.from_diagnostics(tuple(diagnostics))
