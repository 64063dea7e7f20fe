"""
Outcomes of resolving an inbound message against the user's preference.

A disposition is one of three variants; each carries only the fields that
make sense for it.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from ..enums import DispositionKind, LanguagePreference


@dataclass(frozen=True)
class LanguageSet:
    """The message was a language command; ``message`` confirms it."""

    kind: ClassVar[DispositionKind] = DispositionKind.LANGUAGE_SET
    language: LanguagePreference
    message: str


@dataclass(frozen=True)
class NeedsOnboarding:
    """No language chosen yet; ``message`` asks the user to pick one.

    ``first_contact`` marks a user seen for the first time. ``degraded`` marks
    the fallback prompt sent when the preference could not be read.
    """

    kind: ClassVar[DispositionKind] = DispositionKind.NEEDS_ONBOARDING
    message: str
    first_contact: bool = False
    degraded: bool = False


@dataclass(frozen=True)
class Ready:
    """Proceed with analysis of ``query_text`` in ``language``."""

    kind: ClassVar[DispositionKind] = DispositionKind.READY
    language: LanguagePreference
    query_text: str


Disposition = Union[LanguageSet, NeedsOnboarding, Ready]
