"""
Disposition kinds returned by the preference resolver.
"""

from enum import Enum


class DispositionKind(str, Enum):
    LANGUAGE_SET = "language_set"
    NEEDS_ONBOARDING = "needs_onboarding"
    READY = "ready"
