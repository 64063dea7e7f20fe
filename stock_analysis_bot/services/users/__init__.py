"""
User preference module.
"""

from .store import UserStore
from .resolver import PreferenceResolver

__all__ = ["UserStore", "PreferenceResolver"]
