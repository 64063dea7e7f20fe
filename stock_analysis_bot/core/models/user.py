"""
User-related data models.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..enums import LanguagePreference


class UserPreference(BaseModel):
    """Per-user preference and activity record."""

    model_config = ConfigDict(extra="forbid")

    identifier: str = Field(min_length=1)
    language_preference: LanguagePreference = LanguagePreference.PENDING
    created_at: datetime
    last_used_at: datetime
    message_count: int = Field(default=1, ge=0)

    @field_validator("language_preference", mode="before")
    @classmethod
    def _coerce_language(cls, value):
        if isinstance(value, LanguagePreference):
            return value
        return LanguagePreference.from_stored(value)


class UserStats(BaseModel):
    """Aggregate counters across all users."""

    total_users: int = 0
    english_users: int = 0
    hindi_users: int = 0
    gujarati_users: int = 0
    pending_users: int = 0
    total_messages: int = 0
