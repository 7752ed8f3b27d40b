"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ReleaseType(StrEnum):
    ALBUM = "album"
    SINGLE = "single"
    COMPILATION = "compilation"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> ReleaseType:
        if not value:
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


class SkipReason(StrEnum):
    SHORT_FORM = "short_form"
    COMPILATION = "compilation"
    EXISTING = "existing"
    STORAGE_ERROR = "storage_error"
