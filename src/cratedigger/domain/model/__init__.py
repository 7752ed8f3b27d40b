"""Domain model for the catalog importer."""

from __future__ import annotations

from .catalog import (
    Album,
    CandidateArtist,
    CandidateImage,
    CandidateRelease,
    CatalogEntity,
    CoverArt,
    Credential,
)
from .enums import ReleaseType, SkipReason
from .work import FreeTextQuery, NamedEntity, WorkItem

__all__ = [
    "Album",
    "CandidateArtist",
    "CandidateImage",
    "CandidateRelease",
    "CatalogEntity",
    "CoverArt",
    "Credential",
    "FreeTextQuery",
    "NamedEntity",
    "ReleaseType",
    "SkipReason",
    "WorkItem",
]
