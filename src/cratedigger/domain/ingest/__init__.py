"""Continuous catalog import: filtering, batching and the cycle loop."""

from __future__ import annotations

from .batch import BatchRunner
from .corpus import CorpusState
from .cycle import CycleController, CycleSettings, CycleStatistics
from .importer import AlbumImporter, ImportResult
from .normalization import build_album, derive_cover_art, parse_release_date
from .pacing import Pacer
from .policy import InclusionPolicy

__all__ = [
    "AlbumImporter",
    "BatchRunner",
    "CorpusState",
    "CycleController",
    "CycleSettings",
    "CycleStatistics",
    "ImportResult",
    "InclusionPolicy",
    "Pacer",
    "build_album",
    "derive_cover_art",
    "parse_release_date",
]
