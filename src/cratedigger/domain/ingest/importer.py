"""Filter candidate releases and persist the new ones."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from cratedigger.domain.model import SkipReason
from cratedigger.domain.ports.persistence import DuplicateAlbumError, StorageError

from .normalization import build_album
from .policy import InclusionPolicy

if TYPE_CHECKING:
    from cratedigger.domain.model import CandidateRelease
    from cratedigger.domain.ports.unit_of_work import AlbumUnitOfWork

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ImportResult:
    external_id: str
    skip_reason: SkipReason | None = None

    @property
    def imported(self) -> bool:
        return self.skip_reason is None

    @classmethod
    def skipped(cls, candidate: CandidateRelease, reason: SkipReason) -> ImportResult:
        return cls(external_id=candidate.external_id, skip_reason=reason)


@dataclass(slots=True)
class AlbumImporter:
    """Apply the inclusion policy, check for an existing row, then insert.

    The existence check is a read before the write, not a transaction; the
    unique constraint on ``spotify_id`` is what actually prevents duplicates,
    and a violation of it is reported as an existing album.
    """

    unit_of_work_factory: Callable[[], AlbumUnitOfWork]
    policy: InclusionPolicy = field(default_factory=InclusionPolicy)
    clock: Callable[[], datetime] = _utcnow

    def import_if_new(self, candidate: CandidateRelease) -> ImportResult:
        reason = self.policy.exclusion_reason(candidate)
        if reason is not None:
            return ImportResult.skipped(candidate, reason)

        try:
            with self.unit_of_work_factory() as uow:
                albums = uow.repositories.albums
                if albums.find_by_external_id(candidate.external_id) is not None:
                    return ImportResult.skipped(candidate, SkipReason.EXISTING)
                albums.create(build_album(candidate, now=self.clock()))
                uow.commit()
        except DuplicateAlbumError:
            log.debug("Album %s was inserted concurrently", candidate.external_id)
            return ImportResult.skipped(candidate, SkipReason.EXISTING)
        except StorageError as exc:
            log.warning(
                "Could not store album %s (%s): %s", candidate.external_id, candidate.title, exc
            )
            return ImportResult.skipped(candidate, SkipReason.STORAGE_ERROR)

        log.debug("Imported album %s (%s)", candidate.external_id, candidate.title)
        return ImportResult(external_id=candidate.external_id)

    def import_all(self, candidates: list[CandidateRelease]) -> int:
        return sum(1 for candidate in candidates if self.import_if_new(candidate).imported)

    def count(self) -> int:
        with self.unit_of_work_factory() as uow:
            return uow.repositories.albums.count()
