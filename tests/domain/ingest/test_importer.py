from __future__ import annotations

import pytest

from cratedigger.domain.ingest import AlbumImporter
from cratedigger.domain.model import ReleaseType, SkipReason
from tests.helpers.catalog import (
    FIXED_NOW,
    InMemoryAlbumRepository,
    InMemoryUnitOfWork,
    make_candidate,
)


@pytest.fixture
def repository() -> InMemoryAlbumRepository:
    return InMemoryAlbumRepository()


@pytest.fixture
def unit_of_work(repository: InMemoryAlbumRepository) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(repository)


@pytest.fixture
def importer(unit_of_work: InMemoryUnitOfWork) -> AlbumImporter:
    return AlbumImporter(unit_of_work_factory=lambda: unit_of_work, clock=lambda: FIXED_NOW)


def test_new_album_is_stored(
    importer: AlbumImporter,
    repository: InMemoryAlbumRepository,
    unit_of_work: InMemoryUnitOfWork,
) -> None:
    result = importer.import_if_new(make_candidate("a1"))

    assert result.imported
    assert repository.albums["a1"].imported_at == FIXED_NOW
    assert unit_of_work.commits == 1


def test_import_is_idempotent(importer: AlbumImporter, repository: InMemoryAlbumRepository) -> None:
    first = importer.import_if_new(make_candidate("a1"))
    second = importer.import_if_new(make_candidate("a1"))

    assert first.imported
    assert second.skip_reason is SkipReason.EXISTING
    assert repository.count() == 1


def test_excluded_candidate_never_reaches_storage(
    importer: AlbumImporter,
    repository: InMemoryAlbumRepository,
    unit_of_work: InMemoryUnitOfWork,
) -> None:
    short = importer.import_if_new(
        make_candidate("s1", release_type=ReleaseType.SINGLE, total_tracks=2)
    )
    compilation = importer.import_if_new(
        make_candidate("c1", release_type=ReleaseType.COMPILATION)
    )

    assert short.skip_reason is SkipReason.SHORT_FORM
    assert compilation.skip_reason is SkipReason.COMPILATION
    assert repository.count() == 0
    assert unit_of_work.commits == 0


def test_constraint_violation_counts_as_existing(
    importer: AlbumImporter,
    repository: InMemoryAlbumRepository,
    unit_of_work: InMemoryUnitOfWork,
) -> None:
    repository.duplicate_on_create = True

    result = importer.import_if_new(make_candidate("a1"))

    assert result.skip_reason is SkipReason.EXISTING
    assert unit_of_work.rollbacks == 1


def test_storage_failure_is_reported_not_raised(
    importer: AlbumImporter,
    repository: InMemoryAlbumRepository,
    caplog: pytest.LogCaptureFixture,
) -> None:
    repository.fail_on_create = True

    result = importer.import_if_new(make_candidate("a1", title="Broken"))

    assert result.skip_reason is SkipReason.STORAGE_ERROR
    assert "Could not store album a1 (Broken)" in caplog.text


def test_import_all_counts_only_new_albums(
    importer: AlbumImporter, repository: InMemoryAlbumRepository
) -> None:
    importer.import_if_new(make_candidate("a1"))

    imported = importer.import_all(
        [
            make_candidate("a1"),
            make_candidate("a2"),
            make_candidate("s1", release_type=ReleaseType.SINGLE, total_tracks=1),
            make_candidate("a3"),
        ]
    )

    assert imported == 2
    assert importer.count() == 3
    assert sorted(repository.albums) == ["a1", "a2", "a3"]
