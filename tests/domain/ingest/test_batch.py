from __future__ import annotations

import pytest

from cratedigger.domain.ingest import AlbumImporter, BatchRunner
from cratedigger.domain.model import CandidateRelease, FreeTextQuery, NamedEntity
from cratedigger.domain.ports.catalog import AuthenticationError
from tests.helpers.catalog import (
    FakeCatalog,
    InMemoryAlbumRepository,
    InMemoryUnitOfWork,
    RecordingPacer,
    make_candidate,
)


class _RevokedCatalog(FakeCatalog):
    def search_free_text(self, query: str) -> list[CandidateRelease]:
        raise AuthenticationError("token revoked")


def _runner(
    catalog: FakeCatalog, pacer: RecordingPacer
) -> tuple[BatchRunner, InMemoryAlbumRepository]:
    repository = InMemoryAlbumRepository()
    importer = AlbumImporter(unit_of_work_factory=lambda: InMemoryUnitOfWork(repository))
    runner = BatchRunner(catalog=catalog, importer=importer, pacer=pacer, base_pacing_delay=0.6)
    return runner, repository


def test_failing_item_does_not_stop_the_batch(caplog: pytest.LogCaptureFixture) -> None:
    catalog = FakeCatalog(failing={"broken"})
    catalog.add_artist("Alice", make_candidate("a1"))
    catalog.searches["jazz"] = [make_candidate("q1"), make_candidate("q2")]
    pacer = RecordingPacer()
    runner, repository = _runner(catalog, pacer)

    imported = runner.run_batch(
        [NamedEntity("Alice"), FreeTextQuery("broken"), FreeTextQuery("jazz")]
    )

    assert imported == 3
    assert sorted(repository.albums) == ["a1", "q1", "q2"]
    assert "Error processing search 'broken'" in caplog.text


def test_pause_follows_every_item() -> None:
    catalog = FakeCatalog(failing={"broken"})
    pacer = RecordingPacer()
    runner, _ = _runner(catalog, pacer)

    runner.run_batch([FreeTextQuery("one"), FreeTextQuery("broken"), NamedEntity("Nobody")])

    assert pacer.pauses == [0.6, 0.6, 0.6]


def test_unresolved_entity_lists_nothing() -> None:
    catalog = FakeCatalog()
    runner, _ = _runner(catalog, RecordingPacer())

    assert runner.process_item(NamedEntity("Nobody")) == 0
    assert catalog.calls == [("resolve", "Nobody")]


def test_authentication_error_escapes_the_batch() -> None:
    catalog = _RevokedCatalog()
    pacer = RecordingPacer()
    runner, _ = _runner(catalog, pacer)

    with pytest.raises(AuthenticationError):
        runner.run_batch([FreeTextQuery("jazz"), FreeTextQuery("soul")])

    assert pacer.pauses == []


def test_stop_leaves_remaining_items_unprocessed() -> None:
    catalog = FakeCatalog()
    pacer = RecordingPacer(stop_after=1)
    runner, _ = _runner(catalog, pacer)

    runner.run_batch([FreeTextQuery("one"), FreeTextQuery("two"), FreeTextQuery("three")])

    assert catalog.calls == [("search", "one")]


def test_unknown_work_item_is_rejected() -> None:
    runner, _ = _runner(FakeCatalog(), RecordingPacer())

    with pytest.raises(TypeError):
        runner.process_item("not a work item")  # type: ignore[arg-type]
