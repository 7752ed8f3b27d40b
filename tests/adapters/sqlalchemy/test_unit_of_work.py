from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from cratedigger.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAlbumUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from cratedigger.domain.ingest import AlbumImporter, build_album
from cratedigger.domain.model import SkipReason
from tests.helpers.catalog import FIXED_NOW, make_candidate

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyAlbumUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)
    assert configured_engine() is engine_a
    assert is_started()

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_exception_inside_block_rolls_back() -> None:
    startup(engine=create_engine("sqlite+pysqlite:///:memory:", future=True), force=True)

    with pytest.raises(RuntimeError), SqlAlchemyAlbumUnitOfWork() as uow:
        uow.repositories.albums.create(build_album(make_candidate("a1"), now=FIXED_NOW))
        raise RuntimeError("abort")

    with SqlAlchemyAlbumUnitOfWork() as uow:
        assert uow.repositories.albums.count() == 0


def test_importer_is_idempotent_against_sqlite() -> None:
    startup(engine=create_engine("sqlite+pysqlite:///:memory:", future=True), force=True)
    importer = AlbumImporter(unit_of_work_factory=SqlAlchemyAlbumUnitOfWork)

    first = importer.import_if_new(make_candidate("a1"))
    second = importer.import_if_new(make_candidate("a1"))

    assert first.imported
    assert second.skip_reason is SkipReason.EXISTING
    assert importer.count() == 1
