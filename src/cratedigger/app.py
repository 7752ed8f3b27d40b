"""Application orchestration entry points."""

from __future__ import annotations

import random
from collections.abc import Callable
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from cratedigger.adapters.http_resilience import ResilientClient, ResilientSession
from cratedigger.adapters.spotify import (
    SpotifyCatalogClient,
    SpotifyCredentialManager,
    should_cache_payload,
)
from cratedigger.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAlbumUnitOfWork,
    is_started,
    startup,
)
from cratedigger.config import get_ingest_config, get_spotify_config, load_corpus
from cratedigger.domain.ingest import (
    AlbumImporter,
    BatchRunner,
    CorpusState,
    CycleController,
    CycleSettings,
    Pacer,
)

if TYPE_CHECKING:
    from pathlib import Path

    import httpx

    from cratedigger.domain.ingest import CycleStatistics
    from cratedigger.domain.ports.unit_of_work import AlbumUnitOfWork

UnitOfWorkFactory = Callable[[], "AlbumUnitOfWork"]

log = getLogger(__name__)


def run_continuous_import(
    *,
    max_cycles: int | None = None,
    corpus_path: Path | None = None,
    batch_size: int | None = None,
    pacer: Pacer | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    rng: random.Random | None = None,
) -> CycleStatistics | None:
    """Import Spotify albums cycle after cycle until stopped.

    ``max_cycles`` bounds the loop for one-off runs; without it the importer
    only returns once ``pacer`` is stopped or credentials keep failing.
    """

    ingest = get_ingest_config(batch_size=batch_size)
    corpus_config = load_corpus(corpus_path)
    spotify_config = get_spotify_config(cache_predicate=should_cache_payload)

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyAlbumUnitOfWork

    effective_pacer = pacer or Pacer()
    client_factory = partial(
        ResilientClient, transport=transport, cancel_event=effective_pacer.stop_event
    )
    corpus = CorpusState.from_strings(corpus_config.artists, corpus_config.queries)
    log.info(
        "Starting continuous import: artists=%s, queries=%s, batch_size=%s, max_cycles=%s",
        len(corpus.entities),
        len(corpus.queries),
        ingest.batch_size,
        max_cycles,
    )

    with ResilientSession(spotify_config.resilience, client_factory=client_factory) as session:
        credentials = SpotifyCredentialManager(config=spotify_config, session=session)
        catalog = SpotifyCatalogClient(
            config=spotify_config, session=session, credentials=credentials
        )
        importer = AlbumImporter(unit_of_work_factory=unit_of_work_factory)
        runner = BatchRunner(
            catalog=catalog,
            importer=importer,
            pacer=effective_pacer,
            base_pacing_delay=ingest.base_pacing_delay,
        )
        controller = CycleController(
            runner=runner,
            credentials=credentials,
            importer=importer,
            pacer=effective_pacer,
            settings=CycleSettings(
                batch_size=ingest.batch_size,
                batch_cooldown=ingest.batch_cooldown,
                cycle_cooldown=ingest.cycle_cooldown,
                credential_refresh_every=ingest.credential_refresh_every,
                max_auth_failures=ingest.max_auth_failures,
            ),
            rng=rng or random.Random(),
        )
        statistics = controller.run_forever(corpus, max_cycles=max_cycles)

    log.info(
        "Continuous import finished: cycles=%s, imported=%s",
        controller.cycles_started,
        controller.cumulative_imported,
    )
    return statistics


def album_count(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> int:
    """Return the number of stored albums."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyAlbumUnitOfWork
    with unit_of_work_factory() as uow:
        return uow.repositories.albums.count()
