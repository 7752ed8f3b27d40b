"""The never-ending import loop: cycles of batches over the shuffled corpus."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from cratedigger.domain.ports.catalog import AuthenticationError
from cratedigger.domain.ports.persistence import StorageError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cratedigger.domain.model import WorkItem
    from cratedigger.domain.ports.catalog import CredentialSource

    from .batch import BatchRunner
    from .corpus import CorpusState
    from .importer import AlbumImporter
    from .pacing import Pacer

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CycleSettings:
    batch_size: int = 20
    batch_cooldown: float = 30.0
    cycle_cooldown: float = 300.0
    credential_refresh_every: int = 100
    max_auth_failures: int = 3


@dataclass(frozen=True, slots=True)
class CycleStatistics:
    cycle: int
    imported: int
    cumulative_imported: int
    count_at_start: int
    count_at_end: int

    @property
    def delta(self) -> int:
        return self.count_at_end - self.count_at_start


@dataclass(slots=True)
class CycleController:
    runner: BatchRunner
    credentials: CredentialSource
    importer: AlbumImporter
    pacer: Pacer
    settings: CycleSettings = field(default_factory=CycleSettings)
    rng: random.Random = field(default_factory=random.Random)
    cumulative_imported: int = field(default=0, init=False)
    cycles_started: int = field(default=0, init=False)
    _items_since_refresh: int = field(default=0, init=False)

    def run_forever(
        self,
        corpus: CorpusState,
        *,
        max_cycles: int | None = None,
    ) -> CycleStatistics | None:
        """Run cycles until stopped (or ``max_cycles`` have been attempted).

        A credential or storage failure aborts the cycle it happens in; the
        next cycle starts after the usual cooldown. ``max_auth_failures``
        consecutive credential failures re-raise the error.
        """

        last: CycleStatistics | None = None
        auth_failures = 0
        attempted = 0
        while not self.pacer.stopped:
            corpus = corpus.reshuffled(self.rng)
            attempted += 1
            try:
                last = self.run_cycle(corpus)
            except AuthenticationError as exc:
                auth_failures += 1
                log.error(
                    "Cycle %s aborted by credential failure (%s/%s): %s",
                    self.cycles_started,
                    auth_failures,
                    self.settings.max_auth_failures,
                    exc,
                )
                if auth_failures >= self.settings.max_auth_failures:
                    raise
            except StorageError as exc:
                log.error("Cycle %s aborted by storage failure: %s", self.cycles_started, exc)
            else:
                auth_failures = 0

            if max_cycles is not None and attempted >= max_cycles:
                break
            log.info("Waiting %ss before next cycle", self.settings.cycle_cooldown)
            if not self.pacer.pause(self.settings.cycle_cooldown):
                break
        return last

    def run_cycle(self, corpus: CorpusState) -> CycleStatistics:
        self.cycles_started += 1
        cycle = self.cycles_started
        count_at_start = self.importer.count()
        log.info(
            "Cycle %s starting: albums=%s, artists=%s, queries=%s",
            cycle,
            count_at_start,
            len(corpus.entities),
            len(corpus.queries),
        )

        self._refresh_credentials()
        imported = self._run_items("artists", corpus.entities)
        imported += self._run_items("searches", corpus.queries)

        count_at_end = self.importer.count()
        self.cumulative_imported += imported
        statistics = CycleStatistics(
            cycle=cycle,
            imported=imported,
            cumulative_imported=self.cumulative_imported,
            count_at_start=count_at_start,
            count_at_end=count_at_end,
        )
        log.info(
            "Cycle %s complete: delta=%s, imported=%s, cumulative=%s, total=%s",
            cycle,
            statistics.delta,
            imported,
            self.cumulative_imported,
            count_at_end,
        )
        return statistics

    def _run_items(self, label: str, items: Sequence[WorkItem]) -> int:
        imported = 0
        batch_size = self.settings.batch_size
        for start in range(0, len(items), batch_size):
            if self.pacer.stopped:
                break
            batch = items[start : start + batch_size]
            end = start + len(batch)
            log.info("Processing %s %s-%s of %s", label, start + 1, end, len(items))

            batch_imported = self.runner.run_batch(batch)
            imported += batch_imported
            if batch_imported:
                log.info("Imported %s albums from %s %s-%s", batch_imported, label, start + 1, end)

            self._items_since_refresh += len(batch)
            if self._items_since_refresh >= self.settings.credential_refresh_every:
                self._refresh_credentials()

            log.info("Resting %ss", self.settings.batch_cooldown)
            self.pacer.pause(self.settings.batch_cooldown)
        return imported

    def _refresh_credentials(self) -> None:
        self.credentials.obtain()
        self._items_since_refresh = 0
