"""Drive a slice of work items through the catalog and the importer."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from cratedigger.domain.model import FreeTextQuery, NamedEntity
from cratedigger.domain.ports.catalog import AuthenticationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cratedigger.domain.model import CandidateRelease, WorkItem
    from cratedigger.domain.ports.catalog import CatalogClient

    from .importer import AlbumImporter
    from .pacing import Pacer

log = getLogger(__name__)


@dataclass(slots=True)
class BatchRunner:
    """Process work items one at a time, pausing after each one.

    The pause after every item keeps the steady-state request rate below the
    upstream quota and is independent of any retry backoff.
    """

    catalog: CatalogClient
    importer: AlbumImporter
    pacer: Pacer
    base_pacing_delay: float

    def run_batch(self, items: Sequence[WorkItem]) -> int:
        imported = 0
        for item in items:
            if self.pacer.stopped:
                log.info("Stop requested; leaving %s unprocessed", item)
                break
            try:
                imported += self.process_item(item)
            except AuthenticationError:
                raise
            except Exception:
                log.exception("Error processing %s", item)
            self.pacer.pause(self.base_pacing_delay)
        return imported

    def process_item(self, item: WorkItem) -> int:
        return self.importer.import_all(self._candidates_for(item))

    def _candidates_for(self, item: WorkItem) -> list[CandidateRelease]:
        if isinstance(item, NamedEntity):
            entity = self.catalog.resolve_entity(item.name)
            if entity is None:
                log.debug("No catalog match for %s", item)
                return []
            return self.catalog.list_children(entity.external_id)
        if isinstance(item, FreeTextQuery):
            return self.catalog.search_free_text(item.text)
        raise TypeError(f"Unsupported work item: {item!r}")
