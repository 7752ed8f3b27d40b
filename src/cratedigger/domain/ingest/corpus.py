"""The work corpus owned by the cycle controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cratedigger.domain.model import FreeTextQuery, NamedEntity

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class CorpusState:
    """Both corpora in their current order.

    Reshuffling returns a new state; the controller swaps it in between
    cycles, so a cycle never observes its corpus changing under it.
    """

    entities: tuple[NamedEntity, ...] = ()
    queries: tuple[FreeTextQuery, ...] = ()

    @classmethod
    def from_strings(cls, artists: Iterable[str], queries: Iterable[str]) -> CorpusState:
        return cls(
            entities=tuple(NamedEntity(name) for name in artists),
            queries=tuple(FreeTextQuery(text) for text in queries),
        )

    def __len__(self) -> int:
        return len(self.entities) + len(self.queries)

    def reshuffled(self, rng: random.Random) -> CorpusState:
        return CorpusState(
            entities=tuple(rng.sample(self.entities, k=len(self.entities))),
            queries=tuple(rng.sample(self.queries, k=len(self.queries))),
        )
