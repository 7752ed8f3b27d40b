from __future__ import annotations

import random

from cratedigger.domain.ingest import CorpusState
from cratedigger.domain.model import FreeTextQuery, NamedEntity


def test_from_strings_builds_work_items() -> None:
    corpus = CorpusState.from_strings(["Miles Davis", "Sade"], ["modal jazz"])

    assert corpus.entities == (NamedEntity("Miles Davis"), NamedEntity("Sade"))
    assert corpus.queries == (FreeTextQuery("modal jazz"),)
    assert len(corpus) == 3


def test_reshuffle_returns_a_permutation_and_leaves_original_alone() -> None:
    artists = [f"artist {index}" for index in range(30)]
    queries = [f"query {index}" for index in range(10)]
    corpus = CorpusState.from_strings(artists, queries)

    shuffled = corpus.reshuffled(random.Random(42))

    assert shuffled is not corpus
    assert sorted(item.name for item in shuffled.entities) == sorted(artists)
    assert sorted(item.text for item in shuffled.queries) == sorted(queries)
    assert [item.name for item in corpus.entities] == artists
    assert shuffled.entities != corpus.entities


def test_work_items_describe_themselves() -> None:
    assert str(NamedEntity("Sade")) == "artist 'Sade'"
    assert str(FreeTextQuery("city pop")) == "search 'city pop'"
