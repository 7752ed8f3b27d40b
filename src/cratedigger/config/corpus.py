"""Load the discovery corpus (artist names and album search queries)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from importlib import resources
from typing import TYPE_CHECKING

from .errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_CORPUS_RESOURCE = "default_corpus.toml"


@dataclass(frozen=True, slots=True)
class CorpusConfig:
    artists: tuple[str, ...]
    queries: tuple[str, ...]


def load_corpus(path: Path | None = None) -> CorpusConfig:
    """Load a corpus TOML file, or the bundled default when ``path`` is None."""

    try:
        if path is None:
            raw = resources.files("cratedigger.config").joinpath(DEFAULT_CORPUS_RESOURCE).read_text()
        else:
            raw = path.read_text(encoding="utf-8")
        document = tomllib.loads(raw)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        source = path or DEFAULT_CORPUS_RESOURCE
        raise ConfigurationError(f"Could not read corpus {source}: {exc}") from exc

    artists = _string_list(document, "artists")
    queries = _string_list(document, "queries")
    if not artists and not queries:
        raise ConfigurationError("Corpus must define at least one artist or query")
    return CorpusConfig(artists=artists, queries=queries)


def _string_list(document: dict[str, object], key: str) -> tuple[str, ...]:
    values = document.get(key, [])
    if not isinstance(values, list):
        raise ConfigurationError(f"Corpus key {key!r} must be a list of strings")
    seen: dict[str, None] = {}
    for value in values:
        if not isinstance(value, str):
            raise ConfigurationError(f"Corpus key {key!r} must be a list of strings")
        stripped = value.strip()
        if stripped:
            seen.setdefault(stripped, None)
    return tuple(seen)
