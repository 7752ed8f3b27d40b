"""Units of discovery work."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NamedEntity:
    """An artist name to resolve before listing its releases."""

    name: str

    def __str__(self) -> str:
        return f"artist {self.name!r}"


@dataclass(frozen=True, slots=True)
class FreeTextQuery:
    """A release search run directly against the catalog."""

    text: str

    def __str__(self) -> str:
        return f"search {self.text!r}"


type WorkItem = NamedEntity | FreeTextQuery
