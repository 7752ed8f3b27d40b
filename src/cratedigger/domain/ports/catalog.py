"""Ports for the upstream release catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cratedigger.domain.model import CandidateRelease, CatalogEntity, Credential


class AuthenticationError(RuntimeError):
    """Raised when the catalog does not hand out a usable credential."""


@runtime_checkable
class CredentialSource(Protocol):
    """Obtains (and owns) the bearer credential used for catalog requests."""

    def obtain(self) -> Credential: ...


@runtime_checkable
class CatalogClient(Protocol):
    """Best-effort catalog lookups.

    Implementations never raise for upstream failures: a failed lookup is
    reported as ``None`` or an empty list. Only :class:`AuthenticationError`
    escapes, since it signals a systemic rather than a per-item problem.
    """

    def resolve_entity(self, name: str) -> CatalogEntity | None: ...

    def list_children(self, entity_id: str) -> list[CandidateRelease]: ...

    def search_free_text(self, query: str) -> list[CandidateRelease]: ...
