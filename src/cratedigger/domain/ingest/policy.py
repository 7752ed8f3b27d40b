"""Inclusion policy for candidate releases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cratedigger.domain.model import ReleaseType, SkipReason

if TYPE_CHECKING:
    from cratedigger.domain.model import CandidateRelease

DEFAULT_MIN_SINGLE_TRACKS = 4


@dataclass(frozen=True, slots=True)
class InclusionPolicy:
    """Decide whether a candidate is a reviewable release.

    Short singles are promotional one-offs and compilations are excluded
    outright. Rules are applied in order and the first match wins.
    """

    min_single_tracks: int = DEFAULT_MIN_SINGLE_TRACKS

    def exclusion_reason(self, candidate: CandidateRelease) -> SkipReason | None:
        if (
            candidate.release_type is ReleaseType.SINGLE
            and candidate.total_tracks < self.min_single_tracks
        ):
            return SkipReason.SHORT_FORM
        if candidate.release_type is ReleaseType.COMPILATION:
            return SkipReason.COMPILATION
        return None

    def is_eligible(self, candidate: CandidateRelease) -> bool:
        return self.exclusion_reason(candidate) is None
