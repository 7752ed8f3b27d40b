from __future__ import annotations

import pytest

from cratedigger.domain.ingest import InclusionPolicy
from cratedigger.domain.model import ReleaseType, SkipReason
from tests.helpers.catalog import make_candidate


@pytest.mark.parametrize(
    ("release_type", "total_tracks", "expected"),
    [
        (ReleaseType.SINGLE, 1, SkipReason.SHORT_FORM),
        (ReleaseType.SINGLE, 3, SkipReason.SHORT_FORM),
        (ReleaseType.SINGLE, 4, None),
        (ReleaseType.COMPILATION, 25, SkipReason.COMPILATION),
        (ReleaseType.ALBUM, 1, None),
        (ReleaseType.OTHER, 2, None),
    ],
)
def test_exclusion_reason(
    release_type: ReleaseType, total_tracks: int, expected: SkipReason | None
) -> None:
    candidate = make_candidate(release_type=release_type, total_tracks=total_tracks)

    assert InclusionPolicy().exclusion_reason(candidate) is expected


def test_minimum_single_length_is_configurable() -> None:
    policy = InclusionPolicy(min_single_tracks=2)

    assert policy.is_eligible(make_candidate(release_type=ReleaseType.SINGLE, total_tracks=2))
    assert not policy.is_eligible(make_candidate(release_type=ReleaseType.SINGLE, total_tracks=1))
