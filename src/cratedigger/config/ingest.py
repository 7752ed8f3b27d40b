"""Pacing and batching defaults for the continuous import loop."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_float_env, optional_int_env

DEFAULT_BASE_PACING_DELAY = 0.6
DEFAULT_BATCH_COOLDOWN = 30.0
DEFAULT_CYCLE_COOLDOWN = 5 * 60.0
DEFAULT_BATCH_SIZE = 20
DEFAULT_CREDENTIAL_REFRESH_EVERY = 100
DEFAULT_MAX_AUTH_FAILURES = 3


@dataclass(frozen=True, slots=True)
class IngestConfig:
    base_pacing_delay: float = DEFAULT_BASE_PACING_DELAY
    batch_cooldown: float = DEFAULT_BATCH_COOLDOWN
    cycle_cooldown: float = DEFAULT_CYCLE_COOLDOWN
    batch_size: int = DEFAULT_BATCH_SIZE
    credential_refresh_every: int = DEFAULT_CREDENTIAL_REFRESH_EVERY
    max_auth_failures: int = DEFAULT_MAX_AUTH_FAILURES


def get_ingest_config(*, batch_size: int | None = None) -> IngestConfig:
    return IngestConfig(
        base_pacing_delay=optional_float_env(
            "CRATEDIGGER_BASE_PACING_DELAY", DEFAULT_BASE_PACING_DELAY
        ),
        batch_cooldown=optional_float_env("CRATEDIGGER_BATCH_COOLDOWN", DEFAULT_BATCH_COOLDOWN),
        cycle_cooldown=optional_float_env("CRATEDIGGER_CYCLE_COOLDOWN", DEFAULT_CYCLE_COOLDOWN),
        batch_size=batch_size
        or optional_int_env("CRATEDIGGER_BATCH_SIZE", DEFAULT_BATCH_SIZE, minimum=1),
        credential_refresh_every=optional_int_env(
            "CRATEDIGGER_CREDENTIAL_REFRESH_EVERY", DEFAULT_CREDENTIAL_REFRESH_EVERY, minimum=1
        ),
    )
