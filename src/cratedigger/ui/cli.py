from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, SIGTERM, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from cratedigger.app import album_count, run_continuous_import
from cratedigger.common import configure_logging
from cratedigger.config import ConfigurationError
from cratedigger.domain.ingest import Pacer

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {parsed}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Continuously import Spotify albums")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run the import loop")
    run.add_argument(
        "--max-cycles",
        type=_positive_int,
        help="Stop after this many cycles (default: run until interrupted)",
    )
    run.add_argument(
        "--corpus",
        type=Path,
        help="TOML file with 'artists' and 'queries' lists (default: bundled corpus)",
    )
    run.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help="Work items per batch (defaults to config)",
    )

    subparsers.add_parser("stats", help="Print the number of stored albums")

    return parser.parse_args(list(argv))


class _ShutdownHandler:
    """First SIGINT/SIGTERM asks the loop to stop; a second SIGINT exits at once."""

    def __init__(self, pacer: Pacer) -> None:
        self.pacer = pacer

    def __call__(self, signal_received: int, _frame: FrameType | None) -> None:
        if self.pacer.stopped and signal_received == SIGINT:
            log.info("Closed by user (Ctrl+C)")
            sys.exit(130)
        log.info("Shutdown requested (signal %s)", signal_received)
        self.pacer.stop()

    def install(self) -> None:
        signal(SIGINT, self)
        signal(SIGTERM, self)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "run":
            pacer = Pacer()
            _ShutdownHandler(pacer).install()
            run_continuous_import(
                max_cycles=parsed_args.max_cycles,
                corpus_path=parsed_args.corpus,
                batch_size=parsed_args.batch_size,
                pacer=pacer,
            )
        elif parsed_args.command == "stats":
            print(album_count())  # noqa: T201
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


if __name__ == "__main__":
    main()
