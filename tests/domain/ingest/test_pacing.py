from __future__ import annotations

import threading
import time

from cratedigger.domain.ingest import Pacer


def test_pause_returns_true_when_not_stopped() -> None:
    pacer = Pacer()

    assert pacer.pause(0)
    assert pacer.pause(0.01)


def test_pause_after_stop_returns_immediately() -> None:
    pacer = Pacer()
    pacer.stop()

    started = time.monotonic()
    assert not pacer.pause(5)
    assert time.monotonic() - started < 1


def test_stop_from_another_thread_interrupts_pause() -> None:
    pacer = Pacer()
    timer = threading.Timer(0.05, pacer.stop)
    timer.start()

    started = time.monotonic()
    try:
        assert not pacer.pause(10)
    finally:
        timer.cancel()
    assert time.monotonic() - started < 5
    assert pacer.stopped


def test_shared_event_is_used() -> None:
    event = threading.Event()
    pacer = Pacer(event)

    event.set()

    assert pacer.stopped
    assert pacer.stop_event is event
