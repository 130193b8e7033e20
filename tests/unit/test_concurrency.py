"""Tests for the serialized write path under concurrent callers."""

from __future__ import annotations

import re
import threading

from lvlog import FormatFlags, Logger, Priority

LINE = re.compile(r"<2>:t(\d+) n(\d+) (x+)\n")


def test_concurrent_lines_are_never_interleaved(writer) -> None:
    log = Logger(writer, flags=FormatFlags(0))
    threads, per_thread, width = 16, 200, 512
    start = threading.Barrier(threads)

    def worker(t: int) -> None:
        start.wait()
        for n in range(per_thread):
            log.info("t%d n%d %s", t, n, "x" * width)

    pool = [threading.Thread(target=worker, args=(t,)) for t in range(threads)]
    for th in pool:
        th.start()
    for th in pool:
        th.join(30)
    assert log.sync(10)

    lines = writer.lines
    assert len(lines) == threads * per_thread

    seen: dict[int, list[int]] = {t: [] for t in range(threads)}
    for line in lines:
        match = LINE.fullmatch(line)
        assert match, f"partial or interleaved line: {line[:80]!r}"
        assert len(match.group(3)) == width
        seen[int(match.group(1))].append(int(match.group(2)))

    # Each caller's lines land in the order that caller handed them off.
    for t in range(threads):
        assert seen[t] == list(range(per_thread))


def test_slow_destination_throttles_callers(gated_writer) -> None:
    log = Logger(gated_writer, flags=FormatFlags(0))

    # The worker takes the first line and then blocks inside write().
    log.info("first")
    assert gated_writer.entered.wait(5)

    second_done = threading.Event()

    def second() -> None:
        log.info("second")
        second_done.set()

    th = threading.Thread(target=second, daemon=True)
    th.start()

    # No buffering: the hand-off cannot complete while the worker is busy.
    assert not second_done.wait(0.3)

    gated_writer.gate.set()
    assert second_done.wait(5)
    assert log.sync(5)
    assert gated_writer.lines == ["<2>:first\n", "<2>:second\n"]


def test_stalled_worker_stalls_every_caller(gated_writer) -> None:
    """Known property: the hand-off has no timeout."""
    log = Logger(gated_writer, flags=FormatFlags(0))
    log.info("stuck")
    assert gated_writer.entered.wait(5)

    blocked = [
        threading.Thread(target=log.warn, args=(f"w{i}",), daemon=True) for i in range(4)
    ]
    for th in blocked:
        th.start()
    for th in blocked:
        th.join(0.1)
    assert all(th.is_alive() for th in blocked)

    gated_writer.gate.set()
    for th in blocked:
        th.join(5)
    assert not any(th.is_alive() for th in blocked)


def test_config_changes_race_safely_with_logging(writer) -> None:
    log = Logger(writer, Priority.NONE, flags=FormatFlags(0))
    stop = threading.Event()
    errors: list[BaseException] = []

    def mutate() -> None:
        prios = [Priority.NONE, Priority.INFO, Priority.EMERG]
        i = 0
        while not stop.is_set():
            log.prio = prios[i % 3]
            log.flags = FormatFlags(0) if i % 2 else FormatFlags.SYSLOG
            log.prefix = str(i)
            i += 1

    def emit() -> None:
        try:
            for n in range(500):
                log.info("n%d", n)
        except Exception as exc:
            errors.append(exc)

    mutator = threading.Thread(target=mutate, daemon=True)
    mutator.start()
    emitters = [threading.Thread(target=emit) for _ in range(4)]
    for th in emitters:
        th.start()
    for th in emitters:
        th.join(30)
    stop.set()
    mutator.join(5)

    assert errors == []
    assert log.sync(5)
    assert all(re.fullmatch(r"(<2>:)?n\d+\n", line) for line in writer.lines)


def test_loggers_do_not_share_a_worker(writer, gated_writer) -> None:
    slow = Logger(gated_writer, flags=FormatFlags(0))
    fast = Logger(writer, flags=FormatFlags(0))

    slow.info("blocked")
    assert gated_writer.entered.wait(5)

    fast.info("unaffected")
    assert fast.sync(5)
    assert writer.lines == ["<2>:unaffected\n"]
