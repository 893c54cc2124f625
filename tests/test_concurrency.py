"""Tests for LogAggregator under concurrent producers."""

import threading
from collections.abc import Callable

from onelog.aggregator import LogAggregator
from onelog.constants import Level

from conftest import CountingSink, fixed_clock

THREADS = 16
PER_THREAD = 200


def _run_all(target: Callable[[int], None], n: int = THREADS) -> None:
    barrier = threading.Barrier(n)

    def _worker(i: int) -> None:
        barrier.wait()
        target(i)

    threads = [threading.Thread(target=_worker, args=(i,)) for i in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()


def test_concurrent_messages_all_recorded(counting_sink: CountingSink) -> None:
    log = LogAggregator(output=counting_sink, clock=fixed_clock)

    def _produce(i: int) -> None:
        for j in range(PER_THREAD):
            if j % 2:
                log.record_info(f"t{i}-{j}")
            else:
                log.record_info("t%s-", str(i), "-", str(j))

    _run_all(_produce)
    messages = log.messages
    assert len(messages) == THREADS * PER_THREAD
    assert len(set(messages)) == THREADS * PER_THREAD


def test_concurrent_levels_end_at_error(counting_sink: CountingSink) -> None:
    log = LogAggregator(output=counting_sink, clock=fixed_clock)

    def _produce(i: int) -> None:
        for _ in range(50):
            log.record_info("info")
            log.record_warn("warn")
        if i == 0:
            log.record_error(RuntimeError("boom"))

    _run_all(_produce)
    assert log.level is Level.ERROR


def test_concurrent_fields(counting_sink: CountingSink) -> None:
    log = LogAggregator(output=counting_sink, clock=fixed_clock)
    _run_all(lambda i: log.set_pair(f"key{i:02d}", str(i)))
    for i in range(THREADS):
        assert log.get_pair(f"key{i:02d}").value == str(i)


def test_concurrent_emit_writes_once(counting_sink: CountingSink) -> None:
    log = LogAggregator(output=counting_sink, clock=fixed_clock)
    log.record_info("only once")

    results: list[bool] = []
    results_lock = threading.Lock()

    def _emit(_: int) -> None:
        wrote = log.emit()
        with results_lock:
            results.append(wrote)

    _run_all(_emit, n=32)
    assert results.count(True) == 1
    assert len(counting_sink.writes) == 1
    assert counting_sink.writes[0].endswith(b'"msgs": ["only once"]}\n')


def test_emit_while_producing(counting_sink: CountingSink) -> None:
    """The written line is a consistent snapshot, never a torn record."""
    log = LogAggregator(output=counting_sink, clock=fixed_clock)
    log.record_info("start")

    def _work(i: int) -> None:
        if i == 0:
            log.emit()
            return
        for j in range(PER_THREAD):
            log.set_pair(f"k{i}", str(j))
            log.record_warn("w")

    _run_all(_work)
    assert len(counting_sink.writes) == 1
    line = counting_sink.writes[0].decode("utf-8")
    assert line.startswith('{"time": ') and line.endswith("}\n")
    assert line.count("\n") == 1
