from __future__ import annotations

import time

import pytest

from elapsed import timing
from elapsed.format import TimeFormat
from elapsed.timing import Timer, measure_time, time_block


def _fake_clock(monkeypatch: pytest.MonkeyPatch, *readings: int) -> None:
    it = iter(readings)
    monkeypatch.setattr(timing.time, "perf_counter_ns", lambda: next(it))


def test_measure_time_sum_example() -> None:
    elapsed, total = measure_time(lambda: sum(range(10_000)))
    assert total == 49995000
    assert isinstance(elapsed, str)
    assert elapsed.split(" ")[1] in {"ns", "μs", "ms", "s"}


def test_measure_time_formats_clock_difference(monkeypatch: pytest.MonkeyPatch) -> None:
    _fake_clock(monkeypatch, 1_000, 228_810)
    assert measure_time(lambda: "done") == ("227.81 μs", "done")


def test_measure_time_seconds_unit(monkeypatch: pytest.MonkeyPatch) -> None:
    _fake_clock(monkeypatch, 0, 1_500_000_000)
    elapsed, _ = measure_time(lambda: None)
    assert elapsed == "1.50 s"


def test_measure_time_returns_block_result_unchanged() -> None:
    payload = {"a": [1, 2]}
    _, result = measure_time(lambda: payload)
    assert result is payload

    _, none = measure_time(lambda: None)
    assert none is None


def test_measure_time_calls_block_once() -> None:
    calls: list[int] = []

    def block() -> int:
        calls.append(1)
        return len(calls)

    _, result = measure_time(block)
    assert result == 1
    assert calls == [1]


def test_measure_time_sleep_is_bounded(monkeypatch: pytest.MonkeyPatch) -> None:
    readings: list[int] = []
    real = time.perf_counter_ns

    def spy() -> int:
        now = real()
        readings.append(now)
        return now

    monkeypatch.setattr(timing.time, "perf_counter_ns", spy)
    elapsed, _ = measure_time(lambda: time.sleep(0.1))
    monkeypatch.undo()

    assert len(readings) == 2
    diff = readings[1] - readings[0]
    assert 100_000_000 <= diff < 150_000_000
    assert elapsed == str(TimeFormat(diff))
    assert elapsed.endswith(" ms")


def test_measure_time_propagates_block_error() -> None:
    err = KeyError("missing")

    def block() -> None:
        raise err

    with pytest.raises(KeyError) as excinfo:
        measure_time(block)
    assert excinfo.value is err


def test_timer_records_elapsed() -> None:
    with time_block() as t:
        time.sleep(0.01)
    assert t.elapsed_ns >= 10_000_000
    assert t.elapsed >= 0.01
    assert str(t).endswith(" ms")


def test_timer_records_elapsed_when_block_raises() -> None:
    timer = Timer()
    with pytest.raises(RuntimeError, match="boom"):
        with timer:
            raise RuntimeError("boom")
    assert timer.elapsed_ns >= 0
    assert timer.start_ns > 0


def test_timer_format() -> None:
    t = Timer(elapsed_ns=1_234_567)
    assert t.format() == "1.23 ms"
    assert t.format(precision=3) == "1.235 ms"
    assert str(Timer(elapsed_ns=1_500_000_000)) == "1.50 s"
    assert Timer(elapsed_ns=1_500_000_000).elapsed == 1.5
    assert str(Timer()) == "0.00 ns"
