r"""
Stopwatch and call timing for benchmark runs.

    from graphdb_bench.runner.timing import Stopwatch

    with Stopwatch() as watch:
        for block in blocks:
            load(block)
            watch.lap()
    print(watch.laps_ms, watch.elapsed_ms)
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, ParamSpec, TypeVar

__all__ = ["Stopwatch", "Timed", "timed"]

P = ParamSpec("P")
R = TypeVar("R")

_NS_PER_MS = 1_000_000


@dataclass(frozen=True, slots=True)
class Timed(Generic[R]):
    """Return value of a timed call and how long the call took.

    Attributes:
        value: What the call returned.
        elapsed_ns: Wall-clock duration in nanoseconds.
    """

    value: R
    elapsed_ns: int

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / _NS_PER_MS


class Stopwatch:
    """Wall-clock stopwatch with laps.

    Reading :attr:`elapsed_ns` while running gives the time so far;
    after :meth:`stop` (or leaving the ``with`` block) it is fixed.
    """

    def __init__(self) -> None:
        self._started: int | None = None
        self._stopped: int | None = None
        self._lap_started = 0
        self._laps: list[int] = []

    def __enter__(self) -> "Stopwatch":
        self.start()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.stop()

    @property
    def running(self) -> bool:
        return self._started is not None and self._stopped is None

    def start(self) -> None:
        """Start from zero, discarding earlier laps."""
        self._started = self._lap_started = time.perf_counter_ns()
        self._stopped = None
        self._laps.clear()

    def lap(self) -> float:
        """Close the current lap and return its length in milliseconds."""
        if not self.running:
            msg = "Stopwatch is not running"
            raise RuntimeError(msg)
        now = time.perf_counter_ns()
        self._laps.append(now - self._lap_started)
        self._lap_started = now
        return self._laps[-1] / _NS_PER_MS

    def stop(self) -> None:
        if self.running:
            self._stopped = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        if self._started is None:
            return 0
        end = self._stopped if self._stopped is not None else time.perf_counter_ns()
        return end - self._started

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / _NS_PER_MS

    @property
    def laps_ms(self) -> list[float]:
        """Completed laps in milliseconds, oldest first."""
        return [lap / _NS_PER_MS for lap in self._laps]


def timed(func: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> Timed[R]:
    """Call ``func`` and report how long it took.

    Exceptions from ``func`` propagate and no timing is returned.
    """
    start = time.perf_counter_ns()
    value = func(*args, **kwargs)
    return Timed(value=value, elapsed_ns=time.perf_counter_ns() - start)
