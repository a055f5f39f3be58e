"""Per-stage operation counters and wall-clock timing.

Every analysis stage creates a fresh :class:`MetricsRecorder` for each call,
brackets its work with :meth:`MetricsRecorder.timed`, adds its counters and
returns the frozen :class:`StageMetrics` snapshot alongside its result. No
recorder outlives the call that created it, so repeated calls never carry
counts over.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Generator, Iterable, Mapping, Optional

from sccdag.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StageMetrics:
    """Immutable metrics of a single stage invocation.

    Attributes:
        stage: Stage name (e.g. ``"scc"``, ``"topo"``).
        elapsed_ns: Wall-clock duration of the timed section in nanoseconds.
        counters: Operation counters by name.
    """

    stage: str
    elapsed_ns: int = 0
    counters: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "counters", MappingProxyType(dict(self.counters)))

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_ns / 1_000_000.0

    def __getitem__(self, name: str) -> int:
        return self.counters[name]

    def get(self, name: str, default: int = 0) -> int:
        """Return counter ``name`` or ``default`` when it was not recorded."""
        return self.counters.get(name, default)

    def report(self) -> str:
        """Return a one-line summary such as ``scc(dfs_visits=3 time=0.012ms)``."""
        parts = [f"{name}={value}" for name, value in self.counters.items()]
        parts.append(f"time={self.elapsed_ms:.3f}ms")
        return f"{self.stage}({' '.join(parts)})"

    def to_dict(self) -> Dict[str, object]:
        """Return JSON-safe primitives."""
        return {
            "stage": self.stage,
            "time_ms": self.elapsed_ms,
            "counters": dict(self.counters),
        }


class MetricsRecorder:
    """Mutable recorder used for the duration of one stage call.

    Counters declared up front start at zero so that they appear in the
    snapshot even when never incremented.
    """

    def __init__(self, stage: str, counters: Iterable[str] = ()) -> None:
        self.stage = stage
        self._counters: Dict[str, int] = {name: 0 for name in counters}
        self._start_ns: Optional[int] = None
        self._end_ns: Optional[int] = None

    def start(self) -> None:
        self._start_ns = time.perf_counter_ns()
        self._end_ns = None

    def stop(self) -> None:
        if self._start_ns is None:
            logger.warning(
                f"Stage '{self.stage}' stopped without start - timing left at zero"
            )
            return
        self._end_ns = time.perf_counter_ns()

    @contextmanager
    def timed(self) -> Generator[MetricsRecorder, None, None]:
        """Context manager that brackets the body with :meth:`start`/:meth:`stop`."""
        self.start()
        try:
            yield self
        finally:
            self.stop()

    def add(self, name: str, amount: int = 1) -> None:
        """Increase counter ``name`` by ``amount``."""
        self._counters[name] = self._counters.get(name, 0) + amount

    @property
    def elapsed_ns(self) -> int:
        if self._start_ns is None or self._end_ns is None:
            return 0
        return self._end_ns - self._start_ns

    def snapshot(self) -> StageMetrics:
        """Freeze the current state into a :class:`StageMetrics`."""
        metrics = StageMetrics(
            stage=self.stage,
            elapsed_ns=self.elapsed_ns,
            counters=self._counters,
        )
        logger.debug(metrics.report())
        return metrics
