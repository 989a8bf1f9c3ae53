"""
Profiling utilities for idbench.

`profile_block` wraps an insertion run and records:
- wall-clock time (perf_counter)
- process CPU usage over the block (psutil)
- peak RSS, sampled by a background thread (psutil)

Usage:
    from idbench.utils.profiler import profile_block

    with profile_block("uuid") as stats:
        inserter.execute(100_000)

    print(stats.duration_seconds, stats.peak_rss_bytes, stats.cpu_percent)
"""

from __future__ import annotations

import contextlib
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    peak_rss_bytes: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)
    extra: dict[str, Any] = field(default_factory=dict)


class _RssSampler(threading.Thread):
    """Daemon thread tracking the highest RSS seen until stopped."""

    def __init__(self, process: psutil.Process, interval_s: float) -> None:
        super().__init__(daemon=True, name="rss-sampler")
        self._process = process
        self._interval_s = interval_s
        self._stop_event = threading.Event()
        self.peak = process.memory_info().rss

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.peak = max(self.peak, self._process.memory_info().rss)
            except psutil.Error:
                return
            self._stop_event.wait(timeout=self._interval_s)

    def stop(self) -> int:
        self._stop_event.set()
        self.join(timeout=1.0)
        return self.peak


@contextlib.contextmanager
def profile_block(label: str, sample_interval_ms: int = 50) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    sample_interval_ms : int
        Interval in milliseconds for RSS sampling.

    Stats are filled in on exit, including when the block raises.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    # First call primes the counter and always returns 0.0.
    process.cpu_percent(interval=None)

    sampler = _RssSampler(process, sample_interval_ms / 1000.0)
    sampler.start()

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        stats.peak_rss_bytes = sampler.stop() or None
        stats.cpu_percent = process.cpu_percent(interval=None)


__all__ = ["ProfileStats", "profile_block"]
