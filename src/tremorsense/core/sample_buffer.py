"""Bounded sliding window of the most recent motion samples."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable
from typing import Deque, List, Optional

from .models import PlotPoint, Sample

DEFAULT_CAPACITY = 300


class SampleBuffer:
    """Fixed-capacity FIFO window plus lock.

    Pushing into a full buffer evicts the single oldest sample. The RLock
    lets the ingest path append while the analysis path takes snapshots
    without ever observing a half-evicted window.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._samples: Deque[Sample] = deque(maxlen=capacity)
        self._lock = threading.RLock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def push(self, sample: Sample) -> None:
        """Append ``sample``, dropping the oldest one when full."""
        with self._lock:
            self._samples.append(sample)

    def replace(self, samples: Iterable[Sample]) -> None:
        """Swap the whole window for ``samples`` (last ``capacity`` kept)."""
        with self._lock:
            self._samples.clear()
            self._samples.extend(samples)

    def snapshot(self) -> List[Sample]:
        """Return a stable copy of the window in insertion order."""
        with self._lock:
            return list(self._samples)

    def plot_series(self) -> List[PlotPoint]:
        """Return ``(time_seconds, magnitude)`` pairs for charting."""
        with self._lock:
            return [(s.time_s, s.magnitude) for s in self._samples]

    def latest(self) -> Optional[Sample]:
        """Return the newest sample, or ``None`` if the buffer is empty."""
        with self._lock:
            if not self._samples:
                return None
            return self._samples[-1]

    def clear(self) -> None:
        with self._lock:
            self._samples.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)


__all__ = ["DEFAULT_CAPACITY", "SampleBuffer"]
