"""Observer hooks through which renderers follow a session."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from queue import Empty, Full, Queue
from typing import Deque, Optional, Protocol

import numpy as np

from ..config import TremorConfig
from .models import AnalysisResult, PlotPoint, Sample, SessionState
from .sample_buffer import DEFAULT_CAPACITY

__all__ = [
    "SessionListener",
    "NullListener",
    "PlotUpdate",
    "PlotFeed",
]

# Auto-scroll kicks in once the live trace holds more points than this.
_SCROLL_MIN_POINTS = 50


class SessionListener(Protocol):
    """Callbacks invoked by :class:`SessionController` while it holds its lock."""

    def on_state(self, state: SessionState) -> None:  # pragma: no cover - protocol
        ...

    def on_sample(self, sample: Sample) -> None:  # pragma: no cover - protocol
        ...

    def on_reset(self, samples: Sequence[Sample]) -> None:  # pragma: no cover - protocol
        ...

    def on_result(self, result: AnalysisResult) -> None:  # pragma: no cover - protocol
        ...


class NullListener:
    """No-op listener; subclass and override only the hooks you need."""

    def on_state(self, state: SessionState) -> None:
        return

    def on_sample(self, sample: Sample) -> None:
        return

    def on_reset(self, samples: Sequence[Sample]) -> None:
        return

    def on_result(self, result: AnalysisResult) -> None:
        return


def _offer_queue(queue: Queue, item: object) -> None:
    """Best-effort put that drops the oldest payload when the queue is full."""
    try:
        queue.put_nowait(item)
    except Full:
        try:
            queue.get_nowait()
        except Empty:
            pass
        queue.put_nowait(item)


@dataclass(slots=True)
class PlotUpdate:
    """Container with the magnitude trace ready for a chart."""

    timestamps: np.ndarray
    magnitudes: np.ndarray
    live: bool
    x_min: Optional[float] = None
    x_max: Optional[float] = None

    def points(self) -> list[PlotPoint]:
        return list(zip(self.timestamps.tolist(), self.magnitudes.tolist()))


@dataclass(slots=True)
class PlotFeed(NullListener):
    """Mirrors the sample window as ``(time_seconds, magnitude)`` pairs.

    While recording the x-range follows the newest ``window_seconds`` of data.
    Renderers either poll :meth:`latest_update` on their own schedule or drain
    the optional bounded ``queue``.
    """

    capacity: int = DEFAULT_CAPACITY
    window_seconds: float = 8.0
    queue: Queue[PlotUpdate] | None = None

    _points: Deque[PlotPoint] = field(init=False, repr=False)
    _live: bool = field(init=False, default=False, repr=False)
    _latest_update: Optional[PlotUpdate] = field(init=False, default=None, repr=False)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError("capacity must be positive.")
        self._points = deque(maxlen=self.capacity)

    @classmethod
    def from_config(cls, config: TremorConfig, queue: Queue[PlotUpdate] | None = None) -> PlotFeed:
        """Size the feed to the session window and scroll span in ``config``."""
        return cls(capacity=config.buffer_capacity, window_seconds=config.plot_window_seconds, queue=queue)

    def on_state(self, state: SessionState) -> None:
        with self._lock:
            self._live = state is SessionState.RECORDING
            update = self._build_update()
        self._publish(update)

    def on_sample(self, sample: Sample) -> None:
        with self._lock:
            self._points.append((sample.time_s, sample.magnitude))
            update = self._build_update()
        self._publish(update)

    def on_reset(self, samples: Sequence[Sample]) -> None:
        with self._lock:
            self._points.clear()
            self._points.extend((s.time_s, s.magnitude) for s in samples)
            update = self._build_update()
        self._publish(update)

    def latest_update(self) -> Optional[PlotUpdate]:
        with self._lock:
            return self._latest_update

    def drain_queue(self) -> list[PlotUpdate]:
        if self.queue is None:
            return []
        items: list[PlotUpdate] = []
        while True:
            try:
                items.append(self.queue.get_nowait())
            except Empty:
                break
        return items

    def _build_update(self) -> PlotUpdate:
        count = len(self._points)
        times = np.fromiter((p[0] for p in self._points), dtype=np.float64, count=count)
        values = np.fromiter((p[1] for p in self._points), dtype=np.float64, count=count)
        x_min = x_max = None
        if self._live and count > _SCROLL_MIN_POINTS:
            newest = float(times[-1])
            x_min = max(0.0, newest - self.window_seconds)
            x_max = newest + 1.0
        update = PlotUpdate(timestamps=times, magnitudes=values, live=self._live, x_min=x_min, x_max=x_max)
        self._latest_update = update
        return update

    def _publish(self, update: PlotUpdate) -> None:
        if self.queue is not None:
            _offer_queue(self.queue, update)
