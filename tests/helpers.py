"""Fakes shared by the session tests."""

from __future__ import annotations

from typing import Sequence

from tremorsense.core.models import MotionEvent, Sample
from tremorsense.sensors.motion import SourceStatus


def samples_from(magnitudes: Sequence[float], times_ms: Sequence[int] | None = None) -> list[Sample]:
    if times_ms is None:
        times_ms = [i * 100 for i in range(len(magnitudes))]
    return [
        Sample(x=0.0, y=0.0, z=float(m), magnitude=float(m), time_ms=int(t))
        for m, t in zip(magnitudes, times_ms)
    ]


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTimer:
    def __init__(self, interval: float, callback) -> None:
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        # Fires even after cancel() to mimic a timer racing a manual stop.
        self.callback()


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, callback) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


class FakeSubscription:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeSource:
    def __init__(
        self,
        status: SourceStatus = SourceStatus.AVAILABLE,
        *,
        grant: bool = True,
        fail_subscribe: Exception | None = None,
    ) -> None:
        self.status = status
        self.grant = grant
        self.fail_subscribe = fail_subscribe
        self.permission_requests = 0
        self.callbacks = []
        self.subscriptions: list[FakeSubscription] = []

    def probe(self) -> SourceStatus:
        return self.status

    def request_permission(self) -> bool:
        self.permission_requests += 1
        return self.grant

    def subscribe(self, callback) -> FakeSubscription:
        if self.fail_subscribe is not None:
            raise self.fail_subscribe
        self.callbacks.append(callback)
        sub = FakeSubscription()
        self.subscriptions.append(sub)
        return sub

    def emit(self, x, y, z, *, index: int = -1) -> None:
        self.callbacks[index](MotionEvent(x, y, z))


class RecordingListener:
    def __init__(self) -> None:
        self.states = []
        self.samples = []
        self.resets = []
        self.results = []

    def on_state(self, state) -> None:
        self.states.append(state)

    def on_sample(self, sample) -> None:
        self.samples.append(sample)

    def on_reset(self, samples) -> None:
        self.resets.append(list(samples))

    def on_result(self, result) -> None:
        self.results.append(result)
