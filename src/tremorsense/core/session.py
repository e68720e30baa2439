"""Session lifecycle: start, ingest, auto-stop, stop and analysis."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping
from dataclasses import replace
from functools import partial
from typing import Any, Callable, List, Optional, Protocol

import numpy as np

from ..analysis.tremor import analyze_window
from ..config import TremorConfig
from ..sensors.motion import MotionSource, SourceStatus, Subscription, event_from_mapping
from ..sensors.synthetic import generate_test_samples, random_motion_event
from .errors import CapabilityUnavailable, PermissionDenied
from .listeners import SessionListener
from .models import AnalysisResult, MotionEvent, PlotPoint, Sample, SessionState
from .sample_buffer import SampleBuffer

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
_Notification = tuple[str, Any]


class Cancellable(Protocol):
    def cancel(self) -> None:  # pragma: no cover - protocol
        ...


TimerFactory = Callable[[float, Callable[[], None]], Cancellable]


def thread_timer(interval_s: float, callback: Callable[[], None]) -> threading.Timer:
    """Start a daemon :class:`threading.Timer` (the default timer factory)."""
    timer = threading.Timer(interval_s, callback)
    timer.daemon = True
    timer.name = "TremorAutoStop"
    timer.start()
    return timer


class SessionController:
    """
    Owns one recording session at a time and turns it into an analysis.

    Every mutation of the sample window, the state and the result happens
    under a single RLock, so an auto-stop firing on the timer thread, a
    manual :meth:`stop` and the source thread calling :meth:`ingest` are
    serialized. Each session gets a generation number; timer callbacks and
    source callbacks carry it and become no-ops once their session is over.

    Listeners are invoked while the lock is held and must return quickly.
    """

    def __init__(
        self,
        source: Optional[MotionSource] = None,
        config: Optional[TremorConfig] = None,
        *,
        clock: Clock = time.monotonic,
        timer_factory: TimerFactory = thread_timer,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = (config or TremorConfig()).sanitized()
        self._source = source
        self._clock = clock
        self._timer_factory = timer_factory
        self._rng = rng or np.random.default_rng()

        self._lock = threading.RLock()
        self._buffer = SampleBuffer(self.config.buffer_capacity)
        self._state = SessionState.IDLE
        self._idle = threading.Event()
        self._idle.set()
        self._result: Optional[AnalysisResult] = None
        self._generation = 0
        self._t0: Optional[float] = None
        self._last_time_ms = 0
        self._timer: Optional[Cancellable] = None
        self._subscription: Optional[Subscription] = None
        self._listeners: List[SessionListener] = []

    # ------------------------------------------------------------------ control
    def start(self, source: Optional[MotionSource] = None) -> None:
        """
        Begin a new recording session.

        Any active session is torn down first (without analysis). Raises
        :class:`CapabilityUnavailable` or :class:`PermissionDenied` before the
        controller leaves ``IDLE`` when the source cannot deliver samples.
        """
        src = source or self._source
        self._release(self._teardown())

        if src is None:
            logger.error("Cannot start recording: no motion source configured")
            raise CapabilityUnavailable("no motion source configured")

        status = src.probe()
        if status is SourceStatus.UNAVAILABLE:
            logger.error("Cannot start recording: motion sensor unavailable")
            raise CapabilityUnavailable("motion sensor API is not available")
        if status is SourceStatus.PERMISSION_REQUIRED:
            logger.info("Requesting motion sensor permission")
            if not src.request_permission():
                logger.warning("Motion sensor permission denied")
                raise PermissionDenied("motion sensor permission denied")

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._buffer.clear()
            self._result = None
            self._t0 = self._clock()
            self._last_time_ms = 0
            self._set_state(SessionState.RECORDING)
            self._timer = self._timer_factory(
                self.config.auto_stop_seconds,
                partial(self._on_auto_stop, generation),
            )
            self._notify([("on_reset", []), ("on_state", SessionState.RECORDING)])
            logger.info(
                "Recording session %d started (auto-stop in %.1fs)",
                generation,
                self.config.auto_stop_seconds,
            )

        try:
            subscription = src.subscribe(partial(self._ingest, generation=generation))
        except Exception:
            logger.exception("Failed to subscribe to motion source")
            with self._lock:
                if self._generation == generation:
                    self._teardown_locked()
            raise

        with self._lock:
            if self._generation == generation and self._state is SessionState.RECORDING:
                self._subscription = subscription
                return
        # The session ended while we were subscribing.
        self._release(subscription)

    def stop(self) -> Optional[AnalysisResult]:
        """
        End the active recording and analyse the window.

        Idempotent: outside ``RECORDING`` this just returns the latest result.
        """
        return self._finish(None, "manual stop")

    def generate_test_data(
        self,
        count: Optional[int] = None,
        target_hz: Optional[float] = None,
        noise_amplitude: Optional[float] = None,
    ) -> AnalysisResult:
        """
        Replace the window with a synthetic tremor and analyse it right away.

        Works without a recording session; an active one is torn down first.
        """
        cfg = self.config
        count = cfg.test_sample_count if count is None else int(count)
        target_hz = cfg.test_target_hz if target_hz is None else float(target_hz)
        noise = cfg.test_noise_amplitude if noise_amplitude is None else float(noise_amplitude)

        with self._lock:
            subscription = self._teardown_locked()
            self._generation += 1
            self._set_state(SessionState.GENERATING_TEST_DATA)
            self._result = None
            notes: List[_Notification] = [("on_state", SessionState.GENERATING_TEST_DATA)]
            try:
                samples = generate_test_samples(
                    count,
                    target_hz,
                    interval_ms=cfg.test_interval_ms,
                    noise_amplitude=noise,
                    baseline=cfg.baseline_magnitude,
                    gain=cfg.tremor_gain,
                    rng=self._rng,
                )
                self._buffer.replace(samples)
                snapshot = self._buffer.snapshot()
                self._last_time_ms = snapshot[-1].time_ms if snapshot else 0
                notes.append(("on_reset", snapshot))
                self._result = analyze_window(snapshot, cfg)
                notes.append(("on_result", self._result))
                logger.info(
                    "Generated %d test samples at %.2f Hz (noise %.2f)",
                    len(snapshot),
                    target_hz,
                    noise,
                )
            finally:
                self._set_state(SessionState.IDLE)
                notes.append(("on_state", SessionState.IDLE))
                self._notify(notes)
            result = self._result
        self._release(subscription)
        return result

    def inject_manual_sample(self, sample: Optional[Sample] = None) -> Sample:
        """
        Append one ad hoc sample to the current (or most recent) window.

        Without ``sample`` a random near-rest reading is synthesized and
        timestamped relative to the session start. A supplied sample older
        than the newest one is restamped to keep times non-decreasing. State
        is left untouched.
        """
        with self._lock:
            if sample is None:
                event = random_motion_event(self._rng)
                now = self._clock()
                base = self._t0 if self._t0 is not None else now
                time_ms = max(self._last_time_ms, int(round((now - base) * 1000.0)))
                sample = Sample.from_axes(event.x, event.y, event.z, time_ms)
            elif sample.time_ms < self._last_time_ms:
                sample = replace(sample, time_ms=self._last_time_ms)
            self._buffer.push(sample)
            self._last_time_ms = sample.time_ms
            self._notify([("on_sample", sample)])
            logger.debug("Manual sample injected at %d ms", sample.time_ms)
            return sample

    def ingest(self, event: Any) -> bool:
        """
        Accept one raw reading from the active session's producer.

        ``event`` is a :class:`MotionEvent`, any object with ``x/y/z``
        attributes, or a mapping with ``ax/ay/az`` keys. Readings with a
        missing or non-numeric axis are dropped silently. Returns ``True``
        when the sample was stored.
        """
        return self._ingest(event)

    def close(self) -> None:
        """Tear down any active session without analysing it."""
        self._release(self._teardown())

    def __enter__(self) -> SessionController:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------- query
    def current_state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def is_recording(self) -> bool:
        return self.current_state() is SessionState.RECORDING

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until the controller is back in ``IDLE``; False on timeout."""
        return self._idle.wait(timeout)

    def latest_result(self) -> Optional[AnalysisResult]:
        with self._lock:
            return self._result

    def snapshot(self) -> List[Sample]:
        return self._buffer.snapshot()

    def plot_series(self) -> List[PlotPoint]:
        """Return the live window as ``(time_seconds, magnitude)`` pairs."""
        return self._buffer.plot_series()

    def add_listener(self, listener: SessionListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    # ----------------------------------------------------------------- helpers
    def _set_state(self, state: SessionState) -> None:
        self._state = state
        if state is SessionState.IDLE:
            self._idle.set()
        else:
            self._idle.clear()

    def _ingest(self, event: Any, generation: Optional[int] = None) -> bool:
        reading = self._coerce_event(event)
        if reading is None or not reading.is_complete():
            logger.debug("Dropping incomplete motion event: %r", event)
            return False

        with self._lock:
            if self._state is not SessionState.RECORDING:
                return False
            if generation is not None and generation != self._generation:
                return False
            elapsed_ms = int(round((self._clock() - self._t0) * 1000.0))
            time_ms = max(self._last_time_ms, elapsed_ms)
            sample = Sample.from_axes(reading.x, reading.y, reading.z, time_ms)
            self._buffer.push(sample)
            self._last_time_ms = time_ms
            self._notify([("on_sample", sample)])
        return True

    @staticmethod
    def _coerce_event(event: Any) -> Optional[MotionEvent]:
        if event is None:
            return None
        if isinstance(event, MotionEvent):
            return event
        try:
            if isinstance(event, Mapping):
                return event_from_mapping(event)
            return MotionEvent(
                getattr(event, "x", None),
                getattr(event, "y", None),
                getattr(event, "z", None),
            )
        except (TypeError, ValueError):
            return None

    def _on_auto_stop(self, generation: int) -> None:
        self._finish(generation, "auto-stop")

    def _finish(self, generation: Optional[int], reason: str) -> Optional[AnalysisResult]:
        with self._lock:
            if self._state is not SessionState.RECORDING:
                return self._result
            if generation is not None and generation != self._generation:
                logger.debug("Ignoring %s for superseded session %d", reason, generation)
                return self._result

            self._set_state(SessionState.STOPPING)
            notes: List[_Notification] = [("on_state", SessionState.STOPPING)]
            subscription = self._subscription
            self._subscription = None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            try:
                snapshot = self._buffer.snapshot()
                logger.info("Recording session %d ended (%s) with %d samples", self._generation, reason, len(snapshot))
                if snapshot:
                    self._result = analyze_window(snapshot, self.config)
                    notes.append(("on_result", self._result))
            finally:
                self._set_state(SessionState.IDLE)
                notes.append(("on_state", SessionState.IDLE))
                self._notify(notes)
            result = self._result
        self._release(subscription)
        return result

    def _teardown(self) -> Optional[Subscription]:
        with self._lock:
            return self._teardown_locked()

    def _teardown_locked(self) -> Optional[Subscription]:
        """Cancel the timer and detach the source; returns the handle to release."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        subscription = self._subscription
        self._subscription = None
        if self._state is SessionState.RECORDING:
            logger.info("Discarding recording session %d without analysis", self._generation)
            self._generation += 1
            self._set_state(SessionState.IDLE)
            self._notify([("on_state", SessionState.IDLE)])
        return subscription

    @staticmethod
    def _release(subscription: Optional[Subscription]) -> None:
        if subscription is None:
            return
        try:
            subscription.close()
        except Exception:
            logger.exception("Error releasing motion source subscription")

    def _notify(self, notes: List[_Notification]) -> None:
        for listener in list(self._listeners):
            for hook, payload in notes:
                try:
                    getattr(listener, hook)(payload)
                except Exception:
                    logger.exception("Session listener %r failed in %s", listener, hook)

    def __repr__(self) -> str:
        return f"<SessionController(state={self._state.value}, samples={len(self._buffer)})>"


__all__ = ["Cancellable", "Clock", "SessionController", "TimerFactory", "thread_timer"]
