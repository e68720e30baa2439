"""Synthetic tremor data for demos and tests.

Two producers live here:

- :func:`generate_test_samples` builds a complete window at once for
  :meth:`SessionController.generate_test_data`.
- :class:`SyntheticMotionSource` paces simulated motion events on a thread
  so a recording session can be exercised on machines without a sensor.
  It is only used when a caller selects it explicitly.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

import numpy as np

from ..config import TremorConfig
from ..core.models import MotionEvent, Sample
from .motion import MotionCallback, SourceStatus, ThreadSubscription

logger = logging.getLogger(__name__)

# Axis shares of the magnitude (not a unit vector).
_AXIS_FRACTIONS = (0.3, 0.4, 0.5)


def _uniform_noise(rng: np.random.Generator, amplitude: float, size: int | None = None):
    """Zero-centred uniform noise spanning ``amplitude`` peak to peak."""
    return (rng.random(size) - 0.5) * amplitude


def generate_test_samples(
    count: int = 100,
    target_hz: float = 5.0,
    *,
    interval_ms: int = 100,
    noise_amplitude: float = 0.5,
    baseline: float = 9.8,
    gain: float = 2.0,
    rng: Optional[np.random.Generator] = None,
) -> List[Sample]:
    """
    Synthesize ``count`` samples of a sinusoidal tremor at ``target_hz``.

    ``magnitude = baseline + sin(2*pi*target_hz*t) * gain + noise`` with
    samples spaced ``interval_ms`` apart starting at ``t = 0``. With
    ``noise_amplitude == 0`` the output is fully deterministic.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if interval_ms <= 0:
        raise ValueError(f"interval_ms must be > 0, got {interval_ms}")

    times_ms = np.arange(count, dtype=np.int64) * int(interval_ms)
    t = times_ms / 1000.0
    magnitude = baseline + np.sin(2 * np.pi * target_hz * t) * gain
    if noise_amplitude > 0 and count > 0:
        rng = rng or np.random.default_rng()
        magnitude = magnitude + _uniform_noise(rng, noise_amplitude, count)

    fx, fy, fz = _AXIS_FRACTIONS
    return [
        Sample(x=m * fx, y=m * fy, z=m * fz, magnitude=m, time_ms=int(ts))
        for ts, m in zip(times_ms.tolist(), magnitude.tolist())
    ]


def random_motion_event(rng: Optional[np.random.Generator] = None) -> MotionEvent:
    """One ad hoc reading near rest: ``x, y`` in [0, 2), ``z`` in [9.8, 10.8)."""
    rng = rng or np.random.default_rng()
    x, y, z_offset = rng.random(3).tolist()
    return MotionEvent(x=x * 2.0, y=y * 2.0, z=9.8 + z_offset)


def simulated_motion_event(time_ms: float, rng: np.random.Generator) -> MotionEvent:
    """Slow wrist sway plus jitter, as seen by a phone lying in the hand."""
    t = float(time_ms)
    return MotionEvent(
        x=float(np.sin(t / 1000.0) * 2.0 + _uniform_noise(rng, 0.5)),
        y=float(np.cos(t / 1000.0) * 1.5 + _uniform_noise(rng, 0.5)),
        z=float(9.8 + np.sin(t / 500.0) * 1.0 + _uniform_noise(rng, 0.3)),
    )


class SyntheticMotionSource:
    """Always-available source emitting simulated motion events."""

    def __init__(
        self,
        config: Optional[TremorConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.config = (config or TremorConfig()).sanitized()
        self._rng = rng or np.random.default_rng()

    def probe(self) -> SourceStatus:
        return SourceStatus.AVAILABLE

    def request_permission(self) -> bool:
        return True

    def subscribe(self, callback: MotionCallback) -> ThreadSubscription:
        stop_event = threading.Event()
        cfg = self.config

        def _target() -> None:
            if stop_event.wait(cfg.synthetic_start_delay_s):
                return
            for k in range(1, cfg.synthetic_event_count + 1):
                event = simulated_motion_event(k * 100.0, self._rng)
                try:
                    callback(event)
                except Exception:
                    logger.exception("Error in motion callback for simulated event %r", event)
                if stop_event.wait(cfg.synthetic_interval_s):
                    return
            logger.debug("Motion simulation finished after %d events", cfg.synthetic_event_count)

        thread = threading.Thread(target=_target, name="TremorMotionSimulation", daemon=True)
        thread.start()
        logger.info("Motion simulation started (%d events)", cfg.synthetic_event_count)
        return ThreadSubscription(thread=thread, stop_event=stop_event)


__all__ = [
    "SyntheticMotionSource",
    "generate_test_samples",
    "random_motion_event",
    "simulated_motion_event",
]
