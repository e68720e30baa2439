"""Peak-counting frequency estimator."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from ..core.models import Sample
from .features import magnitudes, round_half_away

logger = logging.getLogger(__name__)

DEFAULT_MIN_SAMPLES = 10


@dataclass(frozen=True, slots=True)
class FrequencyEstimate:
    """Peak count over a window and the frequency derived from it."""

    peak_count: int
    sample_count: int
    window_seconds: float
    frequency_hz: float
    rounded_hz: float

    @property
    def sample_rate_hz(self) -> float:
        """Effective sampling rate across the window."""
        return (self.sample_count - 1) / self.window_seconds


def count_peaks(signal: ArrayLike) -> int:
    """
    Count strict interior local maxima of ``signal``.

    A value is a peak only if it is greater than both neighbours, so the
    first and last values never count and flat tops (``[1, 3, 3, 1]``)
    contribute nothing.
    """
    arr = np.asarray(signal, dtype=float).reshape(-1)
    if arr.size < 3:
        return 0
    interior = arr[1:-1]
    mask = (interior > arr[:-2]) & (interior > arr[2:])
    return int(np.count_nonzero(mask))


def window_duration_s(samples: Sequence[Sample]) -> float:
    """Elapsed time between the first and last sample in seconds."""
    if len(samples) < 2:
        return 0.0
    return (samples[-1].time_ms - samples[0].time_ms) / 1000.0


def estimate_frequency(
    samples: Sequence[Sample],
    *,
    min_samples: int = DEFAULT_MIN_SAMPLES,
    decimals: int = 2,
) -> Optional[FrequencyEstimate]:
    """
    Estimate the dominant oscillation frequency of ``samples``.

    Returns ``None`` when fewer than ``min_samples`` samples are available or
    when every sample shares one timestamp (zero-length window).
    """
    n = len(samples)
    if n < min_samples:
        logger.debug("Frequency estimate skipped: %d samples < %d", n, min_samples)
        return None

    duration = window_duration_s(samples)
    if duration <= 0.0:
        logger.debug("Frequency estimate skipped: degenerate %.3f s window over %d samples", duration, n)
        return None

    peaks = count_peaks(magnitudes(samples))
    frequency = peaks / duration
    return FrequencyEstimate(
        peak_count=peaks,
        sample_count=n,
        window_seconds=duration,
        frequency_hz=frequency,
        rounded_hz=round_half_away(frequency, decimals),
    )


__all__ = [
    "DEFAULT_MIN_SAMPLES",
    "FrequencyEstimate",
    "count_peaks",
    "estimate_frequency",
    "window_duration_s",
]
