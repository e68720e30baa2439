"""Feature extraction helpers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

import numpy as np
from numpy.typing import ArrayLike

from ..core.models import Sample


def _to_1d_array(signal: ArrayLike) -> np.ndarray:
    """Convert input to a 1D float64 numpy array."""
    arr = np.asarray(signal, dtype=float)
    if arr.size == 0:
        raise ValueError("signal must contain at least one sample")
    if arr.ndim != 1:
        raise ValueError(f"signal must be 1-D, got shape {arr.shape}")
    return arr


def magnitudes(samples: Sequence[Sample]) -> np.ndarray:
    """Return the stored magnitudes of ``samples`` as a float64 array."""
    return np.fromiter((s.magnitude for s in samples), dtype=np.float64, count=len(samples))


def round_half_away(value: float, decimals: int) -> float:
    """
    Round ``value`` to ``decimals`` places, ties away from zero.

    Rounding works on the shortest decimal representation of the float, so
    ``round_half_away(2.675, 2)`` gives ``2.68`` rather than the ``2.67``
    that binary rounding produces.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-int(decimals))
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def mean_magnitude(signal: ArrayLike) -> float:
    """
    Compute the arithmetic mean of a 1-D magnitude signal.

    Parameters
    ----------
    signal:
        1-D array-like of magnitudes.

    Returns
    -------
    float
        Unrounded mean.
    """
    arr = _to_1d_array(signal)
    return float(np.mean(arr))


def average_amplitude(samples: Sequence[Sample], decimals: int = 3) -> float:
    """Mean magnitude of ``samples`` rounded to ``decimals`` places.

    Works for any non-empty window; the ``min_samples`` gate is applied by
    the session workflow, not here.
    """
    if len(samples) == 0:
        raise ValueError("average_amplitude() requires at least one sample")
    return round_half_away(mean_magnitude(magnitudes(samples)), decimals)


__all__ = ["average_amplitude", "magnitudes", "mean_magnitude", "round_half_away"]
