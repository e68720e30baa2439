"""Frequency-band tremor classification."""

from __future__ import annotations

from ..core.models import Classification

Band = tuple[float, float]

PARKINSONIAN_BAND: Band = (4.0, 6.0)
ESSENTIAL_BAND: Band = (6.0, 12.0)


def classify(
    frequency_hz: float,
    *,
    parkinsonian_band: Band = PARKINSONIAN_BAND,
    essential_band: Band = ESSENTIAL_BAND,
) -> Classification:
    """
    Map a dominant frequency onto a tremor category.

    Bands are inclusive and checked in order, so a frequency on the shared
    6.0 Hz edge is Parkinsonian. Anything outside both bands is Normal.
    """
    low, high = parkinsonian_band
    if low <= frequency_hz <= high:
        return Classification.PARKINSONIAN
    low, high = essential_band
    if low <= frequency_hz <= high:
        return Classification.ESSENTIAL
    return Classification.NORMAL


__all__ = ["ESSENTIAL_BAND", "PARKINSONIAN_BAND", "classify"]
