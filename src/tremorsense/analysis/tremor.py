"""Combine the estimators into a single :class:`AnalysisResult`."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from ..config import TremorConfig
from ..core.models import AnalysisResult, Classification, Sample
from ..tools.debug import time_block
from .classify import classify
from .features import average_amplitude, round_half_away
from .frequency import estimate_frequency

logger = logging.getLogger(__name__)


def analyze_window(samples: Sequence[Sample], config: Optional[TremorConfig] = None) -> AnalysisResult:
    """
    Analyse a stable snapshot of the sample window.

    Windows below ``config.min_samples`` yield an ``INSUFFICIENT`` result with
    no numbers. A zero-length window (all timestamps equal) also yields
    ``INSUFFICIENT`` but keeps the average amplitude, which is still defined.
    Classification uses the unrounded frequency.
    """
    cfg = config or TremorConfig()
    n = len(samples)

    with time_block(f"analyze_window(n={n})"):
        if n < cfg.min_samples:
            logger.info("Insufficient data for tremor analysis: %d < %d samples", n, cfg.min_samples)
            return AnalysisResult(
                dominant_frequency_hz=None,
                average_amplitude=None,
                sample_count=n,
                classification=Classification.INSUFFICIENT,
            )

        amplitude = average_amplitude(samples, cfg.amplitude_decimals)
        estimate = estimate_frequency(
            samples,
            min_samples=cfg.min_samples,
            decimals=cfg.frequency_decimals,
        )
        if estimate is None:
            logger.warning("Degenerate analysis window: %d samples share one timestamp", n)
            return AnalysisResult(
                dominant_frequency_hz=None,
                average_amplitude=amplitude,
                sample_count=n,
                classification=Classification.INSUFFICIENT,
                window_seconds=0.0,
            )

        classification = classify(
            estimate.frequency_hz,
            parkinsonian_band=cfg.parkinsonian_band,
            essential_band=cfg.essential_band,
        )

    logger.info(
        "Tremor analysis: peaks=%d window=%.2fs freq=%.2fHz amplitude=%.3f -> %s",
        estimate.peak_count,
        estimate.window_seconds,
        estimate.frequency_hz,
        amplitude,
        classification.value,
    )
    return AnalysisResult(
        dominant_frequency_hz=estimate.rounded_hz,
        average_amplitude=amplitude,
        sample_count=n,
        classification=classification,
        window_seconds=estimate.window_seconds,
        sample_rate_hz=round_half_away(estimate.sample_rate_hz, cfg.frequency_decimals),
    )


__all__ = ["analyze_window"]
