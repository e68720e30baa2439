from __future__ import annotations

import pytest

from tremorsense.analysis.frequency import count_peaks, estimate_frequency, window_duration_s
from tremorsense.analysis.features import round_half_away

from helpers import samples_from


@pytest.mark.parametrize(
    "values, expected",
    [
        ([1, 3, 2, 3, 1], 2),
        ([1, 3, 3, 1], 0),
        ([5, 1, 1, 5], 0),
        ([3, 1, 2], 0),
        ([1, 2], 0),
        ([], 0),
        ([0, 1, 0, 1, 0, 1, 0, 1, 0, 1], 4),
    ],
)
def test_count_peaks(values, expected) -> None:
    assert count_peaks(values) == expected


def test_estimate_frequency_counts_peaks_over_window() -> None:
    samples = samples_from([0, 1, 0, 1, 0, 1, 0, 1, 0, 1])
    est = estimate_frequency(samples)

    assert est is not None
    assert est.peak_count == 4
    assert est.window_seconds == pytest.approx(0.9)
    assert est.frequency_hz == pytest.approx(4 / 0.9)
    assert est.rounded_hz == 4.44
    assert est.sample_rate_hz == pytest.approx(10.0)


def test_estimate_frequency_needs_min_samples() -> None:
    assert estimate_frequency(samples_from([0, 1, 0, 1, 0, 1, 0, 1, 0])) is None
    assert estimate_frequency(samples_from([0, 1, 0, 1, 0]), min_samples=5) is not None


def test_zero_length_window_is_not_a_frequency() -> None:
    samples = samples_from([0, 1] * 6, times_ms=[250] * 12)
    assert window_duration_s(samples) == 0.0
    assert estimate_frequency(samples) is None


@pytest.mark.parametrize(
    "value, decimals, expected",
    [
        (2.675, 2, 2.68),
        (0.125, 2, 0.13),
        (1.005, 2, 1.01),
        (-2.5, 0, -3.0),
        (4.444444, 2, 4.44),
        (9.8, 3, 9.8),
    ],
)
def test_round_half_away(value, decimals, expected) -> None:
    assert round_half_away(value, decimals) == expected
