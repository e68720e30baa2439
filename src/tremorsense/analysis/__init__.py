"""Tremor signal analysis (peak counting, amplitude, classification).

Modules here operate on plain sequences of :class:`~tremorsense.core.models.Sample`
or NumPy arrays of magnitudes. They hold no state and do no I/O so they can be
called from the session controller, command-line scripts, or tests alike.
"""

from .classify import ESSENTIAL_BAND, PARKINSONIAN_BAND, classify
from .features import average_amplitude, mean_magnitude, round_half_away
from .frequency import FrequencyEstimate, count_peaks, estimate_frequency, window_duration_s
from .tremor import analyze_window

__all__ = [
    "ESSENTIAL_BAND",
    "PARKINSONIAN_BAND",
    "FrequencyEstimate",
    "analyze_window",
    "average_amplitude",
    "classify",
    "count_peaks",
    "estimate_frequency",
    "mean_magnitude",
    "round_half_away",
    "window_duration_s",
]
