"""
Matplotlib view of a tremor window and its analysis.

Used by ``tremorsense demo --plot`` and ``tremorsense record --plot``. Requires
the optional ``plot`` extra.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from ..core.models import AnalysisResult, Classification, PlotPoint

# Display range for acceleration including gravity.
Y_LIMITS = (5.0, 15.0)

_VERDICTS = {
    Classification.PARKINSONIAN: "possible Parkinsonian tremor (4-6 Hz)",
    Classification.ESSENTIAL: "possible Essential tremor (6-12 Hz)",
    Classification.NORMAL: "frequency appears normal",
    Classification.INSUFFICIENT: "not enough data to analyse",
}


def describe_result(result: Optional[AnalysisResult]) -> str:
    """One-line human readable summary of ``result``."""
    if result is None:
        return "No analysis available"
    verdict = _VERDICTS[result.classification]
    if result.dominant_frequency_hz is None:
        return f"{result.sample_count} samples: {verdict}"
    return (
        f"{result.dominant_frequency_hz:.2f} Hz, amplitude {result.average_amplitude:.3f} m/s² "
        f"({result.sample_count} samples): {verdict}"
    )


def setup_figure(series: Sequence[PlotPoint], result: Optional[AnalysisResult] = None):
    """Create figure/axes/line for ``series`` and return (fig, ax, line)."""
    data = np.asarray(series, dtype=float).reshape(-1, 2)
    fig, ax = plt.subplots(1, 1)
    (line,) = ax.plot(data[:, 0], data[:, 1], label="Tremor magnitude (m/s²)")
    ax.set_xlabel("Time (seconds)")
    ax.set_ylabel("Acceleration (m/s²)")
    ax.set_ylim(*Y_LIMITS)
    ax.legend(loc="upper right")
    ax.set_title(describe_result(result))
    fig.tight_layout()
    return fig, ax, line


def plot_result(series: Sequence[PlotPoint], result: Optional[AnalysisResult] = None) -> None:
    """Show a blocking Matplotlib window with the magnitude trace."""
    setup_figure(series, result)
    plt.show()


__all__ = ["Y_LIMITS", "describe_result", "plot_result", "setup_figure"]
