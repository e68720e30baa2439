"""Shared dataclasses for tremor sessions, samples and analysis results."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

PlotPoint = tuple[float, float]


class SessionState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    STOPPING = "stopping"
    GENERATING_TEST_DATA = "generating_test_data"


class Classification(str, Enum):
    PARKINSONIAN = "parkinsonian"
    ESSENTIAL = "essential"
    NORMAL = "normal"
    INSUFFICIENT = "insufficient"


@dataclass(frozen=True, slots=True)
class MotionEvent:
    """Raw triaxial reading as delivered by a sample source.

    Any axis may be ``None`` when the platform reports no value.
    """

    x: Optional[float]
    y: Optional[float]
    z: Optional[float]

    def is_complete(self) -> bool:
        return all(_is_finite_number(v) for v in (self.x, self.y, self.z))


@dataclass(frozen=True, slots=True)
class Sample:
    x: float
    y: float
    z: float
    magnitude: float
    time_ms: int

    @classmethod
    def from_axes(cls, x: float, y: float, z: float, time_ms: int) -> Sample:
        """Build a sample, computing the Euclidean magnitude once."""
        fx, fy, fz = float(x), float(y), float(z)
        return cls(
            x=fx,
            y=fy,
            z=fz,
            magnitude=math.sqrt(fx * fx + fy * fy + fz * fz),
            time_ms=int(time_ms),
        )

    @property
    def time_s(self) -> float:
        return self.time_ms / 1000.0


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """
    Outcome of one completed session (or synthetic test run).

    ``dominant_frequency_hz`` and ``average_amplitude`` are ``None`` when the
    window could not be analysed; ``classification`` is then
    :attr:`Classification.INSUFFICIENT`.
    """

    dominant_frequency_hz: Optional[float]
    average_amplitude: Optional[float]
    sample_count: int
    classification: Classification
    window_seconds: Optional[float] = None
    sample_rate_hz: Optional[float] = None

    @property
    def is_sufficient(self) -> bool:
        return self.classification is not Classification.INSUFFICIENT

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["classification"] = self.classification.value
        return data


def _is_finite_number(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


__all__ = [
    "AnalysisResult",
    "Classification",
    "MotionEvent",
    "PlotPoint",
    "Sample",
    "SessionState",
]
