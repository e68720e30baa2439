"""Runtime configuration for tremor sessions and analysis."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

Band = tuple[float, float]


@dataclass(slots=True)
class TremorConfig:
    """
    Tuning knobs for recording sessions, analysis and synthetic sources.

    The defaults reproduce the phone-based analyzer: a 300-sample window,
    a 10 second auto-stop and 100 ms synthetic sample spacing.
    """

    buffer_capacity: int = 300
    min_samples: int = 10
    auto_stop_seconds: float = 10.0

    frequency_decimals: int = 2
    amplitude_decimals: int = 3
    parkinsonian_band: Band = (4.0, 6.0)
    essential_band: Band = (6.0, 12.0)

    # generate_test_data() defaults
    test_sample_count: int = 100
    test_target_hz: float = 5.0
    test_interval_ms: int = 100
    test_noise_amplitude: float = 0.5
    baseline_magnitude: float = 9.8
    tremor_gain: float = 2.0

    # SyntheticMotionSource pacing
    synthetic_interval_s: float = 0.1
    synthetic_start_delay_s: float = 0.5
    synthetic_event_count: int = 100

    plot_window_seconds: float = 8.0

    def sanitized(self) -> TremorConfig:
        """Return a copy with derived limits applied."""
        return TremorConfig(
            buffer_capacity=max(1, int(self.buffer_capacity)),
            min_samples=max(3, int(self.min_samples)),
            auto_stop_seconds=max(0.001, float(self.auto_stop_seconds)),
            frequency_decimals=max(0, int(self.frequency_decimals)),
            amplitude_decimals=max(0, int(self.amplitude_decimals)),
            parkinsonian_band=_ordered_band(self.parkinsonian_band),
            essential_band=_ordered_band(self.essential_band),
            test_sample_count=max(0, int(self.test_sample_count)),
            test_target_hz=float(self.test_target_hz),
            test_interval_ms=max(1, int(self.test_interval_ms)),
            test_noise_amplitude=max(0.0, float(self.test_noise_amplitude)),
            baseline_magnitude=float(self.baseline_magnitude),
            tremor_gain=float(self.tremor_gain),
            synthetic_interval_s=max(0.0, float(self.synthetic_interval_s)),
            synthetic_start_delay_s=max(0.0, float(self.synthetic_start_delay_s)),
            synthetic_event_count=max(0, int(self.synthetic_event_count)),
            plot_window_seconds=max(0.5, float(self.plot_window_seconds)),
        )


def _ordered_band(band: Any) -> Band:
    low, high = (float(v) for v in band)
    if high < low:
        low, high = high, low
    return (low, high)


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`TremorConfig`."""
    return {f.name for f in fields(TremorConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten a top-level ``tremor`` block into the surrounding mapping."""
    if "tremor" in data and isinstance(data["tremor"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "tremor":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> TremorConfig:
    """Build :class:`TremorConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return TremorConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return TremorConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> TremorConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`TremorConfig`.
    """
    if path is None:
        return TremorConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return TremorConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["TremorConfig", "config_from_mapping", "load_config"]
