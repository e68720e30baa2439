"""Configuration objects and helpers for tremorsense.

A single YAML file (optionally nested under a ``tremor:`` key) overrides the
window size, auto-stop deadline, classification bands and synthetic source
pacing. The typed dataclass in :mod:`runtime` is passed to the session
controller and the sample sources so every part agrees on the same limits.
"""

from .runtime import TremorConfig, config_from_mapping, load_config

__all__ = ["TremorConfig", "config_from_mapping", "load_config"]
