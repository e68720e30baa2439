"""tremorsense: tremor frequency estimation from triaxial acceleration samples.

Typical use::

    from tremorsense import SessionController
    from tremorsense.sensors import stdin_source

    controller = SessionController(stdin_source())
    controller.start()
    ...                      # auto-stops after 10 s
    print(controller.latest_result())
"""

from .config import TremorConfig, load_config
from .core import (
    AnalysisResult,
    CapabilityUnavailable,
    Classification,
    PermissionDenied,
    PlotFeed,
    Sample,
    SampleBuffer,
    SessionState,
    StartError,
)
from .core.session import SessionController

__all__ = [
    "AnalysisResult",
    "CapabilityUnavailable",
    "Classification",
    "PermissionDenied",
    "PlotFeed",
    "Sample",
    "SampleBuffer",
    "SessionController",
    "SessionState",
    "StartError",
    "TremorConfig",
    "load_config",
]

__version__ = "0.1.0"
