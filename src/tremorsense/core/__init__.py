"""Core session primitives: samples, the sliding window and listener hooks.

The session controller itself lives in :mod:`tremorsense.core.session`; it is
not re-exported here because it pulls in the analysis and sensor packages,
which in turn depend on the models defined in this package.
"""

from .errors import CapabilityUnavailable, PermissionDenied, StartError
from .listeners import NullListener, PlotFeed, PlotUpdate, SessionListener
from .models import AnalysisResult, Classification, MotionEvent, PlotPoint, Sample, SessionState
from .sample_buffer import DEFAULT_CAPACITY, SampleBuffer

__all__ = [
    "AnalysisResult",
    "CapabilityUnavailable",
    "Classification",
    "DEFAULT_CAPACITY",
    "MotionEvent",
    "NullListener",
    "PermissionDenied",
    "PlotFeed",
    "PlotPoint",
    "PlotUpdate",
    "Sample",
    "SampleBuffer",
    "SessionListener",
    "SessionState",
    "StartError",
]
