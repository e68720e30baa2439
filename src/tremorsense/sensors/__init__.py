"""Motion sample sources.

Each source implements the :class:`~tremorsense.sensors.motion.MotionSource`
protocol: probe availability, ask for permission when the platform requires
it, then deliver raw :class:`~tremorsense.core.models.MotionEvent` objects to a
callback until the returned subscription is closed.
"""

from .motion import MotionSource, SourceStatus, Subscription, ThreadSubscription, parse_motion_line
from .stream_source import StreamMotionSource, stdin_source
from .synthetic import SyntheticMotionSource, generate_test_samples

__all__ = [
    "MotionSource",
    "SourceStatus",
    "StreamMotionSource",
    "Subscription",
    "ThreadSubscription",
    "SyntheticMotionSource",
    "generate_test_samples",
    "parse_motion_line",
    "stdin_source",
]
