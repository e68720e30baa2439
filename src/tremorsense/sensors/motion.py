"""
Sample-source contract and the JSON line format shared by live sources.

A live source streams JSON lines with (at least):

  - ax, ay, az : float | null  acceleration including gravity in m/s²

``x``/``y``/``z`` are accepted as aliases. ``parse_motion_line()`` keeps a
null or missing axis as ``None`` so the session controller can apply its
drop policy; lines that are not JSON objects are logged and skipped.
"""

from __future__ import annotations

import json
import logging
import math
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Protocol

from ..core.models import MotionEvent

logger = logging.getLogger(__name__)

MotionCallback = Callable[[MotionEvent], None]

_AXIS_KEYS = (("ax", "x"), ("ay", "y"), ("az", "z"))


class SourceStatus(str, Enum):
    AVAILABLE = "available"
    PERMISSION_REQUIRED = "permission_required"
    UNAVAILABLE = "unavailable"


class Subscription(Protocol):
    """Handle returned by :meth:`MotionSource.subscribe`."""

    def close(self) -> None:  # pragma: no cover - protocol
        """Stop delivering events. Idempotent and non-blocking."""
        ...


class MotionSource(Protocol):
    """Producer of raw motion events for one recording session."""

    def probe(self) -> SourceStatus:  # pragma: no cover - protocol
        ...

    def request_permission(self) -> bool:  # pragma: no cover - protocol
        ...

    def subscribe(self, callback: MotionCallback) -> Subscription:  # pragma: no cover - protocol
        ...


@dataclass
class ThreadSubscription:
    """Subscription backed by a daemon thread that polls ``stop_event``."""

    thread: threading.Thread
    stop_event: threading.Event

    def close(self) -> None:
        self.stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        self.thread.join(timeout)

    def is_alive(self) -> bool:
        return self.thread.is_alive()


def _coerce_axis(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def event_from_mapping(record: Mapping[str, Any]) -> MotionEvent:
    """Build a :class:`MotionEvent` from ``ax/ay/az`` (or ``x/y/z``) keys."""
    axes = []
    for primary, alias in _AXIS_KEYS:
        raw = record.get(primary, record.get(alias))
        axes.append(_coerce_axis(raw))
    return MotionEvent(*axes)


def parse_motion_line(line: str) -> MotionEvent | None:
    """
    Parse a single JSON line into a :class:`MotionEvent`.

    Invalid lines return ``None`` so callers can skip them without raising.
    """
    text = line.strip()
    if not text:
        return None

    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Bad JSON from motion stream: %r (%s)", text, exc)
        return None

    if not isinstance(obj, Mapping):
        logger.debug("Skipping non-object JSON payload: %r", obj)
        return None

    try:
        return event_from_mapping(obj)
    except (TypeError, ValueError) as exc:
        logger.warning("Bad field value in motion line %r (%s)", obj, exc)
        return None


__all__ = [
    "MotionCallback",
    "MotionSource",
    "SourceStatus",
    "Subscription",
    "ThreadSubscription",
    "event_from_mapping",
    "parse_motion_line",
]
