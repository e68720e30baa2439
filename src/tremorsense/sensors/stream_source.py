"""Live motion source reading JSON lines on a background thread."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Optional

from .motion import MotionCallback, SourceStatus, ThreadSubscription, parse_motion_line

logger = logging.getLogger(__name__)


def reader_loop(
    stream: Iterable[str],
    callback: MotionCallback,
    *,
    stop_event: Optional[threading.Event] = None,
) -> None:
    """Parse JSON lines from ``stream`` and forward events to ``callback``.

    Stops when the stream is exhausted or ``stop_event`` is set. Callback
    errors are logged so a faulty consumer cannot kill the reader.
    """
    for raw_line in stream:
        if stop_event is not None and stop_event.is_set():
            break

        event = parse_motion_line(raw_line)
        if event is None:
            continue

        try:
            callback(event)
        except Exception:
            logger.exception("Error in motion callback for event %r", event)


class StreamMotionSource:
    """
    Motion source backed by any line iterable (stdin, a logger pipe, a file).

    The source is single-use: the underlying stream is consumed by the first
    subscription.
    """

    def __init__(self, stream: Iterable[str], *, thread_name: str | None = None) -> None:
        self._stream = stream
        self._thread_name = thread_name or "TremorStreamReader"

    def probe(self) -> SourceStatus:
        return SourceStatus.AVAILABLE

    def request_permission(self) -> bool:
        return True

    def subscribe(self, callback: MotionCallback) -> ThreadSubscription:
        stop_event = threading.Event()

        def _target() -> None:
            reader_loop(self._stream, callback, stop_event=stop_event)
            logger.debug("Motion stream reader finished")

        thread = threading.Thread(target=_target, name=self._thread_name, daemon=True)
        thread.start()
        return ThreadSubscription(thread=thread, stop_event=stop_event)


def stdin_source() -> StreamMotionSource:
    """Convenience wrapper that reads motion lines from ``sys.stdin``."""
    import sys

    return StreamMotionSource(sys.stdin, thread_name="TremorStreamReader(stdin)")


__all__ = ["StreamMotionSource", "reader_loop", "stdin_source"]
