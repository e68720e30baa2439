from __future__ import annotations

import io
import json
import time

from tremorsense.core.models import MotionEvent
from tremorsense.sensors.motion import SourceStatus, parse_motion_line
from tremorsense.sensors.stream_source import StreamMotionSource, reader_loop


def _build_line(**axes) -> str:
    return json.dumps(axes)


def test_parse_motion_line_reads_axes_and_aliases() -> None:
    assert parse_motion_line(_build_line(ax=0.1, ay=0.2, az=9.8)) == MotionEvent(0.1, 0.2, 9.8)
    assert parse_motion_line(_build_line(x=1, y=2, z=3)) == MotionEvent(1.0, 2.0, 3.0)


def test_parse_motion_line_keeps_missing_axes_as_none() -> None:
    event = parse_motion_line(_build_line(ax=0.1, ay=None))
    assert event == MotionEvent(0.1, None, None)
    assert not event.is_complete()


def test_parse_motion_line_skips_invalid_lines() -> None:
    assert parse_motion_line("") is None
    assert parse_motion_line("   \n") is None
    assert parse_motion_line("not-json") is None
    assert parse_motion_line("[1, 2, 3]") is None
    assert parse_motion_line(_build_line(ax="not-a-number", ay=0.0, az=9.8)) is None


def test_reader_loop_forwards_events() -> None:
    received = []
    lines = [
        "not-json",
        _build_line(ax=0.1, ay=0.2, az=9.8),
        _build_line(ax=0.3, ay=0.4, az=9.7),
    ]
    reader_loop(lines, received.append)

    assert received == [MotionEvent(0.1, 0.2, 9.8), MotionEvent(0.3, 0.4, 9.7)]


def test_reader_loop_survives_callback_errors() -> None:
    seen = []

    def _callback(event) -> None:
        seen.append(event)
        raise RuntimeError("consumer failed")

    reader_loop([_build_line(ax=1, ay=1, az=1)] * 2, _callback)
    assert len(seen) == 2


def test_stream_source_background_thread() -> None:
    source = StreamMotionSource(io.StringIO(_build_line(ax=1.5, ay=0.0, az=9.8) + "\n"))
    assert source.probe() is SourceStatus.AVAILABLE
    assert source.request_permission()

    received = []
    handle = source.subscribe(received.append)

    # Allow background thread to process the single line
    timeout = time.time() + 1.0
    while time.time() < timeout and not received:
        time.sleep(0.01)

    handle.close()
    handle.join(timeout=1.0)

    assert received == [MotionEvent(1.5, 0.0, 9.8)]
    assert not handle.is_alive()
