from __future__ import annotations

from queue import Queue

import numpy as np
import pytest

from tremorsense.core.listeners import PlotFeed
from tremorsense.core.models import MotionEvent, Sample, SessionState
from tremorsense.core.session import SessionController

from helpers import FakeClock, FakeSource, FakeTimerFactory


def _recording(feed: PlotFeed):
    clock = FakeClock()
    controller = SessionController(FakeSource(), clock=clock, timer_factory=FakeTimerFactory())
    controller.add_listener(feed)
    controller.start()
    return controller, clock


def test_plot_feed_mirrors_test_data() -> None:
    feed = PlotFeed()
    controller = SessionController(rng=np.random.default_rng(0))
    controller.add_listener(feed)

    controller.generate_test_data(count=60, noise_amplitude=0.0)

    update = feed.latest_update()
    assert update is not None
    assert len(update.timestamps) == 60
    assert update.timestamps[-1] == pytest.approx(5.9)
    assert not update.live
    assert update.x_min is None and update.x_max is None
    assert update.points() == controller.plot_series()


def test_plot_feed_scrolls_while_recording() -> None:
    feed = PlotFeed(window_seconds=8.0)
    controller, clock = _recording(feed)

    for _ in range(60):
        clock.advance(0.1)
        controller.ingest(MotionEvent(0.0, 0.0, 9.8))

    update = feed.latest_update()
    assert update.live
    assert update.x_min == 0.0
    assert update.x_max == pytest.approx(7.0)

    controller.stop()
    assert not feed.latest_update().live


def test_plot_feed_does_not_scroll_short_trace() -> None:
    feed = PlotFeed()
    controller, clock = _recording(feed)
    clock.advance(0.1)
    controller.ingest(MotionEvent(0.0, 0.0, 9.8))

    assert feed.latest_update().x_min is None


def test_plot_feed_is_cleared_on_new_session() -> None:
    feed = PlotFeed()
    feed.on_sample(Sample.from_axes(0.0, 0.0, 9.8, time_ms=100))

    _recording(feed)

    assert len(feed.latest_update().timestamps) == 0


def test_plot_feed_queue_drops_oldest() -> None:
    feed = PlotFeed(queue=Queue(maxsize=2))
    for i in range(5):
        feed.on_sample(Sample.from_axes(0.0, 0.0, 9.8, time_ms=i * 100))

    updates = feed.drain_queue()
    assert len(updates) == 2
    assert len(updates[-1].timestamps) == 5
    assert feed.drain_queue() == []


def test_plot_feed_capacity_and_state() -> None:
    feed = PlotFeed(capacity=3)
    for i in range(5):
        feed.on_sample(Sample.from_axes(0.0, 0.0, 1.0, time_ms=i))
    feed.on_state(SessionState.RECORDING)
    assert feed.latest_update().live
    assert len(feed.latest_update().magnitudes) == 3

    with pytest.raises(ValueError):
        PlotFeed(capacity=0)


def test_plot_feed_from_config() -> None:
    from tremorsense.config import TremorConfig

    feed = PlotFeed.from_config(TremorConfig(buffer_capacity=10, plot_window_seconds=2.0))
    assert feed.capacity == 10
    assert feed.window_seconds == 2.0
    assert feed.queue is None
