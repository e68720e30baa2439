"""Opt-in timing instrumentation toggled by ``TREMORSENSE_DEBUG``."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Callable, Iterator

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def debug_enabled() -> bool:
    """Return True when ``TREMORSENSE_DEBUG`` asks for instrumentation."""
    return os.getenv("TREMORSENSE_DEBUG", "").strip().lower() in _TRUTHY


@contextmanager
def time_block(label: str, *, emitter: Callable[[str], None] | None = None) -> Iterator[None]:
    """
    Time the enclosed block and report it when debugging is enabled.

    The report goes to ``emitter`` when given, otherwise to this module's
    logger at DEBUG. Nothing is measured while debugging is off.
    """
    if not debug_enabled():
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        if emitter is None:
            logger.debug("%s took %.3f ms", label, elapsed_ms)
        else:
            emitter(f"{label} took {elapsed_ms:.3f} ms")


__all__ = ["debug_enabled", "time_block"]
