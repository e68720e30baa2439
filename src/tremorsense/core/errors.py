"""Errors surfaced by :meth:`SessionController.start`."""

from __future__ import annotations


class StartError(RuntimeError):
    """A recording session could not be started."""


class PermissionDenied(StartError):
    """The user or platform refused access to the motion sensor."""


class CapabilityUnavailable(StartError):
    """The motion sensor API is absent on this platform."""


__all__ = ["StartError", "PermissionDenied", "CapabilityUnavailable"]
