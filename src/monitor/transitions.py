"""Transition detection — which status changes are worth an alert."""

from __future__ import annotations

from src.probe.base import Status


def is_alert_worthy(previous: Status, current: Status) -> bool:
    """True when the status crosses the ERROR boundary, in either direction.

    OK <-> WARNING, UNKNOWN -> OK and similar changes are not alert-worthy.
    """
    return (previous == Status.ERROR) != (current == Status.ERROR)
