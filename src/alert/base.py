"""Alerter contract — the notification-channel capability the monitor depends on."""

from __future__ import annotations

import abc
from typing import Any

from src.probe.base import Status

# Emoji/icon mapping
_EMOJI = {
    Status.ERROR: "🔴",
    Status.WARNING: "⚠️",
    Status.OK: "✅",
    Status.UNKNOWN: "❔",
}


class Alerter(abc.ABC):
    """Base class each alert channel implements.

    Alerters are built once from ``options`` (the free-form mapping of the
    alert declaration) and live for the whole process.
    """

    def __init__(self, options: dict[str, Any] | None = None) -> None:
        self.options = options or {}

    @abc.abstractmethod
    async def alert(
        self,
        status: Status,
        category: str,
        name: str,
        message: str,
        target: str,
        timestamp: str,
    ) -> None:
        """Deliver one status-change notification (best effort)."""

    async def close(self) -> None:
        """Release any client held by the alerter."""


def format_alert(
    status: Status,
    category: str,
    name: str,
    message: str,
    target: str,
    timestamp: str,
    bold: str = "*",
) -> str:
    """Render a human-readable alert text. ``bold`` is the channel's markup."""
    state = "DOWN" if status == Status.ERROR else "UP"
    text = (
        f"{_EMOJI.get(status, '')} {bold}[{category}] {name} is {state}{bold}\n"
        f"Status: {status.value or 'UNKNOWN'}\n"
        f"Target: {target}\n"
    )
    if message:
        text += f"Detail: {message}\n"
    text += f"At: {timestamp}"
    return text
