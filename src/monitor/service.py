"""Monitored service records."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from src.probe.base import Prober, Status


@dataclass(frozen=True)
class ServiceState:
    """Outcome of one completed probe. Replaced as a whole, never mutated."""

    status: Status = Status.UNKNOWN
    message: str = ""


@dataclass(eq=False)
class Service:
    """One monitored target and its last-known state.

    ``state`` is written only by the manager's probe path, while holding
    ``lock``. Readers take ``state`` once and use that object.
    """

    name: str
    category: str
    prober: Prober
    target: str = ""
    state: ServiceState = field(default_factory=ServiceState)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @property
    def status(self) -> Status:
        return self.state.status

    @property
    def message(self) -> str:
        return self.state.message

    @property
    def busy(self) -> bool:
        """A probe for this service is in flight."""
        return self.lock.locked()

    def to_dict(self) -> dict[str, Any]:
        state = self.state
        return {
            "name": self.name,
            "status": state.status.value,
            "message": state.message,
            "target": self.target,
        }
