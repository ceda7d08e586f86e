"""Shared test fixtures."""

from __future__ import annotations

import threading
import time
from typing import Any

import pytest

from src.alert.base import Alerter
from src.monitor import Manager, Service
from src.probe.base import Prober, ProberConfig, Status


class ScriptedProber(Prober):
    """Returns the scripted statuses in order, repeating the last one."""

    def __init__(self, statuses: list[Status] | None = None, delay: float = 0.0) -> None:
        self.statuses = list(statuses or [Status.OK])
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def init(self, config: ProberConfig) -> None:
        self.config = config

    def probe(self) -> tuple[Status, str]:
        with self._lock:
            index = self.calls
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        status = self.statuses[min(index, len(self.statuses) - 1)]
        return status, f"{status.value}-{index}"


class RecordingAlerter(Alerter):
    """Records every alert call; optionally appends to a shared journal."""

    def __init__(self, options: dict[str, Any] | None = None, journal: list | None = None) -> None:
        super().__init__(options)
        self.calls: list[tuple[Any, ...]] = []
        self.journal = journal
        self.closed = False

    async def alert(self, status, category, name, message, target, timestamp) -> None:
        call = (status, category, name, message, target, timestamp)
        self.calls.append(call)
        if self.journal is not None:
            self.journal.append((self, call))

    async def close(self) -> None:
        self.closed = True


def make_manager(
    probers: dict[tuple[str, str], Prober],
    alerters: list[Alerter] | None = None,
) -> Manager:
    """Manager over ``{(category, name): prober}``, targets ``<name>.test``."""
    services: dict[str, list[Service]] = {}
    for (category, name), prober in probers.items():
        services.setdefault(category, []).append(
            Service(name=name, category=category, prober=prober, target=f"{name}.test")
        )
    return Manager(services=services, alerters=alerters)


@pytest.fixture
def alerter() -> RecordingAlerter:
    return RecordingAlerter()
