"""Prober contract — the health-check capability the monitor depends on."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Status(str, Enum):
    UNKNOWN = ""
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"


DEFAULT_CONNECT_ERROR_MSG = "Unable to connect"


@dataclass
class ProberConfig:
    """Configuration handed to ``Prober.init``.

    ``warning_ms`` and ``fatal_ms`` are duration thresholds: a check slower
    than ``warning_ms`` degrades to WARNING, and ``fatal_ms`` is the timeout
    the prober enforces on itself.
    """

    target: str
    options: dict[str, Any] = field(default_factory=dict)
    warning_ms: int = 500
    fatal_ms: int = 10_000

    @property
    def timeout(self) -> float:
        """Fatal threshold in seconds, for socket / httpx timeouts."""
        return self.fatal_ms / 1000


class Prober(abc.ABC):
    """Base class each probe type implements.

    ``probe()`` is blocking and runs in a worker thread. It must map every
    outcome to exactly one of OK / WARNING / ERROR; UNKNOWN is reserved for
    services that have never been probed.
    """

    config: ProberConfig

    def init(self, config: ProberConfig) -> None:
        """Validate and store configuration. Raise ``ValueError`` if invalid."""
        if not config.target:
            raise ValueError(f"{type(self).__name__}: 'target' is required")
        self.config = config

    @abc.abstractmethod
    def probe(self) -> tuple[Status, str]:
        """Run one health check and return ``(status, message)``."""


def evaluate_duration(duration_ms: float, warning_ms: float) -> tuple[Status, str]:
    """OK or WARNING depending on the warning threshold, with a ``"N ms"`` message."""
    status = Status.WARNING if duration_ms >= warning_ms else Status.OK
    return status, f"{int(duration_ms)} ms"
