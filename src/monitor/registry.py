"""Constructor registry — maps declared type names to prober/alerter factories.

Built explicitly and passed to ``build_manager``; there is no process-wide
mutable registry.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from src.alert import (
    Alerter,
    DiscordAlerter,
    LogAlerter,
    SlackAlerter,
    TelegramAlerter,
    WebhookAlerter,
)
from src.probe import DnsProbe, HttpProbe, PingProbe, PortProbe, Prober, TlsProbe

ProbeFactory = Callable[[], Prober]
AlertFactory = Callable[[dict[str, Any]], Alerter]


@dataclass
class ConstructorRegistry:
    probes: dict[str, ProbeFactory] = field(default_factory=dict)
    alerts: dict[str, AlertFactory] = field(default_factory=dict)

    def register_probe(self, type_name: str, factory: ProbeFactory) -> None:
        self.probes[type_name] = factory

    def register_alert(self, type_name: str, factory: AlertFactory) -> None:
        self.alerts[type_name] = factory


def default_registry() -> ConstructorRegistry:
    """A fresh registry holding the built-in probe and alert types."""
    return ConstructorRegistry(
        probes={
            "http": HttpProbe,
            "port": PortProbe,
            "tcp": PortProbe,
            "dns": DnsProbe,
            "tls": TlsProbe,
            "ping": PingProbe,
        },
        alerts={
            "log": LogAlerter,
            "webhook": WebhookAlerter,
            "slack": SlackAlerter,
            "telegram": TelegramAlerter,
            "discord": DiscordAlerter,
        },
    )
