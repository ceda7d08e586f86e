"""Monitor error types."""

from __future__ import annotations


class BoardError(Exception):
    """Base class for monitor errors."""


class ConfigurationError(BoardError):
    """Raised when probe/alert declarations cannot be turned into a manager."""


class UnknownProbeTypeError(ConfigurationError):
    def __init__(self, probe_type: str) -> None:
        self.probe_type = probe_type
        super().__init__(f"unknown probe type: {probe_type}")


class UnknownAlertTypeError(ConfigurationError):
    def __init__(self, alert_type: str) -> None:
        self.alert_type = alert_type
        super().__init__(f"unknown alert type: {alert_type}")


class ProbeInitError(ConfigurationError):
    """Raised when a prober rejects its configuration."""

    def __init__(self, category: str, name: str, reason: str) -> None:
        self.category = category
        self.name = name
        super().__init__(f"probe {category}/{name}: {reason}")


class AlertInitError(ConfigurationError):
    """Raised when an alerter rejects its options."""

    def __init__(self, index: int, alert_type: str, reason: str) -> None:
        self.index = index
        self.alert_type = alert_type
        super().__init__(f"alert {index} ({alert_type}): {reason}")


class ServiceNotFoundError(BoardError, KeyError):
    def __init__(self, category: str, name: str) -> None:
        self.category = category
        self.name = name
        super().__init__(f"Service not found: {category}/{name}")

    def __str__(self) -> str:
        return self.args[0]
