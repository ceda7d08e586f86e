"""Probe / alert declarations — loads board.yaml into typed models.

Example::

    probes:
      - type: http
        category: Web
        name: Homepage
        target: https://example.com
        warning_ms: 800
        options:
          regex: "Welcome"
    alerts:
      - type: slack
        options:
          webhook_url: https://hooks.slack.com/services/...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.config import settings
from src.probe.base import ProberConfig

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# ── Data models ──────────────────────────────────────────────────────────────


@dataclass
class ProbeDef:
    """Declaration of one monitored service."""

    type: str
    category: str
    name: str
    target: str = ""
    options: dict[str, Any] = field(default_factory=dict)
    warning_ms: int = 0  # 0 = use default
    fatal_ms: int = 0


@dataclass
class AlertDef:
    """Declaration of one notification channel."""

    type: str
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class BoardConfig:
    probes: list[ProbeDef] = field(default_factory=list)
    alerts: list[AlertDef] = field(default_factory=list)


def prober_config(
    definition: ProbeDef,
    default_warning_ms: int | None = None,
    default_fatal_ms: int | None = None,
) -> ProberConfig:
    """Merge a declaration over the default thresholds."""
    if default_warning_ms is None:
        default_warning_ms = settings.default_warning_ms
    if default_fatal_ms is None:
        default_fatal_ms = settings.default_fatal_ms
    return ProberConfig(
        target=definition.target,
        options=dict(definition.options),
        warning_ms=definition.warning_ms or default_warning_ms,
        fatal_ms=definition.fatal_ms or default_fatal_ms,
    )


# ── Loading ──────────────────────────────────────────────────────────────────


def load_config(path: Path | str | None = None) -> BoardConfig:
    """Parse the YAML declarations file. Raises ``ConfigurationError``."""
    path = Path(path or settings.board_config_file)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}") from e

    config = parse_config(raw)
    logger.info(
        "Loaded %d probes and %d alerts from %s", len(config.probes), len(config.alerts), path,
    )
    return config


def parse_config(raw: dict[str, Any]) -> BoardConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError("Config root must be a mapping")
    return BoardConfig(
        probes=[_parse_probe(i, p) for i, p in enumerate(raw.get("probes") or [])],
        alerts=[_parse_alert(i, a) for i, a in enumerate(raw.get("alerts") or [])],
    )


# ── Parsers ──────────────────────────────────────────────────────────────────


def _parse_probe(index: int, raw: Any) -> ProbeDef:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"probes[{index}]: expected a mapping")
    for key in ("type", "name"):
        if not raw.get(key):
            raise ConfigurationError(f"probes[{index}]: '{key}' is required")

    options = raw.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigurationError(f"probes[{index}]: 'options' must be a mapping")

    try:
        warning_ms = int(raw.get("warning_ms") or 0)
        fatal_ms = int(raw.get("fatal_ms") or 0)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"probes[{index}]: invalid threshold: {e}") from e

    return ProbeDef(
        type=str(raw["type"]),
        category=str(raw.get("category") or "Default"),
        name=str(raw["name"]),
        target=str(raw.get("target", "")),
        options=options,
        warning_ms=warning_ms,
        fatal_ms=fatal_ms,
    )


def _parse_alert(index: int, raw: Any) -> AlertDef:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"alerts[{index}]: expected a mapping")
    if not raw.get("type"):
        raise ConfigurationError(f"alerts[{index}]: 'type' is required")

    options = raw.get("options") or {}
    if not isinstance(options, dict):
        raise ConfigurationError(f"alerts[{index}]: 'options' must be a mapping")
    return AlertDef(type=str(raw["type"]), options=options)
