"""Alerter that writes to the application log."""

from __future__ import annotations

import logging

from src.probe.base import Status

from .base import Alerter

logger = logging.getLogger(__name__)


class LogAlerter(Alerter):
    async def alert(
        self,
        status: Status,
        category: str,
        name: str,
        message: str,
        target: str,
        timestamp: str,
    ) -> None:
        level = logging.ERROR if status == Status.ERROR else logging.INFO
        logger.log(
            level, "[%s] %s is %s (%s) target=%s at %s",
            category, name, status.value or "UNKNOWN", message, target, timestamp,
        )
