"""Slack incoming-webhook alerter."""

from __future__ import annotations

import logging
from typing import Any

from src.config import settings
from src.probe.base import Status

from .base import format_alert
from .webhook import HttpAlerter

logger = logging.getLogger(__name__)


class SlackAlerter(HttpAlerter):
    def __init__(self, options: dict[str, Any] | None = None) -> None:
        super().__init__(options)
        self.webhook_url = self.options.get("webhook_url") or settings.slack_webhook_url
        if not self.webhook_url:
            logger.info("Slack alerter disabled (no webhook_url)")

    async def alert(
        self,
        status: Status,
        category: str,
        name: str,
        message: str,
        target: str,
        timestamp: str,
    ) -> None:
        if not self.webhook_url:
            return
        text = format_alert(status, category, name, message, target, timestamp)
        await self.post(self.webhook_url, {"text": text, "mrkdwn": True})
