"""Telegram Bot API alerter."""

from __future__ import annotations

import logging
from typing import Any

from src.config import settings
from src.probe.base import Status

from .base import format_alert
from .webhook import HttpAlerter

logger = logging.getLogger(__name__)

# Telegram API base
TELEGRAM_API = "https://api.telegram.org/bot{token}"


class TelegramAlerter(HttpAlerter):
    def __init__(self, options: dict[str, Any] | None = None) -> None:
        super().__init__(options)
        self.bot_token = self.options.get("bot_token") or settings.telegram_bot_token
        self.chat_id = str(self.options.get("chat_id") or settings.telegram_chat_id)
        self._enabled = bool(self.bot_token and self.chat_id)

        if self._enabled:
            logger.info("Telegram alerter enabled (chat_id=%s)", self.chat_id)
        else:
            logger.info("Telegram alerter disabled (no bot_token/chat_id)")

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def alert(
        self,
        status: Status,
        category: str,
        name: str,
        message: str,
        target: str,
        timestamp: str,
    ) -> None:
        if not self._enabled:
            return
        url = f"{TELEGRAM_API.format(token=self.bot_token)}/sendMessage"
        text = format_alert(
            status, _escape(category), _escape(name), _escape(message), _escape(target), timestamp,
        )
        await self.post(url, {"chat_id": self.chat_id, "text": text, "parse_mode": "Markdown"})


def _escape(text: str) -> str:
    """Escape Telegram Markdown special characters."""
    for ch in ("_", "*", "[", "`"):
        text = text.replace(ch, f"\\{ch}")
    return text
