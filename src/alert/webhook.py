"""Generic JSON webhook alerter and the shared httpx plumbing for chat webhooks."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from src.probe.base import Status

from .base import Alerter

logger = logging.getLogger(__name__)


class HttpAlerter(Alerter):
    """Base for alerters that POST JSON over httpx."""

    ok_statuses: tuple[int, ...] = (200,)

    def __init__(self, options: dict[str, Any] | None = None) -> None:
        super().__init__(options)
        timeout = float(self.options.get("timeout_seconds", 10))
        self._client = httpx.AsyncClient(timeout=timeout)

    async def post(self, url: str, payload: dict[str, Any]) -> bool:
        try:
            resp = await self._client.post(url, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("%s notification failed: %s", type(self).__name__, exc)
            return False
        if resp.status_code not in self.ok_statuses:
            logger.warning(
                "%s returned %d: %s", type(self).__name__, resp.status_code, resp.text[:200],
            )
            return False
        return True

    async def close(self) -> None:
        await self._client.aclose()


class WebhookAlerter(HttpAlerter):
    """POSTs the raw alert fields as JSON to ``options["url"]``."""

    ok_statuses = (200, 201, 202, 204)

    def __init__(self, options: dict[str, Any] | None = None) -> None:
        super().__init__(options)
        self.url = self.options.get("url", "")
        if not self.url:
            logger.info("Webhook alerter disabled (no url)")

    async def alert(
        self,
        status: Status,
        category: str,
        name: str,
        message: str,
        target: str,
        timestamp: str,
    ) -> None:
        if not self.url:
            return
        await self.post(self.url, {
            "status": status.value,
            "category": category,
            "name": name,
            "message": message,
            "target": target,
            "timestamp": timestamp,
        })
