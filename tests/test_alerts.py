"""Tests for the built-in alerters."""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
import pytest

from src.alert import DiscordAlerter, LogAlerter, SlackAlerter, TelegramAlerter, WebhookAlerter, format_alert
from src.alert.webhook import HttpAlerter
from src.probe.base import Status

ARGS = (Status.ERROR, "Web", "api", "Unable to connect", "https://api.test", "12:00:00 UTC")


def _capture(alerter: HttpAlerter, status_code: int = 200) -> list[httpx.Request]:
    """Route the alerter's client through a mock transport and record requests."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, text="ok")

    alerter._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return requests


def _send(alerter, *args) -> None:
    async def run() -> None:
        try:
            await alerter.alert(*(args or ARGS))
        finally:
            await alerter.close()

    asyncio.run(run())


class TestFormatAlert:
    def test_down(self) -> None:
        text = format_alert(*ARGS)
        assert "*[Web] api is DOWN*" in text
        assert "Status: ERROR" in text
        assert "Target: https://api.test" in text
        assert "Detail: Unable to connect" in text
        assert text.endswith("At: 12:00:00 UTC")

    def test_recovery_without_message(self) -> None:
        text = format_alert(Status.OK, "Web", "api", "", "t", "now", bold="**")
        assert "**[Web] api is UP**" in text
        assert "Detail" not in text


class TestLogAlerter:
    def test_error_logged_at_error_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="src.alert.log"):
            _send(LogAlerter())
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert "[Web] api is ERROR" in record.getMessage()

    def test_recovery_logged_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="src.alert.log"):
            _send(LogAlerter(), Status.OK, "Web", "api", "12 ms", "t", "now")
        assert caplog.records[-1].levelno == logging.INFO


class TestWebhookAlerter:
    def test_posts_fields(self) -> None:
        alerter = WebhookAlerter({"url": "https://hooks.test/board"})
        requests = _capture(alerter)

        _send(alerter)

        assert len(requests) == 1
        assert str(requests[0].url) == "https://hooks.test/board"
        assert json.loads(requests[0].content) == {
            "status": "ERROR",
            "category": "Web",
            "name": "api",
            "message": "Unable to connect",
            "target": "https://api.test",
            "timestamp": "12:00:00 UTC",
        }

    def test_disabled_without_url(self) -> None:
        alerter = WebhookAlerter()
        requests = _capture(alerter)
        _send(alerter)
        assert requests == []

    def test_http_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        alerter = WebhookAlerter({"url": "https://hooks.test/board"})
        _capture(alerter, status_code=500)
        with caplog.at_level(logging.WARNING):
            _send(alerter)
        assert "returned 500" in caplog.text

    def test_transport_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        alerter = WebhookAlerter({"url": "https://hooks.test/board"})

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        alerter._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        with caplog.at_level(logging.WARNING):
            _send(alerter)
        assert "notification failed" in caplog.text


class TestChatAlerters:
    def test_slack(self) -> None:
        alerter = SlackAlerter({"webhook_url": "https://hooks.slack.test/x"})
        requests = _capture(alerter)

        _send(alerter)

        body = json.loads(requests[0].content)
        assert body["mrkdwn"] is True
        assert "[Web] api is DOWN" in body["text"]

    def test_discord(self) -> None:
        alerter = DiscordAlerter({"webhook_url": "https://discord.test/api/webhooks/1"})
        requests = _capture(alerter, status_code=204)

        _send(alerter)

        body = json.loads(requests[0].content)
        assert "**[Web] api is DOWN**" in body["content"]

    def test_telegram(self) -> None:
        alerter = TelegramAlerter({"bot_token": "123:abc", "chat_id": 42})
        requests = _capture(alerter)

        _send(alerter, Status.ERROR, "Web", "my_api", "down", "t", "now")

        assert str(requests[0].url) == "https://api.telegram.org/bot123:abc/sendMessage"
        body = json.loads(requests[0].content)
        assert body["chat_id"] == "42"
        assert "my\\_api" in body["text"]

    def test_telegram_disabled(self) -> None:
        alerter = TelegramAlerter({"bot_token": "123:abc", "chat_id": ""})
        requests = _capture(alerter)
        _send(alerter)
        assert not alerter.enabled
        assert requests == []
