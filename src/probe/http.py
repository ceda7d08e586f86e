"""HTTP(S) prober — request the target URL and check status code + latency."""

from __future__ import annotations

import re
import time

import httpx

from .base import DEFAULT_CONNECT_ERROR_MSG, Prober, ProberConfig, Status, evaluate_duration


class HttpProbe(Prober):
    """Options: ``method`` (GET), ``expected_status`` (200), ``regex`` (body match),
    ``verify`` (TLS verification, true)."""

    def init(self, config: ProberConfig) -> None:
        super().init(config)
        if not config.target.startswith(("http://", "https://")):
            raise ValueError(f"http probe: target must be an http(s) URL, got {config.target!r}")

        self.method = str(config.options.get("method", "GET")).upper()
        self.expected_status = int(config.options.get("expected_status", 200))
        self.verify = bool(config.options.get("verify", True))

        pattern = config.options.get("regex")
        try:
            self.regex = re.compile(pattern) if pattern else None
        except re.error as e:
            raise ValueError(f"http probe: invalid regex {pattern!r}: {e}") from e

    def probe(self) -> tuple[Status, str]:
        t0 = time.perf_counter()
        try:
            with httpx.Client(timeout=self.config.timeout, follow_redirects=True, verify=self.verify) as client:
                resp = client.request(self.method, self.config.target)
        except httpx.TimeoutException:
            return Status.ERROR, f"Timed out ({self.config.fatal_ms} ms)"
        except httpx.ConnectError:
            return Status.ERROR, DEFAULT_CONNECT_ERROR_MSG
        except httpx.HTTPError as e:
            return Status.ERROR, f"Error: {type(e).__name__}: {e}"

        latency = (time.perf_counter() - t0) * 1000

        if resp.status_code != self.expected_status:
            return Status.ERROR, f"Expected {self.expected_status}, got {resp.status_code}"

        if self.regex and not self.regex.search(resp.text):
            return Status.ERROR, "Unexpected result"

        return evaluate_duration(latency, self.config.warning_ms)
