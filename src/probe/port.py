"""Raw TCP port connectivity prober."""

from __future__ import annotations

import socket
import time

from .base import DEFAULT_CONNECT_ERROR_MSG, Prober, ProberConfig, Status, evaluate_duration


class PortProbe(Prober):
    """Target is ``host:port``."""

    def init(self, config: ProberConfig) -> None:
        super().init(config)
        host, sep, port = config.target.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError(f"port probe: target must be host:port, got {config.target!r}")
        self.host = host.strip("[]")
        self.port = int(port)

    def probe(self) -> tuple[Status, str]:
        t0 = time.perf_counter()
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.config.timeout)
            sock.close()
        except socket.timeout:
            return Status.ERROR, f"Timed out ({self.config.fatal_ms} ms)"
        except OSError:
            return Status.ERROR, DEFAULT_CONNECT_ERROR_MSG

        latency = (time.perf_counter() - t0) * 1000
        return evaluate_duration(latency, self.config.warning_ms)
