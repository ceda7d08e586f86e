"""ICMP ping prober — shells out to the system ``ping`` binary."""

from __future__ import annotations

import re
import shutil
import subprocess

from .base import Prober, ProberConfig, Status, evaluate_duration

_RTT_RE = re.compile(r"time[=<]\s*([\d.]+)\s*ms")


class PingProbe(Prober):
    def init(self, config: ProberConfig) -> None:
        super().init(config)
        self.binary = config.options.get("binary") or shutil.which("ping")
        if not self.binary:
            raise ValueError("ping probe: no 'ping' binary found on PATH")

    def probe(self) -> tuple[Status, str]:
        wait = max(1, round(self.config.timeout))
        cmd = [self.binary, "-c", "1", "-W", str(wait), self.config.target]
        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.config.timeout + 1,
            )
        except subprocess.TimeoutExpired:
            return Status.ERROR, f"Timed out ({self.config.fatal_ms} ms)"
        except OSError as e:
            return Status.ERROR, f"ping failed: {e}"

        if result.returncode != 0:
            return Status.ERROR, "Host unreachable"

        match = _RTT_RE.search(result.stdout)
        if not match:
            return Status.OK, "Reachable"
        return evaluate_duration(float(match.group(1)), self.config.warning_ms)
