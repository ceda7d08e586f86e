"""DNS resolution prober."""

from __future__ import annotations

import socket
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout

from .base import Prober, Status, evaluate_duration

# getaddrinfo has no timeout argument; lookups run here so probe() can stop
# waiting after the fatal threshold.
_resolver = ThreadPoolExecutor(max_workers=4, thread_name_prefix="dns")


class DnsProbe(Prober):
    """Resolve the target hostname. Option ``expected`` lists addresses that
    must appear in the answer."""

    def probe(self) -> tuple[Status, str]:
        t0 = time.perf_counter()
        future = _resolver.submit(socket.getaddrinfo, self.config.target, None)
        try:
            addrs = future.result(timeout=self.config.timeout)
        except FutureTimeout:
            future.cancel()
            return Status.ERROR, f"Timed out ({self.config.fatal_ms} ms)"
        except socket.gaierror as e:
            return Status.ERROR, f"DNS resolution failed: {e}"
        except OSError as e:
            return Status.ERROR, f"DNS error: {type(e).__name__}: {e}"

        latency = (time.perf_counter() - t0) * 1000
        ips = sorted({a[4][0] for a in addrs})

        expected = self.config.options.get("expected") or []
        missing = [ip for ip in expected if ip not in ips]
        if missing:
            return Status.ERROR, f"Missing {', '.join(missing)} (got {', '.join(ips[:3])})"

        status, message = evaluate_duration(latency, self.config.warning_ms)
        return status, f"{message} ({', '.join(ips[:3])})"
