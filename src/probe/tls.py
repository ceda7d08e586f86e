"""TLS certificate expiry prober."""

from __future__ import annotations

import socket
import ssl
from datetime import datetime, timezone

from .base import DEFAULT_CONNECT_ERROR_MSG, Prober, ProberConfig, Status


class TlsProbe(Prober):
    """Target is ``host`` or ``host:port`` (443). Option ``warn_days_before`` (14)."""

    def init(self, config: ProberConfig) -> None:
        super().init(config)
        host, sep, port = config.target.rpartition(":")
        if sep and port.isdigit():
            self.host, self.port = host, int(port)
        else:
            self.host, self.port = config.target, 443
        self.warn_days_before = int(config.options.get("warn_days_before", 14))

    def probe(self) -> tuple[Status, str]:
        try:
            ctx = ssl.create_default_context()
            with socket.create_connection((self.host, self.port), timeout=self.config.timeout) as sock:
                with ctx.wrap_socket(sock, server_hostname=self.host) as ssock:
                    cert = ssock.getpeercert()
        except ssl.SSLCertVerificationError as e:
            # expired, self-signed or mismatched certificates fail the handshake
            reason = getattr(e, "verify_message", None) or e.reason or e
            return Status.ERROR, f"Certificate invalid: {reason}"
        except ssl.SSLError as e:
            return Status.ERROR, f"TLS error: {e.reason or e}"
        except OSError:
            return Status.ERROR, DEFAULT_CONNECT_ERROR_MSG

        if not cert:
            return Status.ERROR, "No certificate returned"

        not_after = cert.get("notAfter", "")
        expiry = datetime.strptime(not_after, "%b %d %H:%M:%S %Y %Z").replace(tzinfo=timezone.utc)
        days_left = (expiry - datetime.now(timezone.utc)).days

        if days_left < self.warn_days_before:
            return Status.WARNING, f"Certificate expires in {days_left} days"
        return Status.OK, f"Certificate valid for {days_left} days"
