"""Monitor manager — owns the services, runs probing rounds, dispatches alerts.

A probing round probes every service concurrently. Blocking ``Prober.probe``
calls run in a thread pool sized to the number of services, so a round takes
about as long as its slowest probe. Each completed probe is checked for an
ERROR-boundary transition and, when there is one, every alerter is called in
registration order.

Consistency rules:
- a service's ``(status, message)`` is swapped as one immutable ``ServiceState``
- at most one probe per service is in flight (per-service lock; rounds skip
  busy services, manual probes wait)
- each service is tracked as its own task, so a slow probe or alerter only
  holds back that service's next probe
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any

from src.alert.base import Alerter
from src.probe.base import Status

from .definitions import BoardConfig, prober_config
from .errors import (
    AlertInitError,
    ProbeInitError,
    ServiceNotFoundError,
    UnknownAlertTypeError,
    UnknownProbeTypeError,
)
from .registry import ConstructorRegistry, default_registry
from .service import Service, ServiceState
from .transitions import is_alert_worthy

ALERT_TIME_FORMAT = "%H:%M:%S %Z"


class Manager:
    """Monitored services sorted by category, plus the alert channels."""

    def __init__(
        self,
        services: dict[str, list[Service]] | None = None,
        alerters: list[Alerter] | None = None,
        logger: logging.Logger | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.services: dict[str, list[Service]] = services or {}
        self.alerters: list[Alerter] = list(alerters or [])
        self.last_update: datetime | None = None
        self.logger = logger or logging.getLogger(__name__)

        workers = max_workers or max(1, sum(len(s) for s in self.services.values()))
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="probe")
        self._tasks: dict[Service, asyncio.Task[ServiceState]] = {}

    # -- Lookup ---------------------------------------------------------------

    def iter_services(self) -> Iterator[Service]:
        for services in self.services.values():
            yield from services

    def get_service(self, category: str, name: str) -> Service:
        for service in self.services.get(category, []):
            if service.name == name:
                return service
        raise ServiceNotFoundError(category, name)

    # -- Scheduling -----------------------------------------------------------

    async def run_loop(self, interval: float, stop: asyncio.Event | None = None) -> None:
        """Start a round now, then one per ``interval`` seconds until ``stop`` is set.

        Ticks are not synchronized with round completion. Services whose
        previous probe is still running are skipped for that tick; the others
        are probed. In-flight probes are drained before returning.
        """
        if interval <= 0:
            raise ValueError("interval must be positive")

        stop = stop or asyncio.Event()
        loop = asyncio.get_running_loop()
        self.logger.info(
            "Probe loop started: %d services in %d categories every %.1fs",
            sum(len(s) for s in self.services.values()), len(self.services), interval,
        )

        next_tick = loop.time()
        try:
            while not stop.is_set():
                self.start_round()

                next_tick += interval
                now = loop.time()
                while next_tick <= now:
                    next_tick += interval

                try:
                    await asyncio.wait_for(stop.wait(), timeout=next_tick - now)
                except asyncio.TimeoutError:
                    pass
        finally:
            await self.drain()
            self.logger.info("Probe loop stopped")

    def start_round(self) -> list[asyncio.Task[ServiceState]]:
        """Start one probe task per idle service without waiting for them.

        A service whose previous probe (scheduled or manual) has not finished
        is skipped. Returns the tasks started.
        """
        self.logger.debug("Probing all")
        self.last_update = datetime.now(timezone.utc)

        started = []
        for service in self.iter_services():
            previous = self._tasks.get(service)
            if service.busy or (previous is not None and not previous.done()):
                self.logger.debug(
                    "Probe for %s/%s still running — skipped", service.category, service.name,
                )
                continue

            task = asyncio.create_task(
                self._probe_and_track(service),
                name=f"probe-{service.category}-{service.name}",
            )
            self._tasks[service] = task
            task.add_done_callback(self._probe_done)
            started.append(task)
        return started

    def _probe_done(self, task: asyncio.Task[ServiceState]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error("Probe task %s failed", task.get_name(), exc_info=exc)

    async def drain(self) -> None:
        """Wait for every in-flight probe task."""
        pending = [t for t in self._tasks.values() if not t.done()]
        if pending:
            await asyncio.wait(pending)

    # -- Probing --------------------------------------------------------------

    async def probe_all(self) -> None:
        """Run one probing round over every idle service and wait for it."""
        started = self.start_round()
        if started:
            await asyncio.wait(started)

    async def probe_service(self, category: str, name: str) -> ServiceState:
        """Probe a single service now. Waits if a probe for it is in flight."""
        return await self._probe_and_track(self.get_service(category, name))

    async def _probe_and_track(self, service: Service) -> ServiceState:
        async with service.lock:
            previous = service.state
            current = await self._run_probe(service)
            service.state = current

            self.logger.debug(
                "Probe %s/%s: %s (%s)",
                service.category, service.name, current.status.value or "UNKNOWN", current.message,
            )

            if is_alert_worthy(previous.status, current.status):
                self.logger.info(
                    "%s/%s: %s → %s",
                    service.category, service.name,
                    previous.status.value or "UNKNOWN", current.status.value,
                )
                await self.alert_all(service.category, service, current)
            return current

    async def _run_probe(self, service: Service) -> ServiceState:
        loop = asyncio.get_running_loop()
        try:
            status, message = await loop.run_in_executor(self._executor, service.prober.probe)
            return ServiceState(Status(status), message or "")
        except Exception as e:
            self.logger.warning(
                "Prober for %s/%s raised: %s", service.category, service.name, e,
            )
            return ServiceState(Status.ERROR, f"{type(e).__name__}: {e}")

    # -- Alerting -------------------------------------------------------------

    async def alert_all(
        self, category: str, service: Service, state: ServiceState | None = None,
    ) -> None:
        """Send the service's state to every alerter, in registration order.

        A failing alerter is logged and does not stop the others.
        """
        state = state or service.state
        timestamp = datetime.now().astimezone().strftime(ALERT_TIME_FORMAT)

        for alerter in self.alerters:
            try:
                await alerter.alert(
                    state.status, category, service.name, state.message, service.target, timestamp,
                )
            except Exception:
                self.logger.exception(
                    "Alerter %s failed for %s/%s", type(alerter).__name__, category, service.name,
                )

    # -- Reporting ------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Serializable view of the last update and every service's state."""
        return {
            "last_update": self.last_update.isoformat() if self.last_update else None,
            "services": {
                category: [s.to_dict() for s in services]
                for category, services in self.services.items()
            },
        }

    def status_counts(self) -> dict[str, int]:
        counts = {s.name: 0 for s in Status}
        for service in self.iter_services():
            counts[service.status.name] += 1
        return counts

    async def close(self) -> None:
        self._executor.shutdown(wait=False)
        for alerter in self.alerters:
            try:
                await alerter.close()
            except Exception:
                self.logger.exception("Failed to close alerter %s", type(alerter).__name__)


# ── Construction ─────────────────────────────────────────────────────────────


def build_manager(
    config: BoardConfig,
    registry: ConstructorRegistry | None = None,
    logger: logging.Logger | None = None,
    default_warning_ms: int | None = None,
    default_fatal_ms: int | None = None,
) -> Manager:
    """Build a manager from declarations, or raise ``ConfigurationError``.

    Fails on the first unknown type or prober/alerter init failure; no partial
    manager is returned.
    """
    registry = registry or default_registry()

    services: dict[str, list[Service]] = {}
    for definition in config.probes:
        factory = registry.probes.get(definition.type)
        if factory is None:
            raise UnknownProbeTypeError(definition.type)

        prober = factory()
        try:
            prober.init(prober_config(definition, default_warning_ms, default_fatal_ms))
        except Exception as e:
            raise ProbeInitError(definition.category, definition.name, str(e)) from e

        services.setdefault(definition.category, []).append(
            Service(
                name=definition.name,
                category=definition.category,
                prober=prober,
                target=definition.target,
            )
        )

    alert_factories = []
    for definition in config.alerts:
        factory = registry.alerts.get(definition.type)
        if factory is None:
            raise UnknownAlertTypeError(definition.type)
        alert_factories.append((factory, definition.options))

    alerters = []
    for index, (factory, options) in enumerate(alert_factories):
        try:
            alerters.append(factory(options))
        except Exception as e:
            raise AlertInitError(index, config.alerts[index].type, str(e)) from e

    return Manager(services=services, alerters=alerters, logger=logger)
